"""Database Infrastructure: SQLAlchemy Base and a standalone session factory.

Invariants:
    - All sessions are async (AsyncSession)
    - asyncpg in production, aiosqlite in tests
"""
