"""Services Layer: DB orchestration around the pure core.

Invariants:
    - Services take an AsyncSession and own the commit for the operation they run
    - Multi-row writes (reorder, batch, activity log) commit once
"""
