"""Infrastructure Layer: database manager, logging and external service clients.

Invariants:
    - Every external call (Google, Cloudinary, SMTP) maps failures to ExternalServiceError
    - Blocking SDK calls run in a worker thread (asyncio.to_thread)
"""
