"""Database Package — declarative Base and a standalone session factory.

Invariants:
    - Base is shared by every ORM model and by alembic metadata
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests (ADR: native async, no thread pool overhead)
"""
