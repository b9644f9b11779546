"""Infrastructure Layer — database session management and logging setup.

Invariants:
    - Infrastructure imports from core/ only for error types
    - All SQLAlchemy failures mapped to StorageError before leaving this layer

Design Decisions:
    - Initialized once from the FastAPI lifespan (no import side effects)
"""
