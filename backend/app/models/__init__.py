"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Mesa is the only aggregate

Design Decisions:
    - One file per entity for locality
    - Models imported here so Base.metadata is populated by a single import
"""

from app.models.mesa import Mesa  # noqa: F401
