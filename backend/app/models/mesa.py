"""Mesa ORM — persists the table resource and its lifecycle status.

Invariants:
    - id is an autoincrement integer primary key, never reused
    - status is 1 (active) or -1 (inactive), enforced by CHECK constraint
    - created_at and updated_at are timezone-aware UTC timestamps
    - Rows are never deleted: deactivation only flips status

Design Decisions:
    - No ORM default for status: the lifecycle service sets ACTIVE explicitly
    - Index on local: location search is an exact-match lookup
    - UTCDateTime decorator: timestamps compare and serialize the same on every dialect
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware DateTime that always loads as UTC.

    PostgreSQL keeps the offset; SQLite drops it, so naive values read back
    are tagged as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Mesa(Base):
    """Physical table in a venue."""
    __tablename__ = "mesas"
    __table_args__ = (
        CheckConstraint("status IN (1, -1)", name="ck_mesas_status"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    capacidade: Mapped[int] = mapped_column(Integer, nullable=False)
    descricao: Mapped[str] = mapped_column(Text, nullable=False)
    local: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Mesa id={self.id} local={self.local!r} status={self.status}>"
