"""Mesa Repository — SQLAlchemy implementation of the MesaRepository protocol.

Invariants:
    - insert sets created_at == updated_at from a single clock reading
    - update/set_status refresh updated_at on every write that matches
    - expected_status turns a write into compare-and-swap: no match -> None, nothing written
    - Every SQLAlchemyError is rolled back and re-raised as StorageError(operation)
    - find_all / find_by_local are ordered by id (stable for a given state)

Design Decisions:
    - Conditional UPDATE ... WHERE status = :expected instead of row locks:
      works the same on PostgreSQL and SQLite
    - populate_existing on re-read: the identity map may hold the pre-update row
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import MesaId, MesaStatus
from app.core.errors import StorageError
from app.models.mesa import Mesa, utcnow

logger = logging.getLogger(__name__)


def _plain(fields: dict) -> dict:
    """MesaStatus members stored as their int value."""
    return {
        k: (int(v) if isinstance(v, MesaStatus) else v)
        for k, v in fields.items()
    }


class SqlAlchemyMesaRepository:
    """Mesa persistence over an AsyncSession. One instance per request."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _storage(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Mesa storage {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise StorageError(operation) from e

    async def insert(self, fields: dict) -> Mesa:
        now = utcnow()
        mesa = Mesa(**_plain(fields), created_at=now, updated_at=now)
        async with self._storage("insert"):
            self.db.add(mesa)
            await self.db.commit()
        return mesa

    async def find_by_id(self, mesa_id: MesaId) -> Mesa | None:
        async with self._storage("find_by_id"):
            return await self.db.get(Mesa, mesa_id, populate_existing=True)

    async def find_all(self, status: MesaStatus | None = None) -> Sequence[Mesa]:
        query = select(Mesa).order_by(Mesa.id)
        if status is not None:
            query = query.where(Mesa.status == int(status))
        async with self._storage("find_all"):
            result = await self.db.execute(query)
            return result.scalars().all()

    async def find_by_local(self, local: str) -> Sequence[Mesa]:
        query = select(Mesa).where(Mesa.local == local).order_by(Mesa.id)
        async with self._storage("find_by_local"):
            result = await self.db.execute(query)
            return result.scalars().all()

    async def update(
        self, mesa_id: MesaId, fields: dict,
        expected_status: MesaStatus | None = None,
    ) -> Mesa | None:
        values = _plain(fields)
        values["updated_at"] = utcnow()
        stmt = update(Mesa).where(Mesa.id == mesa_id).values(**values)
        if expected_status is not None:
            stmt = stmt.where(Mesa.status == int(expected_status))
        stmt = stmt.execution_options(synchronize_session=False)
        async with self._storage("update"):
            result = await self.db.execute(stmt)
            await self.db.commit()
            if result.rowcount == 0:
                return None
            return await self.db.get(Mesa, mesa_id, populate_existing=True)

    async def set_status(
        self, mesa_id: MesaId, status: MesaStatus,
        expected_status: MesaStatus | None = None,
    ) -> Mesa | None:
        return await self.update(
            mesa_id, {"status": status}, expected_status=expected_status,
        )
