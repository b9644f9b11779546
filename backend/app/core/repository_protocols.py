"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, the ORM model and test fakes
      both satisfy MesaLike without inheriting from it
    - update/set_status take expected_status: conditional write closes the
      read-check-write window of Update/Deactivate (None = unconditional)
"""

from datetime import datetime
from typing import Protocol, Sequence

from app.core.domain_types import MesaId, MesaStatus


class MesaLike(Protocol):
    """Structural contract for Mesa records passed between service and routes."""
    id: int
    capacidade: int
    descricao: str
    local: str
    status: int
    created_at: datetime
    updated_at: datetime


class MesaRepository(Protocol):
    """Contract for mesa persistence — implemented by shell.

    Every method raises StorageError on underlying IO failure.
    """
    async def insert(self, fields: dict) -> MesaLike: ...
    async def find_by_id(self, mesa_id: MesaId) -> MesaLike | None: ...
    async def find_all(
        self, status: MesaStatus | None = None,
    ) -> Sequence[MesaLike]: ...
    async def find_by_local(self, local: str) -> Sequence[MesaLike]: ...
    async def update(
        self, mesa_id: MesaId, fields: dict,
        expected_status: MesaStatus | None = None,
    ) -> MesaLike | None: ...
    async def set_status(
        self, mesa_id: MesaId, status: MesaStatus,
        expected_status: MesaStatus | None = None,
    ) -> MesaLike | None: ...
