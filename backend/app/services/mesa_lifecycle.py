"""Mesa Lifecycle — create/read/update/deactivate orchestration around pure rules.

Invariants:
    - Every rule check runs before the first write (fail fast, storage untouched on 400)
    - A created mesa is always ACTIVE: supplied status is discarded here, not by storage
    - Update order: not found (404) -> deactivated (400) -> field errors (400) -> status (400)
    - Writes on Update/Deactivate are conditional on status == ACTIVE
    - Deactivate on an INACTIVE mesa is a no-op success (updated_at unchanged)
    - find_by_local with no visible match raises LocalNotFoundError; list_mesas never raises on empty
    - StorageError propagates untouched, never retried

Design Decisions:
    - Repository injected as MesaRepository Protocol: tests use an in-memory fake
    - A lost compare-and-swap is resolved by re-reading: gone -> 404, deactivated -> 400
"""

import logging
from typing import Sequence

from app.core.domain_types import MesaId, MesaStatus, is_terminal, next_status
from app.core.enforce_mesa import check_mutable, validate_create, validate_update
from app.core.errors import LocalNotFoundError, MesaNotFoundError, StateConflictError
from app.core.filter_local import filter_by_local
from app.core.repository_protocols import MesaLike, MesaRepository

logger = logging.getLogger(__name__)


class MesaLifecycleService:
    """Enforces the mesa state machine and delegates persistence."""

    def __init__(
        self, repository: MesaRepository, local_include_inactive: bool = True,
    ):
        self.repository = repository
        self.local_include_inactive = local_include_inactive

    async def create(self, fields: dict) -> MesaLike:
        """Validate and insert. Status forced to ACTIVE."""
        validated = validate_create(fields)
        mesa = await self.repository.insert(
            {**validated, "status": MesaStatus.ACTIVE},
        )
        logger.info(
            f"Mesa {mesa.id} created at '{mesa.local}'",
            extra={"mesa_id": mesa.id, "local": mesa.local},
        )
        return mesa

    async def get(self, mesa_id: MesaId) -> MesaLike:
        """Fetch by id. Deactivated mesas are still readable."""
        mesa = await self.repository.find_by_id(mesa_id)
        if mesa is None:
            raise MesaNotFoundError(mesa_id)
        return mesa

    async def list_mesas(
        self, status: MesaStatus | None = None,
    ) -> Sequence[MesaLike]:
        return list(await self.repository.find_all(status))

    async def update(self, mesa_id: MesaId, fields: dict) -> MesaLike:
        """Apply supplied fields to an active mesa."""
        current = await self.get(mesa_id)
        check_mutable(mesa_id, current.status)
        changes = validate_update(fields)
        if "status" in changes:
            changes["status"] = next_status(
                MesaStatus(current.status), changes["status"],
            )

        updated = await self.repository.update(
            mesa_id, changes, expected_status=MesaStatus.ACTIVE,
        )
        if updated is None:
            await self._raise_lost_write(mesa_id)

        if changes.get("status") is MesaStatus.INACTIVE:
            logger.info(
                f"Mesa {mesa_id} deactivated via update",
                extra={"mesa_id": mesa_id},
            )
        else:
            logger.info(
                f"Mesa {mesa_id} updated: {sorted(changes)}",
                extra={"mesa_id": mesa_id},
            )
        return updated

    async def deactivate(self, mesa_id: MesaId) -> MesaLike:
        """Logical delete. Idempotent on an already inactive mesa."""
        current = await self.get(mesa_id)
        if is_terminal(MesaStatus(current.status)):
            logger.info(
                f"Mesa {mesa_id} already inactive",
                extra={"mesa_id": mesa_id},
            )
            return current

        updated = await self.repository.set_status(
            mesa_id, MesaStatus.INACTIVE, expected_status=MesaStatus.ACTIVE,
        )
        if updated is None:
            # concurrent deactivation won the race; same end state
            return await self.get(mesa_id)

        logger.info(f"Mesa {mesa_id} deactivated", extra={"mesa_id": mesa_id})
        return updated

    async def find_by_local(
        self, local: str, include_inactive: bool | None = None,
    ) -> Sequence[MesaLike]:
        """Exact-match location search. Empty result is an error here."""
        if include_inactive is None:
            include_inactive = self.local_include_inactive
        mesas = filter_by_local(
            await self.repository.find_by_local(local), local, include_inactive,
        )
        if not mesas:
            raise LocalNotFoundError(local)
        return mesas

    async def _raise_lost_write(self, mesa_id: MesaId) -> None:
        mesa = await self.repository.find_by_id(mesa_id)
        if mesa is None:
            raise MesaNotFoundError(mesa_id)
        logger.warning(
            f"Mesa {mesa_id} changed state during update",
            extra={"mesa_id": mesa_id},
        )
        raise StateConflictError(mesa_id)
