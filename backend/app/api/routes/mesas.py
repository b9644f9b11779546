"""Mesa Routes — thin HTTP adapter over MesaLifecycleService.

Invariants:
    - Routes contain no business rules: parse -> service -> MesaResponse
    - Domain errors propagate as MesaError and are rendered by api/error_handlers.py
    - /local/{local} registered before /{mesa_id} so the literal segment wins

Design Decisions:
    - Service built per request through Depends: one AsyncSession per request,
      settings default for inactive visibility overridable via ?incluir_inativas
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import MesaId, MesaStatus
from app.core.errors import ValidationError
from app.infrastructure.database import get_db
from app.schemas.mesa import MesaCreate, MesaResponse, MesaUpdate
from app.services.mesa_lifecycle import MesaLifecycleService
from app.services.mesa_repository import SqlAlchemyMesaRepository

router = APIRouter(prefix="/api/mesas", tags=["Mesas"])

_STORAGE_ERROR = {"description": "Erro ao acessar o armazenamento"}
_NOT_FOUND = {"description": "Mesa não encontrada"}


def get_mesa_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MesaLifecycleService:
    return MesaLifecycleService(
        SqlAlchemyMesaRepository(db),
        local_include_inactive=settings.local_search_include_inactive,
    )


@router.get(
    "", response_model=list[MesaResponse],
    summary="Lista todas as mesas",
    responses={500: _STORAGE_ERROR},
)
async def list_mesas(
    status_filter: int | None = Query(
        None, alias="status", description="1 para ativas, -1 para desativadas",
    ),
    service: MesaLifecycleService = Depends(get_mesa_service),
):
    """List mesas ordered by id. Empty list is a valid result."""
    mesa_status = None
    if status_filter is not None:
        if status_filter not in MesaStatus.values():
            raise ValidationError("status inválido", "status")
        mesa_status = MesaStatus(status_filter)
    return await service.list_mesas(mesa_status)


@router.get(
    "/local/{local}", response_model=list[MesaResponse],
    summary="Busca mesas por local",
    responses={
        404: {"description": "Nenhuma mesa encontrada para o local especificado"},
        500: _STORAGE_ERROR,
    },
)
async def get_mesas_by_local(
    local: str,
    incluir_inativas: bool | None = Query(
        None, description="Inclui mesas desativadas (padrão definido na configuração)",
    ),
    service: MesaLifecycleService = Depends(get_mesa_service),
):
    """Exact, case-sensitive match on local. 404 when nothing matches."""
    return await service.find_by_local(local, include_inactive=incluir_inativas)


@router.get(
    "/{mesa_id}", response_model=MesaResponse,
    summary="Obtém uma mesa pelo ID",
    responses={404: _NOT_FOUND, 500: _STORAGE_ERROR},
)
async def get_mesa(
    mesa_id: int, service: MesaLifecycleService = Depends(get_mesa_service),
):
    """Get one mesa, active or not."""
    return await service.get(MesaId(mesa_id))


@router.post(
    "", response_model=MesaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cria uma nova mesa",
    responses={
        400: {"description": "Campos obrigatórios faltando ou inválidos"},
        500: _STORAGE_ERROR,
    },
)
async def create_mesa(
    body: MesaCreate, service: MesaLifecycleService = Depends(get_mesa_service),
):
    """Create a mesa. It always starts active."""
    return await service.create(body.to_fields())


@router.put(
    "/{mesa_id}", response_model=MesaResponse,
    summary="Atualiza uma mesa existente",
    responses={
        400: {"description": "Campos inválidos ou mesa desativada"},
        404: _NOT_FOUND,
        500: _STORAGE_ERROR,
    },
)
async def update_mesa(
    mesa_id: int,
    body: MesaUpdate,
    service: MesaLifecycleService = Depends(get_mesa_service),
):
    """Update supplied fields of an active mesa."""
    return await service.update(MesaId(mesa_id), body.to_fields())


@router.delete(
    "/{mesa_id}", response_model=MesaResponse,
    summary="Desativa uma mesa (delete lógico)",
    responses={404: _NOT_FOUND, 500: _STORAGE_ERROR},
)
async def deactivate_mesa(
    mesa_id: int, service: MesaLifecycleService = Depends(get_mesa_service),
):
    """Logical delete: status -> -1. Repeating it returns the same mesa."""
    return await service.deactivate(MesaId(mesa_id))
