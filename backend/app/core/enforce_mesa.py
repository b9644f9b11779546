"""Mesa Field Enforcement — pure validation of creation and update payloads.

Invariants:
    - validate_create requires capacidade, descricao and local (absent, null or blank = missing)
    - capacidade is a positive integer; booleans are rejected even though bool subclasses int
    - validate_update checks only supplied keys; supplied null/blank is invalid, not "unset"
    - status on update must be one of MesaStatus values, else "status inválido"
    - Functions return normalized field dicts and never touch storage

Design Decisions:
    - Raises ValidationError instead of returning error dicts: the shell maps
      MesaError subclasses to HTTP in one place (api/error_handlers.py)
    - status is NOT part of validate_create output: the service applies the
      ACTIVE construction rule explicitly
"""

from typing import Any

from app.core.domain_types import MesaId, MesaStatus, is_terminal
from app.core.errors import StateConflictError, ValidationError


REQUIRED_FIELDS: tuple[str, ...] = ("capacidade", "descricao", "local")
TEXT_FIELDS: tuple[str, ...] = ("descricao", "local")
MISSING_FIELD_MESSAGE = "missing required field"


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def check_capacidade(value: Any) -> int:
    """Coerce capacidade to a positive int or raise."""
    message = "capacidade deve ser um inteiro positivo"
    if isinstance(value, bool):
        raise ValidationError(message, "capacidade")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(message, "capacidade")
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(message, "capacidade")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(message, "capacidade")
    return value


def check_text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} deve ser texto", field)
    stripped = value.strip()
    if not stripped:
        raise ValidationError(f"{field} não pode ser vazio", field)
    return stripped


def check_status(value: Any) -> MesaStatus:
    if isinstance(value, bool) or value not in MesaStatus.values():
        raise ValidationError("status inválido", "status")
    return MesaStatus(value)


def validate_create(fields: dict) -> dict:
    """Required-field and type rules for a new mesa. Ignores status."""
    for name in REQUIRED_FIELDS:
        if _is_missing(fields.get(name)):
            raise ValidationError(MISSING_FIELD_MESSAGE, name)
    return {
        "capacidade": check_capacidade(fields["capacidade"]),
        "descricao": check_text(fields["descricao"], "descricao"),
        "local": check_text(fields["local"], "local"),
    }


def validate_update(fields: dict) -> dict:
    """Partial rules: only supplied keys are checked and returned."""
    changes: dict = {}
    if "capacidade" in fields:
        if fields["capacidade"] is None:
            raise ValidationError("capacidade deve ser um inteiro positivo", "capacidade")
        changes["capacidade"] = check_capacidade(fields["capacidade"])
    for name in TEXT_FIELDS:
        if name in fields:
            changes[name] = check_text(fields[name], name)
    # status checked last: field errors win over an invalid status
    if "status" in fields:
        changes["status"] = check_status(fields["status"])
    return changes


def check_mutable(mesa_id: MesaId, status: int) -> None:
    """Rule: a deactivated mesa rejects every further field update."""
    if is_terminal(MesaStatus(status)):
        raise StateConflictError(mesa_id)
