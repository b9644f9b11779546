"""Mesa Schemas — Pydantic models for the mesa API boundary.

Invariants:
    - MesaCreate/MesaUpdate only coerce types; required-field and status rules
      live in core/enforce_mesa.py so they hold for every caller
    - Booleans never reach int coercion: capacidade/status true|false raise the
      domain ValidationError before Pydantic would turn them into 1/0
    - Blank capacidade/status strings become None, so the core reports them
      as missing (create) or invalid (update)
    - MesaUpdate is dumped with exclude_unset: absent key = untouched, null = invalid
    - MesaResponse is the flat persisted representation, timestamps in ISO-8601 UTC

Design Decisions:
    - All request fields Optional: a missing capacidade must surface as the
      domain message "missing required field", not a generic Pydantic error
    - Before-validators raise MesaError subclasses, not ValueError: the error
      handler renders them with the same message the core uses
    - from_attributes on MesaResponse: built straight from ORM rows or fakes
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enforce_mesa import check_capacidade, check_status


def _blank_as_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _capacidade_before(value: Any) -> Any:
    value = _blank_as_none(value)
    if isinstance(value, bool):
        check_capacidade(value)  # always raises for bool
    return value


class MesaCreate(BaseModel):
    """Mesa creation payload. status is accepted and ignored."""
    capacidade: int | None = Field(None, description="Capacidade da mesa")
    descricao: str | None = Field(None, description="Descrição da mesa")
    local: str | None = Field(None, description="Local da mesa")
    status: int | None = Field(
        None, description="Ignorado: toda mesa nasce ativa (1)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "capacidade": 4,
                "descricao": "Mesa perto da janela",
                "local": "Restaurante A",
            },
        },
    )

    @field_validator("capacidade", mode="before")
    @classmethod
    def capacidade_not_bool(cls, v: Any) -> Any:
        return _capacidade_before(v)

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MesaUpdate(BaseModel):
    """Partial update payload — only supplied keys are applied."""
    capacidade: int | None = Field(None, description="Capacidade da mesa")
    descricao: str | None = Field(None, description="Descrição da mesa")
    local: str | None = Field(None, description="Local da mesa")
    status: int | None = Field(
        None, description="Status da mesa (1 para ativo, -1 para desativado)",
    )

    @field_validator("capacidade", mode="before")
    @classmethod
    def capacidade_not_bool(cls, v: Any) -> Any:
        return _capacidade_before(v)

    @field_validator("status", mode="before")
    @classmethod
    def status_not_bool(cls, v: Any) -> Any:
        v = _blank_as_none(v)
        if isinstance(v, bool):
            check_status(v)  # always raises for bool
        return v

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MesaResponse(BaseModel):
    """Mesa representation returned by every endpoint."""
    id: int
    capacidade: int
    descricao: str
    local: str
    status: int = Field(description="1 para ativo, -1 para desativado")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "capacidade": 4,
                "descricao": "Mesa perto da janela",
                "local": "Restaurante A",
                "status": 1,
                "created_at": "2023-10-10T12:00:00Z",
                "updated_at": "2023-10-10T12:00:00Z",
            },
        },
    )
