"""Domain Types — rich types for the mesa lifecycle.

Invariants:
    - MesaId wraps int — never use a bare int for identities in domain logic
    - MesaStatus holds exactly two values: ACTIVE (1) and INACTIVE (-1)
    - INACTIVE is terminal: next_status() never leaves it

Design Decisions:
    - IntEnum over bool flag: status serializes as 1/-1 and new states
      (e.g. reserved) do not require renaming the column
    - Transition rule as a pure function: shell only persists the result
"""

from enum import IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MesaId = NewType("MesaId", int)


# ─── Enums ───────────────────────────────────────────────────────

class MesaStatus(IntEnum):
    """Mesa lifecycle states — maps to DB `status` column."""
    ACTIVE = 1
    INACTIVE = -1

    @classmethod
    def values(cls) -> set[int]:
        return {member.value for member in cls}


class InvalidTransition(Exception):
    """Raised by next_status when a transition leaves a terminal state."""

    def __init__(self, current: MesaStatus, requested: MesaStatus):
        super().__init__(f"{current.name} -> {requested.name}")
        self.current = current
        self.requested = requested


def is_terminal(status: MesaStatus) -> bool:
    return status is MesaStatus.INACTIVE


def next_status(current: MesaStatus, requested: MesaStatus) -> MesaStatus:
    """One-way transition: ACTIVE -> ACTIVE | INACTIVE, nothing out of INACTIVE."""
    if is_terminal(current):
        raise InvalidTransition(current, requested)
    return requested
