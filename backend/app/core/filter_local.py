"""Location Query — exact-match filtering of mesas by `local`.

Invariants:
    - Match is case-sensitive exact string equality (no trimming, no partial match)
    - include_inactive=True keeps every match; False keeps only ACTIVE mesas
    - Input order is preserved

Design Decisions:
    - Inactive visibility is an explicit option, not hard-coded: the default
      comes from Settings.local_search_include_inactive
"""

from typing import Iterable

from app.core.domain_types import MesaStatus
from app.core.repository_protocols import MesaLike


def matches_local(mesa: MesaLike, local: str) -> bool:
    return mesa.local == local


def is_visible(mesa: MesaLike, include_inactive: bool) -> bool:
    return include_inactive or mesa.status == MesaStatus.ACTIVE


def filter_by_local(
    mesas: Iterable[MesaLike], local: str, include_inactive: bool = True,
) -> list[MesaLike]:
    """Mesas at exactly `local`, optionally hiding deactivated ones."""
    return [
        m for m in mesas
        if matches_local(m, local) and is_visible(m, include_inactive)
    ]
