"""Sibling ordering helpers shared by the group and request managers.

Positions travel as digit strings and are compared numerically, so ``"10"``
sorts after ``"9"``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from reqboard.server.models.entities import Group, WorkRequest

Ranked = TypeVar("Ranked", Group, WorkRequest)


def position_rank(position: str | None) -> int:
    """Numeric value of a string-encoded rank.  Unparsable ranks sort first."""
    try:
        return int(position) if position is not None else 0
    except ValueError:
        return 0


def sort_by_position(records: Iterable[Ranked]) -> list[Ranked]:
    """Sort by ascending numeric ``position``, then by insertion order.

    ``records`` must be given in store insertion order; the enumeration index
    is the explicit tie-break.
    """
    indexed = list(enumerate(records))
    indexed.sort(key=lambda item: (position_rank(item[1].position), item[0]))
    return [record for _, record in indexed]
