from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Mapping, Sequence


def count_statuses(items: Iterable, statuses: Sequence[Enum], *, key: Callable = lambda item: item.status) -> dict:
    """{status value: number of items}, zero for statuses with no items."""
    counts = {s.value: 0 for s in statuses}
    for item in items:
        value = key(item).value
        if value in counts:
            counts[value] += 1
    return counts


def zero_filled(counts: Mapping[str, int], statuses: Sequence[Enum]) -> dict:
    """Restrict grouped counts to `statuses`, zero where a status has no rows."""
    return {s.value: int(counts.get(s.value, 0)) for s in statuses}
