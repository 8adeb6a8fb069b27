"""Small helpers for bot handlers."""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Any


def random_between(low: int, high: int) -> int:
    """Return a random integer in ``[low, high)``; raises ValueError if the range is empty."""
    if high <= low:
        raise ValueError(f"empty range: [{low}, {high})")
    return random.randrange(low, high)


def is_in_group(uid: int, group_uids: Iterable[int]) -> bool:
    """Tell whether ``uid`` is one of ``group_uids``."""
    return any(uid == member for member in group_uids)


def is_in_list(value: Any, items: Iterable[str]) -> bool:
    """Tell whether ``value`` equals one of the strings in ``items``."""
    return any(value == item for item in items)


def is_admin(uid: int, admin_uids: Iterable[int]) -> bool:
    """Tell whether ``uid`` is among the administrators."""
    return any(uid == admin for admin in admin_uids)