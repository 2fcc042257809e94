"""Live substring filtering and selection bookkeeping for the profile list."""

from __future__ import annotations

from collections.abc import Sequence

from profile_switcher.catalog import Profile


def filter_profiles(profiles: Sequence[Profile], query: str) -> list[Profile]:
    """Return profiles whose name contains ``query``, case-insensitively.

    An empty query keeps every profile. Relative order is preserved.
    """
    if not query:
        return list(profiles)
    needle = query.lower()
    return [p for p in profiles if needle in p.name.lower()]


def reconcile_selection(
    filtered: Sequence[Profile], previous: int | None,
) -> int | None:
    """Return a selection index that is valid for ``filtered``."""
    if not filtered:
        return None
    if previous is None or not 0 <= previous < len(filtered):
        return 0
    return previous


def move_selection(
    filtered: Sequence[Profile], current: int | None, delta: int,
) -> int | None:
    """Move the cursor by ``delta`` rows, clamped to the list bounds."""
    if not filtered:
        return None
    start = reconcile_selection(filtered, current) or 0
    return max(0, min(len(filtered) - 1, start + delta))
