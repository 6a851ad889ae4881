from __future__ import annotations

from typing import Iterable, Optional


def matches_text(search: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring match over any of the given fields."""

    if not search:
        return True
    needle = search.strip().lower()
    return any(needle in (f or "").lower() for f in fields)


def matches_facets(item, **facets) -> bool:
    """AND over categorical facets; a facet set to None/'' matches everything."""

    for attr, wanted in facets.items():
        if wanted in (None, ""):
            continue
        if getattr(item, attr) != wanted:
            return False
    return True


def distinct(values: Iterable[Optional[str]]) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen
