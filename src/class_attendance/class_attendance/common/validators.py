from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_YEAR, MIN_YEAR
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_year(value, field_name: str = "Year") -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValidationError(f"{field_name} must be between {MIN_YEAR} and {MAX_YEAR}")
    return year


def require_section(value: Optional[str]) -> str:
    section = require_non_empty(value, "Section").upper()
    if len(section) != 1 or not section.isalpha():
        raise ValidationError("Section must be a single letter")
    return section


def optional_year(value) -> Optional[int]:
    """Parse a year facet from a query string; blank means 'all'."""

    if value in (None, ""):
        return None
    return require_year(value)
