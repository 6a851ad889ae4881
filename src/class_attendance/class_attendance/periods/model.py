from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import LUNCH_BREAK_NAME


@dataclass(frozen=True)
class Period:
    """Domain entity: a fixed daily time slot (seeded, read-only)."""

    period_id: int
    period_number: int
    name: str
    start_time: time
    end_time: time

    @property
    def is_lunch_break(self) -> bool:
        return self.name.strip().lower() == LUNCH_BREAK_NAME

    @property
    def label(self) -> str:
        return f"{self.name} ({self.start_time:%H:%M}-{self.end_time:%H:%M})"
