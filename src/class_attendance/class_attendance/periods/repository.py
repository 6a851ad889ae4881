from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Period


class PeriodRepository(Protocol):
    def list_all(self) -> Sequence[Period]:
        """Ordered by period number."""

        raise NotImplementedError

    def get_by_id(self, period_id: int) -> Optional[Period]:
        raise NotImplementedError
