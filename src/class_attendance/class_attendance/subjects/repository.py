from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject, SubjectInput


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        """Ordered by course, year, then name."""

        raise NotImplementedError

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Subject]:
        raise NotImplementedError

    def create(self, data: SubjectInput) -> int:
        raise NotImplementedError

    def update(self, subject_id: int, data: SubjectInput) -> bool:
        raise NotImplementedError

    def delete_by_id(self, subject_id: int) -> bool:
        raise NotImplementedError
