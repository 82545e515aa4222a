from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ScheduleSlot


class ScheduleRepository(Protocol):
    def list_schedule(self, academic_year: Optional[str] = None) -> Sequence[ScheduleSlot]:
        """List slots; with ``academic_year``, only slots of that year or with no year."""

        raise NotImplementedError

    def replace_schedule(self, slots: Sequence[ScheduleSlot]) -> None:
        """Replace the whole collection with ``slots``."""

        raise NotImplementedError
