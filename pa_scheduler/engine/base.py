"""Base phase interface that all assignment phases must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from pa_scheduler.domain.models import ShiftSlot

from .state import ScheduleState


class BasePhase(ABC):
    """
    Abstract base class for one pass of the assignment engine.

    Each phase resolves the slots it is responsible for (committing them or
    leaving them explicitly unfilled) and hands the rest to the next phase.
    """

    name: str | None = None  # Override in subclasses (e.g., "self_request", "weekday")

    @abstractmethod
    def run(self, pending: Sequence[ShiftSlot], state: ScheduleState) -> List[ShiftSlot]:
        """
        Resolve slots for this phase.

        Args:
            pending: Unresolved slots, in original input order
            state: Run state holding staff values and committed slots

        Returns:
            Slots still unresolved, in original input order
        """
        pass

    def get_phase_name(self) -> str:
        """Get the name used in logs and trace records."""
        return self.name or "UNKNOWN"
