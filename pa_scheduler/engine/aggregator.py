"""Collect the final slot list and staff statistics of a scheduling run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from pa_scheduler.domain.models import ShiftSlot, StaffMember

from .state import Decision, ScheduleState


@dataclass
class ScheduleResult:
    """Result of schedule generation."""

    slots: List[ShiftSlot]
    staff: List[StaffMember]
    trace: Optional[List[Decision]] = field(default=None)

    @property
    def filled_slots(self) -> List[ShiftSlot]:
        return [s for s in self.slots if s.is_filled]

    @property
    def unfilled_slots(self) -> List[ShiftSlot]:
        return [s for s in self.slots if not s.is_filled]

    def staff_by_id(self) -> Dict[str, StaffMember]:
        return {member.id: member for member in self.staff if member.id}

    def slots_for(self, staff_id: str) -> List[ShiftSlot]:
        return [s for s in self.slots if s.staff_id == staff_id]


def aggregate_result(slots: Sequence[ShiftSlot], state: ScheduleState) -> ScheduleResult:
    """
    Build the run result in input order.

    Every input slot appears exactly once: as committed, or explicitly
    unfilled when no phase resolved it.

    Args:
        slots: Original input slots
        state: Final run state

    Returns:
        ScheduleResult with slots, core then flexible staff, and the trace
    """
    final_slots = [state.outcomes.get(slot.id) or slot.cleared() for slot in slots]
    return ScheduleResult(
        slots=final_slots,
        staff=[*state.core, *state.flexible],
        trace=list(state.trace) if state.trace is not None else None,
    )
