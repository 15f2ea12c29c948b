"""Weekday phase: first-fit greedy over core staff, then flexible staff."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pa_scheduler.domain.models import ShiftSlot, StaffMember
from pa_scheduler.services.constraints import can_assign_core, can_assign_flexible

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class WeekdayPhase(BasePhase):
    """
    Fill each remaining slot with the first eligible staff member.

    Core staff are tried in roster order under the standard rules; flexible
    staff are the overflow pool. Once no core staff can take any more work
    the rest of the slots are left unfilled without further evaluation.
    """

    name = "weekday"

    def run(self, pending: Sequence[ShiftSlot], state: ScheduleState) -> List[ShiftSlot]:
        assigned = 0
        unfilled = 0

        for position, slot in enumerate(pending):
            if not state.has_available_core():
                rest = pending[position:]
                logger.warning(f"No PAs available for remaining weekday shifts ({len(rest)} left unfilled)")
                for leftover in rest:
                    state.leave_unfilled(leftover, self.name, "No core staff remain available")
                unfilled += len(rest)
                break

            staff = self._pick(slot, state)
            if staff is None:
                state.leave_unfilled(slot, self.name, "No available staff")
                logger.info(f"No staff available for weekday shift {slot.date} {slot.kind.value}")
                unfilled += 1
                continue
            state.commit(slot, staff, self.name, "Weekday assignment")
            assigned += 1

        logger.info(f"Weekday phase: {assigned} assigned, {unfilled} unfilled")
        return []

    def _pick(self, slot: ShiftSlot, state: ScheduleState) -> Optional[StaffMember]:
        for staff in state.core_candidates():
            eligibility = can_assign_core(staff, slot, state.slots_for(staff.id), state.rules)
            if eligibility.eligible:
                return staff
            state.record(self.name, slot, staff, False, eligibility.reason)

        for flexible in state.flexible_candidates():
            eligibility = can_assign_flexible(flexible, slot, state.slots_for(flexible.id), state.rules)
            if eligibility.eligible:
                return flexible
            state.record(self.name, slot, flexible, False, eligibility.reason)
        return None
