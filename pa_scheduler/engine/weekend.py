"""Weekend-priority phase: spread weekend slots to staff with the fewest weekends."""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from pa_scheduler.domain.models import ShiftSlot
from pa_scheduler.services.constraints import can_assign_relaxed

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class WeekendPriorityPhase(BasePhase):
    """
    Assign weekend slots tier by tier using the relaxed evaluator.

    Tier ``n`` holds the core staff with exactly ``n`` weekend shifts so far;
    a slot only reaches tier ``n + 1`` once nobody in tier ``n`` can take it.
    Weekday slots pass through untouched.
    """

    name = "weekend_priority"

    def run(self, pending: Sequence[ShiftSlot], state: ScheduleState) -> List[ShiftSlot]:
        weekend_slots = [s for s in pending if s.is_weekend]
        weekday_slots = [s for s in pending if not s.is_weekend]
        logger.info(f"Weekend phase: {len(weekend_slots)} weekend slots, {len(weekday_slots)} weekday slots pass on")

        weekend_counts: Dict[str, int] = {
            staff.id: state.weekend_count(staff.id) for staff in state.core_candidates()
        }
        tiers = state.rules.weekend_priority_tiers

        for slot in weekend_slots:
            if not self._assign(slot, state, weekend_counts, tiers):
                state.leave_unfilled(slot, self.name, "No PA available for weekend shift")
                logger.info(f"No PA available for weekend shift {slot.date} {slot.kind.value}")

        logger.debug(f"Weekend distribution after priority phase: {weekend_counts}")
        return weekday_slots

    def _assign(self, slot: ShiftSlot, state: ScheduleState, weekend_counts: Dict[str, int], tiers: int) -> bool:
        for tier in range(tiers):
            for staff in state.core_candidates():
                if weekend_counts.get(staff.id) != tier:
                    continue
                eligibility = can_assign_relaxed(staff, slot, state.committed, state.rules)
                if not eligibility.eligible:
                    state.record(self.name, slot, staff, False, eligibility.reason)
                    continue
                state.commit(slot, staff, self.name, f"Weekend priority tier {tier}")
                weekend_counts[staff.id] = tier + 1
                return True
        return False
