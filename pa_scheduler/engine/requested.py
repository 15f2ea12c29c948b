"""Self-requested phase: honour staff pre-selections before any rule checks."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pa_scheduler.domain.models import ShiftSlot, WorkRequest

from .base import BasePhase
from .state import ScheduleState

logger = logging.getLogger(__name__)


class SelfRequestPhase(BasePhase):
    """Commit slots matching a self-requested (date, shift kind) unconditionally."""

    name = "self_request"

    @staticmethod
    def _matching_request(slot: ShiftSlot, requests: Sequence[WorkRequest]) -> Optional[WorkRequest]:
        for request in requests:
            if request.date == slot.date and request.kind is slot.kind:
                return request
        return None

    def run(self, pending: Sequence[ShiftSlot], state: ScheduleState) -> List[ShiftSlot]:
        remaining: List[ShiftSlot] = []
        committed = 0

        for slot in pending:
            request = self._matching_request(slot, state.work_requests)
            staff = state.find_core(request.staff_id) if request is not None else None
            if staff is None:
                remaining.append(slot)
                continue
            if state.is_booked(staff.id, slot.date):
                # second slot of the same kind that day goes to the later phases
                state.record(self.name, slot, staff, False, "Already assigned to another shift today")
                remaining.append(slot)
                continue
            state.commit(slot, staff, self.name, "Self-requested")
            committed += 1

        logger.info(f"Self-requested phase: {committed} committed, {len(remaining)} remaining")
        return remaining
