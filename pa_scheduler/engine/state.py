"""Accumulating state shared by the assignment phases of one scheduling run."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from pa_scheduler.config import SchedulingRules
from pa_scheduler.domain.models import CoreStaff, FlexibleStaff, ShiftSlot, StaffMember
from pa_scheduler.services.periods import week_of_month
from pa_scheduler.services.roster import Roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """One trace record: a candidate accepted or rejected for a slot."""

    phase: str
    slot_id: str
    staff_id: Optional[str]
    accepted: bool
    reason: str


class ScheduleState:
    """
    Immutable inputs plus the result built up across phases.

    Staff values are replaced, never mutated: ``commit`` swaps in the
    updated staff member and hands it back to the caller.
    """

    def __init__(self, roster: Roster, rules: SchedulingRules, collect_trace: bool = False):
        self.rules = rules
        self.work_requests = list(roster.work_requests)
        self.core: List[CoreStaff] = list(roster.core)
        self.flexible: List[FlexibleStaff] = list(roster.flexible)
        self.committed: List[ShiftSlot] = []
        self.outcomes: Dict[str, ShiftSlot] = {}
        self.trace: Optional[List[Decision]] = [] if collect_trace else None

        self._core_index = self._index(self.core)
        self._flexible_index = self._index(self.flexible)
        self._by_staff: Dict[str, List[ShiftSlot]] = defaultdict(list)

    @staticmethod
    def _index(staff: Sequence[StaffMember]) -> Dict[str, int]:
        index: Dict[str, int] = {}
        for position, member in enumerate(staff):
            # empty ids never schedule; duplicates resolve to the first entry
            if member.id and member.id not in index:
                index[member.id] = position
        return index

    # Candidate pools ---------------------------------------------------

    def core_candidates(self) -> List[CoreStaff]:
        """Schedulable core staff in roster order."""
        return [self.core[i] for i in sorted(self._core_index.values())]

    def flexible_candidates(self) -> List[FlexibleStaff]:
        return [self.flexible[i] for i in sorted(self._flexible_index.values())]

    def find_core(self, staff_id: str) -> Optional[CoreStaff]:
        position = self._core_index.get(staff_id)
        return self.core[position] if position is not None else None

    # Queries -------------------------------------------------------------

    def slots_for(self, staff_id: str) -> List[ShiftSlot]:
        return list(self._by_staff.get(staff_id, ()))

    def is_booked(self, staff_id: str, day: date) -> bool:
        return any(s.date == day for s in self._by_staff.get(staff_id, ()))

    def weekend_count(self, staff_id: str) -> int:
        return sum(1 for s in self._by_staff.get(staff_id, ()) if s.is_weekend)

    def has_available_core(self) -> bool:
        """
        True while some core staff member is neither at the horizon cap nor
        at the weekly cap in any (year, week-of-month) bucket.
        """
        for staff in self.core_candidates():
            if staff.assigned_shifts >= staff.max_shifts:
                continue
            per_week: Dict[tuple, int] = defaultdict(int)
            for slot in self._by_staff.get(staff.id, ()):
                per_week[(slot.date.year, week_of_month(slot.date))] += 1
            if any(count >= self.rules.max_shifts_per_week for count in per_week.values()):
                continue
            return True
        return False

    # Updates -------------------------------------------------------------

    def commit(self, slot: ShiftSlot, staff: StaffMember, phase: str, reason: str = "") -> StaffMember:
        """
        Commit ``slot`` to ``staff`` and return the staff member's updated value.

        Raises:
            ValueError: If the slot was already resolved in this run
        """
        if slot.id in self.outcomes:
            raise ValueError(f"Slot {slot.id} already resolved")
        filled = slot.assign(staff)
        updated = staff.record(filled)
        if isinstance(staff, FlexibleStaff):
            self.flexible[self._flexible_index[staff.id]] = updated
        else:
            self.core[self._core_index[staff.id]] = updated

        self.committed.append(filled)
        self._by_staff[staff.id].append(filled)
        self.outcomes[slot.id] = filled
        self.record(phase, slot, staff, True, reason)
        logger.debug(f"[{phase}] {staff.name} ({staff.id}) -> {slot.date} {slot.kind.value}")
        return updated

    def leave_unfilled(self, slot: ShiftSlot, phase: str, reason: str) -> None:
        if slot.id in self.outcomes:
            raise ValueError(f"Slot {slot.id} already resolved")
        self.outcomes[slot.id] = slot.cleared()
        self.record(phase, slot, None, False, reason)
        logger.debug(f"[{phase}] {slot.date} {slot.kind.value} left unfilled: {reason}")

    def record(self, phase: str, slot: ShiftSlot, staff: Optional[StaffMember], accepted: bool, reason: str) -> None:
        if self.trace is not None:
            self.trace.append(
                Decision(
                    phase=phase,
                    slot_id=slot.id,
                    staff_id=staff.id if staff is not None else None,
                    accepted=accepted,
                    reason=reason,
                )
            )
