"""Eligibility checks deciding whether a staff member may take a shift slot."""

from __future__ import annotations

from typing import Iterable, List, NamedTuple

from pa_scheduler.config import SchedulingRules
from pa_scheduler.domain.models import CoreStaff, FlexibleStaff, ShiftSlot, StaffMember

from .periods import days_between, same_month, same_paycheck_period, same_week


class ConstraintViolation:
    """Human-readable rejection reasons."""

    MAX_SHIFTS = "Max shifts reached for the scheduling horizon"
    SAME_DAY = "Already assigned to another shift today"
    DAY_OFF = "Requested day off"
    POST_OVERNIGHT_REST = "Days off required after overnight shift"
    MIN_REST = "Rest required between shifts"
    CONSECUTIVE = "Max consecutive shifts in a row"
    WEEKLY_CAP = "Max shifts per week reached"
    PAYCHECK_CAP = "Max shifts per paycheck period reached"
    OVERNIGHT_CAP = "Max overnight shifts per paycheck period reached"
    WEEKEND_CAP = "Max weekend shifts per month reached"
    OUTSIDE_AVAILABILITY = "Not available during this date range"
    NO_IDENTIFIER = "Staff member has no identifier"


class Eligibility(NamedTuple):
    eligible: bool
    reason: str = ""


ELIGIBLE = Eligibility(True, "")


def _own_slots(staff: StaffMember, committed: Iterable[ShiftSlot]) -> List[ShiftSlot]:
    return [s for s in committed if s.staff_id == staff.id]


def _consecutive_run_blocks(own: List[ShiftSlot], slot: ShiftSlot, run_cap: int) -> bool:
    """True if the latest ``run_cap`` shifts are back-to-back days ending the day before ``slot``."""
    if len(own) < run_cap:
        return False
    tail = sorted(own, key=lambda s: s.date)[-run_cap:]
    run = 1
    for earlier, later in zip(reversed(tail[:-1]), reversed(tail[1:])):
        if (later.date - earlier.date).days == 1:
            run += 1
        else:
            break
    return run >= run_cap and (slot.date - tail[-1].date).days == 1


def can_assign_core(
    staff: CoreStaff,
    slot: ShiftSlot,
    committed: Iterable[ShiftSlot],
    rules: SchedulingRules,
) -> Eligibility:
    """
    Standard evaluator for core staff.

    Checks run in a fixed order and stop at the first failure.

    Args:
        staff: Core staff member being considered
        slot: Candidate slot
        committed: Slots already committed in this run (any staff)
        rules: Scheduling rules with the numeric limits

    Returns:
        Eligibility with the rejection reason when not eligible
    """
    if staff.assigned_shifts >= staff.max_shifts:
        return Eligibility(False, ConstraintViolation.MAX_SHIFTS)

    own = _own_slots(staff, committed)

    if any(s.date == slot.date for s in own):
        return Eligibility(False, ConstraintViolation.SAME_DAY)

    if slot.date in staff.requested_days_off:
        return Eligibility(False, ConstraintViolation.DAY_OFF)

    if staff.last_overnight_date is not None:
        if days_between(staff.last_overnight_date, slot.date) < rules.overnight_rest_days:
            return Eligibility(False, ConstraintViolation.POST_OVERNIGHT_REST)

    if own:
        latest = max(own, key=lambda s: s.date)
        if days_between(latest.date, slot.date) < rules.min_rest_days:
            return Eligibility(False, ConstraintViolation.MIN_REST)

    if _consecutive_run_blocks(own, slot, rules.max_consecutive_days):
        return Eligibility(False, ConstraintViolation.CONSECUTIVE)

    week_count = sum(1 for s in own if same_week(s.date, slot.date))
    if week_count >= rules.max_shifts_per_week:
        return Eligibility(False, f"{ConstraintViolation.WEEKLY_CAP} (has {week_count})")

    paycheck_own = [s for s in own if same_paycheck_period(s.date, slot.date)]
    if len(paycheck_own) >= rules.max_shifts_per_paycheck:
        return Eligibility(False, f"{ConstraintViolation.PAYCHECK_CAP} (has {len(paycheck_own)})")

    if slot.is_overnight:
        overnight_count = sum(1 for s in paycheck_own if s.is_overnight)
        if overnight_count >= rules.max_overnight_per_paycheck:
            return Eligibility(False, ConstraintViolation.OVERNIGHT_CAP)

    if slot.is_weekend:
        weekend_count = sum(1 for s in own if s.is_weekend and same_month(s.date, slot.date))
        if weekend_count >= rules.max_weekend_per_month:
            return Eligibility(False, ConstraintViolation.WEEKEND_CAP)

    return ELIGIBLE


def can_assign_relaxed(
    staff: CoreStaff,
    slot: ShiftSlot,
    committed: Iterable[ShiftSlot],
    rules: SchedulingRules | None = None,
) -> Eligibility:
    """
    Weekend-forcing evaluator: only same-day exclusivity and requested days off.

    Workload, rest and cap rules are bypassed so weekend slots get covered.
    """
    if any(s.staff_id == staff.id and s.date == slot.date for s in committed):
        return Eligibility(False, ConstraintViolation.SAME_DAY)
    if slot.date in staff.requested_days_off:
        return Eligibility(False, ConstraintViolation.DAY_OFF)
    return ELIGIBLE


def can_assign_flexible(
    staff: FlexibleStaff,
    slot: ShiftSlot,
    committed: Iterable[ShiftSlot],
    rules: SchedulingRules | None = None,
) -> Eligibility:
    """Flexible staff: availability window and same-day exclusivity only."""
    if not staff.is_available_on(slot.date):
        return Eligibility(False, ConstraintViolation.OUTSIDE_AVAILABILITY)
    if any(s.staff_id == staff.id and s.date == slot.date for s in committed):
        return Eligibility(False, ConstraintViolation.SAME_DAY)
    return ELIGIBLE


def can_assign(
    staff: StaffMember,
    slot: ShiftSlot,
    committed: Iterable[ShiftSlot],
    rules: SchedulingRules | None = None,
) -> Eligibility:
    """Dispatch to the evaluator matching the staff member's type."""
    rules = rules or SchedulingRules()
    if not staff.id:
        return Eligibility(False, ConstraintViolation.NO_IDENTIFIER)
    if isinstance(staff, FlexibleStaff):
        return can_assign_flexible(staff, slot, committed, rules)
    return can_assign_core(staff, slot, committed, rules)
