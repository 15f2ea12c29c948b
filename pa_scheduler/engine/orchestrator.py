"""Orchestrator - runs the assignment phases in order to build a complete schedule."""

from __future__ import annotations

import logging
from typing import List, Sequence

from pa_scheduler.config import SchedulerConfig
from pa_scheduler.domain.models import ShiftSlot
from pa_scheduler.services.roster import Roster, SchedulingData, build_roster

from .aggregator import ScheduleResult, aggregate_result
from .base import BasePhase
from .requested import SelfRequestPhase
from .state import ScheduleState
from .weekday import WeekdayPhase
from .weekend import WeekendPriorityPhase

logger = logging.getLogger(__name__)


def default_phases() -> List[BasePhase]:
    return [SelfRequestPhase(), WeekendPriorityPhase(), WeekdayPhase()]


def _check_slots(slots: Sequence[ShiftSlot] | None) -> List[ShiftSlot]:
    if slots is None:
        raise ValueError("No shift slots supplied: load or create slots before scheduling")
    seen = set()
    for slot in slots:
        if slot.id in seen:
            raise ValueError(f"Duplicate shift slot id: {slot.id}")
        seen.add(slot.id)
    return list(slots)


def _span_days(slots: Sequence[ShiftSlot]) -> int:
    """Calendar days covered by the slot dates, first and last day included."""
    if not slots:
        return 0
    dates = [slot.date for slot in slots]
    return (max(dates) - min(dates)).days + 1


class Orchestrator:
    """
    Orchestrator runs the assignment phases over one slot list.

    Phases execute in order (self-requested, weekend priority, weekday);
    each resolves its share of the slots and passes the rest on. Nothing is
    revisited once resolved.
    """

    def __init__(self, phases: List[BasePhase] | None = None, config: SchedulerConfig | None = None):
        self.phases = phases if phases is not None else default_phases()
        self.config = config or SchedulerConfig()

    def run(self, slots: Sequence[ShiftSlot] | None, roster: Roster, collect_trace: bool = False) -> ScheduleResult:
        """
        Build the schedule for a slot list.

        Args:
            slots: Shift slots in their original order
            roster: Typed staff roster and work requests
            collect_trace: Keep per-decision trace records in the result

        Returns:
            ScheduleResult with every slot filled or explicitly unfilled

        Raises:
            ValueError: If no slot list is supplied or slot ids repeat
        """
        slots = _check_slots(slots)
        span = _span_days(slots)
        if span > self.config.horizon_days:
            logger.warning(f"Slots span {span} days, longer than the {self.config.horizon_days}-day horizon; "
                           f"shift caps are still applied per week, paycheck period and month")
        logger.info(f"Scheduling {len(slots)} slots with {len(roster.core)} PAs "
                    f"and {len(roster.flexible)} per-diem staff")

        state = ScheduleState(roster, self.config.rules, collect_trace=collect_trace)
        # pre-populated assignments are recomputed
        pending = [slot.cleared() for slot in slots]
        for phase in self.phases:
            logger.info(f"Running {phase.get_phase_name()} phase on {len(pending)} slots")
            pending = phase.run(pending, state)

        for slot in pending:
            state.leave_unfilled(slot, "final", "Not resolved by any phase")

        result = aggregate_result(slots, state)
        logger.info(f"Schedule complete: {len(result.filled_slots)} filled, {len(result.unfilled_slots)} unfilled")
        return result


def generate_schedule(
    slots: Sequence[ShiftSlot] | None,
    data: SchedulingData | None,
    config: SchedulerConfig | None = None,
    collect_trace: bool = False,
) -> ScheduleResult:
    """
    Convenience function: build the roster and run all phases.

    Args:
        slots: Shift slots to staff
        data: Raw roster and request records
        config: SchedulerConfig (defaults when omitted)
        collect_trace: Keep per-decision trace records in the result

    Returns:
        ScheduleResult
    """
    config = config or SchedulerConfig()
    slots = _check_slots(slots)
    roster = build_roster(data, config.rules)
    return Orchestrator(config=config).run(slots, roster, collect_trace=collect_trace)
