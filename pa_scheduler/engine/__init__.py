"""Assignment engine with ordered scheduling phases."""

from .aggregator import ScheduleResult, aggregate_result
from .base import BasePhase
from .orchestrator import Orchestrator, generate_schedule
from .requested import SelfRequestPhase
from .state import Decision, ScheduleState
from .weekday import WeekdayPhase
from .weekend import WeekendPriorityPhase

__all__ = [
    "BasePhase",
    "SelfRequestPhase",
    "WeekendPriorityPhase",
    "WeekdayPhase",
    "ScheduleState",
    "Decision",
    "ScheduleResult",
    "aggregate_result",
    "Orchestrator",
    "generate_schedule",
]
