"""Services for scheduling logic."""

from .constraints import ConstraintViolation, Eligibility, can_assign, can_assign_core, can_assign_flexible, can_assign_relaxed
from .periods import is_weekend, paycheck_period, parse_date, same_paycheck_period, same_week, week_of_month
from .roster import Roster, SchedulingData, build_roster, parse_name_id

__all__ = [
    "ConstraintViolation",
    "Eligibility",
    "can_assign",
    "can_assign_core",
    "can_assign_flexible",
    "can_assign_relaxed",
    "parse_date",
    "week_of_month",
    "paycheck_period",
    "same_week",
    "same_paycheck_period",
    "is_weekend",
    "Roster",
    "SchedulingData",
    "build_roster",
    "parse_name_id",
]
