"""Build typed staff rosters from raw roster and request records."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pa_scheduler.config import SchedulingRules
from pa_scheduler.domain.models import CoreStaff, FlexibleStaff, ShiftKind, WorkRequest

from .periods import parse_date

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

# Normalised field name -> accepted aliases (spreadsheet headers and camelCase keys)
NAME_ID_FIELDS = ("nameid",)
DATE_FIELDS = ("date",)
SHIFT_FIELDS = ("shift", "shiftkind", "shifttype", "type")
MAX_SHIFT_FIELDS = ("numberofshift", "numberofshifts", "maxshifts")
START_FIELDS = ("datesavailabletoworkstart", "availabilitystart", "availablestart")
END_FIELDS = ("datesavailabletoworkend", "availabilityend", "availableend")


@dataclass
class SchedulingData:
    """Raw records handed over by the ingestion layer. ``None`` means not supplied."""

    roster: Optional[Sequence[Record]] = None
    flexible_roster: Optional[Sequence[Record]] = None
    work_requests: Optional[Sequence[Record]] = None
    days_off: Optional[Sequence[Record]] = None


@dataclass
class Roster:
    core: List[CoreStaff] = field(default_factory=list)
    flexible: List[FlexibleStaff] = field(default_factory=list)
    work_requests: List[WorkRequest] = field(default_factory=list)


def _normalize_key(key: Any) -> str:
    return re.sub(r"[^a-z0-9]", "", str(key).lower())


def _field(record: Record, aliases: Tuple[str, ...]) -> Any:
    for key, value in record.items():
        if _normalize_key(key) in aliases:
            return value
    return None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN from pandas
        return True
    return str(value).strip() == ""


def parse_name_id(token: Any) -> Tuple[str, str]:
    """
    Split a combined ``"Name(ID)"`` token into display name and identifier.

    A token without an opening parenthesis yields ``("", "")`` so the
    resulting staff entity simply matches nothing.

    Args:
        token: Raw roster token, e.g. ``"Alice Smith(A1)"``

    Returns:
        Tuple of (name, identifier)
    """
    if _is_blank(token):
        return "", ""
    text = str(token)
    if "(" not in text:
        return "", ""
    name, _, rest = text.partition("(")
    staff_id = rest.split("(")[0].replace(")", "", 1).strip()
    return name.strip(), staff_id


def _staff_id(record: Record) -> str:
    return parse_name_id(_field(record, NAME_ID_FIELDS))[1]


def _to_int(value: Any, default: int) -> int:
    if _is_blank(value):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric shift count {value!r}, using {default}")
        return default
    # a zero count falls back to the default, like an empty cell
    return number if number > 0 else default


def build_work_requests(records: Sequence[Record] | None) -> List[WorkRequest]:
    """
    Parse self-requested work day records, keeping their original order.

    Records with no usable identifier or an unknown shift label are dropped.
    """
    requests: List[WorkRequest] = []
    for record in records or []:
        staff_id = _staff_id(record)
        if not staff_id:
            logger.warning(f"Skipping work request without staff identifier: {dict(record)}")
            continue
        try:
            kind = ShiftKind.parse(_field(record, SHIFT_FIELDS))
        except ValueError:
            logger.warning(f"Skipping work request for {staff_id} with unknown shift {_field(record, SHIFT_FIELDS)!r}")
            continue
        requests.append(WorkRequest(staff_id=staff_id, date=parse_date(_field(record, DATE_FIELDS)), kind=kind))
    return requests


def build_days_off(records: Sequence[Record] | None) -> Dict[str, set]:
    days_off: Dict[str, set] = defaultdict(set)
    for record in records or []:
        staff_id = _staff_id(record)
        if not staff_id:
            continue
        days_off[staff_id].add(parse_date(_field(record, DATE_FIELDS)))
    return days_off


def build_core_staff(
    records: Sequence[Record] | None,
    work_requests: Sequence[WorkRequest],
    days_off: Mapping[str, set],
    rules: SchedulingRules,
) -> List[CoreStaff]:
    """
    Build core staff in roster order.

    ``assigned_shifts`` starts at the number of the member's self-requested
    work days; every other counter starts at zero.
    """
    requests_by_staff: Dict[str, List[WorkRequest]] = defaultdict(list)
    for request in work_requests:
        requests_by_staff[request.staff_id].append(request)

    staff: List[CoreStaff] = []
    for record in records or []:
        name, staff_id = parse_name_id(_field(record, NAME_ID_FIELDS))
        if not staff_id:
            logger.warning(f"Malformed roster token {_field(record, NAME_ID_FIELDS)!r}: staff will not be scheduled")
        own_requests = requests_by_staff.get(staff_id, []) if staff_id else []
        staff.append(
            CoreStaff(
                id=staff_id,
                name=name,
                max_shifts=_to_int(_field(record, MAX_SHIFT_FIELDS), rules.max_shifts_per_horizon),
                assigned_shifts=len(own_requests),
                requested_work_days=tuple((r.date, r.kind) for r in own_requests),
                requested_days_off=frozenset(days_off.get(staff_id, ())) if staff_id else frozenset(),
            )
        )
    return staff


def build_flexible_staff(records: Sequence[Record] | None, rules: SchedulingRules) -> List[FlexibleStaff]:
    """Build per-diem staff in roster order; rows without a usable availability window are dropped."""
    staff: List[FlexibleStaff] = []
    for record in records or []:
        name, staff_id = parse_name_id(_field(record, NAME_ID_FIELDS))
        if not staff_id:
            logger.warning(f"Malformed roster token {_field(record, NAME_ID_FIELDS)!r}: staff will not be scheduled")
        try:
            available_start = parse_date(_field(record, START_FIELDS))
            available_end = parse_date(_field(record, END_FIELDS))
        except ValueError as e:
            logger.warning(f"Skipping per-diem staff {name or staff_id!r} without a usable availability window: {e}")
            continue
        staff.append(
            FlexibleStaff(
                id=staff_id,
                name=name,
                available_start=available_start,
                available_end=available_end,
                max_shifts=_to_int(_field(record, MAX_SHIFT_FIELDS), rules.flexible_max_shifts),
            )
        )
    return staff


def build_roster(data: SchedulingData | None, rules: SchedulingRules | None = None) -> Roster:
    """
    Transform raw records into typed staff collections.

    Args:
        data: Raw roster/request records; missing datasets count as empty
        rules: Scheduling rules providing default shift caps

    Returns:
        Roster with core staff, flexible staff and ordered work requests

    Raises:
        ValueError: If a work request or day-off date cannot be parsed
    """
    data = data or SchedulingData()
    rules = rules or SchedulingRules()

    work_requests = build_work_requests(data.work_requests)
    days_off = build_days_off(data.days_off)
    core = build_core_staff(data.roster, work_requests, days_off, rules)
    flexible = build_flexible_staff(data.flexible_roster, rules)

    logger.info(f"Roster built: {len(core)} core staff, {len(flexible)} flexible staff, "
                f"{len(work_requests)} work requests")
    return Roster(core=core, flexible=flexible, work_requests=work_requests)
