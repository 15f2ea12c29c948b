from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

import pandas as pd

from .config import SchedulingRules
from .domain.models import CoreStaff, ShiftSlot
from .engine.aggregator import ScheduleResult
from .io.export_csv import slots_frame, staff_frame
from .services.periods import paycheck_period


def validate_schedule(input_slots: Sequence[ShiftSlot], result: ScheduleResult) -> None:
    """
    Check the structural guarantees of a scheduling run.

    Raises:
        ValueError: If a slot is dropped or duplicated, a staff member is
            double-booked on a date, or a slot references unknown staff
    """
    # Completeness: same slots, same order, each exactly once
    expected = [s.id for s in input_slots]
    got = [s.id for s in result.slots]
    if len(got) != len(expected):
        raise ValueError(f"Slot count mismatch: expected {len(expected)}, got {len(got)}")
    duplicates = [slot_id for slot_id, n in Counter(got).items() if n > 1]
    if duplicates:
        raise ValueError(f"Slots appear more than once: {', '.join(sorted(duplicates))}")
    if set(got) != set(expected):
        raise ValueError("Result slots do not match the input slots")

    # Referential integrity
    known = set(result.staff_by_id())
    unknown = {s.staff_id for s in result.filled_slots} - known
    if unknown:
        raise ValueError(f"Slots reference unknown staff ids: {', '.join(sorted(unknown))}")

    # No double booking per staff per date
    per_day = Counter((s.staff_id, s.date) for s in result.filled_slots)
    clashes = [key for key, n in per_day.items() if n > 1]
    if clashes:
        staff_id, day = clashes[0]
        raise ValueError(f"Staff {staff_id} is assigned to {per_day[clashes[0]]} shifts on {day}")


def find_cap_violations(result: ScheduleResult, rules: SchedulingRules | None = None) -> List[Dict[str, object]]:
    """
    List core staff whose committed slots exceed the overnight, paycheck or
    weekend caps.

    Only the self-requested and weekend-priority phases can produce these,
    so each entry records whether every slot involved falls on a weekend.

    Returns:
        One dict per violation: staff_id, rule, period, count, weekend_only
    """
    rules = rules or SchedulingRules()
    core_ids = {m.id for m in result.staff if isinstance(m, CoreStaff) and m.id}
    filled = [s for s in result.filled_slots if s.staff_id in core_ids]
    violations: List[Dict[str, object]] = []
    if not filled:
        return violations

    df = slots_frame(filled)
    df["date"] = [s.date for s in filled]
    df["overnight"] = [s.is_overnight for s in filled]
    df["weekend"] = [s.is_weekend for s in filled]
    df["paycheck"] = [f"{s.date.year}-{s.date.month:02d}-P{paycheck_period(s.date)}" for s in filled]
    df["month"] = [f"{s.date.year}-{s.date.month:02d}" for s in filled]

    checks = [
        ("max_overnight_per_paycheck", df[df["overnight"]], "paycheck", rules.max_overnight_per_paycheck),
        ("max_shifts_per_paycheck", df, "paycheck", rules.max_shifts_per_paycheck),
        ("max_weekend_per_month", df[df["weekend"]], "month", rules.max_weekend_per_month),
    ]
    for rule, frame, period_col, cap in checks:
        if frame.empty:
            continue
        grouped = frame.groupby(["staff_id", period_col])
        for (staff_id, period), group in grouped:
            if len(group) > cap:
                violations.append({
                    "staff_id": staff_id,
                    "rule": rule,
                    "period": period,
                    "count": int(len(group)),
                    "weekend_only": bool(group["weekend"].all()),
                })
    return violations


def summarize_schedule(result: ScheduleResult) -> str:
    if not result.slots:
        return "No slots."
    df = slots_frame(result.slots)
    df["filled"] = df["staff_id"].notna()

    coverage = df.groupby(["date", "type"])["filled"].sum().unstack(fill_value=0).astype(int)
    unfilled = df[~df["filled"]]
    staff = staff_frame(result.staff)

    lines = [f"Slots: {len(df)} total, {int(df['filled'].sum())} filled, {len(unfilled)} unfilled"]
    lines.append("")
    lines.append("Filled slots per day per shift:")
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Shifts per staff member:")
    if staff.empty:
        lines.append("(no staff)")
    else:
        lines.append(
            staff[["staff_id", "name", "staff_type", "assigned_shifts", "overnight_shifts", "weekend_shifts"]]
            .to_string(index=False)
        )
    if not unfilled.empty:
        lines.append("")
        lines.append("Unfilled slots:")
        lines.append(unfilled[["id", "date", "type"]].to_string(index=False))
    return "\n".join(lines)


def summarize_slots_frame(df: pd.DataFrame) -> str:
    """Summary of an exported slots CSV (columns id, date, type, staff_id)."""
    if df.empty:
        return "No slots."
    df = df.copy()
    df["filled"] = df["staff_id"].notna() & (df["staff_id"].astype(str).str.strip() != "")
    coverage = df.groupby(["date", "type"])["filled"].sum().unstack(fill_value=0).astype(int)
    per_staff = df[df["filled"]].groupby("staff_id").size().sort_values(ascending=False)

    lines = [f"Slots: {len(df)} total, {int(df['filled'].sum())} filled"]
    lines.append("")
    lines.append("Filled slots per day per shift:")
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Shifts per staff member:")
    lines.append(per_staff.to_string() if not per_staff.empty else "(none)")
    return "\n".join(lines)
