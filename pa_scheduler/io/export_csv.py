"""CSV export utilities for schedule results."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from pa_scheduler.domain.models import FlexibleStaff, ShiftSlot, StaffMember
from pa_scheduler.engine.state import Decision

logger = logging.getLogger(__name__)

SLOT_COLUMNS = ["id", "date", "type", "staff_id", "staff_name"]
STAFF_COLUMNS = [
    "staff_id",
    "name",
    "staff_type",
    "max_shifts",
    "assigned_shifts",
    "overnight_shifts",
    "weekend_shifts",
    "last_overnight_date",
    "available_start",
    "available_end",
]
TRACE_COLUMNS = ["phase", "slot_id", "staff_id", "accepted", "reason"]


def slots_frame(slots: Sequence[ShiftSlot]) -> pd.DataFrame:
    rows = [
        {
            "id": s.id,
            "date": s.date.isoformat(),
            "type": s.kind.value,
            "staff_id": s.staff_id,
            "staff_name": s.staff_name,
        }
        for s in slots
    ]
    return pd.DataFrame(rows, columns=SLOT_COLUMNS)


def staff_frame(staff: Sequence[StaffMember]) -> pd.DataFrame:
    rows: List[dict] = []
    for member in staff:
        if isinstance(member, FlexibleStaff):
            rows.append({
                "staff_id": member.id,
                "name": member.name,
                "staff_type": "flexible",
                "max_shifts": member.max_shifts,
                "assigned_shifts": member.assigned_shifts,
                "available_start": member.available_start.isoformat(),
                "available_end": member.available_end.isoformat(),
            })
        else:
            rows.append({
                "staff_id": member.id,
                "name": member.name,
                "staff_type": "core",
                "max_shifts": member.max_shifts,
                "assigned_shifts": member.assigned_shifts,
                "overnight_shifts": member.overnight_shifts,
                "weekend_shifts": member.weekend_shifts,
                "last_overnight_date": member.last_overnight_date.isoformat() if member.last_overnight_date else None,
            })
    return pd.DataFrame(rows, columns=STAFF_COLUMNS)


def export_slots_csv(slots: Sequence[ShiftSlot], csv_path: str | Path) -> int:
    """
    Export shift slots (filled and unfilled) to CSV.

    Returns:
        Number of slots exported
    """
    df = slots_frame(slots)
    df.to_csv(csv_path, index=False)
    logger.info(f"Exported {len(df)} slots to {csv_path}")
    return len(df)


def export_staff_csv(staff: Sequence[StaffMember], csv_path: str | Path) -> int:
    """Export final staff counters to CSV. Returns number of staff exported."""
    df = staff_frame(staff)
    df.to_csv(csv_path, index=False)
    logger.info(f"Exported {len(df)} staff to {csv_path}")
    return len(df)


def export_trace_csv(trace: Sequence[Decision], csv_path: str | Path) -> int:
    df = pd.DataFrame(
        [
            {"phase": d.phase, "slot_id": d.slot_id, "staff_id": d.staff_id, "accepted": d.accepted, "reason": d.reason}
            for d in trace
        ],
        columns=TRACE_COLUMNS,
    )
    df.to_csv(csv_path, index=False)
    logger.info(f"Exported {len(df)} trace records to {csv_path}")
    return len(df)
