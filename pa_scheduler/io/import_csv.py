"""CSV/XLSX import utilities producing slots and raw roster records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from pa_scheduler.domain.models import ShiftKind, ShiftSlot
from pa_scheduler.services.periods import parse_date
from pa_scheduler.services.roster import SchedulingData

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def _read_frame(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    # keep every cell as text so dates never go through a timezone-aware parser
    if path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.strip()
    df = df.fillna("")
    return df


def read_records(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read a roster or request sheet into a list of raw records.

    Args:
        path: CSV or Excel file; headers are kept as written (e.g. "Name(ID)")

    Returns:
        List of dicts, one per row, empty cells as ``None``
    """
    df = _read_frame(path)
    records = []
    for row in df.to_dict(orient="records"):
        records.append({key: (value if str(value).strip() != "" else None) for key, value in row.items()})
    logger.info(f"Read {len(records)} records from {path}")
    return records


def import_slots_csv(path: str | Path) -> List[ShiftSlot]:
    """
    Import shift slots from CSV/XLSX.

    Recognised columns (case-insensitive): ``id``/``shift_id``, ``date``,
    ``type``/``shift``/``kind``, and optionally ``staff_id``/``staff_name``.
    Rows without an id get ``<date>-<type>-<row>``.

    Args:
        path: Path to slots file

    Returns:
        Slots in file order

    Raises:
        ValueError: On missing columns, bad dates or unknown shift types
    """
    df = _read_frame(path)
    df.columns = df.columns.str.lower()
    df.rename(columns={"shift_id": "id", "shift": "type", "kind": "type", "shift_kind": "type"}, inplace=True)

    missing = {"date", "type"} - set(df.columns)
    if missing:
        raise ValueError(f"Slots file {path} is missing column(s): {', '.join(sorted(missing))}")

    slots = []
    for row_number, row in enumerate(df.to_dict(orient="records"), start=1):
        day = parse_date(row["date"])
        kind = ShiftKind.parse(row["type"])
        slot_id = str(row.get("id") or "").strip() or f"{day.isoformat()}-{kind.value}-{row_number}"
        staff_id = str(row.get("staff_id") or "").strip() or None
        staff_name = str(row.get("staff_name") or "").strip() or None
        slots.append(ShiftSlot(id=slot_id, date=day, kind=kind, staff_id=staff_id, staff_name=staff_name))

    logger.info(f"Imported {len(slots)} shift slots from {path}")
    return slots


def load_scheduling_data(
    roster: str | Path | None = None,
    flexible: str | Path | None = None,
    work_requests: str | Path | None = None,
    days_off: str | Path | None = None,
) -> SchedulingData:
    """
    Load every supplied roster/request file; omitted files stay ``None``.
    """
    return SchedulingData(
        roster=read_records(roster) if roster else None,
        flexible_roster=read_records(flexible) if flexible else None,
        work_requests=read_records(work_requests) if work_requests else None,
        days_off=read_records(days_off) if days_off else None,
    )
