"""Tests for CSV/XLSX import and CSV export."""

from datetime import date

import pandas as pd
import pytest

from pa_scheduler.domain.models import CoreStaff, FlexibleStaff, ShiftKind
from pa_scheduler.engine.state import Decision
from pa_scheduler.io.export_csv import export_slots_csv, export_staff_csv, export_trace_csv
from pa_scheduler.io.import_csv import import_slots_csv, load_scheduling_data, read_records
from pa_scheduler.services.roster import build_roster


def test_import_slots_csv(tmp_path):
    """Test importing slots from CSV."""
    csv_content = """id,date,type
s1,2024-06-03,7AM
s2,2024-06-03,7PM
s3,2024-06-08,10AM
"""
    csv_file = tmp_path / "slots.csv"
    csv_file.write_text(csv_content)

    slots = import_slots_csv(csv_file)
    assert [s.id for s in slots] == ["s1", "s2", "s3"]
    assert slots[0].date == date(2024, 6, 3)
    assert slots[1].kind is ShiftKind.OVERNIGHT
    assert slots[2].is_weekend
    assert all(s.staff_id is None for s in slots)


def test_import_slots_alternate_headers(tmp_path):
    csv_content = """Shift_ID,Date,Shift,staff_id,staff_name
,2024-06-04,8AM,,
x9,2024-06-05,overnight,A1,Alice
"""
    csv_file = tmp_path / "slots.csv"
    csv_file.write_text(csv_content)

    first, second = import_slots_csv(csv_file)
    # generated id when the cell is empty
    assert first.id == "2024-06-04-8AM-1"
    assert first.kind is ShiftKind.MID_MORNING
    assert second.id == "x9"
    assert second.kind is ShiftKind.OVERNIGHT
    assert (second.staff_id, second.staff_name) == ("A1", "Alice")


def test_import_slots_missing_column(tmp_path):
    csv_file = tmp_path / "slots.csv"
    csv_file.write_text("id,date\ns1,2024-06-03\n")
    with pytest.raises(ValueError, match="type"):
        import_slots_csv(csv_file)


def test_import_slots_unknown_type(tmp_path):
    csv_file = tmp_path / "slots.csv"
    csv_file.write_text("id,date,type\ns1,2024-06-03,9PM\n")
    with pytest.raises(ValueError, match="Unknown shift kind"):
        import_slots_csv(csv_file)


def test_import_slots_xlsx(tmp_path):
    xlsx_file = tmp_path / "slots.xlsx"
    pd.DataFrame(
        [{"id": "s1", "date": "2024-06-03", "type": "7AM"}, {"id": "s2", "date": "2024-06-09", "type": "7PM"}]
    ).to_excel(xlsx_file, index=False)

    slots = import_slots_csv(xlsx_file)
    assert [(s.id, s.date, s.kind) for s in slots] == [
        ("s1", date(2024, 6, 3), ShiftKind.EARLY_MORNING),
        ("s2", date(2024, 6, 9), ShiftKind.OVERNIGHT),
    ]


def test_read_records_keeps_headers(tmp_path):
    csv_content = """Name(ID),Number of Shift
Alice(A1),10
Bob(B2),
"""
    csv_file = tmp_path / "roster.csv"
    csv_file.write_text(csv_content)

    records = read_records(csv_file)
    assert records == [
        {"Name(ID)": "Alice(A1)", "Number of Shift": "10"},
        {"Name(ID)": "Bob(B2)", "Number of Shift": None},
    ]


def test_load_scheduling_data_from_files(tmp_path):
    roster = tmp_path / "roster.csv"
    roster.write_text("Name(ID),Number of Shift\nAlice(A1),10\nBob(B2),\n")
    flexible = tmp_path / "flexible.xlsx"
    pd.DataFrame([{
        "Name(ID)": "Pat(P9)",
        "Number of Shift": "4",
        "Dates Available to Work Start": "2024-06-01",
        "Dates Available to Work End": "2024-06-14",
    }]).to_excel(flexible, index=False)
    requests = tmp_path / "requests.csv"
    requests.write_text("Name(ID),Date,Shift\nAlice(A1),2024-06-05,7PM\n")

    data = load_scheduling_data(roster=roster, flexible=flexible, work_requests=requests)
    assert data.days_off is None

    built = build_roster(data)
    alice, bob = built.core
    assert alice.max_shifts == 10
    assert alice.assigned_shifts == 1
    assert bob.max_shifts == 12
    assert built.flexible[0].available_end == date(2024, 6, 14)
    assert built.flexible[0].max_shifts == 4


def test_export_slots_csv(tmp_path, make_slot):
    slots = [make_slot(3, slot_id="s1", staff_id="A1"), make_slot(4, "7PM", slot_id="s2")]
    out = tmp_path / "out.csv"

    assert export_slots_csv(slots, out) == 2

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["id", "date", "type", "staff_id", "staff_name"]
    assert df.iloc[0].tolist() == ["s1", "2024-06-03", "7AM", "A1", "A1"]
    assert df.iloc[1].tolist() == ["s2", "2024-06-04", "7PM", "", ""]


def test_exported_slots_can_be_reimported(tmp_path, make_slot):
    slots = [make_slot(3, slot_id="s1", staff_id="A1"), make_slot(8, "10AM", slot_id="s2")]
    out = tmp_path / "out.csv"
    export_slots_csv(slots, out)
    assert import_slots_csv(out) == slots


def test_export_staff_csv(tmp_path):
    staff = [
        CoreStaff(id="A1", name="Alice", assigned_shifts=3, overnight_shifts=1, weekend_shifts=1,
                  last_overnight_date=date(2024, 6, 5)),
        FlexibleStaff(id="P9", name="Pat", available_start=date(2024, 6, 1), available_end=date(2024, 6, 14),
                      assigned_shifts=2),
    ]
    out = tmp_path / "staff.csv"

    assert export_staff_csv(staff, out) == 2

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    alice, pat = df.to_dict(orient="records")
    assert alice["staff_type"] == "core"
    assert alice["assigned_shifts"] == "3"
    assert alice["last_overnight_date"] == "2024-06-05"
    assert alice["available_start"] == ""
    assert pat["staff_type"] == "flexible"
    assert pat["max_shifts"] == "8"
    assert pat["available_end"] == "2024-06-14"
    assert pat["overnight_shifts"] == ""


def test_export_trace_csv(tmp_path):
    trace = [
        Decision("weekday", "s1", "A1", False, "Requested day off"),
        Decision("weekday", "s1", None, False, "No available staff"),
    ]
    out = tmp_path / "trace.csv"

    assert export_trace_csv(trace, out) == 2

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["phase", "slot_id", "staff_id", "accepted", "reason"]
    assert df["reason"].tolist() == ["Requested day off", "No available staff"]
    assert df["staff_id"].tolist() == ["A1", ""]
