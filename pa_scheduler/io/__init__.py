"""I/O utilities for CSV/XLSX import and CSV export."""

from .import_csv import import_slots_csv, load_scheduling_data, read_records
from .export_csv import export_slots_csv, export_staff_csv, export_trace_csv

__all__ = [
    "read_records",
    "import_slots_csv",
    "load_scheduling_data",
    "export_slots_csv",
    "export_staff_csv",
    "export_trace_csv",
]
