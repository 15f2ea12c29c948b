"""Domain models for shift slots and staff."""

from .models import CoreStaff, FlexibleStaff, ShiftKind, ShiftSlot, StaffMember, WorkRequest

__all__ = [
    "ShiftKind",
    "ShiftSlot",
    "WorkRequest",
    "CoreStaff",
    "FlexibleStaff",
    "StaffMember",
]
