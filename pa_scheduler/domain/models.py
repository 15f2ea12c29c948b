"""Domain models for PA shift scheduling."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union


class ShiftKind(Enum):
    """Fixed set of shift kinds, valued by their roster labels."""

    EARLY_MORNING = "7AM"
    OVERNIGHT = "7PM"
    MID_MORNING = "8AM"
    LATE_MORNING = "10AM"

    @classmethod
    def parse(cls, value) -> "ShiftKind":
        """
        Resolve a shift kind from its label ("7PM") or member name ("overnight").

        Raises:
            ValueError: If the value names no known shift kind
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip() if value is not None else ""
        for kind in cls:
            if text.upper() == kind.value or text.upper().replace(" ", "_") == kind.name:
                return kind
        raise ValueError(f"Unknown shift kind: {value!r}")

    @property
    def is_overnight(self) -> bool:
        return self is ShiftKind.OVERNIGHT


@dataclass(frozen=True)
class ShiftSlot:
    """A single shift to be staffed on a given date."""

    id: str
    date: date
    kind: ShiftKind
    staff_id: Optional[str] = None
    staff_name: Optional[str] = None

    @property
    def is_filled(self) -> bool:
        return self.staff_id is not None

    @property
    def is_overnight(self) -> bool:
        return self.kind.is_overnight

    @property
    def is_weekend(self) -> bool:
        # Saturday=5, Sunday=6
        return self.date.weekday() >= 5

    def assign(self, staff: "StaffMember") -> "ShiftSlot":
        """Return a copy of this slot filled by ``staff``."""
        return replace(self, staff_id=staff.id, staff_name=staff.name)

    def cleared(self) -> "ShiftSlot":
        """Return an explicitly unfilled copy of this slot."""
        return replace(self, staff_id=None, staff_name=None)

    def __repr__(self) -> str:
        return f"<ShiftSlot(id={self.id}, date={self.date}, kind={self.kind.value}, staff={self.staff_id})>"


@dataclass(frozen=True)
class WorkRequest:
    """A staff member's self-selection of a specific (date, shift kind)."""

    staff_id: str
    date: date
    kind: ShiftKind


@dataclass(frozen=True)
class CoreStaff:
    """
    Core PA with a horizon shift cap and request-based preferences.

    Counters are never mutated; ``record`` returns the advanced value.
    """

    id: str
    name: str
    max_shifts: int = 12
    assigned_shifts: int = 0
    overnight_shifts: int = 0
    weekend_shifts: int = 0
    last_overnight_date: Optional[date] = None
    requested_work_days: Tuple[Tuple[date, ShiftKind], ...] = ()
    requested_days_off: FrozenSet[date] = field(default_factory=frozenset)

    def record(self, slot: ShiftSlot) -> "CoreStaff":
        """
        Advance the counters for a newly committed slot.

        Args:
            slot: Slot just committed to this staff member

        Returns:
            Updated copy of this staff member
        """
        changes = {"assigned_shifts": self.assigned_shifts + 1}
        if slot.is_overnight:
            changes["overnight_shifts"] = self.overnight_shifts + 1
            changes["last_overnight_date"] = slot.date
        if slot.is_weekend:
            changes["weekend_shifts"] = self.weekend_shifts + 1
        return replace(self, **changes)

    def __repr__(self) -> str:
        return f"<CoreStaff(id={self.id}, name='{self.name}', assigned={self.assigned_shifts}/{self.max_shifts})>"


@dataclass(frozen=True)
class FlexibleStaff:
    """Per-diem staff member available only inside a bounded date window."""

    id: str
    name: str
    available_start: date
    available_end: date
    max_shifts: int = 8  # informational, never enforced
    assigned_shifts: int = 0

    def is_available_on(self, day: date) -> bool:
        return self.available_start <= day <= self.available_end

    def record(self, slot: ShiftSlot) -> "FlexibleStaff":
        return replace(self, assigned_shifts=self.assigned_shifts + 1)

    def __repr__(self) -> str:
        return f"<FlexibleStaff(id={self.id}, name='{self.name}', window={self.available_start}..{self.available_end})>"


StaffMember = Union[CoreStaff, FlexibleStaff]
