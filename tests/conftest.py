"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from pa_scheduler.config import SchedulingRules
from pa_scheduler.domain.models import ShiftKind, ShiftSlot


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def rules():
    """Default scheduling rules."""
    return SchedulingRules()


@pytest.fixture
def make_slot():
    """Factory for June 2024 slots: make_slot(day, kind='7AM', slot_id=None, staff_id=None)."""
    def _make(day, kind="7AM", slot_id=None, staff_id=None):
        d = date(2024, 6, day) if isinstance(day, int) else day
        k = ShiftKind.parse(kind)
        return ShiftSlot(
            id=slot_id or f"{d.isoformat()}-{k.value}",
            date=d,
            kind=k,
            staff_id=staff_id,
            staff_name=staff_id,
        )
    return _make
