"""Load and validate scheduler configuration (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class SchedulingRules:
    """Labor rules applied by the eligibility evaluators."""

    max_shifts_per_horizon: int = 12
    flexible_max_shifts: int = 8
    overnight_rest_days: int = 2
    min_rest_days: int = 1
    max_consecutive_days: int = 3
    max_shifts_per_week: int = 3
    max_shifts_per_paycheck: int = 6
    max_overnight_per_paycheck: int = 2
    max_weekend_per_month: int = 2
    weekend_priority_tiers: int = 2


@dataclass(frozen=True)
class SchedulerConfig:
    rules: SchedulingRules = field(default_factory=SchedulingRules)
    horizon_days: int = 28
    log_level: str = "INFO"


def _build_rules(raw: Dict[str, Any]) -> SchedulingRules:
    known = {f.name for f in fields(SchedulingRules)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown scheduling rule(s): {', '.join(sorted(unknown))}")
    values = {}
    for key, value in raw.items():
        try:
            values[key] = int(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Rule {key} must be an integer, got {value!r}") from e
        if values[key] < 0:
            raise ValueError(f"Rule {key} must not be negative, got {value}")
    if values.get("max_consecutive_days", 1) < 1:
        raise ValueError("Rule max_consecutive_days must be at least 1")
    return SchedulingRules(**values)


def config_from_dict(raw: Dict[str, Any] | None) -> SchedulerConfig:
    """
    Build a SchedulerConfig from a parsed mapping.

    Args:
        raw: Mapping with optional ``rules``, ``horizon_days`` and ``log_level`` keys

    Returns:
        Validated SchedulerConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    raw = dict(raw or {})
    unknown = set(raw) - {"rules", "horizon_days", "log_level"}
    if unknown:
        raise ValueError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    rules = _build_rules(raw.get("rules") or {})
    horizon_days = int(raw.get("horizon_days", 28))
    if horizon_days <= 0:
        raise ValueError(f"horizon_days must be positive, got {horizon_days}")
    log_level = str(raw.get("log_level", "INFO")).upper()
    return SchedulerConfig(rules=rules, horizon_days=horizon_days, log_level=log_level)


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Config file path; ``None`` returns the defaults

    Returns:
        Validated SchedulerConfig
    """
    if path is None:
        return SchedulerConfig()
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    return config_from_dict(raw)
