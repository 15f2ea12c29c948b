"""Scheduler package for PA shift assignment.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: shift slot and staff models
- services.periods: week-of-month and paycheck period helpers
- services.constraints: eligibility evaluators
- services.roster: typed roster building from raw records
- engine: self-requested, weekend-priority and weekday assignment phases
- io: CSV/XLSX import and CSV export
- validator: post-generation validations and summaries
- cli: command-line interface entrypoints
"""

__version__ = "1.0.0"

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "validator",
    "cli",
]
