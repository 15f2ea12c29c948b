"""Command-line interface for PA shift scheduling."""

from __future__ import annotations

import argparse
import logging

import pandas as pd

from .config import load_config
from .engine.orchestrator import generate_schedule
from .io.export_csv import export_slots_csv, export_staff_csv, export_trace_csv
from .io.import_csv import import_slots_csv, load_scheduling_data
from .validator import find_cap_violations, summarize_schedule, summarize_slots_frame, validate_schedule


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate a schedule from slot and roster files."""
    cfg = load_config(args.config)
    _configure_logging(args.log_level or cfg.log_level)

    try:
        slots = import_slots_csv(args.slots)
        if not slots:
            raise SystemExit(f"No shift slots found in {args.slots}")
        data = load_scheduling_data(
            roster=args.roster,
            flexible=args.flexible,
            work_requests=args.work_requests,
            days_off=args.days_off,
        )
        result = generate_schedule(slots, data, cfg, collect_trace=bool(args.trace))
        validate_schedule(slots, result)
    except ValueError as e:
        print(f"[ERROR] Generation failed: {e}")
        raise

    export_slots_csv(result.slots, args.out)
    print(f"[OK] Slots written to {args.out}")
    if args.staff_out:
        export_staff_csv(result.staff, args.staff_out)
        print(f"[OK] Staff statistics written to {args.staff_out}")
    if args.trace:
        export_trace_csv(result.trace or [], args.trace)
        print(f"[OK] Decision trace written to {args.trace}")

    for violation in find_cap_violations(result, cfg.rules):
        print(f"[WARN] {violation['staff_id']} exceeds {violation['rule']} in {violation['period']} "
              f"({violation['count']} shifts)")
    print(summarize_schedule(result))


def _cmd_summarize(args: argparse.Namespace) -> None:
    df = pd.read_csv(args.slots, dtype={"staff_id": str})
    print(summarize_slots_frame(df))


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="pa-scheduler",
        description="Assign PAs and per-diem staff to shift slots",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate assignments for a slot list")
    g.add_argument("--slots", required=True, help="Slots CSV/XLSX (id, date, type)")
    g.add_argument("--roster", help="PA roster (Name(ID), optional Number of Shift)")
    g.add_argument("--flexible", help="Per-diem roster with availability window")
    g.add_argument("--work-requests", help="Self-requested work days (Name(ID), Date, Shift)")
    g.add_argument("--days-off", help="Requested days off (Name(ID), Date)")
    g.add_argument("--config", help="Path to config YAML/JSON (defaults when omitted)")
    g.add_argument("--out", required=True, help="Output slots CSV")
    g.add_argument("--staff-out", help="Optional: output staff statistics CSV")
    g.add_argument("--trace", help="Optional: output per-decision trace CSV")
    g.add_argument("--log-level", help="Override the configured log level")
    g.set_defaults(func=_cmd_generate)

    s = sub.add_parser("summarize", help="Summarize a generated slots CSV")
    s.add_argument("--slots", required=True)
    s.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
