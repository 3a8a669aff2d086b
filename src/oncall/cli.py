from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict

from pydantic import ValidationError

from oncall.errors import ConfigurationError, SchedulingError
from oncall.io.csv_loader import load_history, load_rotation
from oncall.io.results_export import export_csv, export_json
from oncall.models.shift import ROLES
from oncall.models.validated import ValidatedSchedulerConfig
from oncall.solver.engine import schedule
from oncall.utils.logging_setup import setup_logging
from oncall.utils.structured_logging import configure_structlog


def _build_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            cfg.update(json.load(f))
    if args.num_shifts is not None:
        cfg["num_shifts"] = int(args.num_shifts)
    if args.lookback is not None:
        cfg["lookback"] = int(args.lookback)
    if args.seed is not None:
        cfg["seed"] = int(args.seed)
    if args.time_limit is not None:
        cfg["time_limit_seconds"] = float(args.time_limit)
    if args.no_shuffle:
        cfg["shuffle"] = False
    return cfg


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Primary/secondary on-call scheduler")
    p.add_argument("--roster", required=True, help="Roster CSV (name,location)")
    p.add_argument("--history", help="Past assignments CSV (shift,role,name)")
    p.add_argument("--config", help="JSON configuration file")
    p.add_argument("--num-shifts", type=int, help="Number of shifts to schedule (default: 4)")
    p.add_argument("--lookback", type=int, help="Number of historical shifts (default: 1)")
    p.add_argument("--seed", type=int, help="Seed for roster shuffling and the solver")
    p.add_argument("--no-shuffle", action="store_true", help="Keep roster order")
    p.add_argument("--time-limit", type=float, help="Solver time limit in seconds")
    p.add_argument("--export", help="Write the schedule to this .json or .csv file")
    p.add_argument("--log-level", default="WARNING", help="Console log level")
    p.add_argument("--log-file", default=None, help="Rotating log file")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON output (summary)")
    args = p.parse_args(argv)

    setup_logging(level="DEBUG", log_file=args.log_file, console_level=args.log_level)
    configure_structlog(json_output=args.json_out)

    try:
        config = ValidatedSchedulerConfig(**_build_cfg(args)).to_dataclass()
        rotation = load_rotation(args.roster)
        history = load_history(args.history) if args.history else None
    except (ValidationError, ValueError, OSError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        res = schedule(rotation, config, history)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchedulingError as e:
        print(f"Scheduling failed: {e}", file=sys.stderr)
        return 1

    if args.export:
        if args.export.endswith(".csv"):
            export_csv(res, args.export)
        else:
            export_json(res, args.export, config)

    if args.json_out:
        print(json.dumps({"summary": res.summary(), "assignments": res.as_tuples()},
                         ensure_ascii=False, indent=2))
    else:
        for role in ROLES:
            for a in res.assignments:
                if a.role == role:
                    print(repr(a))
        print("Summary:")
        for k, v in res.summary().items():
            print(f" - {k}: {v}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
