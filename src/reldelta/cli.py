from __future__ import annotations

import argparse
import importlib
import inspect
import sys
from datetime import date, datetime
from typing import Dict, List, Optional

from loguru import logger


RELATIVE_OPTIONS = ("years", "months", "weeks", "days", "leap_days", "hours", "minutes", "seconds", "milliseconds")
ABSOLUTE_OPTIONS = ("year", "month", "day", "hour", "minute", "second", "millisecond", "year_day", "non_leap_year_day")


def _parse_instant(s: str) -> datetime:
    return datetime.fromisoformat(s)


def _parse_number(s: str):
    return float(s) if any(c in s for c in ".eE") else int(s)


def _parse_weekday(s: str):
    """MO, MO:-1, 0 or 0:2 -> (code, n)"""
    code, _, n = s.partition(":")
    code = int(code) if code.lstrip("-").isdigit() else code.upper()
    return (code, int(n) if n else 1)


def _setup_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.enable("reldelta")
        logger.add(sys.stderr, level="DEBUG")
    else:
        logger.add(sys.stderr, level="WARNING")


def _add_field_options(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group("relative fields")
    for name in RELATIVE_OPTIONS:
        g.add_argument(f"--{name.replace('_', '-')}", dest=name, type=_parse_number, default=None)
    g = p.add_argument_group("absolute fields")
    for name in ABSOLUTE_OPTIONS:
        g.add_argument(f"--{name.replace('_', '-')}", dest=name, type=int, default=None)
    g.add_argument("--weekday", type=_parse_weekday, default=None, help="MO..SU or 0..6, optionally :N (e.g. FR:-1)")


def _fields(args: argparse.Namespace) -> Dict[str, object]:
    out = {}
    for name in RELATIVE_OPTIONS + ABSOLUTE_OPTIONS + ("weekday",):
        value = getattr(args, name)
        if value is not None:
            out[name] = value
    return out


def _run_module_main(modpath: str, argv: List[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_diff(argv: List[str]) -> int:
    import reldelta

    p = argparse.ArgumentParser(prog="reldelta diff", description="DATE1 - DATE2 as a relative delta")
    p.add_argument("date1", help="ISO date or datetime")
    p.add_argument("date2", help="ISO date or datetime")
    p.add_argument("--leap-days", action="store_true", help="also count February 29ths spanned")
    p.add_argument("--normalized", action="store_true")
    args = p.parse_args(argv)

    delta = reldelta.between(_parse_instant(args.date1), _parse_instant(args.date2), count_leap_days=args.leap_days)
    if args.normalized:
        delta = delta.normalized()
    print(repr(delta))
    return 0


def cmd_apply(argv: List[str]) -> int:
    import reldelta

    p = argparse.ArgumentParser(prog="reldelta apply", description="Apply a relative delta to an instant")
    p.add_argument("instant", help="ISO date or datetime")
    _add_field_options(p)
    args = p.parse_args(argv)

    delta = reldelta.RelativeDelta(**_fields(args))
    instant: date = _parse_instant(args.instant)
    if "T" not in args.instant and " " not in args.instant:
        instant = instant.date()
    print(delta.apply_to_date(instant).isoformat())
    return 0


def cmd_convert(argv: List[str]) -> int:
    import reldelta

    p = argparse.ArgumentParser(prog="reldelta convert", description="Express a relative delta in one time unit")
    p.add_argument("--unit", choices=reldelta.list_units(), default="seconds")
    p.add_argument("--reference", default=None, help="ISO date the delta is measured from (default: now)")
    _add_field_options(p)
    args = p.parse_args(argv)

    delta = reldelta.RelativeDelta(**_fields(args))
    reference = _parse_instant(args.reference) if args.reference else None
    print(reldelta.convert(delta, args.unit, reference=reference))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    from reldelta.core.errors import RelDeltaError

    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="reldelta", description="Calendar-aware relative date deltas.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("diff", help="Difference between two instants")
    sub.add_parser("apply", help="Apply a delta to an instant")
    sub.add_parser("convert", help="Convert a delta to a single unit")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (needs the diagnostics extra)")
    p_diag.add_argument("tool", choices=["month-drift"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)
    _setup_logging(args.verbose)

    commands = {
        "diff": cmd_diff,
        "apply": cmd_apply,
        "convert": cmd_convert,
    }
    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd == "diag":
            tool_map = {
                "month-drift": "reldelta.diagnostics.month_drift",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (RelDeltaError, ValueError) as e:
        print(f"reldelta: error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
