#!/usr/bin/env python3
"""
How far whole-month deltas land from an integer month count before to_months()
snaps them, over a range of reference dates. Used to check the snap tolerance.
"""
from __future__ import annotations

import argparse
from datetime import date, timedelta
from typing import Dict, Iterator, List, Optional

from reldelta import RelativeDelta
from reldelta.core.settings import DEFAULT_SETTINGS, ConversionSettings


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "reldelta[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "reldelta[diagnostics]"') from e


def parse_spans(s: str) -> List[int]:
    out = [int(x) for x in s.split(",") if x.strip()]
    if not out or any(n == 0 for n in out):
        raise SystemExit("--spans must be a comma list of non-zero month counts")
    return out


def reference_dates(start_year: int, end_year: int, step_days: int) -> Iterator[date]:
    d = date(start_year, 1, 1)
    end = date(end_year, 12, 31)
    while d <= end:
        yield d
        d += timedelta(days=step_days)


def raw_month_drift(
    months: int,
    references: List[date],
    settings: ConversionSettings = DEFAULT_SETTINGS,
) -> List[float]:
    """Unsnapped month count minus `months` for each reference date."""
    delta = RelativeDelta(months=months)
    return [delta.to_days(ref, settings=settings) / settings.mean_month_days - months for ref in references]


def summarize(np, drift: List[float], tolerance: float) -> Dict[str, float]:
    a = np.abs(np.asarray(drift, dtype=float))
    return {
        "max": float(a.max()),
        "mean": float(a.mean()),
        "p95": float(np.percentile(a, 95)),
        "snapped": float((a < tolerance).mean()),
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Drift of whole-month deltas from the mean Gregorian month.")
    p.add_argument("--start-year", type=int, default=1990)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--step-days", type=int, default=1)
    p.add_argument("--spans", default="1,2,3,4,6,12,24", help="Comma list of month counts (default: 1,2,3,4,6,12,24)")
    p.add_argument("--tolerance", type=float, default=DEFAULT_SETTINGS.month_snap_tolerance)
    p.add_argument("--out", default=None, help="Write a drift histogram to this image file")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")
    if args.step_days < 1:
        raise SystemExit("--step-days must be positive")

    np = _need_numpy()
    spans = parse_spans(args.spans)
    refs = list(reference_dates(args.start_year, args.end_year, args.step_days))

    print(f"{len(refs)} reference dates, {args.start_year}..{args.end_year}, tolerance {args.tolerance}")
    print(f"{'months':>7} {'max':>9} {'mean':>9} {'p95':>9} {'snapped':>8}")
    drifts: Dict[int, List[float]] = {}
    for n in spans:
        drift = raw_month_drift(n, refs)
        drifts[n] = drift
        s = summarize(np, drift, args.tolerance)
        print(f"{n:>7d} {s['max']:>9.5f} {s['mean']:>9.5f} {s['p95']:>9.5f} {s['snapped']:>8.1%}")

    if args.out:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(10, 4))
        for n, drift in drifts.items():
            ax.hist(drift, bins=60, histtype="step", label=f"{n} mo")
        ax.axvline(-args.tolerance, color="0.3", lw=0.8, ls="--")
        ax.axvline(args.tolerance, color="0.3", lw=0.8, ls="--")
        ax.set_xlabel("to_months() before snapping, minus month count")
        ax.set_ylabel("reference dates")
        ax.legend(loc="upper right", fontsize=8)
        fig.tight_layout()
        fig.savefig(args.out, dpi=150)
        print(f"Wrote {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
