"""Diagnostics package.

Optional: needs the diagnostics extra (numpy, matplotlib).
"""

__all__ = ["month_drift"]
