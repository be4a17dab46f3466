from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionSettings:
    """Constants used when a delta is turned into a scalar duration."""
    mean_month_days: float = 30.436875   # 365.2425 / 12
    month_snap_tolerance: float = 0.06
    integer_epsilon: float = 1e-6
    round_digits: int = 10
    reference_hour: int = 12             # pin references to noon, away from DST edges

    def __post_init__(self) -> None:
        if self.mean_month_days <= 0:
            raise ValueError("mean_month_days must be positive")
        if not (0 <= self.month_snap_tolerance < 0.5):
            raise ValueError("month_snap_tolerance must be in [0, 0.5)")
        if not (0 <= self.integer_epsilon < 0.5):
            raise ValueError("integer_epsilon must be in [0, 0.5)")
        if self.round_digits < 0:
            raise ValueError("round_digits must be non-negative")
        if not (0 <= self.reference_hour <= 23):
            raise ValueError("reference_hour must be in 0..23")


DEFAULT_SETTINGS = ConversionSettings()
