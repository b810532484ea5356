"""Tunable constants for the turning-point detectors."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DetectionParams:
    """Thresholds and windows shared by the detectors.

    Defaults are the conventional daily-bar values. Callers that need
    different values build their own instance (the API layer does so from
    ``Settings``); detectors never read the environment.
    """

    # RSI
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    rsi_rearm_band: float = 2.0

    # Moving-average crossovers: number of aligned samples scanned
    max_cross_lookback: int = 252

    # Recent swing annotations
    recent_swing_window: int = 2
    recent_swing_bars: int = 60

    # Support / resistance
    level_swing_window: int = 5
    level_lookbacks: tuple[int, ...] = (90, 180, 252)
    level_cluster_tolerance: float = 1.0
    level_proximity_pct: float = 0.20
    level_recency_days: int = 60
    level_rounding_step: float = 0.5
    min_level_bars: int = 30

    # 52-week extremes
    fifty_two_week_tolerance: float = 0.01


DEFAULT_PARAMS = DetectionParams()
