"""Indicator series derived locally from bars.

Used when the upstream provider did not supply a series. Warm-up samples are
left out, so each series starts on the first bar where the indicator is
defined, matching the sparsity of provider series.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from analysis.indicators import TechnicalIndicators

from .models import IndicatorPoint, MACDPoint, PriceBar
from .series import normalize_bars


@dataclass
class IndicatorSeries:
    """Indicator series in the shape the detectors consume."""
    rsi: list[IndicatorPoint] = field(default_factory=list)
    sma_fast: list[IndicatorPoint] = field(default_factory=list)
    sma_slow: list[IndicatorPoint] = field(default_factory=list)
    macd: list[MACDPoint] = field(default_factory=list)


def _to_points(timestamps: list[int], values: list[float | None]) -> list[IndicatorPoint]:
    return [
        IndicatorPoint(timestamp=ts, value=v)
        for ts, v in zip(timestamps, values)
        if v is not None
    ]


def derive_indicator_series(
    bars: Sequence[PriceBar],
    rsi_period: int = 14,
    fast_period: int = 50,
    slow_period: int = 200,
    macd_periods: tuple[int, int, int] = (12, 26, 9),
) -> IndicatorSeries:
    """Compute RSI, fast/slow SMA, and MACD series from bar closes."""
    ordered = normalize_bars(bars)
    timestamps = [b.timestamp for b in ordered]
    closes = [b.close for b in ordered]

    macd_line, signal_line, histogram = TechnicalIndicators.macd(closes, *macd_periods)
    macd_points = [
        MACDPoint(timestamp=ts, macd=m, signal=s, histogram=h)
        for ts, m, s, h in zip(timestamps, macd_line, signal_line, histogram)
        if m is not None and s is not None and h is not None
    ]

    return IndicatorSeries(
        rsi=_to_points(timestamps, TechnicalIndicators.rsi(closes, rsi_period)),
        sma_fast=_to_points(timestamps, TechnicalIndicators.sma(closes, fast_period)),
        sma_slow=_to_points(timestamps, TechnicalIndicators.sma(closes, slow_period)),
        macd=macd_points,
    )
