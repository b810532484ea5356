"""Bar and indicator-series factories keyed on calendar dates."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

from analysis.turning_points import IndicatorPoint, MACDPoint, PriceBar

START = date(2025, 1, 1)


def ts(day: date) -> int:
    """Epoch milliseconds at midnight UTC of ``day``."""
    return int(datetime(day.year, day.month, day.day, tzinfo=timezone.utc).timestamp() * 1000)


def day_ts(i: int, start: date = START) -> int:
    """Timestamp of the ``i``-th calendar day after ``start``."""
    return ts(start + timedelta(days=i))


def day_iso(i: int, start: date = START) -> str:
    """ISO date of the ``i``-th calendar day after ``start``."""
    return (start + timedelta(days=i)).isoformat()


def make_bars(
    closes: Sequence[float],
    *,
    start: date = START,
    spread: float = 1.0,
    highs: Sequence[float] | None = None,
    lows: Sequence[float] | None = None,
) -> list[PriceBar]:
    """Build one bar per calendar day from a close series.

    High/low default to close +/- ``spread`` unless given explicitly.
    """
    bars: list[PriceBar] = []
    for i, close in enumerate(closes):
        bars.append(
            PriceBar(
                timestamp=day_ts(i, start),
                open=close,
                high=highs[i] if highs is not None else close + spread,
                low=lows[i] if lows is not None else close - spread,
                close=close,
                volume=1_000_000 + i,
            )
        )
    return bars


def make_points(values: Sequence[float | None], *, start: date = START) -> list[IndicatorPoint]:
    """Build an indicator series; ``None`` entries are skipped (warm-up gaps)."""
    return [
        IndicatorPoint(timestamp=day_ts(i, start), value=v)
        for i, v in enumerate(values)
        if v is not None
    ]


def make_macd(
    macd: Sequence[float],
    signal: Sequence[float],
    *,
    start: date = START,
) -> list[MACDPoint]:
    """Build a MACD series with the histogram as the line difference."""
    return [
        MACDPoint(timestamp=day_ts(i, start), macd=m, signal=s, histogram=m - s)
        for i, (m, s) in enumerate(zip(macd, signal))
    ]

