"""Swing point detection over a symmetric bar window."""
from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from scipy.signal import argrelextrema  # type: ignore[import-untyped]

from .models import PriceBar, SwingKind, SwingPoint
from .params import DEFAULT_PARAMS
from .series import normalize_bars

logger = logging.getLogger(__name__)


def find_swing_points(bars: Sequence[PriceBar], window: int) -> list[SwingPoint]:
    """Find swing highs and lows.

    Bar ``i`` is a swing high when its high is strictly greater than the high
    of every other bar in ``[i - window, i + window]``, and a swing low when
    its low is strictly less than every other low in that range. Only
    interior bars (``window <= i < n - window``) are eligible.

    Returns:
        Swing points ordered by timestamp; empty when fewer than
        ``2 * window + 1`` bars are available.
    """
    ordered = normalize_bars(bars)
    n = len(ordered)
    if window < 1 or n < 2 * window + 1:
        return []

    highs = np.array([b.high for b in ordered])
    lows = np.array([b.low for b in ordered])

    def _interior(indices: np.ndarray) -> np.ndarray:
        return indices[(indices >= window) & (indices < n - window)]

    high_idx = _interior(argrelextrema(highs, np.greater, order=window)[0])
    low_idx = _interior(argrelextrema(lows, np.less, order=window)[0])

    points = [
        SwingPoint(ordered[i].timestamp, ordered[i].high, SwingKind.HIGH)
        for i in high_idx
    ]
    points.extend(
        SwingPoint(ordered[i].timestamp, ordered[i].low, SwingKind.LOW)
        for i in low_idx
    )
    points.sort(key=lambda p: p.timestamp)
    return points


def recent_swing_extremes(
    bars: Sequence[PriceBar],
    window: int = DEFAULT_PARAMS.recent_swing_window,
    tail: int = DEFAULT_PARAMS.recent_swing_bars,
) -> tuple[SwingPoint | None, SwingPoint | None]:
    """Highest swing high and lowest swing low over the trailing ``tail`` bars.

    Ties keep the earlier swing. A non-positive ``tail`` finds nothing.
    """
    if tail <= 0:
        return None, None
    ordered = normalize_bars(bars)
    swings = find_swing_points(ordered[-tail:], window)

    highs = [p for p in swings if p.kind is SwingKind.HIGH]
    lows = [p for p in swings if p.kind is SwingKind.LOW]

    swing_high = max(highs, key=lambda p: p.price) if highs else None
    swing_low = min(lows, key=lambda p: p.price) if lows else None
    return swing_high, swing_low
