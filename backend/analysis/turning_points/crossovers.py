"""Crossover detection for moving-average pairs and MACD.

A cross is recorded at sample ``i`` when the fast quantity was at or below the
slow one at ``i - 1`` and strictly above it at ``i`` (upward), or at or above
and then strictly below (downward). Samples are compared only on timestamps
shared by both series.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .models import IndicatorPoint, MACDCrossovers, MACDPoint, MovingAverageCross
from .params import DEFAULT_PARAMS
from .series import align_series, normalize_macd, to_iso_date

logger = logging.getLogger(__name__)


def find_crosses(
    fast: Sequence[float] | np.ndarray,
    slow: Sequence[float] | np.ndarray | float,
) -> tuple[np.ndarray, np.ndarray]:
    """Find indices where ``fast`` crosses ``slow``.

    Args:
        fast: Values of the crossing quantity, oldest first.
        slow: Values of the reference quantity aligned with ``fast``, or a
            constant (e.g. ``0.0`` for a zero-line cross).

    Returns:
        Tuple of (upward cross indices, downward cross indices), ascending.
    """
    fast_arr = np.asarray(fast, dtype=float)
    slow_arr = np.broadcast_to(np.asarray(slow, dtype=float), fast_arr.shape)
    if fast_arr.size < 2:
        empty = np.array([], dtype=int)
        return empty, empty

    prev_fast, cur_fast = fast_arr[:-1], fast_arr[1:]
    prev_slow, cur_slow = slow_arr[:-1], slow_arr[1:]

    upward = np.flatnonzero((prev_fast <= prev_slow) & (cur_fast > cur_slow)) + 1
    downward = np.flatnonzero((prev_fast >= prev_slow) & (cur_fast < cur_slow)) + 1
    return upward, downward


def select_regime_start(golden: Sequence[int], death: Sequence[int]) -> int | None:
    """Pick the golden cross that opened the current bullish regime.

    That is the oldest golden cross after the latest death cross. Falls back to
    the latest golden cross when none postdates the last death cross, and to
    the first golden cross when there is no death cross at all.
    """
    if not golden:
        return None
    if not death:
        return golden[0]
    last_death = death[-1]
    for ts in golden:
        if ts > last_death:
            return ts
    return golden[-1]


def detect_ma_crossover(
    fast: Sequence[IndicatorPoint],
    slow: Sequence[IndicatorPoint],
    max_lookback: int = DEFAULT_PARAMS.max_cross_lookback,
) -> MovingAverageCross:
    """Detect golden and death crosses between a fast and a slow moving average.

    The full cross history inside the lookback is kept on the result. While
    the fast average sits above the slow one, ``golden_cross`` is the start of
    the current bullish regime (see :func:`select_regime_start`); in any state
    ``death_cross`` is the most recent death cross.

    Args:
        fast: Fast moving-average series (e.g. SMA-50).
        slow: Slow moving-average series (e.g. SMA-200).
        max_lookback: Maximum number of aligned sample pairs scanned, counted
            back from the latest shared timestamp. ``0`` disables the bound.
    """
    aligned = align_series(fast=fast, slow=slow)
    if aligned.empty:
        return MovingAverageCross(state="neutral")

    if max_lookback and len(aligned) > max_lookback + 1:
        aligned = aligned.iloc[-(max_lookback + 1):]

    timestamps = aligned.index.to_numpy()
    fast_values = aligned["fast"].to_numpy()
    slow_values = aligned["slow"].to_numpy()

    if fast_values[-1] > slow_values[-1]:
        state = "bullish"
    elif fast_values[-1] < slow_values[-1]:
        state = "bearish"
    else:
        state = "neutral"

    upward, downward = find_crosses(fast_values, slow_values)
    result = MovingAverageCross(
        state=state,
        golden_crosses=[int(timestamps[i]) for i in upward],
        death_crosses=[int(timestamps[i]) for i in downward],
    )

    for ts in result.golden_crosses:
        logger.debug("Golden cross on %s", to_iso_date(ts))
    for ts in result.death_crosses:
        logger.debug("Death cross on %s", to_iso_date(ts))

    if state == "bullish":
        result.golden_cross = select_regime_start(
            result.golden_crosses, result.death_crosses
        )
    if result.death_crosses:
        result.death_cross = result.death_crosses[-1]

    logger.debug(
        "MA crossover scan: %d golden, %d death, state=%s",
        len(result.golden_crosses),
        len(result.death_crosses),
        state,
    )
    return result


def detect_macd_crossovers(points: Sequence[MACDPoint]) -> MACDCrossovers:
    """Find the earliest signal-line and zero-line crosses of the MACD line.

    Each of the four event types keeps only its first occurrence, scanning
    oldest to newest.
    """
    series = normalize_macd(points)
    if len(series) < 2:
        return MACDCrossovers()

    timestamps = [p.timestamp for p in series]
    macd_line = [p.macd for p in series]
    signal_line = [p.signal for p in series]

    bullish, bearish = find_crosses(macd_line, signal_line)
    above_zero, below_zero = find_crosses(macd_line, 0.0)

    def _first(indices: np.ndarray) -> int | None:
        return timestamps[indices[0]] if indices.size else None

    return MACDCrossovers(
        bullish_cross=_first(bullish),
        bearish_cross=_first(bearish),
        zero_cross_above=_first(above_zero),
        zero_cross_below=_first(below_zero),
    )
