"""RSI overbought / oversold entry detection."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .models import IndicatorPoint
from .params import DEFAULT_PARAMS
from .series import normalize_points

logger = logging.getLogger(__name__)


def _latest_entry(
    values: Sequence[float],
    in_zone: Callable[[float], bool],
    cleared: Callable[[float], bool],
) -> int | None:
    """Index of the sample that opened the most recent zone episode.

    Walks newest to oldest and stops at the first entry (out of zone, then in
    zone). If the out-of-zone stretch just before that entry never cleared the
    re-arm level before an earlier in-zone reading, the dip is treated as part
    of one episode and the search continues into the earlier entry.
    """
    entry = None
    i = len(values) - 1
    while i >= 1:
        if in_zone(values[i]) and not in_zone(values[i - 1]):
            entry = i
            j = i - 1
            while j >= 0 and not in_zone(values[j]) and not cleared(values[j]):
                j -= 1
            if j >= 0 and in_zone(values[j]):
                i = j
                continue
            break
        i -= 1
    return entry


def detect_rsi_entries(
    points: Sequence[IndicatorPoint],
    overbought: float = DEFAULT_PARAMS.rsi_overbought,
    oversold: float = DEFAULT_PARAMS.rsi_oversold,
    rearm_band: float = DEFAULT_PARAMS.rsi_rearm_band,
) -> tuple[int | None, int | None]:
    """Find when RSI most recently entered overbought and oversold territory.

    Overbought entry is a move from below ``overbought`` to at or above it;
    oversold entry is a move from above ``oversold`` to at or below it. A dip
    out of the zone that stays within ``rearm_band`` of the threshold does not
    end the episode, so a brief 69 between two readings above 70 keeps the
    original entry date. With ``rearm_band=0`` the plain most-recent
    transition is reported.

    Returns:
        Tuple of (overbought entry timestamp, oversold entry timestamp); either
        is None when no entry exists in the series.
    """
    series = normalize_points(points)
    if len(series) < 2:
        return None, None

    values = [p.value for p in series]

    overbought_idx = _latest_entry(
        values,
        in_zone=lambda v: v >= overbought,
        cleared=lambda v: v < overbought - rearm_band,
    )
    oversold_idx = _latest_entry(
        values,
        in_zone=lambda v: v <= oversold,
        cleared=lambda v: v > oversold + rearm_band,
    )

    overbought_ts = series[overbought_idx].timestamp if overbought_idx is not None else None
    oversold_ts = series[oversold_idx].timestamp if oversold_idx is not None else None
    logger.debug(
        "RSI entries: overbought=%s oversold=%s", overbought_ts, oversold_ts
    )
    return overbought_ts, oversold_ts
