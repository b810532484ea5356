"""Support/resistance estimation, level breaks, and 52-week extreme dating."""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .models import LevelCluster, PriceBar, SupportResistance, SwingKind, SwingPoint
from .params import DEFAULT_PARAMS, DetectionParams
from .series import MS_PER_DAY, normalize_bars
from .swings import find_swing_points

logger = logging.getLogger(__name__)

_YEAR_MS = 365 * MS_PER_DAY


# ---------------------------------------------------------------------------
# Clustering
# ---------------------------------------------------------------------------

def cluster_swing_points(
    points: Sequence[SwingPoint],
    tolerance: float = DEFAULT_PARAMS.level_cluster_tolerance,
) -> list[LevelCluster]:
    """Group swing points whose prices lie within ``tolerance`` of a cluster average.

    Points are folded in input order into the first cluster whose running
    average is close enough; otherwise they start a new cluster.
    """
    clusters: list[LevelCluster] = []
    for point in points:
        match = next(
            (c for c in clusters if abs(c.price - point.price) <= tolerance), None
        )
        if match is not None:
            match.add(point)
        else:
            clusters.append(
                LevelCluster(price=point.price, touches=1, most_recent_timestamp=point.timestamp)
            )
    return clusters


def pool_swing_points(
    bars: Sequence[PriceBar],
    lookbacks: Sequence[int],
    window: int,
) -> tuple[list[SwingPoint], list[SwingPoint]]:
    """Collect swing highs and lows from several trailing windows.

    The same swing found in overlapping windows is kept once per window, which
    raises the touch count of long-standing levels. Non-positive lookbacks are
    skipped.
    """
    highs: list[SwingPoint] = []
    lows: list[SwingPoint] = []
    for lookback in lookbacks:
        if lookback <= 0:
            continue
        for point in find_swing_points(bars[-lookback:], window):
            if point.kind is SwingKind.HIGH:
                highs.append(point)
            else:
                lows.append(point)
    return highs, lows


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_to_step(price: float, step: float) -> float:
    """Round half-up to the nearest multiple of ``step``."""
    return math.floor(price / step + 0.5) * step


def _round_below(price: float, current: float, step: float) -> float:
    level = round_to_step(price, step)
    if level >= current:
        level = math.floor(price / step) * step
    return level


def _round_above(price: float, current: float, step: float) -> float:
    level = round_to_step(price, step)
    if level <= current:
        level = math.ceil(price / step) * step
    return level


# ---------------------------------------------------------------------------
# Support / resistance
# ---------------------------------------------------------------------------

def estimate_support_resistance(
    bars: Sequence[PriceBar],
    current_price: float | None,
    params: DetectionParams = DEFAULT_PARAMS,
    as_of: int | None = None,
) -> SupportResistance:
    """Estimate the nearest support below and resistance above ``current_price``.

    Swing points (window ``params.level_swing_window``) from each trailing
    lookback are pooled and clustered. Candidates must lie strictly on the
    correct side of the current price and within ``params.level_proximity_pct``
    of it. They are ranked by recency (a member swing within
    ``params.level_recency_days`` of ``as_of``), then touch count, then
    distance to the current price. The winner is rounded to
    ``params.level_rounding_step``, nudged outward by one step if rounding
    would land it on or across the current price.

    Args:
        bars: Daily bars, any order.
        current_price: Latest traded price.
        params: Detection constants.
        as_of: Recency reference in epoch ms. Defaults to the latest bar.

    Returns:
        :class:`SupportResistance`; either side is None when no cluster
        qualifies or the data is insufficient.
    """
    ordered = normalize_bars(bars)
    if len(ordered) < params.min_level_bars:
        logger.debug(
            "Not enough bars for support/resistance (%d < %d)",
            len(ordered),
            params.min_level_bars,
        )
        return SupportResistance()

    if current_price is None or not math.isfinite(current_price) or current_price <= 0:
        logger.debug("Invalid current price %r, skipping support/resistance", current_price)
        return SupportResistance()

    swing_highs, swing_lows = pool_swing_points(
        ordered, params.level_lookbacks, params.level_swing_window
    )
    high_clusters = cluster_swing_points(swing_highs, params.level_cluster_tolerance)
    low_clusters = cluster_swing_points(swing_lows, params.level_cluster_tolerance)

    reference = as_of if as_of is not None else ordered[-1].timestamp
    recent_cutoff = reference - params.level_recency_days * MS_PER_DAY

    def _is_recent(cluster: LevelCluster) -> bool:
        return cluster.most_recent_timestamp > recent_cutoff

    upper_bound = current_price * (1 + params.level_proximity_pct)
    lower_bound = current_price * (1 - params.level_proximity_pct)

    resistance_candidates = sorted(
        (c for c in high_clusters if current_price < c.price < upper_bound),
        key=lambda c: (not _is_recent(c), -c.touches, c.price - current_price),
    )
    support_candidates = sorted(
        (c for c in low_clusters if lower_bound < c.price < current_price),
        key=lambda c: (not _is_recent(c), -c.touches, current_price - c.price),
    )

    logger.debug(
        "Support/resistance: %d swing highs, %d swing lows, "
        "%d resistance / %d support candidates around %.2f",
        len(swing_highs),
        len(swing_lows),
        len(resistance_candidates),
        len(support_candidates),
        current_price,
    )

    step = params.level_rounding_step
    resistance = (
        _round_above(resistance_candidates[0].price, current_price, step)
        if resistance_candidates else None
    )
    support = (
        _round_below(support_candidates[0].price, current_price, step)
        if support_candidates else None
    )
    return SupportResistance(support=support, resistance=resistance)


def find_level_breaks(
    bars: Sequence[PriceBar],
    support: float | None,
    resistance: float | None,
) -> tuple[int | None, int | None]:
    """Most recent closes that broke below support and above resistance.

    Returns:
        Tuple of (support break timestamp, resistance break timestamp).
    """
    ordered = normalize_bars(bars)
    if len(ordered) < 2:
        return None, None

    support_break = None
    resistance_break = None
    pairs = list(zip(ordered[:-1], ordered[1:]))
    for previous, current in reversed(pairs):
        if (
            support_break is None
            and support is not None
            and current.close < support <= previous.close
        ):
            support_break = current.timestamp
        if (
            resistance_break is None
            and resistance is not None
            and current.close > resistance >= previous.close
        ):
            resistance_break = current.timestamp
        if support_break is not None and resistance_break is not None:
            break
    return support_break, resistance_break


# ---------------------------------------------------------------------------
# 52-week extremes
# ---------------------------------------------------------------------------

def _trailing_year(bars: list[PriceBar]) -> list[PriceBar]:
    cutoff = bars[-1].timestamp - _YEAR_MS
    return [b for b in bars if b.timestamp >= cutoff]


def fifty_two_week_range(bars: Sequence[PriceBar]) -> tuple[float | None, float | None]:
    """Highest high and lowest low over the trailing year of bars."""
    ordered = normalize_bars(bars)
    if not ordered:
        return None, None
    window = _trailing_year(ordered)
    return max(b.high for b in window), min(b.low for b in window)


def find_fifty_two_week_dates(
    bars: Sequence[PriceBar],
    high: float | None = None,
    low: float | None = None,
    tolerance: float = DEFAULT_PARAMS.fifty_two_week_tolerance,
) -> tuple[int | None, int | None]:
    """Date the bars that set the 52-week high and low.

    A bar matches the high when ``bar.high >= high - tolerance``; the greatest
    matching high wins and ties go to the later bar. Symmetric for the low.
    Missing or non-positive extremes are derived from the bars.

    Returns:
        Tuple of (high timestamp, low timestamp).
    """
    ordered = normalize_bars(bars)
    if not ordered:
        return None, None
    window = _trailing_year(ordered)

    derived_high, derived_low = fifty_two_week_range(window)
    if high is None or not math.isfinite(high) or high <= 0:
        high = derived_high
    if low is None or not math.isfinite(low) or low <= 0:
        low = derived_low

    high_bar: PriceBar | None = None
    low_bar: PriceBar | None = None
    for bar in window:
        if high is not None and bar.high >= high - tolerance:
            if high_bar is None or bar.high >= high_bar.high:
                high_bar = bar
        if low is not None and bar.low <= low + tolerance:
            if low_bar is None or bar.low <= low_bar.low:
                low_bar = bar

    return (
        high_bar.timestamp if high_bar else None,
        low_bar.timestamp if low_bar else None,
    )
