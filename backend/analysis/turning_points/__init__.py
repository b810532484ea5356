"""Turning-point extraction -- convenience API.

Provides :func:`analyze_turning_points`, which normalizes a ticker's bar and
indicator series, runs every detector in isolation, and merges the findings
into one record. Detectors are pure functions of their input; a detector
that fails or lacks data contributes no finding and never blocks the others.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from .crossovers import detect_ma_crossover, detect_macd_crossovers, find_crosses, select_regime_start
from .derived import IndicatorSeries, derive_indicator_series
from .levels import (
    cluster_swing_points,
    estimate_support_resistance,
    fifty_two_week_range,
    find_fifty_two_week_dates,
    find_level_breaks,
)
from .models import (
    IndicatorPoint,
    LevelCluster,
    MACDCrossovers,
    MACDPoint,
    MovingAverageCross,
    PriceBar,
    SupportResistance,
    SwingKind,
    SwingPoint,
    TechnicalFindings,
    TurningPoints,
)
from .params import DEFAULT_PARAMS, DetectionParams
from .returns import period_return, twelve_month_return
from .series import align_series, normalize_bars, to_iso_date, to_timestamp
from .swings import find_swing_points, recent_swing_extremes
from .thresholds import detect_rsi_entries

logger = logging.getLogger(__name__)

__all__ = [
    "analyze_turning_points",
    "analyze_batch",
    "align_series",
    "cluster_swing_points",
    "derive_indicator_series",
    "detect_ma_crossover",
    "detect_macd_crossovers",
    "detect_rsi_entries",
    "estimate_support_resistance",
    "fifty_two_week_range",
    "find_crosses",
    "find_fifty_two_week_dates",
    "find_level_breaks",
    "find_swing_points",
    "normalize_bars",
    "period_return",
    "recent_swing_extremes",
    "select_regime_start",
    "to_iso_date",
    "to_timestamp",
    "twelve_month_return",
    "DEFAULT_PARAMS",
    "DetectionParams",
    "IndicatorPoint",
    "IndicatorSeries",
    "LevelCluster",
    "MACDCrossovers",
    "MACDPoint",
    "MovingAverageCross",
    "PriceBar",
    "SupportResistance",
    "SwingKind",
    "SwingPoint",
    "TechnicalFindings",
    "TurningPoints",
]

T = TypeVar("T")


def _isolated(name: str, symbol: str, default: T, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run one detector, turning an unexpected failure into ``default``."""
    try:
        return func(*args, **kwargs)
    except Exception:
        logger.warning("%s failed for %s", name, symbol, exc_info=True)
        return default


def _iso(timestamp: int | None) -> str | None:
    return to_iso_date(timestamp) if timestamp is not None else None


def _usable(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def analyze_turning_points(
    bars: Sequence[PriceBar],
    rsi: Sequence[IndicatorPoint] | None = None,
    sma_fast: Sequence[IndicatorPoint] | None = None,
    sma_slow: Sequence[IndicatorPoint] | None = None,
    macd: Sequence[MACDPoint] | None = None,
    current_price: float | None = None,
    fifty_two_week_high: float | None = None,
    fifty_two_week_low: float | None = None,
    as_of: int | None = None,
    params: DetectionParams = DEFAULT_PARAMS,
    symbol: str = "UNKNOWN",
) -> TechnicalFindings:
    """Extract turning points and key levels for a single ticker.

    Args:
        bars: Daily OHLCV bars, any order.
        rsi: RSI series; derived from closes when None.
        sma_fast: Fast SMA series (SMA-50); derived from closes when None.
        sma_slow: Slow SMA series (SMA-200); derived from closes when None.
        macd: MACD series; derived from closes when None.
        current_price: Latest traded price. Defaults to the latest close.
        fifty_two_week_high: Quoted 52-week high; derived from bars when
            missing or non-positive.
        fifty_two_week_low: Quoted 52-week low; derived likewise.
        as_of: Recency reference (epoch ms) for support/resistance ranking.
            Defaults to the latest bar timestamp.
        params: Detection constants.
        symbol: Ticker, used for logging only.

    Returns:
        A :class:`TechnicalFindings`. Fields with no qualifying event are None.
    """
    ordered = normalize_bars(bars)

    if ordered and (rsi is None or sma_fast is None or sma_slow is None or macd is None):
        derived = _isolated(
            "Indicator derivation", symbol, IndicatorSeries(), derive_indicator_series, ordered
        )
        rsi = derived.rsi if rsi is None else rsi
        sma_fast = derived.sma_fast if sma_fast is None else sma_fast
        sma_slow = derived.sma_slow if sma_slow is None else sma_slow
        macd = derived.macd if macd is None else macd

    if not _usable(current_price) and ordered:
        current_price = ordered[-1].close

    derived_high, derived_low = _isolated(
        "52-week range", symbol, (None, None), fifty_two_week_range, ordered
    )
    high = fifty_two_week_high if _usable(fifty_two_week_high) else derived_high
    low = fifty_two_week_low if _usable(fifty_two_week_low) else derived_low

    levels = _isolated(
        "Support/resistance",
        symbol,
        SupportResistance(),
        estimate_support_resistance,
        ordered,
        current_price,
        params=params,
        as_of=as_of,
    )

    overbought, oversold = _isolated(
        "RSI entries",
        symbol,
        (None, None),
        detect_rsi_entries,
        rsi or [],
        overbought=params.rsi_overbought,
        oversold=params.rsi_oversold,
        rearm_band=params.rsi_rearm_band,
    )
    ma_cross = _isolated(
        "MA crossover",
        symbol,
        MovingAverageCross(state="neutral"),
        detect_ma_crossover,
        sma_fast or [],
        sma_slow or [],
        max_lookback=params.max_cross_lookback,
    )
    macd_cross = _isolated(
        "MACD crossovers", symbol, MACDCrossovers(), detect_macd_crossovers, macd or []
    )
    swing_high, swing_low = _isolated(
        "Recent swings",
        symbol,
        (None, None),
        recent_swing_extremes,
        ordered,
        window=params.recent_swing_window,
        tail=params.recent_swing_bars,
    )
    high_date, low_date = _isolated(
        "52-week dates",
        symbol,
        (None, None),
        find_fifty_two_week_dates,
        ordered,
        high,
        low,
        tolerance=params.fifty_two_week_tolerance,
    )
    support_break, resistance_break = _isolated(
        "Level breaks",
        symbol,
        (None, None),
        find_level_breaks,
        ordered,
        levels.support,
        levels.resistance,
    )
    yearly_return = _isolated(
        "Twelve-month return", symbol, None, twelve_month_return, ordered
    )

    turning_points = TurningPoints(
        rsi_overbought_date=_iso(overbought),
        rsi_oversold_date=_iso(oversold),
        golden_cross_date=_iso(ma_cross.golden_cross),
        death_cross_date=_iso(ma_cross.death_cross),
        macd_bullish_cross_date=_iso(macd_cross.bullish_cross),
        macd_bearish_cross_date=_iso(macd_cross.bearish_cross),
        macd_zero_cross_above_date=_iso(macd_cross.zero_cross_above),
        macd_zero_cross_below_date=_iso(macd_cross.zero_cross_below),
        recent_swing_high_date=_iso(swing_high.timestamp if swing_high else None),
        recent_swing_low_date=_iso(swing_low.timestamp if swing_low else None),
        fifty_two_week_high_date=_iso(high_date),
        fifty_two_week_low_date=_iso(low_date),
        support_break_date=_iso(support_break),
        resistance_break_date=_iso(resistance_break),
    )

    logger.info(
        "Turning points for %s: %d events, support=%s, resistance=%s",
        symbol,
        len(turning_points.to_dict()),
        levels.support,
        levels.resistance,
    )

    return TechnicalFindings(
        turning_points=turning_points,
        current_price=current_price,
        support=levels.support,
        resistance=levels.resistance,
        twelve_month_return=yearly_return,
        fifty_two_week_high=high,
        fifty_two_week_low=low,
    )


def analyze_batch(
    requests: Mapping[str, Mapping[str, Any]],
    params: DetectionParams = DEFAULT_PARAMS,
) -> dict[str, TechnicalFindings | None]:
    """Run :func:`analyze_turning_points` for several tickers.

    Args:
        requests: Mapping of symbol to keyword arguments for
            :func:`analyze_turning_points` (at minimum ``bars``).

    Returns:
        Mapping of symbol to its findings, or None for a ticker that failed.
    """
    results: dict[str, TechnicalFindings | None] = {}
    for symbol, kwargs in requests.items():
        try:
            results[symbol] = analyze_turning_points(**kwargs, params=params, symbol=symbol)
        except Exception as e:
            logger.error("Turning-point analysis failed for %s: %s", symbol, e)
            results[symbol] = None

    logger.info(
        "Batch turning points computed: %d/%d symbols succeeded",
        sum(1 for v in results.values() if v is not None),
        len(requests),
    )
    return results
