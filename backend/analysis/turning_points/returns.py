"""Period return between two dates using the nearest trading-day bars."""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone

from .models import PriceBar
from .series import normalize_bars, to_iso_date, to_timestamp

logger = logging.getLogger(__name__)


def _resolve_start(bars: list[PriceBar], start: int) -> PriceBar:
    for bar in bars:
        if bar.timestamp >= start:
            return bar
    before = [b for b in bars if b.timestamp < start]
    return before[-1] if before else bars[0]


def _resolve_end(bars: list[PriceBar], end: int) -> PriceBar:
    on_or_before = [b for b in bars if b.timestamp <= end]
    if on_or_before:
        return on_or_before[-1]
    return next((b for b in bars if b.timestamp > end), bars[-1])


def _end_bound(end: int | date | datetime) -> int:
    """Latest timestamp covered by ``end``; a plain date covers its whole day."""
    if isinstance(end, date) and not isinstance(end, datetime):
        return to_timestamp(end + timedelta(days=1)) - 1
    return to_timestamp(end)


def period_return(
    bars: Sequence[PriceBar],
    start: int | date | datetime,
    end: int | date | datetime,
) -> float | None:
    """Percentage return from ``start`` to ``end``.

    The start resolves to the first bar on or after ``start`` (falling back to
    the last bar before it); the end resolves to the last bar on or before
    ``end`` (falling back to the first bar after it). A plain ``end`` date
    includes every bar stamped on that UTC day. Weekend and holiday
    boundaries therefore land on the nearest trading day.

    Returns:
        ``(end_close - start_close) / start_close * 100``, or None when there
        are no bars, a close is not a positive number, the resolved start
        follows the resolved end, or both resolve to the same bar.
    """
    ordered = normalize_bars(bars)
    if not ordered:
        return None

    start_bar = _resolve_start(ordered, to_timestamp(start))
    end_bar = _resolve_end(ordered, _end_bound(end))

    for close in (start_bar.close, end_bar.close):
        if not math.isfinite(close) or close <= 0:
            return None
    if start_bar.timestamp > end_bar.timestamp:
        return None
    if start_bar.timestamp == end_bar.timestamp:
        return None

    result = (end_bar.close - start_bar.close) / start_bar.close * 100
    logger.debug(
        "Period return %s (%.2f) -> %s (%.2f) = %.2f%%",
        to_iso_date(start_bar.timestamp),
        start_bar.close,
        to_iso_date(end_bar.timestamp),
        end_bar.close,
        result,
    )
    return result


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


def twelve_month_return(bars: Sequence[PriceBar]) -> float | None:
    """Return over the year ending at the most recent bar."""
    ordered = normalize_bars(bars)
    if not ordered:
        return None
    latest = ordered[-1]
    latest_day = datetime.fromtimestamp(latest.timestamp / 1000, tz=timezone.utc).date()
    return period_return(ordered, one_year_before(latest_day), latest.timestamp)
