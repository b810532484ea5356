"""Series normalization: ordering, de-duplication, and timestamp alignment.

Every detector calls into this module before comparing samples, so callers
may hand over series in any order. Rows with missing or non-finite values are
dropped rather than repaired; forward-filling would fabricate signals.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict
from datetime import date, datetime, timezone

import numpy as np
import pandas as pd  # type: ignore[import-untyped]

from .models import IndicatorPoint, MACDPoint, PriceBar

logger = logging.getLogger(__name__)

MS_PER_DAY = 86_400_000

# Epoch-ms range a calendar date can be derived from
_MIN_TIMESTAMP = pd.Timestamp.min.value // 1_000_000 + 1
_MAX_TIMESTAMP = pd.Timestamp.max.value // 1_000_000


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

def to_iso_date(timestamp: int) -> str:
    """Format a millisecond epoch timestamp as a UTC ``YYYY-MM-DD`` string."""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).date().isoformat()


def to_timestamp(value: int | float | date | datetime) -> int:
    """Convert a date, datetime, or epoch-millisecond number to epoch milliseconds.

    Naive datetimes and plain dates are interpreted as UTC; a date maps to
    midnight at the start of that day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)
    if isinstance(value, date):
        midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        return int(midnight.timestamp() * 1000)
    return int(value)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def _clean_frame(records: Sequence[object], value_columns: list[str]) -> pd.DataFrame:
    """Build a timestamp-sorted, de-duplicated frame from dataclass records.

    Rows with a missing or non-finite value, or a timestamp outside the
    representable date range, are dropped.
    """
    frame = pd.DataFrame([asdict(r) for r in records])  # type: ignore[call-overload]
    frame = frame.replace([np.inf, -np.inf], np.nan)
    frame = frame.dropna(subset=["timestamp", *value_columns])
    frame = frame[frame["timestamp"].between(_MIN_TIMESTAMP, _MAX_TIMESTAMP)]
    # Last write wins for repeated timestamps
    frame = frame.drop_duplicates(subset="timestamp", keep="last")
    return frame.sort_values("timestamp", kind="stable")


def normalize_bars(bars: Sequence[PriceBar]) -> list[PriceBar]:
    """Return bars sorted ascending by timestamp, unique per timestamp, NaN-free."""
    if not bars:
        return []
    frame = _clean_frame(bars, ["open", "high", "low", "close"])
    dropped = len(bars) - len(frame)
    if dropped:
        logger.debug("Dropped %d invalid or duplicate bars", dropped)
    frame["volume"] = frame["volume"].fillna(0)
    return [
        PriceBar(
            timestamp=int(row.timestamp),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(row.volume),
        )
        for row in frame.itertuples(index=False)
    ]


def normalize_points(points: Sequence[IndicatorPoint]) -> list[IndicatorPoint]:
    """Return indicator points sorted ascending by timestamp, unique, NaN-free."""
    if not points:
        return []
    frame = _clean_frame(points, ["value"])
    return [
        IndicatorPoint(timestamp=int(row.timestamp), value=float(row.value))
        for row in frame.itertuples(index=False)
    ]


def normalize_macd(points: Sequence[MACDPoint]) -> list[MACDPoint]:
    """Return MACD points sorted ascending by timestamp, unique, NaN-free.

    Only the MACD and signal values are required; a missing histogram is
    recomputed as their difference.
    """
    if not points:
        return []
    frame = _clean_frame(points, ["macd", "signal"])
    frame["histogram"] = frame["histogram"].fillna(frame["macd"] - frame["signal"])
    return [
        MACDPoint(
            timestamp=int(row.timestamp),
            macd=float(row.macd),
            signal=float(row.signal),
            histogram=float(row.histogram),
        )
        for row in frame.itertuples(index=False)
    ]


def align_series(**series: Sequence[IndicatorPoint]) -> pd.DataFrame:
    """Align named indicator series on the timestamps present in all of them.

    Returns a frame indexed by timestamp (ascending) with one column per
    keyword argument. The frame is empty when the series share no timestamp.
    """
    columns: dict[str, pd.Series] = {}
    for name, points in series.items():
        cleaned = normalize_points(points)
        columns[name] = pd.Series(
            [p.value for p in cleaned],
            index=[p.timestamp for p in cleaned],
            dtype=float,
        )

    if not columns or any(col.empty for col in columns.values()):
        return pd.DataFrame(columns=list(series), dtype=float)

    aligned = pd.concat(columns, axis=1, join="inner").sort_index()
    if aligned.empty:
        logger.debug("No overlapping timestamps between %s", ", ".join(series))
    return aligned
