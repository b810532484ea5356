"""Data model for turning-point extraction.

All entities are built fresh per analysis request and discarded afterwards.
Timestamps are integer milliseconds since the Unix epoch (UTC).
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class PriceBar:
    """One daily OHLCV bar."""
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: int = 0


@dataclass(frozen=True)
class IndicatorPoint:
    """A single RSI / SMA / EMA reading."""
    timestamp: int
    value: float


@dataclass(frozen=True)
class MACDPoint:
    """A single MACD reading with its signal line and histogram."""
    timestamp: int
    macd: float
    signal: float
    histogram: float


class SwingKind(Enum):
    """Direction of a swing point."""
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class SwingPoint:
    """A local price extremum."""
    timestamp: int
    price: float
    kind: SwingKind


@dataclass
class LevelCluster:
    """Swing points grouped into a candidate support/resistance level."""
    price: float  # running average of member prices
    touches: int
    most_recent_timestamp: int

    def add(self, point: SwingPoint) -> None:
        """Fold a swing point into the running average."""
        self.touches += 1
        self.price = (self.price * (self.touches - 1) + point.price) / self.touches
        self.most_recent_timestamp = max(self.most_recent_timestamp, point.timestamp)


@dataclass(frozen=True)
class SupportResistance:
    """Nearest actionable levels around the current price."""
    support: float | None = None
    resistance: float | None = None


@dataclass
class MovingAverageCross:
    """Fast/slow moving-average crossover scan result."""
    state: str  # "bullish", "bearish", "neutral"
    golden_crosses: list[int] = field(default_factory=list)
    death_crosses: list[int] = field(default_factory=list)
    golden_cross: int | None = None  # reported regime-start timestamp
    death_cross: int | None = None


@dataclass
class MACDCrossovers:
    """Earliest MACD signal-line and zero-line crosses in the window."""
    bullish_cross: int | None = None
    bearish_cross: int | None = None
    zero_cross_above: int | None = None
    zero_cross_below: int | None = None


# Attribute name -> external camelCase key
_TURNING_POINT_KEYS: dict[str, str] = {
    "rsi_overbought_date": "rsiOverboughtDate",
    "rsi_oversold_date": "rsiOversoldDate",
    "golden_cross_date": "goldenCrossDate",
    "death_cross_date": "deathCrossDate",
    "macd_bullish_cross_date": "macdBullishCrossDate",
    "macd_bearish_cross_date": "macdBearishCrossDate",
    "macd_zero_cross_above_date": "macdZeroCrossAboveDate",
    "macd_zero_cross_below_date": "macdZeroCrossBelowDate",
    "recent_swing_high_date": "recentSwingHighDate",
    "recent_swing_low_date": "recentSwingLowDate",
    "fifty_two_week_high_date": "fiftyTwoWeekHighDate",
    "fifty_two_week_low_date": "fiftyTwoWeekLowDate",
    "support_break_date": "supportBreakDate",
    "resistance_break_date": "resistanceBreakDate",
}


@dataclass
class TurningPoints:
    """Named historical events, each an ISO date string or None when not found."""
    rsi_overbought_date: str | None = None
    rsi_oversold_date: str | None = None
    golden_cross_date: str | None = None
    death_cross_date: str | None = None
    macd_bullish_cross_date: str | None = None
    macd_bearish_cross_date: str | None = None
    macd_zero_cross_above_date: str | None = None
    macd_zero_cross_below_date: str | None = None
    recent_swing_high_date: str | None = None
    recent_swing_low_date: str | None = None
    fifty_two_week_high_date: str | None = None
    fifty_two_week_low_date: str | None = None
    support_break_date: str | None = None
    resistance_break_date: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Convert to the camelCase record, omitting events that were not found."""
        return {
            _TURNING_POINT_KEYS[f.name]: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass
class TechnicalFindings:
    """Everything the pipeline extracts for one ticker."""
    turning_points: TurningPoints
    current_price: float | None = None
    support: float | None = None
    resistance: float | None = None
    twelve_month_return: float | None = None
    fifty_two_week_high: float | None = None
    fifty_two_week_low: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "current_price": self.current_price,
            "support": self.support,
            "resistance": self.resistance,
            "twelve_month_return": (
                round(self.twelve_month_return, 4)
                if self.twelve_month_return is not None else None
            ),
            "fifty_two_week_high": self.fifty_two_week_high,
            "fifty_two_week_low": self.fifty_two_week_low,
            "turning_points": self.turning_points.to_dict(),
        }
