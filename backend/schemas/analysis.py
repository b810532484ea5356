"""Schemas for turning-point analysis endpoints."""

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from analysis.turning_points import IndicatorPoint, MACDPoint, PriceBar


# Input series
class PriceBarIn(BaseModel):
    """One daily bar; accepts full names or provider shorthand (t, o, h, l, c, v)."""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: int = Field(validation_alias=AliasChoices("timestamp", "t"))
    open: float = Field(validation_alias=AliasChoices("open", "o"))
    high: float = Field(validation_alias=AliasChoices("high", "h"))
    low: float = Field(validation_alias=AliasChoices("low", "l"))
    close: float = Field(validation_alias=AliasChoices("close", "c"))
    volume: int = Field(0, validation_alias=AliasChoices("volume", "v"))

    def to_bar(self) -> PriceBar:
        return PriceBar(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


class IndicatorPointIn(BaseModel):
    """One RSI / SMA / EMA reading."""
    timestamp: int
    value: float

    def to_point(self) -> IndicatorPoint:
        return IndicatorPoint(timestamp=self.timestamp, value=self.value)


class MACDPointIn(BaseModel):
    """One MACD reading."""
    timestamp: int
    macd: float
    signal: float
    histogram: float | None = None

    def to_point(self) -> MACDPoint:
        histogram = self.histogram if self.histogram is not None else self.macd - self.signal
        return MACDPoint(
            timestamp=self.timestamp,
            macd=self.macd,
            signal=self.signal,
            histogram=histogram,
        )


# Turning points
class TurningPointsRequest(BaseModel):
    """Request body for turning-point extraction.

    Indicator series left out are derived from the bars.
    """
    symbol: str = Field(min_length=1, max_length=20)
    bars: list[PriceBarIn]
    rsi: list[IndicatorPointIn] | None = None
    sma_fast: list[IndicatorPointIn] | None = None
    sma_slow: list[IndicatorPointIn] | None = None
    macd: list[MACDPointIn] | None = None
    current_price: float | None = Field(None, gt=0)
    fifty_two_week_high: float | None = None
    fifty_two_week_low: float | None = None
    as_of: int | None = None


class TurningPointsResponse(BaseModel):
    """Response schema for turning-point extraction."""
    symbol: str
    analyzed_at: datetime
    current_price: float | None
    support: float | None
    resistance: float | None
    twelve_month_return: float | None
    fifty_two_week_high: float | None
    fifty_two_week_low: float | None
    turning_points: dict[str, str] = {}


# Support / resistance
class SupportResistanceRequest(BaseModel):
    """Request body for support/resistance estimation."""
    bars: list[PriceBarIn]
    current_price: float | None = Field(None, gt=0)
    as_of: int | None = None


class SupportResistanceResponse(BaseModel):
    """Nearest support below and resistance above the current price."""
    current_price: float | None
    support: float | None
    resistance: float | None


# Period return
class PeriodReturnRequest(BaseModel):
    """Request body for a period return.

    ``start`` and ``end`` accept ISO dates, ISO datetimes, or epoch milliseconds.
    """
    bars: list[PriceBarIn]
    start: date | datetime | int
    end: date | datetime | int


class PeriodReturnResponse(BaseModel):
    """Percentage return, or null when it cannot be computed."""
    return_percent: float | None
