"""Analysis API endpoints for turning points, key levels, and period returns."""

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable, TypeVar

from fastapi import APIRouter

from analysis.turning_points import (
    PriceBar,
    analyze_turning_points,
    estimate_support_resistance,
    normalize_bars,
    period_return,
)
from api.deps import Params
from api.exceptions import EmptySeriesError
from schemas.analysis import (
    PeriodReturnRequest,
    PeriodReturnResponse,
    PriceBarIn,
    SupportResistanceRequest,
    SupportResistanceResponse,
    TurningPointsRequest,
    TurningPointsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])

T = TypeVar("T")


async def _run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run CPU-bound analysis in the thread pool executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


def _usable_bars(bars: list[PriceBarIn]) -> list[PriceBar]:
    """Convert and normalize request bars, rejecting a request with nothing usable."""
    usable = normalize_bars([b.to_bar() for b in bars])
    if not usable:
        raise EmptySeriesError("bars", dropped=len(bars))
    return usable


@router.post("/turning-points", response_model=TurningPointsResponse)
async def get_turning_points(
    request: TurningPointsRequest,
    params: Params,
) -> TurningPointsResponse:
    """
    Extract turning points for one ticker.

    Returns dated RSI threshold entries, moving-average and MACD crosses,
    recent swings, 52-week extremes, level breaks, support/resistance, and
    the trailing twelve-month return. Events that did not occur are omitted.
    """
    bars = await _run_blocking(_usable_bars, request.bars)
    symbol = request.symbol.upper()

    def _points(series):
        return [p.to_point() for p in series] if series is not None else None

    findings = await _run_blocking(
        analyze_turning_points,
        bars,
        rsi=_points(request.rsi),
        sma_fast=_points(request.sma_fast),
        sma_slow=_points(request.sma_slow),
        macd=_points(request.macd),
        current_price=request.current_price,
        fifty_two_week_high=request.fifty_two_week_high,
        fifty_two_week_low=request.fifty_two_week_low,
        as_of=request.as_of,
        params=params,
        symbol=symbol,
    )

    return TurningPointsResponse(
        symbol=symbol,
        analyzed_at=datetime.now(timezone.utc),
        current_price=findings.current_price,
        support=findings.support,
        resistance=findings.resistance,
        twelve_month_return=findings.twelve_month_return,
        fifty_two_week_high=findings.fifty_two_week_high,
        fifty_two_week_low=findings.fifty_two_week_low,
        turning_points=findings.turning_points.to_dict(),
    )


@router.post("/support-resistance", response_model=SupportResistanceResponse)
async def get_support_resistance(
    request: SupportResistanceRequest,
    params: Params,
) -> SupportResistanceResponse:
    """Estimate the nearest support and resistance around the current price."""
    bars = await _run_blocking(_usable_bars, request.bars)

    current_price = request.current_price or bars[-1].close
    levels = await _run_blocking(
        estimate_support_resistance,
        bars,
        current_price,
        params=params,
        as_of=request.as_of,
    )
    return SupportResistanceResponse(
        current_price=current_price,
        support=levels.support,
        resistance=levels.resistance,
    )


@router.post("/period-return", response_model=PeriodReturnResponse)
async def get_period_return(request: PeriodReturnRequest) -> PeriodReturnResponse:
    """Percentage return between two dates using the nearest trading-day bars."""
    bars = await _run_blocking(_usable_bars, request.bars)
    result = await _run_blocking(period_return, bars, request.start, request.end)
    if result is None:
        logger.info("Period return unavailable for %s -> %s", request.start, request.end)
    return PeriodReturnResponse(return_percent=result)
