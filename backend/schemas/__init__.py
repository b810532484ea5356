from schemas.analysis import (
    IndicatorPointIn,
    MACDPointIn,
    PeriodReturnRequest,
    PeriodReturnResponse,
    PriceBarIn,
    SupportResistanceRequest,
    SupportResistanceResponse,
    TurningPointsRequest,
    TurningPointsResponse,
)
from schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "IndicatorPointIn",
    "MACDPointIn",
    "PeriodReturnRequest",
    "PeriodReturnResponse",
    "PriceBarIn",
    "SupportResistanceRequest",
    "SupportResistanceResponse",
    "TurningPointsRequest",
    "TurningPointsResponse",
]
