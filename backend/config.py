"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from analysis.turning_points.params import DetectionParams


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # --- RSI thresholds ---
    RSI_OVERBOUGHT: float = 70.0
    RSI_OVERSOLD: float = 30.0
    # A dip out of the zone must clear threshold -/+ band to end an episode
    RSI_REARM_BAND: float = 2.0

    # --- Moving-average crossovers ---
    MAX_CROSS_LOOKBACK: int = Field(252, ge=0)  # aligned samples, 0 = unbounded

    # --- Swing points ---
    RECENT_SWING_WINDOW: PositiveInt = 2
    RECENT_SWING_BARS: PositiveInt = 60

    # --- Support / resistance ---
    LEVEL_SWING_WINDOW: PositiveInt = 5
    LEVEL_LOOKBACKS: list[PositiveInt] = Field(default=[90, 180, 252], min_length=1)
    LEVEL_CLUSTER_TOLERANCE: float = 1.0  # dollars
    LEVEL_PROXIMITY_PCT: float = 0.20
    LEVEL_RECENCY_DAYS: int = 60
    LEVEL_ROUNDING_STEP: float = Field(0.5, gt=0)
    MIN_LEVEL_BARS: PositiveInt = 30

    # --- 52-week extremes ---
    FIFTY_TWO_WEEK_TOLERANCE: float = 0.01

    def detection_params(self) -> DetectionParams:
        """Build the detector constants from these settings."""
        return DetectionParams(
            rsi_overbought=self.RSI_OVERBOUGHT,
            rsi_oversold=self.RSI_OVERSOLD,
            rsi_rearm_band=self.RSI_REARM_BAND,
            max_cross_lookback=self.MAX_CROSS_LOOKBACK,
            recent_swing_window=self.RECENT_SWING_WINDOW,
            recent_swing_bars=self.RECENT_SWING_BARS,
            level_swing_window=self.LEVEL_SWING_WINDOW,
            level_lookbacks=tuple(self.LEVEL_LOOKBACKS),
            level_cluster_tolerance=self.LEVEL_CLUSTER_TOLERANCE,
            level_proximity_pct=self.LEVEL_PROXIMITY_PCT,
            level_recency_days=self.LEVEL_RECENCY_DAYS,
            level_rounding_step=self.LEVEL_ROUNDING_STEP,
            min_level_bars=self.MIN_LEVEL_BARS,
            fifty_two_week_tolerance=self.FIFTY_TWO_WEEK_TOLERANCE,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
