"""Common dependencies for API routes."""

from typing import Annotated

from fastapi import Depends

from analysis.turning_points import DetectionParams
from config import Settings, get_settings


def get_detection_params(settings: Settings = Depends(get_settings)) -> DetectionParams:
    """Detector constants derived from the application settings."""
    return settings.detection_params()


# Type alias for dependency injection
Params = Annotated[DetectionParams, Depends(get_detection_params)]
