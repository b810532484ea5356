"""Market analysis package."""
from .indicators import TechnicalIndicators
from .turning_points import TechnicalFindings, analyze_batch, analyze_turning_points

__all__ = ["TechnicalIndicators", "TechnicalFindings", "analyze_batch", "analyze_turning_points"]
