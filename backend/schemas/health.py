"""Schema for the health check endpoint."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service liveness. The service holds no connections, so liveness is the whole check."""
    status: str = Field(description="Always 'healthy' when the process is serving")
    version: str
    timestamp: datetime
