"""API package - Versioned router for the turning-points service."""

from fastapi import APIRouter

from api.routes.analysis import router as analysis_router
from api.routes.health import router as health_router

# Mounted under settings.API_V1_PREFIX by main.py
api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(analysis_router)

__all__ = ["api_router"]
