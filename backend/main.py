"""FastAPI application entry point."""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings

settings = get_settings()

# Configure logging before importing other modules
# This ensures all loggers created with getLogger(__name__) use this configuration
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ],
    force=True,  # Override any existing configuration
)

# Set specific loggers to appropriate levels
logging.getLogger("uvicorn").setLevel(logging.INFO)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)  # Reduce access log noise
logging.getLogger("httpx").setLevel(logging.WARNING)  # Reduce HTTP client noise

logger = logging.getLogger(__name__)

from api import api_router  # noqa: E402
from api.exceptions import ValidationError, validation_error_handler  # noqa: E402
from api.routes.health import VERSION  # noqa: E402

app = FastAPI(
    title="Turning Points API",
    description="Dated technical events and key price levels for financial copy",
    version=VERSION,
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]

app.include_router(api_router, prefix=settings.API_V1_PREFIX)

logger.info("Turning Points API %s ready (prefix %s)", VERSION, settings.API_V1_PREFIX)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run the Turning Points API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    import uvicorn

    if args.reload:
        uvicorn.run("main:app", host=args.host, port=args.port, reload=True)
    else:
        uvicorn.run(app, host=args.host, port=args.port)
