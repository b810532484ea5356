"""Shared pytest fixtures for the turning-points test suite.

Provides:
- Sample bar sets (a short week, a full rising year)
- FastAPI async test client (httpx.AsyncClient + ASGITransport)

Series factories live in ``factories.py``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from analysis.turning_points import PriceBar
from factories import make_bars, ts


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_bars() -> list[PriceBar]:
    """Five consecutive trading days with realistic OHLCV data."""
    return [
        PriceBar(ts(date(2026, 1, 5)), 180.0, 185.0, 179.0, 184.0, 50_000_000),
        PriceBar(ts(date(2026, 1, 6)), 184.0, 187.0, 183.0, 186.0, 48_000_000),
        PriceBar(ts(date(2026, 1, 7)), 186.0, 189.0, 184.0, 185.0, 52_000_000),
        PriceBar(ts(date(2026, 1, 8)), 185.0, 188.0, 182.0, 187.0, 55_000_000),
        PriceBar(ts(date(2026, 1, 9)), 187.0, 190.0, 186.0, 189.0, 47_000_000),
    ]


@pytest.fixture()
def rising_year_bars() -> list[PriceBar]:
    """300 daily bars with closes rising linearly from $90 to $110."""
    closes = [90.0 + 20.0 * i / 299 for i in range(300)]
    return make_bars(closes, spread=0.5)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


@pytest.fixture()
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the FastAPI app."""
    from main import app  # deferred so settings load per test session

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
