# tests/conftest.py
import random
from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.adapters.clients.geocoding import MapboxGeocoder
from app.adapters.repos.properties import PropertyRepository
from app.domain.geo import NoJitter
from app.models import Base
from app.service_layer.pipeline import ImportDeps

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


async def no_sleep(_: float) -> None:
    return None


def mapbox_body(lng: float, lat: float, *, city: str = "Chico", zip_code: str = "95926", place_name: str | None = None) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "center": [lng, lat],
                "place_name": place_name or f"100 Test St, {city}, California {zip_code}, United States",
                "context": [
                    {"id": "postcode.1", "text": zip_code},
                    {"id": "place.2", "text": city},
                    {"id": "region.3", "text": "California", "short_code": "US-CA"},
                ],
            }
        ],
    }


def mock_geocoder(handler) -> MapboxGeocoder:
    """Geocoder wired to an httpx.MockTransport handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return MapboxGeocoder(token="test-token", base_url="https://geo.test/places", client=client)


@pytest.fixture(autouse=True)
async def _reset_db(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
def repo(async_session_maker):
    return PropertyRepository(async_session_maker)


@pytest.fixture
def deps(repo):
    # No geocoder token: every import exercises the static fallbacks.
    return ImportDeps(
        repo=repo,
        geocoder=MapboxGeocoder(token=None),
        jitter=NoJitter(),
        sleep=no_sleep,
        clock=lambda: FIXED_NOW,
        rng=random.Random(7),
    )
