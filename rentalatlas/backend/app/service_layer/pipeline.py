# app/service_layer/pipeline.py
from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..adapters.clients.geocoding import GeoResolver, MapboxGeocoder
from ..adapters.clients.parcels import ParcelDirectory, StaticParcelDirectory
from ..adapters.repos.properties import PropertyRepository
from ..config import settings
from ..domain.geo import Jitter, jitter_from_settings
from ..domain.types import GeoResult
from ..domain.utilities import UtilityAllowanceEngine
from ..models import utcnow
from .batch import BatchStrategy

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class ImportDeps:
    """
    Everything an importer touches, passed in explicitly.
    Tests build one with NoJitter, zero delays and a MockTransport geocoder.
    """

    repo: PropertyRepository
    geocoder: GeoResolver
    engine: UtilityAllowanceEngine = field(default_factory=UtilityAllowanceEngine)
    jitter: Jitter = field(default_factory=lambda: jitter_from_settings(False))
    parcels: ParcelDirectory = field(default_factory=StaticParcelDirectory)
    geocode_delay_s: float = 0.0
    error_max_len: int = 80
    refresh_strategy: BatchStrategy = field(default_factory=lambda: BatchStrategy.bounded(10, 0.0))
    sleep: Sleep = asyncio.sleep
    clock: Callable[[], datetime] = utcnow
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_settings(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "ImportDeps":
        return cls(
            repo=PropertyRepository(session_factory),
            geocoder=MapboxGeocoder.from_settings(client=http_client),
            engine=UtilityAllowanceEngine(),
            jitter=jitter_from_settings(settings.FALLBACK_JITTER_ENABLED),
            parcels=StaticParcelDirectory.from_settings(),
            geocode_delay_s=settings.GEOCODE_DELAY_S,
            error_max_len=settings.ERROR_MESSAGE_MAX_LEN,
            refresh_strategy=BatchStrategy.bounded(settings.REFRESH_BATCH_SIZE, settings.REFRESH_BATCH_DELAY_S),
        )

    async def geocode(self, address: str) -> GeoResult | None:
        """Geocode, then wait the fixed inter-call delay."""
        geo = await self.geocoder.resolve(address)
        if self.geocode_delay_s > 0:
            await self.sleep(self.geocode_delay_s)
        return geo
