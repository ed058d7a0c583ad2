# app/adapters/ingestion/base.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol

from ...domain.types import ScrapedListing


class SourceStatus(str, enum.Enum):
    active = "active"
    blocked = "blocked"
    api_only = "api-only"


@dataclass(frozen=True)
class RentalSource:
    id: str
    name: str
    category: str  # database | local | national | classifieds
    status: SourceStatus
    description: str
    estimated_listings: int


class ScrapeSource(Protocol):
    async def fetch(self, *, limit: int) -> list[ScrapedListing]:
        raise NotImplementedError
