# app/adapters/ingestion/registry.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ...domain.types import ScrapedListing
from .base import RentalSource, ScrapeSource, SourceStatus
from .known_properties import KnownPropertiesSource
from .rss_feed import FeedSource

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def _src(id: str, name: str, category: str, status: SourceStatus, description: str, estimated: int) -> RentalSource:
    return RentalSource(
        id=id,
        name=name,
        category=category,
        status=status,
        description=description,
        estimated_listings=estimated,
    )


_ACTIVE, _BLOCKED, _API = SourceStatus.active, SourceStatus.blocked, SourceStatus.api_only

RENTAL_SOURCES: dict[str, RentalSource] = {
    s.id: s
    for s in (
        # Internal
        _src("known", "Known Butte County Properties", "database", _ACTIVE, "Local database of verified apartment complexes", 30),
        _src("feed", "Chico Apartments RSS Feed", "classifieds", _ACTIVE, "Syndicated apartment listings feed", 100),
        # Local Butte County sites
        _src("chicoForRent", "ChicoForRent.com", "local", _BLOCKED, "Chico-specific rental listings", 150),
        _src("rentInChico", "RentInChico.com", "local", _BLOCKED, "Local Chico rental properties", 120),
        _src("csusChico", "CSU Chico Off-Campus Housing", "local", _BLOCKED, "Student housing near campus", 200),
        _src("chicoNewsReview", "Chico News & Review Classifieds", "local", _BLOCKED, "Local classifieds section", 50),
        _src("butteCountyHousing", "Butte County Housing Authority", "local", _API, "Affordable housing listings", 75),
        _src("paradisePost", "Paradise Post Classifieds", "local", _BLOCKED, "Paradise area rentals", 40),
        _src("orovilleMR", "Oroville Mercury-Register", "local", _BLOCKED, "Oroville local listings", 35),
        _src("butteCountyBulletin", "Butte County Bulletin Board", "local", _BLOCKED, "Community bulletin rentals", 25),
        # National rental sites
        _src("zillow", "Zillow Rentals", "national", _BLOCKED, "Major rental marketplace", 400),
        _src("realtor", "Realtor.com Rentals", "national", _BLOCKED, "Rental listings", 300),
        _src("apartments", "Apartments.com", "national", _BLOCKED, "Apartment search", 350),
        _src("trulia", "Trulia Rentals", "national", _BLOCKED, "Rental marketplace", 250),
        _src("hotpads", "HotPads", "national", _BLOCKED, "Map-based rental search", 200),
        _src("zumper", "Zumper", "national", _BLOCKED, "Apartment rentals", 180),
        _src("padmapper", "PadMapper", "national", _BLOCKED, "Map-based apartment search", 150),
        _src("rentCafe", "RENTCafé", "national", _API, "Apartment listings", 220),
        _src("cozy", "Cozy.co", "national", _API, "Landlord platform", 90),
        _src("avail", "Avail", "national", _API, "Landlord tools", 85),
        _src("rentPath", "RentPath", "national", _API, "Rental network", 260),
        _src("realPage", "RealPage", "national", _API, "Property management software", 300),
        _src("yardi", "Yardi RentCafe", "national", _API, "Property software", 320),
        _src("appFolio", "AppFolio", "national", _API, "Property management", 280),
        # Classifieds
        _src("craigslist", "Craigslist Chico", "classifieds", _BLOCKED, "Local classifieds (anti-bot protection)", 300),
        _src("facebook", "Facebook Marketplace", "classifieds", _BLOCKED, "Social marketplace", 450),
        _src("nextdoor", "Nextdoor", "classifieds", _BLOCKED, "Neighborhood network", 120),
        _src("offerup", "OfferUp", "classifieds", _BLOCKED, "Buy and sell locally", 150),
    )
}


@dataclass
class ScrapeResult:
    listings: list[ScrapedListing] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def source_error(source: RentalSource) -> str | None:
    if source.status == SourceStatus.blocked:
        return f"{source.name}: Site blocks automated scraping - consider API access"
    if source.status == SourceStatus.api_only:
        return f"{source.name}: Requires API key - manual setup needed"
    return None


async def scrape_rental_listings(
    source_ids: list[str],
    *,
    scrapers: dict[str, ScrapeSource],
    limit_per_source: int = 50,
    delay_s: float = 1.0,
    sleep: Sleep = asyncio.sleep,
    registry: dict[str, RentalSource] | None = None,
) -> ScrapeResult:
    """
    Aggregate listings from the requested sources, one source at a time.
    Unknown ids are ignored; blocked / api-only sources and scraper failures
    become error strings, never exceptions.
    """
    reg = registry or RENTAL_SOURCES
    result = ScrapeResult()

    for source_id in source_ids:
        source = reg.get(source_id)
        if source is None:
            log.debug("unknown scrape source id=%r", source_id)
            continue

        err = source_error(source)
        if err:
            result.errors.append(err)
            continue

        scraper = scrapers.get(source_id)
        if scraper is None:
            result.errors.append(f"{source.name}: Scraper not implemented yet")
            continue

        try:
            listings = await scraper.fetch(limit=limit_per_source)
        except Exception as e:
            log.warning("scrape source failed source=%s err=%s", source_id, e)
            result.errors.append(f"{source.name}: {str(e) or type(e).__name__}")
            continue

        result.listings.extend(listings[:limit_per_source])
        log.info("scraped source=%s listings=%s", source_id, len(listings))
        await sleep(delay_s)

    return result


def default_scrapers() -> dict[str, ScrapeSource]:
    return {"known": KnownPropertiesSource(), "feed": FeedSource.from_settings()}
