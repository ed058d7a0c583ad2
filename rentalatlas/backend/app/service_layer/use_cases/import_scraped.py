# app/service_layer/use_cases/import_scraped.py
from __future__ import annotations

import logging

from ...adapters.ingestion.registry import ScrapeResult, scrape_rental_listings
from ...adapters.ingestion.base import ScrapeSource
from ...domain.geo import city_fallback
from ...domain.identifiers import scrape_import_id
from ...domain.listing_text import parse_pet_policy
from ...domain.records import assemble_record
from ...domain.types import Identity, ScrapedListing, SourceFields
from ...models import EnrichmentStatus
from ..batch import BatchResult, BatchRunner, BatchStrategy, ItemOutcome
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)


def scrape_source_fields(listing: ScrapedListing) -> SourceFields:
    return SourceFields(
        data_source=f"scrape_{listing.source}",
        data_recorder="Web Scraper",
        source_label=f"Scraped from {listing.source}",
        enrichment_status=EnrichmentStatus.scraped.value,
        property_type=listing.property_type or "apartment",
        year_built=1990,
        property_name=listing.property_name,
        bathrooms=listing.bathrooms,
        square_feet=listing.square_feet or 450 + listing.bedrooms * 300,
        rent=listing.rent,
        management_company=listing.management_company,
        phone=listing.phone,
        website=listing.source_url or None,
        amenities=list(listing.amenities),
        pet_policy=parse_pet_policy(listing.pet_policy or ""),
        mark_post_fire=True,
        note_detail=f"Source URL: {listing.source_url or 'N/A'}. Please verify all information.",
    )


async def import_listing(deps: ImportDeps, listing: ScrapedListing) -> ItemOutcome:
    apn = scrape_import_id(listing.address, listing.source)

    if await deps.repo.get_by_address(listing.address) is not None:
        log.debug("skip existing address=%r", listing.address)
        return ItemOutcome.skipped
    if await deps.repo.get_by_apn(apn) is not None:
        log.debug("skip existing apn=%s", apn)
        return ItemOutcome.skipped

    geo = await deps.geocode(listing.address)
    coords = geo.coordinates if geo is not None else city_fallback(listing.city, deps.jitter)

    utilities, fmr = deps.engine.for_import(listing.city, listing.bedrooms)
    record = assemble_record(
        Identity(apn=apn, address=listing.address, city=listing.city, state=listing.state, zip_code=listing.zip_code),
        coords,
        listing.bedrooms,
        utilities,
        fmr,
        scrape_source_fields(listing),
        now=deps.clock(),
    )

    # ON CONFLICT(apn) DO NOTHING: a duplicate is a skip, not a failure.
    if await deps.repo.insert_if_absent(record) is None:
        return ItemOutcome.skipped

    log.info("imported listing address=%r source=%s", listing.address, listing.source)
    return ItemOutcome.success


async def import_scraped_properties(deps: ImportDeps, listings: list[ScrapedListing]) -> BatchResult:
    runner: BatchRunner[ScrapedListing] = BatchRunner(
        strategy=BatchStrategy.sequential(),
        label=lambda li: li.address,
        max_error_len=deps.error_max_len,
        sleep=deps.sleep,
    )
    return await runner.run(listings, lambda li: import_listing(deps, li))


async def scrape_and_import(
    deps: ImportDeps,
    source_ids: list[str],
    *,
    scrapers: dict[str, ScrapeSource],
    limit_per_source: int = 50,
    source_delay_s: float = 1.0,
) -> BatchResult:
    """Scrape the requested sources, import what came back, merge the error lists."""
    scraped: ScrapeResult = await scrape_rental_listings(
        source_ids,
        scrapers=scrapers,
        limit_per_source=limit_per_source,
        delay_s=source_delay_s,
        sleep=deps.sleep,
    )
    result = await import_scraped_properties(deps, scraped.listings)
    result.errors = scraped.errors + result.errors
    log.info("scrape_and_import sources=%s scraped=%s", source_ids, len(scraped.listings))
    return result
