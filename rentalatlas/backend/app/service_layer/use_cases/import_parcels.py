# app/service_layer/use_cases/import_parcels.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.address import normalize_apn
from ...domain.census import tract_for_parcel
from ...domain.geo import known_city_fallback
from ...domain.parsing import DEFAULT_BEDROOMS
from ...domain.records import assemble_record
from ...domain.types import Coordinates, Identity, SourceFields
from ...models import EnrichmentStatus
from ..batch import BatchResult, BatchRunner, BatchStrategy, ItemFailed, ItemOutcome
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)

NO_COORDINATES = "no coordinates available"


@dataclass
class ParcelEnrichment:
    apn: str
    address: str | None
    city: str | None
    zip_code: str | None
    census_tract: str | None
    coords: Coordinates | None
    missing: list[str] = field(default_factory=list)

    @property
    def status(self) -> EnrichmentStatus:
        n = len(self.missing)
        if n == 0:
            return EnrichmentStatus.complete
        if n < 4:
            return EnrichmentStatus.partial
        return EnrichmentStatus.missing_data


async def enrich_parcel(deps: ImportDeps, apn: str) -> ParcelEnrichment:
    """Assessor lookup -> census tract -> geocode (city centroid fallback)."""
    parcel = await deps.parcels.lookup(apn)
    address = parcel.address if parcel else None
    city = parcel.city if parcel else None
    zip_code = parcel.zip_code if parcel else None

    missing: list[str] = []
    if not address:
        missing.append("address")
    if not city:
        missing.append("city")
    if not zip_code:
        missing.append("zip_code")

    tract = tract_for_parcel(apn, city)
    if not tract:
        missing.append("census_tract")

    coords: Coordinates | None = None
    if address and city:
        geo = await deps.geocode(f"{address}, {city}, CA {zip_code or ''}".strip())
        coords = geo.coordinates if geo is not None else known_city_fallback(city, deps.jitter)
    if coords is None:
        missing.append("coordinates")

    return ParcelEnrichment(
        apn=apn,
        address=address,
        city=city,
        zip_code=zip_code,
        census_tract=tract,
        coords=coords,
        missing=missing,
    )


async def import_parcel(deps: ImportDeps, raw_apn: str) -> ItemOutcome:
    apn = normalize_apn(raw_apn)

    if await deps.repo.get_by_apn(apn) is not None:
        log.debug("skip existing apn=%s", apn)
        return ItemOutcome.skipped

    enriched = await enrich_parcel(deps, apn)
    if enriched.address and await deps.repo.get_by_address(enriched.address) is not None:
        log.debug("skip existing address=%r apn=%s", enriched.address, apn)
        return ItemOutcome.skipped

    # Unlike the address and scrape paths there is no unconditional fallback here.
    if enriched.coords is None:
        raise ItemFailed(NO_COORDINATES)

    city = enriched.city or "Unknown"
    utilities, fmr = deps.engine.for_import(city, DEFAULT_BEDROOMS)
    source = SourceFields(
        data_source="apn_import",
        data_recorder="APN Import",
        source_label=f"Enriched from parcel {apn}",
        enrichment_status=enriched.status.value,
        property_type="unknown",
        year_built=1985,
        census_tract=enriched.census_tract,
        note_detail=f"Missing: {', '.join(enriched.missing)}." if enriched.missing else "",
    )

    record = assemble_record(
        Identity(
            apn=apn,
            address=enriched.address or f"Property {apn}",
            city=city,
            state="CA",
            zip_code=enriched.zip_code or "00000",
        ),
        enriched.coords,
        DEFAULT_BEDROOMS,
        utilities,
        fmr,
        source,
        now=deps.clock(),
    )

    if await deps.repo.insert_if_absent(record) is None:
        return ItemOutcome.skipped

    log.info("imported parcel apn=%s status=%s", apn, enriched.status.value)
    return ItemOutcome.success


async def import_parcels(deps: ImportDeps, apns: list[str]) -> BatchResult:
    cleaned = [a.strip() for a in apns if a and a.strip()]
    runner: BatchRunner[str] = BatchRunner(
        strategy=BatchStrategy.sequential(),
        label=lambda a: a,
        max_error_len=deps.error_max_len,
        sleep=deps.sleep,
    )
    return await runner.run(cleaned, lambda a: import_parcel(deps, a))
