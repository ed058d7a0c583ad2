# app/service_layer/use_cases/import_addresses.py
from __future__ import annotations

import logging

from ...data.addresses import ADDRESSES_RAW
from ...domain.address import address_stats, parse_address_list
from ...domain.geo import zip_fallback
from ...domain.identifiers import address_import_id
from ...domain.parsing import extract_bedrooms
from ...domain.records import assemble_record
from ...domain.types import Identity, ParsedAddress, SourceFields
from ...models import EnrichmentStatus
from ..batch import BatchResult, BatchRunner, BatchStrategy, ItemOutcome
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)

ADDRESS_IMPORT_FIELDS = SourceFields(
    data_source="address_import",
    data_recorder="System Import",
    source_label="Imported via address lookup",
    enrichment_status=EnrichmentStatus.address_import.value,
    property_type="apartment",
    year_built=1985,
)


def bundled_address_stats() -> dict[str, int]:
    s = address_stats(ADDRESSES_RAW)
    return {"total": s.total, "unique": s.unique, "duplicates": s.duplicates}


async def import_address(deps: ImportDeps, addr: ParsedAddress) -> ItemOutcome:
    apn = address_import_id(addr.full_address)

    # Address first (reliable natural key), then the synthesized id (hash may collide).
    if await deps.repo.get_by_address(addr.full_address) is not None:
        log.debug("skip existing address=%r", addr.full_address)
        return ItemOutcome.skipped
    if await deps.repo.get_by_apn(apn) is not None:
        log.debug("skip existing apn=%s address=%r", apn, addr.full_address)
        return ItemOutcome.skipped

    geo = await deps.geocode(addr.full_address)
    # ZIP fallback always yields coordinates, so this path cannot fail on geography.
    coords = geo.coordinates if geo is not None else zip_fallback(addr.zip_code, deps.jitter)

    city = addr.city or "Chico"
    bedrooms = extract_bedrooms(addr.full_address)
    utilities, fmr = deps.engine.for_import(city, bedrooms)

    record = assemble_record(
        Identity(apn=apn, address=addr.full_address, city=city, state=addr.state or "CA", zip_code=addr.zip_code),
        coords,
        bedrooms,
        utilities,
        fmr,
        ADDRESS_IMPORT_FIELDS,
        now=deps.clock(),
    )

    if await deps.repo.insert_if_absent(record) is None:
        return ItemOutcome.skipped

    log.info("imported address=%r apn=%s geocoded=%s", addr.full_address, apn, geo is not None)
    return ItemOutcome.success


async def import_addresses(deps: ImportDeps, raw: str | list[str] | None = None) -> BatchResult:
    """
    Import free-text addresses (bundled list when `raw` is None).
    Sequential; re-running over the same input skips everything already stored.
    """
    addresses = parse_address_list(ADDRESSES_RAW if raw is None else raw)

    runner: BatchRunner[ParsedAddress] = BatchRunner(
        strategy=BatchStrategy.sequential(),
        label=lambda a: a.street,
        max_error_len=deps.error_max_len,
        sleep=deps.sleep,
    )
    return await runner.run(addresses, lambda a: import_address(deps, a))
