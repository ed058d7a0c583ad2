# app/service_layer/use_cases/lookup.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ...adapters.repos.properties import StoreError
from ...domain.identifiers import lookup_id
from ...domain.parsing import DEFAULT_BEDROOMS
from ...domain.records import assemble_record
from ...domain.types import Identity, PetPolicy, SourceFields
from ...models import EnrichmentStatus, Property
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)

LOOKUP_AMENITIES = ["Parking", "Air Conditioning"]


@dataclass
class LookupResult:
    success: bool
    property: dict[str, Any] | None
    message: str
    source: str  # validation | database | database_partial | geocoding | database_error | not_found

    def as_dict(self) -> dict[str, Any]:
        return {"success": self.success, "property": self.property, "message": self.message, "source": self.source}


def _row(p: Property | None) -> dict[str, Any] | None:
    return p.to_dict() if p is not None else None


LOOKUP_FIELDS = SourceFields(
    data_source="address_lookup",
    data_recorder="Address Lookup",
    source_label="Lookup from address",
    enrichment_status=EnrichmentStatus.pending.value,
    property_type="apartment",
    year_built=1990,
    bathrooms=1.0,
    square_feet=850,
    amenities=LOOKUP_AMENITIES,
    pet_policy=PetPolicy(True, "Contact for pet policy"),
    note_detail="Data needs verification.",
)


async def lookup_address(deps: ImportDeps, address: str) -> LookupResult:
    """
    Existing record by street (substring), else geocode and create a pending
    LKP record. No coordinate fallback: an operator is waiting on a real match.
    """
    if not address or len(address.strip()) < 5:
        return LookupResult(False, None, "Please enter a valid address", "validation")

    clean = address.strip()
    street = clean.split(",")[0].strip()

    existing = await deps.repo.search_by_address(street)
    if existing is not None:
        return LookupResult(True, _row(existing), "Found existing property in database", "database")

    geo = await deps.geocoder.resolve(clean)
    if geo is None:
        return LookupResult(False, None, "Could not geocode address. Please check the address format.", "geocoding")

    formatted = geo.formatted_address or clean
    city = geo.city or "Chico"
    state = geo.state or "CA"
    zip_code = geo.zip_code or "95928"
    apn = lookup_id(formatted)

    utilities, fmr = deps.engine.for_import(city, DEFAULT_BEDROOMS)
    record = assemble_record(
        Identity(apn=apn, address=formatted, city=city, state=state, zip_code=zip_code),
        geo.coordinates,
        DEFAULT_BEDROOMS,
        utilities,
        fmr,
        LOOKUP_FIELDS,
        now=deps.clock(),
    )
    record["owner_mailing_address"] = f"{city}, {state} {zip_code}"

    try:
        inserted = await deps.repo.insert_if_absent(record)
        if inserted is None:
            inserted = await deps.repo.get_by_apn(apn)
            return LookupResult(True, _row(inserted), "Found existing property in database", "database")
    except StoreError as e:
        log.warning("lookup save failed address=%r err=%s", formatted, e)
        return LookupResult(False, record, f"Geocoded successfully but failed to save: {e}", "database_error")

    log.info("lookup created apn=%s address=%r", apn, formatted)
    return LookupResult(True, _row(inserted), "Address geocoded and property created successfully", "geocoding")


async def lookup_apn(deps: ImportDeps, apn: str) -> LookupResult:
    if not apn or len(apn.strip()) < 3:
        return LookupResult(False, None, "Please enter a valid APN", "validation")

    clean = apn.strip().upper()

    exact = await deps.repo.get_by_apn(clean)
    if exact is not None:
        return LookupResult(True, _row(exact), "Found existing property in database", "database")

    partial = await deps.repo.search_by_apn(clean, limit=1)
    if partial:
        return LookupResult(True, _row(partial[0]), "Found property with similar APN", "database_partial")

    return LookupResult(
        False,
        None,
        f'APN "{clean}" not found in database. Try importing APNs first or use the Address lookup to add new properties.',
        "not_found",
    )
