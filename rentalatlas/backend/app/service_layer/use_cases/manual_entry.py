# app/service_layer/use_cases/manual_entry.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ...adapters.repos.properties import PROPERTY_COLUMNS, StoreError
from ...domain.geo import manual_entry_location
from ...domain.identifiers import manual_entry_id
from ...domain.parsing import parse_money
from ...domain.utilities import manual_utility_config
from ...models import EnrichmentStatus, ManagementType
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)

PRIVATE_OWNER = "private"

# Columns an operator may edit after import. Identity (id, apn, created_at) is not among them.
EDITABLE_FIELDS = frozenset(
    {
        "property_name", "address", "city", "zip_code", "bedrooms", "bathrooms", "square_feet",
        "year_built", "current_rent", "management_company", "phone_number", "office_hours", "website",
        "pets_allowed", "pet_deposit", "pet_rent", "pet_restrictions", "is_available", "is_section_8",
        "is_ada_accessible", "notes", "census_tract", "latitude", "longitude", "fmr_override",
    }
) & PROPERTY_COLUMNS


@dataclass
class ManualPropertyForm:
    address: str
    city: str
    bedrooms: int
    bathrooms: float
    property_type: str = "apartment"
    census_tract: str = ""
    complex_name: str = ""
    phone_number: str = ""
    rent_amount: str = ""
    available_date: str = ""
    office_hours: str = ""
    management_company: str = ""
    amenities: list[str] = field(default_factory=list)
    pets_allowed: bool = True
    pet_restrictions: str = ""
    ada_accessible: bool = False
    heating: str = "none"
    cooking: str = "none"
    air_conditioning: str = "none"
    water_heater: str = "none"
    water_included: bool = False
    sewer_included: bool = False
    trash_included: bool = False
    range_microwave: str = "provided"
    refrigerator: str = "provided"
    notes: str = ""
    data_recorder: str = ""


def manual_record(deps: ImportDeps, form: ManualPropertyForm) -> dict[str, Any]:
    coords, zip_code = manual_entry_location(form.city, deps.jitter)
    rent = parse_money(form.rent_amount)
    private = form.management_company == PRIVATE_OWNER
    now = deps.clock()

    return {
        "apn": manual_entry_id(now_ms=int(now.timestamp() * 1000), rng=deps.rng),
        "address": form.address,
        "city": form.city,
        "county": "Butte",
        "state": "CA",
        "zip_code": zip_code,
        "census_tract": form.census_tract or None,
        "latitude": coords.latitude,
        "longitude": coords.longitude,
        "property_type": form.property_type,
        "property_name": form.complex_name or None,
        "bedrooms": form.bedrooms,
        "bathrooms": form.bathrooms,
        "is_available": bool(form.available_date) or bool(rent),
        "current_rent": rent,
        "last_listed_date": form.available_date or None,
        "phone_number": form.phone_number or None,
        "office_hours": form.office_hours or None,
        "management_type": (ManagementType.private if private else ManagementType.professional).value,
        "management_company": None if private else (form.management_company or None),
        "utilities": manual_utility_config(
            heating=form.heating,
            cooking=form.cooking,
            air_conditioning=form.air_conditioning,
            water_heater=form.water_heater,
            water_included=form.water_included,
            trash_included=form.trash_included,
            refrigerator=form.refrigerator,
            range_microwave=form.range_microwave,
        ),
        "amenities": list(form.amenities),
        "pets_allowed": form.pets_allowed,
        "pet_restrictions": form.pet_restrictions or None,
        "special_features": ["ada-accessible"] if form.ada_accessible else [],
        "is_ada_accessible": form.ada_accessible,
        "notes": form.notes or None,
        "data_recorder": form.data_recorder or None,
        "data_source": "manual_entry",
        "enrichment_status": EnrichmentStatus.complete.value,
        "created_at": now,
        "updated_at": now,
    }


async def save_manual_property(deps: ImportDeps, form: ManualPropertyForm) -> dict[str, Any]:
    """{"success": bool, "id"?: int, "error"?: str}"""
    try:
        inserted = await deps.repo.insert_if_absent(manual_record(deps, form))
    except StoreError as e:
        log.warning("manual entry failed address=%r err=%s", form.address, e)
        return {"success": False, "error": str(e)}

    if inserted is None:
        return {"success": False, "error": "Generated identifier already exists; retry"}

    log.info("manual entry saved id=%s apn=%s", inserted.id, inserted.apn)
    return {"success": True, "id": inserted.id}


async def update_property(deps: ImportDeps, property_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    """Write only the provided (non-None) editable fields, plus updated_at."""
    values = {k: v for k, v in fields.items() if v is not None and k in EDITABLE_FIELDS}
    values["updated_at"] = deps.clock()

    try:
        updated = await deps.repo.update_by_id(property_id, values)
    except StoreError as e:
        return {"success": False, "error": str(e)}
    if updated is None:
        return {"success": False, "error": "Property not found"}
    return {"success": True}


async def delete_property(deps: ImportDeps, property_id: int) -> dict[str, Any]:
    try:
        deleted = await deps.repo.delete_by_id(property_id)
    except StoreError as e:
        return {"success": False, "error": str(e)}
    if not deleted:
        return {"success": False, "error": "Property not found"}
    return {"success": True}
