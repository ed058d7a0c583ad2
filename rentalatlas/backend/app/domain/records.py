# app/domain/records.py
"""
Record assembly: identity + coordinates + utilities/FMR + source fields -> one
complete `properties` row. Pure; no I/O.

Every column the store expects gets a value, even when the source has no
opinion about it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from .census import tract_for_city
from .types import Coordinates, FMRComputation, Identity, PetPolicy, SourceFields, UtilityConfiguration

COUNTY = "Butte"
UNIVERSITY_CITY = "Chico"
POST_FIRE_CITY = "Paradise"
POST_FIRE_ZONE = "Camp Fire Zone"

DEFAULT_OWNER = "Property Owner"
DEFAULT_PHONE = "(530) 000-0000"
DEFAULT_OFFICE_HOURS = "Mon-Fri 9AM-5PM"
DEFAULT_MANAGEMENT_COMPANY = "Unknown"
DEFAULT_AMENITIES = ["On-site Laundry", "Parking", "Air Conditioning"]
DEFAULT_PET_POLICY = PetPolicy(
    allowed=True,
    restrictions="Dogs and cats allowed with deposit. Breed restrictions may apply.",
)
PET_DEPOSIT = 500
PET_RENT = 25
DEFAULT_FEES: dict[str, Any] = {
    "application_fee": 35,
    "security_deposit": "1 month rent",
    "cleaning_fee": 150,
    "key_deposit": 25,
}
ADA_AMENITY = "ADA Accessible"

# bedrooms -> (square feet, bathrooms); 4 covers 4+
_SIZE_STEPS: dict[int, tuple[int, float]] = {
    0: (450, 1.0),
    1: (650, 1.0),
    2: (850, 1.0),
    3: (1100, 2.0),
    4: (1400, 2.5),
}


def size_for_bedrooms(bedrooms: int) -> tuple[int, float]:
    return _SIZE_STEPS[min(max(bedrooms, 0), 4)]


def build_notes(source: SourceFields, now: datetime) -> str:
    return f"{source.source_label} on {now:%Y-%m-%d %H:%M} UTC. {source.note_detail}".strip()


def assemble_record(
    identity: Identity,
    coords: Coordinates,
    bedrooms: int,
    utilities: UtilityConfiguration,
    fmr: FMRComputation,
    source: SourceFields,
    *,
    now: datetime,
) -> dict[str, Any]:
    default_sqft, default_baths = size_for_bedrooms(bedrooms)
    city = identity.city
    zip_code = identity.zip_code or ""

    amenities = list(source.amenities) if source.amenities else list(DEFAULT_AMENITIES)
    pets = source.pet_policy or DEFAULT_PET_POLICY
    rent = source.rent
    post_fire = source.mark_post_fire and city == POST_FIRE_CITY

    record: dict[str, Any] = {
        # Identity
        "apn": identity.apn,
        "address": identity.address,
        "city": city,
        "zip_code": identity.zip_code,
        "county": COUNTY,
        "state": identity.state or "CA",
        "latitude": coords.latitude,
        "longitude": coords.longitude,
        "census_tract": source.census_tract or tract_for_city(city),
        # Classification
        "property_name": source.property_name,
        "property_type": source.property_type,
        "bedrooms": bedrooms,
        "bathrooms": source.bathrooms if source.bathrooms is not None else default_baths,
        "square_feet": source.square_feet or default_sqft,
        "year_built": source.year_built,
        "lot_size": 0.15,
        "total_units": 1,
        "available_units": 1 if rent else 0,
        # Availability
        "is_available": bool(rent),
        "current_rent": rent,
        "last_listed_date": now.isoformat() if rent else None,
        "last_available_rent": rent,
        "availability_date": now.date().isoformat() if rent else None,
        # Management
        "management_type": "professional" if source.management_company else "unknown",
        "management_company": source.management_company or DEFAULT_MANAGEMENT_COMPANY,
        "owner_name": DEFAULT_OWNER,
        "owner_mailing_address": f"{city}, CA {zip_code}".strip(),
        "phone_number": source.phone or DEFAULT_PHONE,
        "office_hours": DEFAULT_OFFICE_HOURS,
        "website": source.website or None,
        # Utilities / FMR
        "utilities": utilities.to_json(),
        "utility_type": "city",
        "fmr_base": fmr.base_fmr,
        "fmr_utility_allowance": fmr.utility_allowance,
        "fmr_adjusted": fmr.adjusted_fmr,
        "fmr_override": None,
        # Features
        "amenities": amenities,
        "special_features": [],
        "is_post_fire_rebuild": post_fire,
        "is_student_housing": city == UNIVERSITY_CITY,
        "fire_zone": POST_FIRE_ZONE if post_fire else None,
        "is_section_8": False,
        "is_seniors_only": False,
        "is_ada_accessible": ADA_AMENITY in amenities,
        # Pets / fees
        "pets_allowed": pets.allowed,
        "pet_restrictions": pets.restrictions,
        "pet_deposit": PET_DEPOSIT if pets.allowed else 0,
        "pet_rent": PET_RENT if pets.allowed else 0,
        "extra_fees": dict(DEFAULT_FEES),
        # Provenance
        "notes": build_notes(source, now),
        "data_recorder": source.data_recorder,
        "data_source": source.data_source,
        "enrichment_status": source.enrichment_status,
        "created_at": now,
        "updated_at": now,
    }
    record.update(source.extra)
    return record
