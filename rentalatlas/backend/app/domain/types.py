from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoResult:
    """
    Geocoder output. Never partially valid: when the service cannot produce
    a coordinate pair, callers get None instead of a GeoResult.
    """
    latitude: float
    longitude: float
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    formatted_address: str | None = None

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)


@dataclass(frozen=True)
class ParsedAddress:
    full_address: str
    street: str
    city: str
    state: str
    zip_code: str
    unit: str | None = None


@dataclass(frozen=True)
class Identity:
    apn: str
    address: str
    city: str
    state: str
    zip_code: str | None


@dataclass(frozen=True)
class PetPolicy:
    allowed: bool
    restrictions: str


@dataclass(frozen=True)
class ScrapedListing:
    address: str
    city: str
    state: str
    zip_code: str
    rent: int | None
    bedrooms: int
    bathrooms: float | None
    square_feet: int | None
    property_type: str
    amenities: list[str]
    pet_policy: str | None
    phone: str | None
    property_name: str | None
    management_company: str | None
    source: str
    source_url: str


@dataclass(frozen=True)
class FMRComputation:
    base_fmr: int
    utility_allowance: int
    adjusted_fmr: int  # base_fmr - utility_allowance, may be negative


@dataclass(frozen=True)
class UtilityCharge:
    type: str
    amount: int


@dataclass(frozen=True)
class IncludedCharge:
    included: bool
    amount: int


@dataclass(frozen=True)
class UtilityConfiguration:
    heating: UtilityCharge
    cooking: UtilityCharge
    water_heater: UtilityCharge
    air_conditioning: UtilityCharge
    water: IncludedCharge
    sewer: IncludedCharge
    trash: IncludedCharge
    other_electric: int
    range_provided: bool = True
    refrigerator_provided: bool = True

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SourceFields:
    """
    Source-specific values handed to the record assembler. None means
    "the source has no opinion" and the assembler default applies.
    """
    data_source: str
    data_recorder: str
    source_label: str
    enrichment_status: str
    property_type: str = "apartment"
    year_built: int = 1985
    property_name: str | None = None
    bathrooms: float | None = None
    square_feet: int | None = None
    rent: int | None = None
    management_company: str | None = None
    phone: str | None = None
    website: str | None = None
    amenities: list[str] | None = None
    pet_policy: PetPolicy | None = None
    census_tract: str | None = None
    mark_post_fire: bool = False
    note_detail: str = "Please verify all information and update with actual property details."
    extra: dict[str, Any] = field(default_factory=dict)
