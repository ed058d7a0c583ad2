from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any

from .models import ManagementType


class BatchResultOut(BaseModel):
    success: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    errors: list[str]


class AddressImportIn(BaseModel):
    # None -> bundled address list
    addresses: list[str] | None = None


class ParcelImportIn(BaseModel):
    apns: list[str] = Field(..., min_length=1)


class ScrapeImportIn(BaseModel):
    sources: list[str] = Field(default_factory=lambda: ["known"])


class AddressStatsOut(BaseModel):
    total: int
    unique: int
    duplicates: int


class RentalSourceOut(BaseModel):
    id: str
    name: str
    category: str
    status: str
    description: str
    estimated_listings: int


class AddressLookupIn(BaseModel):
    address: str


class ApnLookupIn(BaseModel):
    apn: str


class LookupOut(BaseModel):
    success: bool
    property: dict[str, Any] | None = None
    message: str
    source: str


class ManualPropertyIn(BaseModel):
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    property_type: str = "apartment"
    census_tract: str = ""
    complex_name: str = ""
    phone_number: str = ""
    rent_amount: str = ""
    available_date: str = ""
    office_hours: str = ""
    management_company: str = ""
    amenities: list[str] = Field(default_factory=list)
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


class PropertyUpdateIn(BaseModel):
    property_name: str | None = None
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    bedrooms: int | None = None
    bathrooms: float | None = None
    square_feet: int | None = None
    year_built: int | None = None
    current_rent: float | None = None
    management_company: str | None = None
    phone_number: str | None = None
    office_hours: str | None = None
    website: str | None = None
    pets_allowed: bool | None = None
    pet_deposit: int | None = None
    pet_rent: int | None = None
    pet_restrictions: str | None = None
    is_available: bool | None = None
    is_section_8: bool | None = None
    is_ada_accessible: bool | None = None
    notes: str | None = None
    census_tract: str | None = None
    fmr_override: int | None = None


class OperationOut(BaseModel):
    success: bool
    id: int | None = None
    error: str | None = None


class PropertyOut(BaseModel):
    id: int
    apn: str
    address: str
    city: str
    zip_code: str | None = None
    state: str
    county: str
    latitude: float | None = None
    longitude: float | None = None
    census_tract: str | None = None

    property_name: str | None = None
    property_type: str
    bedrooms: int | None = None
    bathrooms: float | None = None
    square_feet: int | None = None

    is_available: bool
    current_rent: float | None = None

    management_type: ManagementType
    management_company: str | None = None
    phone_number: str | None = None

    fmr_base: int | None = None
    fmr_utility_allowance: int | None = None
    fmr_adjusted: int | None = None

    amenities: list[str] = Field(default_factory=list)
    pets_allowed: bool
    is_student_housing: bool
    is_post_fire_rebuild: bool

    enrichment_status: str
    data_source: str | None = None
    created_at: datetime
    updated_at: datetime
