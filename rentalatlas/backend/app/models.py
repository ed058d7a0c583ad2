# app/models.py
from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


# -----------------------------
# Core enums
# -----------------------------
class EnrichmentStatus(str, enum.Enum):
    address_import = "address-import"
    scraped = "scraped"
    pending = "pending"
    complete = "complete"
    partial = "partial"
    missing_data = "missing_data"
    refreshed = "refreshed"


class ManagementType(str, enum.Enum):
    professional = "professional"
    private = "private"
    unknown = "unknown"


class JobRunStatus(str, enum.Enum):
    running = "running"
    success = "success"
    failed = "failed"


# -----------------------------
# Models
# -----------------------------
class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (UniqueConstraint("apn", name="uq_property_apn"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Identity. apn is either a real parcel number or a synthesized ADR-/SCR-/LKP-/MAN- code.
    apn: Mapped[str] = mapped_column(String(40))
    address: Mapped[str] = mapped_column(String(255), index=True)
    city: Mapped[str] = mapped_column(String(80))
    zip_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    county: Mapped[str] = mapped_column(String(40), default="Butte")
    state: Mapped[str] = mapped_column(String(2), default="CA")

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    census_tract: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Classification
    property_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    property_type: Mapped[str] = mapped_column(String(40), default="unknown")
    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[float | None] = mapped_column(Float, nullable=True)
    square_feet: Mapped[int | None] = mapped_column(Integer, nullable=True)
    year_built: Mapped[int | None] = mapped_column(Integer, nullable=True)
    lot_size: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_units: Mapped[int | None] = mapped_column(Integer, nullable=True)
    available_units: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Availability
    is_available: Mapped[bool] = mapped_column(Boolean, default=False)
    current_rent: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_listed_date: Mapped[str | None] = mapped_column(String(40), nullable=True)
    last_available_rent: Mapped[float | None] = mapped_column(Float, nullable=True)
    availability_date: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Management / contact
    management_type: Mapped[ManagementType] = mapped_column(Enum(ManagementType), default=ManagementType.unknown)
    management_company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_mailing_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    office_hours: Mapped[str | None] = mapped_column(String(80), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Utilities + FMR
    utilities: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    utility_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    fmr_base: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fmr_utility_allowance: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fmr_adjusted: Mapped[int | None] = mapped_column(Integer, nullable=True)  # may be negative
    fmr_override: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Features
    amenities: Mapped[list[str]] = mapped_column(JSON, default=list)
    special_features: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_post_fire_rebuild: Mapped[bool] = mapped_column(Boolean, default=False)
    is_student_housing: Mapped[bool] = mapped_column(Boolean, default=False)
    fire_zone: Mapped[str | None] = mapped_column(String(80), nullable=True)
    is_section_8: Mapped[bool] = mapped_column(Boolean, default=False)
    is_seniors_only: Mapped[bool] = mapped_column(Boolean, default=False)
    is_ada_accessible: Mapped[bool] = mapped_column(Boolean, default=False)

    # Pets / fees
    pets_allowed: Mapped[bool] = mapped_column(Boolean, default=True)
    pet_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    pet_deposit: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pet_rent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    extra_fees: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    # Provenance
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    data_recorder: Mapped[str | None] = mapped_column(String(80), nullable=True)
    data_source: Mapped[str | None] = mapped_column(String(80), nullable=True)
    enrichment_status: Mapped[str] = mapped_column(String(40), default=EnrichmentStatus.pending.value, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


class JobRun(Base):
    """
    Tracks operator-triggered import executions (addresses, parcels, scrape, refresh).
    """
    __tablename__ = "job_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_name: Mapped[str] = mapped_column(String(80), index=True)

    status: Mapped[JobRunStatus] = mapped_column(Enum(JobRunStatus), default=JobRunStatus.running, index=True)

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # store error message
    error: Mapped[str | None] = mapped_column(Text, nullable=True)

    # batch totals: {"success": .., "failed": .., "skipped": .., "errors": [...]}
    summary_json: Mapped[str | None] = mapped_column(Text, nullable=True)
