from datetime import datetime, timezone

from app.domain.census import format_census_tract, tract_for_apn, tract_for_parcel
from app.domain.records import DEFAULT_AMENITIES, POST_FIRE_ZONE, assemble_record, size_for_bedrooms
from app.domain.types import Coordinates, Identity, SourceFields
from app.domain.utilities import UtilityAllowanceEngine
from app.adapters.repos.properties import PROPERTY_COLUMNS

NOW = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)


def _fields(**kw) -> SourceFields:
    base = dict(data_source="t", data_recorder="Tester", source_label="Imported in test", enrichment_status="pending")
    base.update(kw)
    return SourceFields(**base)


def _record(city: str, source: SourceFields, bedrooms: int = 2) -> dict:
    utilities, fmr = UtilityAllowanceEngine().for_import(city, bedrooms)
    return assemble_record(
        Identity(apn="ADR-1-2-3", address=f"1 Test St, {city}, CA 95969", city=city, state="CA", zip_code="95969"),
        Coordinates(39.75, -121.6),
        bedrooms,
        utilities,
        fmr,
        source,
        now=NOW,
    )


def test_record_fills_every_column():
    rec = _record("Chico", _fields())
    assert set(rec) == PROPERTY_COLUMNS - {"id"}


def test_defaults_without_source_opinion():
    rec = _record("Chico", _fields(note_detail="Check it."), bedrooms=3)

    assert rec["square_feet"] == 1100
    assert rec["bathrooms"] == 2.0
    assert rec["amenities"] == DEFAULT_AMENITIES
    assert rec["is_available"] is False
    assert rec["available_units"] == 0
    assert rec["management_type"] == "unknown"
    assert rec["is_student_housing"] is True
    assert rec["census_tract"] == "0001.00"
    assert rec["notes"] == "Imported in test on 2026-01-02 03:04 UTC. Check it."
    assert rec["created_at"] == rec["updated_at"] == NOW


def test_post_fire_only_when_marked_and_in_paradise():
    marked = _record("Paradise", _fields(mark_post_fire=True))
    assert marked["is_post_fire_rebuild"] is True
    assert marked["fire_zone"] == POST_FIRE_ZONE
    assert marked["is_student_housing"] is False

    assert _record("Paradise", _fields())["is_post_fire_rebuild"] is False
    assert _record("Chico", _fields(mark_post_fire=True))["is_post_fire_rebuild"] is False


def test_listing_values_override_defaults():
    rec = _record(
        "Chico",
        _fields(rent=1450, management_company="Acme PM", amenities=["ADA Accessible"], bathrooms=1.5, extra={"lot_size": 0.3}),
    )
    assert rec["is_available"] is True
    assert rec["current_rent"] == 1450
    assert rec["management_type"] == "professional"
    assert rec["is_ada_accessible"] is True
    assert rec["bathrooms"] == 1.5
    assert rec["lot_size"] == 0.3


def test_size_steps_cap_at_four():
    assert size_for_bedrooms(0) == (450, 1.0)
    assert size_for_bedrooms(7) == (1400, 2.5)


def test_census_tracts():
    assert tract_for_apn("001-010-001") == "06007000101"
    assert tract_for_apn("99") is None
    assert tract_for_parcel("999-000-000", "Paradise") == "06007000800"
    assert tract_for_parcel("999-000-000", None) is None
    assert format_census_tract("06007000101") == "1.01"
    assert format_census_tract("06007000800") == "8"
