import pytest

from app.adapters.clients.parcels import ParcelAddress, StaticParcelDirectory
from app.domain.geo import CITY_CENTROIDS
from app.service_layer.use_cases.import_parcels import NO_COORDINATES, enrich_parcel, import_parcels


@pytest.mark.asyncio
async def test_known_apn_imports_complete(deps, repo):
    res = await import_parcels(deps, ["001010001"])
    assert res.as_dict() == {"success": 1, "failed": 0, "skipped": 0, "errors": []}

    p = await repo.get_by_apn("001-010-001")
    assert p.address == "1122 W Sacramento Ave"
    assert p.city == "Chico"
    assert p.zip_code == "95926"
    assert p.census_tract == "06007000101"
    assert p.enrichment_status == "complete"
    assert p.data_source == "apn_import"
    assert (p.latitude, p.longitude) == CITY_CENTROIDS["Chico"]


@pytest.mark.asyncio
async def test_unknown_apn_fails_without_coordinates(deps, repo):
    res = await import_parcels(deps, ["999-999-999"])

    assert (res.success, res.failed, res.skipped) == (0, 1, 0)
    assert res.errors == [f"999-999-999: {NO_COORDINATES}"]
    assert await repo.get_by_apn("999-999-999") is None


@pytest.mark.asyncio
async def test_partial_parcel_records_missing_fields(deps, repo):
    deps.parcels = StaticParcelDirectory({"005-000-001": ParcelAddress("1 Test St", "Chico", None)})

    enriched = await enrich_parcel(deps, "005-000-001")
    assert enriched.missing == ["zip_code"]
    assert enriched.status.value == "partial"

    await import_parcels(deps, ["005-000-001"])
    p = await repo.get_by_apn("005-000-001")
    assert p.enrichment_status == "partial"
    assert p.zip_code == "00000"
    assert "Missing: zip_code." in p.notes


@pytest.mark.asyncio
async def test_existing_apn_and_blank_inputs_are_skipped(deps):
    await import_parcels(deps, ["001-010-001"])
    res = await import_parcels(deps, ["001-010-001", "  ", "", "003-010-001"])

    assert (res.success, res.failed, res.skipped) == (1, 0, 1)
