import pytest

from app.adapters.repos.properties import PropertyRepository, StoreError
from app.models import Base


def _values(apn: str, address: str, city: str = "Chico") -> dict:
    return {"apn": apn, "address": address, "city": city, "zip_code": "95926"}


@pytest.mark.asyncio
async def test_insert_if_absent_is_idempotent_on_apn(repo):
    first = await repo.insert_if_absent(_values("ADR-1-1-1", "1 A St"))
    second = await repo.insert_if_absent(_values("ADR-1-1-1", "2 B St"))

    assert first is not None and first.id is not None
    assert second is None
    assert [p.address for p in await repo.list_all()] == ["1 A St"]


@pytest.mark.asyncio
async def test_unknown_columns_are_rejected(repo):
    with pytest.raises(ValueError):
        await repo.insert_if_absent({"apn": "X-1", "address": "1 A St", "city": "Chico", "bogus": 1})


@pytest.mark.asyncio
async def test_substring_searches_and_paging(repo):
    await repo.insert_if_absent(_values("001-010-001", "1122 W Sacramento Ave"))
    await repo.insert_if_absent(_values("001-010-002", "1200 W Sacramento Ave", city="Paradise"))

    assert len(await repo.search_by_apn("010-00")) == 2
    assert (await repo.search_by_address("sacramento")).apn == "001-010-001"
    assert await repo.search_by_address("Esplanade") is None

    paradise = await repo.list_page(city="Paradise")
    assert [p.apn for p in paradise] == ["001-010-002"]
    assert len(await repo.list_page(limit=1, offset=1)) == 1


@pytest.mark.asyncio
async def test_update_and_delete_report_absence(repo):
    p = await repo.insert_if_absent(_values("ADR-2-2-2", "2 B St"))

    updated = await repo.update_by_id(p.id, {"current_rent": 1200.0})
    assert updated.current_rent == 1200.0
    assert await repo.update_by_id(p.id + 100, {"current_rent": 1.0}) is None

    assert await repo.delete_by_id(p.id) is True
    assert await repo.delete_by_id(p.id) is False


@pytest.mark.asyncio
async def test_database_errors_surface_as_store_error(engine, async_session_maker):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    with pytest.raises(StoreError):
        await PropertyRepository(async_session_maker).list_all()
