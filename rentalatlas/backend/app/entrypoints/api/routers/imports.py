# app/entrypoints/api/routers/imports.py
from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_import_deps, get_scrapers, require_api_key
from ....adapters.ingestion.base import ScrapeSource
from ....adapters.ingestion.registry import RENTAL_SOURCES
from ....config import settings
from ....db import get_session
from ....schemas import (
    AddressImportIn,
    AddressStatsOut,
    BatchResultOut,
    ParcelImportIn,
    RentalSourceOut,
    ScrapeImportIn,
)
from ....service_layer.batch import BatchResult
from ....service_layer.jobruns import finish_job_fail, finish_job_success, start_job
from ....service_layer.pipeline import ImportDeps
from ....service_layer.use_cases.import_addresses import bundled_address_stats, import_addresses
from ....service_layer.use_cases.import_parcels import import_parcels
from ....service_layer.use_cases.import_scraped import scrape_and_import
from ....service_layer.use_cases.refresh import refresh_all_properties

router = APIRouter(prefix="/imports", tags=["imports"])


async def _run_job(session: AsyncSession, job_name: str, run: Callable[[], Awaitable[BatchResult]]) -> dict[str, Any]:
    jr = await start_job(session, job_name)
    await session.commit()
    try:
        res = (await run()).as_dict()
        await finish_job_success(session, jr, res)
        await session.commit()
        return res
    except Exception as e:
        await finish_job_fail(session, jr, e)
        await session.commit()
        raise


@router.post("/addresses", response_model=BatchResultOut, dependencies=[Depends(require_api_key)])
async def imports_addresses(
    body: AddressImportIn | None = None,
    deps: ImportDeps = Depends(get_import_deps),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    addresses = body.addresses if body else None
    return await _run_job(session, "import_addresses", lambda: import_addresses(deps, addresses))


@router.get("/addresses/stats", response_model=AddressStatsOut)
def imports_address_stats() -> dict[str, int]:
    return bundled_address_stats()


@router.post("/parcels", response_model=BatchResultOut, dependencies=[Depends(require_api_key)])
async def imports_parcels(
    body: ParcelImportIn,
    deps: ImportDeps = Depends(get_import_deps),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    return await _run_job(session, "import_parcels", lambda: import_parcels(deps, body.apns))


@router.post("/scrape", response_model=BatchResultOut, dependencies=[Depends(require_api_key)])
async def imports_scrape(
    body: ScrapeImportIn,
    deps: ImportDeps = Depends(get_import_deps),
    scrapers: dict[str, ScrapeSource] = Depends(get_scrapers),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    return await _run_job(
        session,
        "import_scrape",
        lambda: scrape_and_import(
            deps,
            body.sources,
            scrapers=scrapers,
            limit_per_source=settings.SCRAPE_MAX_LISTINGS_PER_SOURCE,
            source_delay_s=settings.SCRAPE_SOURCE_DELAY_S,
        ),
    )


@router.get("/sources", response_model=list[RentalSourceOut])
def imports_sources() -> list[dict[str, Any]]:
    return [
        {
            "id": s.id,
            "name": s.name,
            "category": s.category,
            "status": s.status.value,
            "description": s.description,
            "estimated_listings": s.estimated_listings,
        }
        for s in RENTAL_SOURCES.values()
    ]


@router.post("/refresh", response_model=BatchResultOut, dependencies=[Depends(require_api_key)])
async def imports_refresh(
    deps: ImportDeps = Depends(get_import_deps),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    return await _run_job(session, "refresh_all", lambda: refresh_all_properties(deps))
