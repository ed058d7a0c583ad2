# app/service_layer/use_cases/refresh.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ...adapters.repos.properties import StoreError
from ...domain.census import tract_for_parcel
from ...domain.geo import known_city_fallback
from ...models import EnrichmentStatus, Property
from ..batch import BatchResult, BatchRunner, ItemFailed, ItemOutcome
from ..pipeline import ImportDeps

log = logging.getLogger(__name__)

NO_ENRICHMENT = "No enrichment data available"


@dataclass(frozen=True)
class PropertyRef:
    """Snapshot of the identity columns a refresh needs. Partitioned by id."""

    id: int
    apn: str
    address: str
    city: str
    zip_code: str | None
    census_tract: str | None

    @classmethod
    def of(cls, p: Property) -> "PropertyRef":
        return cls(id=p.id, apn=p.apn, address=p.address, city=p.city, zip_code=p.zip_code, census_tract=p.census_tract)

    def query(self) -> str:
        if "," in self.address:
            return self.address
        return f"{self.address}, {self.city}, CA {self.zip_code or ''}".strip()


async def _refreshed_values(deps: ImportDeps, ref: PropertyRef) -> dict[str, Any]:
    geo = await deps.geocoder.resolve(ref.query())

    if geo is not None:
        lat, lng = geo.latitude, geo.longitude
        city = geo.city or ref.city
        zip_code = geo.zip_code or ref.zip_code
    else:
        coords = known_city_fallback(ref.city, deps.jitter)
        if coords is None:
            raise ItemFailed(NO_ENRICHMENT)
        lat, lng = coords.latitude, coords.longitude
        city, zip_code = ref.city, ref.zip_code

    return {
        "latitude": lat,
        "longitude": lng,
        # Identity (apn, address) is never rewritten here.
        "city": city,
        "zip_code": zip_code,
        "census_tract": tract_for_parcel(ref.apn, city) or ref.census_tract,
        "updated_at": deps.clock(),
        "enrichment_status": EnrichmentStatus.refreshed.value,
    }


async def refresh_property(deps: ImportDeps, ref: PropertyRef) -> ItemOutcome:
    values = await _refreshed_values(deps, ref)
    if await deps.repo.update_by_id(ref.id, values) is None:
        raise ItemFailed("Property not found")
    return ItemOutcome.success


async def refresh_all_properties(deps: ImportDeps) -> BatchResult:
    """
    Re-geocode every stored property, newest first, in concurrent groups
    (deps.refresh_strategy). Group order is preserved; order inside a group is not.
    """
    try:
        rows = await deps.repo.list_all()
    except StoreError as e:
        log.error("refresh: cannot list properties err=%s", e)
        return BatchResult.fatal(str(e) or "Failed to fetch properties")

    refs = [PropertyRef.of(p) for p in rows]
    runner: BatchRunner[PropertyRef] = BatchRunner(
        strategy=deps.refresh_strategy,
        label=lambda r: r.apn,
        max_error_len=deps.error_max_len,
        sleep=deps.sleep,
    )
    return await runner.run(refs, lambda r: refresh_property(deps, r))


async def refresh_single_property(deps: ImportDeps, property_id: int) -> dict[str, Any]:
    """{"success": bool, "error"?: str}"""
    try:
        prop = await deps.repo.get_by_id(property_id)
    except StoreError as e:
        return {"success": False, "error": str(e)}
    if prop is None:
        return {"success": False, "error": "Property not found"}

    try:
        await refresh_property(deps, PropertyRef.of(prop))
    except (ItemFailed, StoreError) as e:
        return {"success": False, "error": str(e)}
    return {"success": True}
