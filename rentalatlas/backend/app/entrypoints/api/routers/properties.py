# app/entrypoints/api/routers/properties.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_import_deps, require_api_key
from ....adapters.repos.properties import StoreError
from ....schemas import (
    AddressLookupIn,
    ApnLookupIn,
    LookupOut,
    ManualPropertyIn,
    OperationOut,
    PropertyOut,
    PropertyUpdateIn,
)
from ....service_layer.pipeline import ImportDeps
from ....service_layer.use_cases.lookup import lookup_address, lookup_apn
from ....service_layer.use_cases.manual_entry import (
    ManualPropertyForm,
    delete_property,
    save_manual_property,
    update_property,
)
from ....service_layer.use_cases.refresh import refresh_single_property

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyOut])
async def list_properties(
    city: str | None = Query(default=None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    deps: ImportDeps = Depends(get_import_deps),
) -> list[PropertyOut]:
    try:
        rows = await deps.repo.list_page(limit=limit, offset=offset, city=city)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [PropertyOut.model_validate(p, from_attributes=True) for p in rows]


@router.post("/lookup/address", response_model=LookupOut, dependencies=[Depends(require_api_key)])
async def properties_lookup_address(
    body: AddressLookupIn,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    return (await lookup_address(deps, body.address)).as_dict()


@router.post("/lookup/apn", response_model=LookupOut)
async def properties_lookup_apn(
    body: ApnLookupIn,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    return (await lookup_apn(deps, body.apn)).as_dict()


@router.post("/manual", response_model=OperationOut, dependencies=[Depends(require_api_key)])
async def properties_manual(
    body: ManualPropertyIn,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    return await save_manual_property(deps, ManualPropertyForm(**body.model_dump()))


@router.patch("/{property_id}", response_model=OperationOut, dependencies=[Depends(require_api_key)])
async def properties_update(
    property_id: int,
    body: PropertyUpdateIn,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    res = await update_property(deps, property_id, body.model_dump(exclude_unset=True))
    if res.get("error") == "Property not found":
        raise HTTPException(status_code=404, detail=res["error"])
    return res


@router.delete("/{property_id}", response_model=OperationOut, dependencies=[Depends(require_api_key)])
async def properties_delete(
    property_id: int,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    res = await delete_property(deps, property_id)
    if res.get("error") == "Property not found":
        raise HTTPException(status_code=404, detail=res["error"])
    return res


@router.post("/{property_id}/refresh", response_model=OperationOut, dependencies=[Depends(require_api_key)])
async def properties_refresh(
    property_id: int,
    deps: ImportDeps = Depends(get_import_deps),
) -> dict[str, Any]:
    return await refresh_single_property(deps, property_id)
