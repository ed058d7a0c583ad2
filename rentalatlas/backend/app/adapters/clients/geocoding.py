# app/adapters/clients/geocoding.py
from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from ...config import settings
from ...domain.types import GeoResult

log = logging.getLogger(__name__)


class GeoResolver(Protocol):
    async def resolve(self, address: str) -> GeoResult | None:
        ...


def _looks_like_json(resp: httpx.Response) -> bool:
    ctype = resp.headers.get("content-type", "")
    if "application/json" not in ctype:
        return False
    return resp.text[:1] in ("{", "[")


def _parse_context(feature: dict[str, Any]) -> dict[str, str | None]:
    out: dict[str, str | None] = {"city": None, "state": None, "zip_code": None}
    for ctx in feature.get("context") or []:
        if not isinstance(ctx, dict):
            continue
        cid = str(ctx.get("id") or "")
        text = ctx.get("text")
        if cid.startswith("place."):
            out["city"] = text
        elif cid.startswith("region."):
            short = ctx.get("short_code")
            out["state"] = short.replace("US-", "") if isinstance(short, str) and short else text
        elif cid.startswith("postcode."):
            out["zip_code"] = text
    return out


def parse_feature_collection(data: Any) -> GeoResult | None:
    """First feature -> GeoResult. Anything without a usable center -> None."""
    if not isinstance(data, dict):
        return None
    features = data.get("features")
    if not isinstance(features, list) or not features or not isinstance(features[0], dict):
        return None

    feature = features[0]
    center = feature.get("center")
    if not isinstance(center, list) or len(center) < 2:
        return None
    try:
        lng, lat = float(center[0]), float(center[1])
    except (TypeError, ValueError):
        return None

    ctx = _parse_context(feature)
    return GeoResult(
        latitude=lat,
        longitude=lng,
        city=ctx["city"],
        state=ctx["state"],
        zip_code=ctx["zip_code"],
        formatted_address=feature.get("place_name"),
    )


class MapboxGeocoder:
    """
    Mapbox forward geocoding, one GET per address, no retries.

    Returns None for every failure mode (no token, network error, timeout,
    non-2xx, HTML dressed up as 200, malformed JSON). Callers own the fallback.
    """

    def __init__(
        self,
        *,
        token: str | None,
        base_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places",
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._client = client

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient | None = None) -> "MapboxGeocoder":
        return cls(
            token=settings.MAPBOX_TOKEN,
            base_url=settings.MAPBOX_BASE_URL,
            timeout_s=settings.GEOCODE_TIMEOUT_S,
            client=client,
        )

    @property
    def available(self) -> bool:
        return bool(self.token)

    def _url(self, address: str) -> str:
        return f"{self.base_url}/{quote(address, safe='')}.json"

    def _params(self) -> dict[str, Any]:
        return {"access_token": self.token, "country": "US", "types": "address", "limit": 1}

    async def _get(self, address: str) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if self._client is not None:
            return await self._client.get(self._url(address), params=self._params(), headers=headers, timeout=self.timeout_s)
        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await client.get(self._url(address), params=self._params(), headers=headers)

    async def resolve(self, address: str) -> GeoResult | None:
        if not self.token:
            # Not configured is a normal state, not an error.
            return None

        try:
            resp = await self._get(address)
        except httpx.HTTPError as e:
            log.warning("geocode request failed address=%r err=%s", address, e)
            return None

        if not resp.is_success:
            log.warning("geocode non-2xx address=%r status=%s", address, resp.status_code)
            return None
        if not _looks_like_json(resp):
            log.warning(
                "geocode non-JSON response address=%r content-type=%r",
                address,
                resp.headers.get("content-type"),
            )
            return None

        try:
            data = resp.json()
        except ValueError as e:
            log.warning("geocode JSON decode failed address=%r err=%s", address, e)
            return None

        result = parse_feature_collection(data)
        if result is None:
            log.info("geocode no match address=%r", address)
        return result
