import json

import httpx
import pytest

from app.adapters.clients.geocoding import MapboxGeocoder, parse_feature_collection

from conftest import mapbox_body, mock_geocoder


@pytest.mark.asyncio
async def test_success_parses_center_and_context():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=mapbox_body(-121.84, 39.73, city="Chico", zip_code="95926"))

    geo = await mock_geocoder(handler).resolve("1122 W Sacramento Ave, Chico, CA")

    assert geo is not None
    assert (geo.latitude, geo.longitude) == (39.73, -121.84)
    assert geo.city == "Chico"
    assert geo.state == "CA"
    assert geo.zip_code == "95926"
    assert seen["url"].startswith("https://geo.test/places/1122")
    assert ".json?" in seen["url"]
    assert seen["params"]["access_token"] == "test-token"
    assert seen["params"]["limit"] == "1"
    assert seen["params"]["country"] == "US"


@pytest.mark.asyncio
async def test_html_served_as_200_is_a_miss():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>rate limited</html>", headers={"content-type": "application/json"})

    assert await mock_geocoder(handler).resolve("1 A St") is None


@pytest.mark.asyncio
async def test_body_with_leading_whitespace_is_a_miss():
    def handler(request: httpx.Request) -> httpx.Response:
        body = "\n  " + json.dumps(mapbox_body(-121.84, 39.73))
        return httpx.Response(200, text=body, headers={"content-type": "application/json"})

    assert await mock_geocoder(handler).resolve("1 A St") is None


@pytest.mark.asyncio
async def test_wrong_content_type_is_a_miss():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text='{"features": []}', headers={"content-type": "text/html"})

    assert await mock_geocoder(handler).resolve("1 A St") is None


@pytest.mark.asyncio
async def test_non_2xx_and_network_errors_are_misses():
    def server_error(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "down"})

    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert await mock_geocoder(server_error).resolve("1 A St") is None
    assert await mock_geocoder(boom).resolve("1 A St") is None


@pytest.mark.asyncio
async def test_no_token_makes_no_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=mapbox_body(0, 0))

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    geocoder = MapboxGeocoder(token=None, client=client)

    assert geocoder.available is False
    assert await geocoder.resolve("1 A St") is None
    assert calls == []


def test_feature_collection_without_usable_center():
    assert parse_feature_collection({"features": []}) is None
    assert parse_feature_collection({"features": [{"center": ["x", "y"]}]}) is None
    assert parse_feature_collection([]) is None
