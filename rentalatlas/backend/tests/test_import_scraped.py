import random

import httpx
import pytest

from app.adapters.ingestion.known_properties import KnownPropertiesSource
from app.adapters.ingestion.registry import RENTAL_SOURCES, scrape_rental_listings
from app.adapters.ingestion.rss_feed import FeedSource, parse_feed
from app.service_layer.use_cases.import_scraped import scrape_and_import

from conftest import no_sleep

FEED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<item>
  <title><![CDATA[$1,350 / 2br - 900ft² - Remodeled duplex, pool (chico)]]></title>
  <description><![CDATA[Located at 742 Nord Ave with washer/dryer hookups. Pets OK.]]></description>
  <link>https://feed.test/apa/1.html</link>
</item>
<item>
  <title><![CDATA[$875 / 1br - cozy cottage (paradise)]]></title>
  <description><![CDATA[Quiet place at 5800 Clark Rd 95969. No pets.]]></description>
  <link>https://feed.test/apa/2.html</link>
</item>
<item>
  <title><![CDATA[Room for rent, call for details]]></title>
  <description><![CDATA[No address given.]]></description>
  <link>https://feed.test/apa/3.html</link>
</item>
</channel></rss>
"""


def test_parse_feed_skips_items_without_street():
    listings = parse_feed(FEED_XML, limit=10)
    assert [li.address for li in listings] == ["742 Nord Ave, Chico, CA", "5800 Clark Rd, Paradise, CA"]

    nord, clark = listings
    assert (nord.rent, nord.bedrooms, nord.square_feet) == (1350, 2, 900)
    assert "Pool" in nord.amenities and "On-site Laundry" in nord.amenities
    assert clark.zip_code == "95969"
    assert "No pets" in clark.pet_policy
    assert clark.source_url == "https://feed.test/apa/2.html"

    assert len(parse_feed(FEED_XML, limit=1)) == 1


@pytest.mark.asyncio
async def test_feed_source_sends_user_agent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, text=FEED_XML, headers={"content-type": "application/rss+xml"})

    source = FeedSource(
        url="https://feed.test/rss",
        user_agent="RentalAtlasBot/test",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    listings = await source.fetch(limit=50)

    assert seen["ua"] == "RentalAtlasBot/test"
    assert len(listings) == 2


@pytest.mark.asyncio
async def test_feed_listings_keep_their_pet_policy(deps, repo):
    source = FeedSource(
        url="https://feed.test/rss",
        user_agent="RentalAtlasBot/test",
        client=httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text=FEED_XML))
        ),
    )

    res = await scrape_and_import(deps, ["feed"], scrapers={"feed": source}, limit_per_source=50, source_delay_s=0)
    assert (res.success, res.failed, res.skipped) == (2, 0, 0)

    nord = await repo.get_by_address("742 Nord Ave, Chico, CA")
    assert nord.pets_allowed is True
    assert nord.pet_restrictions == "Dogs and cats allowed with deposit. Breed restrictions may apply."

    clark = await repo.get_by_address("5800 Clark Rd, Paradise, CA")
    assert clark.pets_allowed is False
    assert clark.pet_restrictions == "No pets allowed"


@pytest.mark.asyncio
async def test_known_catalog_imports_one_row_per_address(deps, repo):
    scrapers = {"known": KnownPropertiesSource(rng=random.Random(1))}

    res = await scrape_and_import(deps, ["known"], scrapers=scrapers, limit_per_source=50, source_delay_s=0)

    # 25 listings over 10 distinct complexes
    assert (res.success, res.failed, res.skipped) == (10, 0, 15)
    assert res.errors == []

    paradise = await repo.get_by_address("5975 Maxwell Dr, Paradise, CA")
    assert paradise.is_post_fire_rebuild is True
    assert paradise.enrichment_status == "scraped"
    assert paradise.data_source == "scrape_known-properties"
    assert paradise.management_type.value == "professional"
    assert paradise.property_name == "Eaglepointe Apartments"
    # first listing of a complex is the 1br one
    assert paradise.bedrooms == 1
    assert 1100 <= paradise.current_rent <= 1300


@pytest.mark.asyncio
async def test_registry_reports_unavailable_sources():
    class Broken:
        async def fetch(self, *, limit):
            raise RuntimeError("feed unreachable")

    res = await scrape_rental_listings(
        ["zillow", "rentCafe", "known", "feed", "no-such-source"],
        scrapers={"feed": Broken()},
        sleep=no_sleep,
    )

    assert res.listings == []
    assert res.errors == [
        "Zillow Rentals: Site blocks automated scraping - consider API access",
        "RENTCafé: Requires API key - manual setup needed",
        "Known Butte County Properties: Scraper not implemented yet",
        "Chico Apartments RSS Feed: feed unreachable",
    ]


@pytest.mark.asyncio
async def test_scrape_errors_come_before_import_errors(deps):
    scrapers = {"known": KnownPropertiesSource(rng=random.Random(2))}
    res = await scrape_and_import(deps, ["zillow", "known"], scrapers=scrapers, limit_per_source=3, source_delay_s=0)

    assert res.success == 1
    assert res.skipped == 2
    assert res.errors[0].startswith(RENTAL_SOURCES["zillow"].name)
