# app/adapters/ingestion/rss_feed.py
from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from bs4 import BeautifulSoup

from ...config import settings
from ...domain.listing_text import parse_amenities, parse_listing_text
from ...domain.parsing import DEFAULT_BEDROOMS
from ...domain.types import ScrapedListing
from .base import ScrapeSource

log = logging.getLogger(__name__)

FEED_SOURCE_NAME = "rss-feed"


def _text(item, tag: str) -> str:
    node = item.find(tag)
    return node.get_text(strip=True) if node is not None else ""


def parse_feed(xml: str, *, limit: int, source: str = FEED_SOURCE_NAME) -> list[ScrapedListing]:
    """
    <item><title><![CDATA[...]]></title><description>...</description><link>...</link></item>
    -> ScrapedListing. Items without a recognizable street address are dropped.
    """
    soup = BeautifulSoup(xml, "xml")
    out: list[ScrapedListing] = []

    for item in soup.find_all("item"):
        if len(out) >= limit:
            break

        title = _text(item, "title")
        description = _text(item, "description")
        link = _text(item, "link")

        parsed = parse_listing_text(title, description)
        if not parsed.street:
            log.debug("feed item without street address title=%r", title)
            continue

        combined = f"{title} {description}"
        bedrooms = parsed.bedrooms if parsed.bedrooms is not None else DEFAULT_BEDROOMS

        out.append(
            ScrapedListing(
                address=f"{parsed.street}, {parsed.city}, CA",
                city=parsed.city,
                state="CA",
                zip_code=parsed.zip_code,
                rent=parsed.rent,
                bedrooms=bedrooms,
                bathrooms=None,
                square_feet=parsed.square_feet,
                property_type="apartment",
                amenities=parse_amenities(combined),
                pet_policy=combined,
                phone=None,
                property_name=None,
                management_company=None,
                source=source,
                source_url=link,
            )
        )

    return out


@dataclass
class FeedSource(ScrapeSource):
    """Syndicated (RSS) listing feed fetched over HTTP."""

    url: str
    user_agent: str
    timeout_s: float = 30.0
    client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient | None = None) -> "FeedSource":
        return cls(
            url=settings.SCRAPE_FEED_URL,
            user_agent=settings.SCRAPE_USER_AGENT,
            timeout_s=settings.SCRAPE_HTTP_TIMEOUT_S,
            client=client,
        )

    async def _get(self) -> httpx.Response:
        headers = {"User-Agent": self.user_agent, "Accept": "application/rss+xml, application/xml, text/xml"}
        if self.client is not None:
            return await self.client.get(self.url, headers=headers, timeout=self.timeout_s)
        async with httpx.AsyncClient(timeout=self.timeout_s, follow_redirects=True) as client:
            return await client.get(self.url, headers=headers)

    async def fetch(self, *, limit: int) -> list[ScrapedListing]:
        resp = await self._get()
        resp.raise_for_status()
        listings = parse_feed(resp.text, limit=limit)
        log.info("feed fetched url=%s listings=%s", self.url, len(listings))
        return listings
