# scripts/scrape_listings.py
import argparse
import asyncio
import json
import logging

from app.adapters.ingestion.registry import RENTAL_SOURCES, default_scrapers
from app.config import settings
from app.db import AsyncSessionLocal, engine
from app.models import Base
from app.service_layer.pipeline import ImportDeps
from app.service_layer.use_cases.import_scraped import scrape_and_import


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("sources", nargs="*", default=["known"], help=f"Source ids: {', '.join(RENTAL_SOURCES)}")
    parser.add_argument("--limit", type=int, default=settings.SCRAPE_MAX_LISTINGS_PER_SOURCE)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    res = await scrape_and_import(
        ImportDeps.from_settings(AsyncSessionLocal),
        args.sources,
        scrapers=default_scrapers(),
        limit_per_source=args.limit,
        source_delay_s=settings.SCRAPE_SOURCE_DELAY_S,
    )
    print(json.dumps(res.as_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
