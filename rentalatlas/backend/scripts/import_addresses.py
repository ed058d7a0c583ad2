# scripts/import_addresses.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from app.db import AsyncSessionLocal, engine
from app.models import Base
from app.service_layer.pipeline import ImportDeps
from app.service_layer.use_cases.import_addresses import bundled_address_stats, import_addresses


async def main() -> None:
    parser = argparse.ArgumentParser(description="Import free-text addresses into the properties table.")
    parser.add_argument("file", nargs="?", help="Text file, one address per line (default: bundled Chico list)")
    parser.add_argument("--stats", action="store_true", help="Print bundled list stats and exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if args.stats:
        print(json.dumps(bundled_address_stats()))
        return

    raw = Path(args.file).read_text(encoding="utf-8") if args.file else None

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    res = await import_addresses(ImportDeps.from_settings(AsyncSessionLocal), raw)
    print(json.dumps(res.as_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
