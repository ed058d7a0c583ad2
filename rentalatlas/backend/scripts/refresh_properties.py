# scripts/refresh_properties.py
import asyncio
import json
import logging
import os

from app.db import AsyncSessionLocal
from app.service_layer.pipeline import ImportDeps
from app.service_layer.use_cases.refresh import refresh_all_properties, refresh_single_property


async def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)

    deps = ImportDeps.from_settings(AsyncSessionLocal)
    property_id = os.environ.get("PROPERTY_ID")
    if property_id:
        print(json.dumps(await refresh_single_property(deps, int(property_id))))
        return

    res = await refresh_all_properties(deps)
    print(json.dumps(res.as_dict(), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
