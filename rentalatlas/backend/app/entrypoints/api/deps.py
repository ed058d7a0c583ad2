# app/entrypoints/api/deps.py
from __future__ import annotations

from fastapi import Header, HTTPException

from ...adapters.ingestion.base import ScrapeSource
from ...adapters.ingestion.registry import default_scrapers
from ...config import settings
from ...db import AsyncSessionLocal
from ...service_layer.pipeline import ImportDeps


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY:
        if not x_api_key or x_api_key != settings.API_KEY:
            raise HTTPException(status_code=401, detail="Invalid API key")


def get_import_deps() -> ImportDeps:
    # Overridden in tests via app.dependency_overrides.
    return ImportDeps.from_settings(AsyncSessionLocal)


def get_scrapers() -> dict[str, ScrapeSource]:
    return default_scrapers()
