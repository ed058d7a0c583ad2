# app/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..db import engine
from ..models import Base
from .api.routers import health, imports, properties


def create_app() -> FastAPI:
    app = FastAPI(title="Rental Atlas - Butte County property import")

    @app.on_event("startup")
    async def _startup() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    app.include_router(health.router)
    app.include_router(imports.router)
    app.include_router(properties.router)

    return app
