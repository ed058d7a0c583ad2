# app/adapters/repos/properties.py
from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...models import Property, utcnow

T = TypeVar("T")

PROPERTY_COLUMNS = frozenset(c.name for c in Property.__table__.columns)


class StoreError(Exception):
    """Transport / constraint / parse failure talking to the property store."""


def _store_call(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await fn(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StoreError(f"{type(e).__name__}: {e}") from e

    return wrapper


class PropertyRepository:
    """
    Store handle for the `properties` table.

    Opens one short-lived session per call, so concurrent tasks can share a
    repository without sharing a session. Absence is returned as None;
    failures raise StoreError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # -------------------------
    # Point lookups
    # -------------------------

    @_store_call
    async def get_by_id(self, property_id: int) -> Property | None:
        async with self.session_factory() as session:
            return await session.get(Property, property_id)

    @_store_call
    async def get_by_address(self, address: str) -> Property | None:
        async with self.session_factory() as session:
            q = select(Property).where(Property.address == address).limit(1)
            return (await session.execute(q)).scalars().first()

    @_store_call
    async def get_by_apn(self, apn: str) -> Property | None:
        async with self.session_factory() as session:
            q = select(Property).where(Property.apn == apn).limit(1)
            return (await session.execute(q)).scalars().first()

    # -------------------------
    # Substring lookups
    # -------------------------

    @_store_call
    async def search_by_apn(self, fragment: str, limit: int = 10) -> list[Property]:
        async with self.session_factory() as session:
            q = select(Property).where(Property.apn.ilike(f"%{fragment}%")).order_by(Property.id.asc()).limit(limit)
            return list((await session.execute(q)).scalars().all())

    @_store_call
    async def search_by_address(self, fragment: str) -> Property | None:
        async with self.session_factory() as session:
            q = select(Property).where(Property.address.ilike(f"%{fragment}%")).order_by(Property.id.asc()).limit(1)
            return (await session.execute(q)).scalars().first()

    # -------------------------
    # Writes
    # -------------------------

    def _insert_stmt(self, session: AsyncSession, values: dict[str, Any]):
        dialect = session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        return (
            insert(Property)
            .values(**values)
            .on_conflict_do_nothing(index_elements=["apn"])
            .returning(Property.id)
        )

    @_store_call
    async def insert_if_absent(self, values: dict[str, Any]) -> Property | None:
        """
        INSERT ... ON CONFLICT(apn) DO NOTHING.
        Returns the new row, or None when a row with this apn already exists.
        """
        unknown = set(values) - PROPERTY_COLUMNS
        if unknown:
            raise ValueError(f"unknown property columns: {sorted(unknown)}")

        async with self.session_factory() as session:
            new_id = (await session.execute(self._insert_stmt(session, values))).scalar_one_or_none()
            await session.commit()
            if new_id is None:
                return None
            return await session.get(Property, new_id)

    @_store_call
    async def update_by_id(self, property_id: int, values: dict[str, Any]) -> Property | None:
        unknown = set(values) - PROPERTY_COLUMNS
        if unknown:
            raise ValueError(f"unknown property columns: {sorted(unknown)}")

        async with self.session_factory() as session:
            prop = await session.get(Property, property_id)
            if prop is None:
                return None
            for k, v in values.items():
                setattr(prop, k, v)
            if "updated_at" not in values:
                prop.updated_at = utcnow()
            await session.commit()
            return prop

    @_store_call
    async def delete_by_id(self, property_id: int) -> bool:
        async with self.session_factory() as session:
            res = await session.execute(delete(Property).where(Property.id == property_id))
            await session.commit()
            return bool(res.rowcount)

    # -------------------------
    # Scans
    # -------------------------

    @_store_call
    async def list_all(self) -> list[Property]:
        """Whole table, newest first."""
        async with self.session_factory() as session:
            q = select(Property).order_by(Property.created_at.desc(), Property.id.desc())
            return list((await session.execute(q)).scalars().all())

    @_store_call
    async def list_page(self, *, limit: int = 100, offset: int = 0, city: str | None = None) -> list[Property]:
        async with self.session_factory() as session:
            q = select(Property)
            if city:
                q = q.where(Property.city == city)
            q = q.order_by(Property.created_at.desc(), Property.id.desc()).limit(limit).offset(offset)
            return list((await session.execute(q)).scalars().all())
