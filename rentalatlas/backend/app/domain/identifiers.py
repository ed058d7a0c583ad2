# app/domain/identifiers.py
"""
Deterministic APN-like identifiers for records that do not come with a real
parcel number.

The hash is the classic 32-bit ``h = h*31 + code_unit`` string hash. Only nine
decimal digits of its magnitude survive the formatting, so unrelated addresses
can collide. Importers therefore check exact-address equality as well as
identifier equality before treating an input as already imported.
"""
from __future__ import annotations

import enum
import random
import time


class IdPrefix(str, enum.Enum):
    address_import = "ADR"
    scrape_import = "SCR"
    manual_lookup = "LKP"
    manual_entry = "MAN"


def string_hash(seed: str) -> int:
    """Signed 32-bit rolling hash over UTF-16 code units."""
    h = 0
    data = seed.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    return h - 0x1_0000_0000 if h & 0x8000_0000 else h


def synthesize(seed: str, prefix: IdPrefix = IdPrefix.address_import) -> str:
    magnitude = abs(string_hash(seed))

    a = f"{magnitude % 1000:03d}"
    b = f"{(magnitude // 1000) % 1000:03d}"
    c = f"{(magnitude // 1_000_000) % 1000:03d}"

    return f"{prefix.value}-{a}-{b}-{c}"


def address_import_id(address: str) -> str:
    return synthesize(address, IdPrefix.address_import)


def scrape_import_id(address: str, source: str) -> str:
    return synthesize(f"{address}-{source}", IdPrefix.scrape_import)


def lookup_id(formatted_address: str) -> str:
    return synthesize(formatted_address, IdPrefix.manual_lookup)


def manual_entry_id(*, now_ms: int | None = None, rng: random.Random | None = None) -> str:
    # Timestamp + random instead of the hash: must never collide with an automated import.
    ts = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = (rng or random).randrange(1000)
    return f"{IdPrefix.manual_entry.value}-{ts}-{suffix:03d}"
