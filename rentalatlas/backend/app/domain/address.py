# app/domain/address.py
from __future__ import annotations

import re
from dataclasses import dataclass

from .parsing import normalize_whitespace
from .types import ParsedAddress

FALLBACK_CITY = "Chico"
FALLBACK_STATE = "CA"
FALLBACK_ZIP = "95928"

_FULL_ADDRESS = re.compile(r"^(.+?),\s*(.+?),\s*([A-Z]{2})\s*(\d{5})$")
_UNIT = re.compile(r"^(.+?)\s+(Unit|Apt|#|Suite)\s*(.+)$", re.IGNORECASE)


def parse_address(line: str) -> ParsedAddress:
    """
    "123 Street Name, City, ST 12345" or "123 Street Name Unit X, City, ST 12345".
    Anything else keeps the whole line as the street and falls back to Chico/CA/95928.
    """
    normalized = normalize_whitespace(line)
    m = _FULL_ADDRESS.match(normalized)
    if not m:
        return ParsedAddress(
            full_address=normalized,
            street=normalized,
            city=FALLBACK_CITY,
            state=FALLBACK_STATE,
            zip_code=FALLBACK_ZIP,
        )

    street_part, city, state, zip_code = (g.strip() for g in m.groups())
    unit_match = _UNIT.match(street_part)

    return ParsedAddress(
        full_address=normalized,
        street=unit_match.group(1).strip() if unit_match else street_part,
        unit=f"{unit_match.group(2)} {unit_match.group(3)}".strip() if unit_match else None,
        city=city,
        state=state,
        zip_code=zip_code,
    )


def parse_address_list(raw: str | list[str]) -> list[ParsedAddress]:
    """Parse one address per line, dropping case-insensitive duplicates (first wins)."""
    lines = raw.splitlines() if isinstance(raw, str) else list(raw)

    out: list[ParsedAddress] = []
    seen: set[str] = set()
    for line in lines:
        normalized = normalize_whitespace(line)
        if not normalized:
            continue
        key = normalized.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(parse_address(normalized))
    return out


@dataclass(frozen=True)
class AddressStats:
    total: int
    unique: int
    duplicates: int


def address_stats(raw: str) -> AddressStats:
    lines = [ln for ln in (normalize_whitespace(x) for x in raw.splitlines()) if ln]
    unique = len(parse_address_list(lines))
    return AddressStats(total=len(lines), unique=unique, duplicates=len(lines) - unique)


def normalize_apn(apn: str) -> str:
    """Digits only; nine digits are rendered as XXX-XXX-XXX, anything else is kept as given."""
    digits = re.sub(r"[^0-9]", "", apn or "")
    if len(digits) == 9:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    return apn.strip()
