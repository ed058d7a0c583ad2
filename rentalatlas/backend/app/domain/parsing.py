# app/domain/parsing.py
from __future__ import annotations

import re
from typing import Any

DEFAULT_BEDROOMS = 2

_BEDROOM_TOKEN = re.compile(r"(\d)\s*(?:BR|bd|bed|bedroom)", re.IGNORECASE)
_WS = re.compile(r"\s+")


def to_int(x: Any) -> int | None:
    if x is None or x == "":
        return None
    try:
        return int(float(x))
    except (TypeError, ValueError):
        return None


def to_float(x: Any) -> float | None:
    if x is None or x == "":
        return None
    try:
        return float(x)
    except (TypeError, ValueError):
        return None


def normalize_whitespace(s: str) -> str:
    return _WS.sub(" ", s).strip()


def extract_bedrooms(text: str, default: int = DEFAULT_BEDROOMS) -> int:
    """'123 Main St #2BR' -> 2. No bedroom token -> default."""
    m = _BEDROOM_TOKEN.search(text or "")
    return int(m.group(1)) if m else default


def parse_money(text: str | None) -> float | None:
    """'$1,250.00' -> 1250.0"""
    if not text:
        return None
    cleaned = re.sub(r"[$,\s]", "", text)
    return to_float(cleaned) or None
