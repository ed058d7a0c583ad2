# app/domain/listing_text.py
"""
Regex extraction for free-text rental listings (feed titles/descriptions).

Typical feed title:  "$1,200 / 2br - 850ft² - Cozy duplex near campus (chico)"
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from .parsing import normalize_whitespace, to_int
from .types import PetPolicy

DEFAULT_LISTING_CITY = "Chico"

# City -> ZIP used when the listing text carries no 5-digit ZIP.
CITY_DEFAULT_ZIPS: dict[str, str] = {
    "Chico": "95928",
    "Paradise": "95969",
    "Oroville": "95965",
    "Gridley": "95948",
    "Biggs": "95917",
    "Durham": "95938",
    "Magalia": "95954",
}

_PRICE = re.compile(r"\$\s*([\d,]+)")
_BEDROOMS = re.compile(r"(\d+)\s*br\b", re.IGNORECASE)
_SQFT = re.compile(r"(\d+)\s*ft(?:²|2)", re.IGNORECASE)
_TITLE_CITY = re.compile(r"\(([^()]+)\)\s*$")
_ZIP = re.compile(r"\b(9\d{4})\b")
_STREET = re.compile(
    r"\b(\d{1,6}\s+(?:[NSEW]\.?\s+)?[A-Za-z0-9'.]+(?:\s+[A-Za-z0-9'.]+){0,3}?\s+"
    r"(?:St|Street|Ave|Avenue|Blvd|Boulevard|Dr|Drive|Rd|Road|Ln|Lane|Way|Ct|Court|Pl|Place|Cir|Circle|Pkwy|Hwy)\b\.?)",
    re.IGNORECASE,
)

AMENITY_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"pool", re.IGNORECASE), "Pool"),
    (re.compile(r"gym|fitness", re.IGNORECASE), "Fitness Center"),
    (re.compile(r"laundry|washer|dryer", re.IGNORECASE), "On-site Laundry"),
    (re.compile(r"parking|garage", re.IGNORECASE), "Parking"),
    (re.compile(r"air\s*condition|a/c|ac\s|hvac", re.IGNORECASE), "Air Conditioning"),
    (re.compile(r"dishwasher", re.IGNORECASE), "Dishwasher"),
    (re.compile(r"patio|balcony", re.IGNORECASE), "Patio/Balcony"),
    (re.compile(r"storage", re.IGNORECASE), "Storage"),
    (re.compile(r"elevator", re.IGNORECASE), "Elevator"),
    (re.compile(r"wheelchair|ada|accessible", re.IGNORECASE), "ADA Accessible"),
    (re.compile(r"gated|security", re.IGNORECASE), "Gated Community"),
    (re.compile(r"playground", re.IGNORECASE), "Playground"),
    (re.compile(r"clubhouse", re.IGNORECASE), "Clubhouse"),
    (re.compile(r"cable|internet|wifi", re.IGNORECASE), "Internet Ready"),
]
BASELINE_AMENITIES = ["Parking", "Air Conditioning"]

ALLOWED_WITH_DEPOSIT = "Dogs and cats allowed with deposit. Breed restrictions may apply."
CONTACT_FOR_PETS = "Contact for pet policy"

# Ordered; the first hit decides.
PET_RULES: list[tuple[re.Pattern[str], PetPolicy]] = [
    (re.compile(r"no\s*pets?", re.IGNORECASE), PetPolicy(False, "No pets allowed")),
    (re.compile(r"cats?\s*only", re.IGNORECASE), PetPolicy(True, "Cats only")),
    (re.compile(r"dogs?\s*only", re.IGNORECASE), PetPolicy(True, "Dogs only")),
    (re.compile(r"pets?\s*(ok|allowed|welcome|friendly)", re.IGNORECASE), PetPolicy(True, ALLOWED_WITH_DEPOSIT)),
]


@dataclass(frozen=True)
class ListingText:
    rent: int | None
    bedrooms: int | None
    square_feet: int | None
    street: str | None
    city: str
    zip_code: str


def parse_price(text: str) -> int | None:
    m = _PRICE.search(text or "")
    if not m:
        return None
    return to_int(m.group(1).replace(",", "")) or None


def parse_bedrooms(text: str) -> int | None:
    m = _BEDROOMS.search(text or "")
    return int(m.group(1)) if m else None


def parse_square_feet(text: str) -> int | None:
    m = _SQFT.search(text or "")
    return int(m.group(1)) if m else None


def parse_street(*texts: str) -> str | None:
    for t in texts:
        m = _STREET.search(t or "")
        if m:
            return normalize_whitespace(m.group(1))
    return None


def parse_city(title: str) -> str:
    """Trailing "(chico)" -> "Chico". Missing parenthetical -> default city."""
    m = _TITLE_CITY.search((title or "").strip())
    if not m:
        return DEFAULT_LISTING_CITY
    return normalize_whitespace(m.group(1)).title()


def parse_zip(text: str, city: str) -> str:
    m = _ZIP.search(text or "")
    if m:
        return m.group(1)
    return CITY_DEFAULT_ZIPS.get(city, CITY_DEFAULT_ZIPS[DEFAULT_LISTING_CITY])


def parse_amenities(text: str) -> list[str]:
    found = [name for pattern, name in AMENITY_PATTERNS if pattern.search(text or "")]
    return found or list(BASELINE_AMENITIES)


def parse_pet_policy(text: str) -> PetPolicy:
    for pattern, policy in PET_RULES:
        if pattern.search(text or ""):
            return policy
    return PetPolicy(True, CONTACT_FOR_PETS)


def _first_not_none(*values: int | None) -> int | None:
    for v in values:
        if v is not None:
            return v
    return None


def parse_listing_text(title: str, description: str = "") -> ListingText:
    combined = f"{title} {description}"
    city = parse_city(title)
    return ListingText(
        rent=parse_price(title) or parse_price(description),
        bedrooms=_first_not_none(parse_bedrooms(title), parse_bedrooms(description)),
        square_feet=parse_square_feet(title) or parse_square_feet(description),
        street=parse_street(description, title),
        city=city,
        zip_code=parse_zip(combined, city),
    )
