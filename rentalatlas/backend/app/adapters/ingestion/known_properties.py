# app/adapters/ingestion/known_properties.py
from __future__ import annotations

import random
from dataclasses import dataclass, field

from ...domain.types import ScrapedListing
from .base import ScrapeSource

KNOWN_SOURCE_NAME = "known-properties"
RENT_VARIANCE = 100
CATALOG_AMENITIES = ["On-site Laundry", "Parking", "Air Conditioning", "Pool"]
CATALOG_PET_POLICY = "Dogs and cats allowed with deposit"
CATALOG_MANAGER = "Local Property Management"


@dataclass(frozen=True)
class KnownProperty:
    name: str
    address: str
    city: str
    beds: tuple[int, ...]
    rent_low: int
    rent_high: int
    phone: str


KNOWN_PROPERTIES: tuple[KnownProperty, ...] = (
    KnownProperty("Bidwell Park Apartments", "1234 Bidwell Ave", "Chico", (1, 2, 3), 1200, 1800, "(530) 343-5000"),
    KnownProperty("Canyon Oaks", "2000 Forest Ave", "Chico", (1, 2), 1100, 1600, "(530) 342-8888"),
    KnownProperty("The Esplanade", "500 Esplanade", "Chico", (1, 2, 3), 1300, 2100, "(530) 895-9200"),
    KnownProperty("Creekside Village", "3500 Notre Dame Blvd", "Chico", (2, 3), 1500, 2200, "(530) 894-6400"),
    KnownProperty("Mangrove Manor", "1800 Mangrove Ave", "Chico", (1, 2), 1000, 1500, "(530) 343-2900"),
    KnownProperty("Nord Ave Apartments", "1555 Nord Ave", "Chico", (1, 2), 950, 1400, "(530) 342-1234"),
    KnownProperty("Villa East Apartments", "2585 East Ave", "Chico", (1, 2, 3), 1150, 1850, "(530) 343-7000"),
    KnownProperty("Eaglepointe Apartments", "5975 Maxwell Dr", "Paradise", (1, 2, 3), 1200, 1950, "(530) 877-8800"),
    KnownProperty("Oroville Garden Apartments", "1965 Montgomery St", "Oroville", (1, 2), 900, 1300, "(530) 533-4500"),
    KnownProperty("Oro Dam Estates", "2350 Oro Dam Blvd", "Oroville", (1, 2, 3), 950, 1450, "(530) 534-7800"),
)


def catalog_zip(city: str) -> str:
    if city == "Chico":
        return "95928"
    if city == "Paradise":
        return "95969"
    return "95965"


def catalog_bathrooms(beds: int) -> float:
    if beds <= 1:
        return 1.0
    if beds <= 3:
        return 1.5
    return 2.0


def base_rent(prop: KnownProperty, beds: int) -> float:
    """Linear across the rent range: 1br at the low end, 3br at the high end."""
    return prop.rent_low + (prop.rent_high - prop.rent_low) * (beds - 1) / 2


@dataclass
class KnownPropertiesSource(ScrapeSource):
    """
    Static catalog of Butte County complexes. No network; one listing per
    (complex, bedroom count) with rent varied by +/- RENT_VARIANCE.
    """

    rng: random.Random = field(default_factory=random.Random)
    catalog: tuple[KnownProperty, ...] = KNOWN_PROPERTIES

    async def fetch(self, *, limit: int) -> list[ScrapedListing]:
        out: list[ScrapedListing] = []
        for prop in self.catalog:
            for beds in prop.beds:
                if len(out) >= limit:
                    return out
                variance = self.rng.uniform(-RENT_VARIANCE, RENT_VARIANCE)
                out.append(
                    ScrapedListing(
                        address=f"{prop.address}, {prop.city}, CA",
                        city=prop.city,
                        state="CA",
                        zip_code=catalog_zip(prop.city),
                        rent=round(base_rent(prop, beds) + variance),
                        bedrooms=beds,
                        bathrooms=catalog_bathrooms(beds),
                        square_feet=450 + beds * 300,
                        property_type="apartment",
                        amenities=list(CATALOG_AMENITIES),
                        pet_policy=CATALOG_PET_POLICY,
                        phone=prop.phone,
                        property_name=prop.name,
                        management_company=CATALOG_MANAGER,
                        source=KNOWN_SOURCE_NAME,
                        source_url="",
                    )
                )
        return out
