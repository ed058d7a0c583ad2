# app/adapters/clients/parcels.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class ParcelAddress:
    address: str | None
    city: str | None
    zip_code: str | None


class ParcelDirectory(Protocol):
    async def lookup(self, apn: str) -> ParcelAddress | None:
        ...


# Development assessor table keyed by formatted APN.
ASSESSOR_TABLE: dict[str, ParcelAddress] = {
    "001-010-001": ParcelAddress("1122 W Sacramento Ave", "Chico", "95926"),
    "001-010-002": ParcelAddress("1200 W Sacramento Ave", "Chico", "95926"),
    "001-010-003": ParcelAddress("567 E 1st Ave", "Chico", "95926"),
    "002-010-001": ParcelAddress("5975 Maxwell Dr", "Paradise", "95969"),
    "002-010-002": ParcelAddress("5975 Maxwell Dr Unit 12", "Paradise", "95969"),
    "003-010-001": ParcelAddress("1965 Montgomery St", "Oroville", "95965"),
}


@dataclass
class StaticParcelDirectory:
    """
    In-process assessor lookup. A county GIS client can replace it as long as
    it keeps the `lookup(apn) -> ParcelAddress | None` shape.
    """

    table: dict[str, ParcelAddress] = field(default_factory=lambda: dict(ASSESSOR_TABLE))

    @classmethod
    def from_settings(cls) -> "StaticParcelDirectory":
        return cls()

    async def lookup(self, apn: str) -> ParcelAddress | None:
        return self.table.get(apn)
