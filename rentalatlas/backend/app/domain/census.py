# app/domain/census.py
from __future__ import annotations

import re

# Display tracts by city, used for imported records.
CITY_TRACTS: dict[str, str] = {
    "Chico": "0001.00",
    "Paradise": "0010.00",
    "Oroville": "0020.00",
    "Gridley": "0030.00",
    "Biggs": "0031.00",
    "Durham": "0035.00",
    "Magalia": "0015.00",
}
DEFAULT_TRACT = "0001.00"

# Assessor book number (first three APN digits) -> FIPS tract.
APN_BOOK_TRACTS: dict[str, str] = {
    # Chico
    "001": "06007000101",
    "002": "06007000102",
    "003": "06007000103",
    "004": "06007000104",
    "005": "06007000105",
    "006": "06007000201",
    "007": "06007000202",
    "008": "06007000301",
    "009": "06007000302",
    "010": "06007000400",
    # Paradise
    "011": "06007000800",
    "012": "06007000801",
    "013": "06007000802",
    "014": "06007000900",
    "015": "06007000901",
    "016": "06007001000",
    "017": "06007001001",
    "018": "06007001002",
    "019": "06007001100",
    "020": "06007001101",
    # Magalia
    "021": "06007001000",
    "022": "06007001001",
    "023": "06007001002",
    "024": "06007001003",
    "025": "06007001004",
    # Oroville
    "026": "06007001100",
    "027": "06007001101",
    "028": "06007001102",
    "029": "06007001200",
    "030": "06007001201",
    "031": "06007001300",
    "032": "06007001301",
    "033": "06007001302",
    "034": "06007001400",
    "035": "06007001401",
    "036": "06007001500",
    "037": "06007001501",
    "038": "06007001600",
    "039": "06007001601",
    "040": "06007001700",
    # Gridley
    "041": "06007001400",
    "042": "06007001401",
    "043": "06007001402",
    "044": "06007001403",
    "045": "06007001500",
    # Biggs
    "046": "06007001500",
    "047": "06007001501",
    "048": "06007001502",
    # Durham
    "049": "06007001600",
    "050": "06007001601",
    "051": "06007001602",
    "052": "06007001700",
    "053": "06007001701",
    "054": "06007001702",
    "055": "06007001800",
}

CITY_FIPS_TRACTS: dict[str, str] = {
    "chico": "06007000101",
    "paradise": "06007000800",
    "magalia": "06007001000",
    "oroville": "06007001100",
    "gridley": "06007001400",
    "biggs": "06007001500",
    "durham": "06007001600",
    "palermo": "06007001200",
    "thermalito": "06007001300",
}


def tract_for_city(city: str | None) -> str:
    return CITY_TRACTS.get(city or "", DEFAULT_TRACT)


def tract_for_apn(apn: str | None) -> str | None:
    digits = re.sub(r"[^0-9]", "", apn or "")
    if len(digits) < 3:
        return None
    return APN_BOOK_TRACTS.get(digits[:3])


def tract_for_parcel(apn: str | None, city: str | None) -> str | None:
    """APN book first, then city. None when neither is known."""
    tract = tract_for_apn(apn)
    if tract:
        return tract
    if city:
        return CITY_FIPS_TRACTS.get(city.strip().lower())
    return None


def format_census_tract(tract: str) -> str:
    """'06007000101' -> '1.01', '06007000800' -> '8'."""
    if not tract or len(tract) < 11:
        return tract

    tract_num = tract[5:]
    main, suffix = tract_num[:4], tract_num[4:]
    main = main.lstrip("0") or "0"
    return main if suffix == "00" else f"{main}.{suffix}"
