# app/domain/utilities.py
"""
Utility allowance and FMR math (Butte County, 2026 schedule).

Two computations live here on purpose and must stay separate:

  * UtilityAllowanceEngine.sum_allowance  - the allowance written onto imported
    records (gas appliances + refrigerated air + flat other-electric + any
    water/sewer/trash not included in rent).
  * calculate_fmr_2026 / total_with_fees  - the display calculator, which works
    from user selections and adds utility customer charges.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .types import FMRComputation, IncludedCharge, UtilityCharge, UtilityConfiguration

MAX_BEDROOMS = 5

FMR_2026: dict[int, int] = {
    0: 1097,  # Studio
    1: 1153,
    2: 1461,
    3: 2092,
    4: 2403,
    5: 2764,  # 5+ BR
}
DEFAULT_BASE_FMR = 1625

RATE_ZONES: tuple[str, ...] = ("chico", "oroville", "paradise", "gridley", "biggs", "durham", "magalia")
# Most listings sit in the Chico zone; unknown cities are priced as Chico.
DEFAULT_RATE_ZONE = "chico"

OTHER_ELECTRIC = 15
GAS_CUSTOMER_CHARGE = 4
ELECTRIC_CUSTOMER_CHARGE = 12

# [utility][type][bedrooms 0..5]; every row is non-decreasing in bedrooms.
UTILITY_RATES_2026: dict[str, Any] = {
    "heating": {
        "natural-gas": [30, 35, 40, 46, 51, 56],
        "bottled-gas": [72, 85, 98, 110, 123, 136],
        "electric": [24, 28, 32, 36, 40, 45],
        "electric-heat-pump": [19, 22, 25, 29, 32, 35],
        "fuel-oil": [62, 72, 83, 93, 104, 115],
        "other": [32, 37, 42, 48, 53, 58],
    },
    "cooking": {
        "natural-gas": [5, 6, 9, 11, 13, 15],
        "bottled-gas": [13, 15, 20, 25, 31, 36],
        "electric": [8, 10, 13, 16, 19, 22],
    },
    "water_heater": {
        "natural-gas": [16, 19, 23, 28, 32, 36],
        "bottled-gas": [38, 45, 56, 67, 78, 89],
        "electric": [15, 18, 23, 28, 33, 37],
        "electric-heat-pump": [8, 10, 13, 15, 18, 20],
        "fuel-oil": [32, 37, 47, 56, 66, 74],
    },
    "air_conditioning": {
        "refrigerated": [25, 30, 43, 57, 71, 85],
        "evaporative": [8, 10, 15, 19, 23, 29],
        "none": [0, 0, 0, 0, 0, 0],
    },
    "water": {
        "chico": [30, 32, 38, 46, 54, 62],
        "oroville": [34, 36, 43, 52, 61, 70],
        "paradise": [40, 43, 51, 62, 73, 84],
        "gridley": [31, 33, 40, 48, 56, 64],
        "biggs": [33, 35, 42, 50, 58, 67],
        "durham": [36, 38, 45, 54, 63, 72],
        "magalia": [40, 43, 51, 62, 73, 84],
    },
    "sewer": {
        "chico": [36, 36, 40, 44, 48, 52],
        "oroville": [42, 42, 46, 51, 56, 61],
        "paradise": [28, 28, 31, 34, 37, 40],
        "gridley": [45, 45, 49, 54, 59, 64],
        "biggs": [44, 44, 48, 53, 58, 63],
        "durham": [30, 30, 33, 36, 39, 42],
        "magalia": [28, 28, 31, 34, 37, 40],
    },
    "trash": [27, 27, 30, 34, 38, 42],
    "range": [7, 7, 7, 7, 7, 7],
    "refrigerator": [9, 9, 9, 9, 9, 9],
}


def clamp_bedrooms(bedrooms: int | None) -> int:
    return min(max(0, int(bedrooms or 0)), MAX_BEDROOMS)


def rate_zone(city: str | None) -> str:
    z = (city or "").strip().lower()
    return z if z in RATE_ZONES else DEFAULT_RATE_ZONE


@dataclass
class UtilityAllowanceEngine:
    """
    Shared by every importer. Auto-imported records assume natural gas for
    heating, cooking and water heating plus refrigerated air; tenant pays
    water, sewer and trash.
    """

    rates: dict[str, Any] = field(default_factory=lambda: UTILITY_RATES_2026)
    fmr_table: dict[int, int] = field(default_factory=lambda: FMR_2026)
    other_electric: int = OTHER_ELECTRIC

    def compute_utilities(self, city: str | None, bedrooms: int | None = 2) -> UtilityConfiguration:
        br = clamp_bedrooms(bedrooms)
        zone = rate_zone(city)
        r = self.rates

        return UtilityConfiguration(
            heating=UtilityCharge("natural-gas", r["heating"]["natural-gas"][br]),
            cooking=UtilityCharge("natural-gas", r["cooking"]["natural-gas"][br]),
            water_heater=UtilityCharge("natural-gas", r["water_heater"]["natural-gas"][br]),
            air_conditioning=UtilityCharge("refrigerated", r["air_conditioning"]["refrigerated"][br]),
            water=IncludedCharge(False, r["water"][zone][br]),
            sewer=IncludedCharge(False, r["sewer"][zone][br]),
            trash=IncludedCharge(False, r["trash"][br]),
            other_electric=self.other_electric,
            range_provided=True,
            refrigerator_provided=True,
        )

    @staticmethod
    def sum_allowance(config: UtilityConfiguration) -> int:
        total = (
            config.heating.amount
            + config.cooking.amount
            + config.water_heater.amount
            + config.air_conditioning.amount
            + config.other_electric
        )
        for charge in (config.water, config.sewer, config.trash):
            if not charge.included:
                total += charge.amount
        return total

    def base_fmr(self, bedrooms: int) -> int:
        # Raw bedroom count, not clamped: counts outside the table use DEFAULT_BASE_FMR.
        return self.fmr_table.get(bedrooms) or DEFAULT_BASE_FMR

    def compute_fmr(self, bedrooms: int, config: UtilityConfiguration) -> FMRComputation:
        base = self.base_fmr(bedrooms)
        allowance = self.sum_allowance(config)
        # No clamping: a negative ceiling is a data-quality signal for callers.
        return FMRComputation(base_fmr=base, utility_allowance=allowance, adjusted_fmr=base - allowance)

    def for_import(self, city: str | None, bedrooms: int) -> tuple[UtilityConfiguration, FMRComputation]:
        config = self.compute_utilities(city, bedrooms)
        return config, self.compute_fmr(bedrooms, config)


# -------------------------
# Manual entry selections
# -------------------------

NONE_SELECTION = "none"  # paid by landlord / not present


def manual_utility_config(
    *,
    heating: str,
    cooking: str,
    air_conditioning: str,
    water_heater: str,
    water_included: bool,
    trash_included: bool,
    refrigerator: str,
    range_microwave: str,
) -> dict[str, Any]:
    """Utilities exactly as an operator entered them; "none" means the tenant does not pay."""
    return {
        "heating": {"type": heating, "tenant_pays": heating != NONE_SELECTION},
        "cooking": {"type": cooking, "tenant_pays": cooking != NONE_SELECTION},
        "air_conditioning": {"type": air_conditioning, "tenant_pays": air_conditioning != NONE_SELECTION},
        "water_heater": {"type": water_heater, "tenant_pays": water_heater != NONE_SELECTION},
        "water_sewer": "included" if water_included else "not-included",
        "trash": "included" if trash_included else "not-included",
        "refrigerator_provided": refrigerator == "provided",
        "range_provided": range_microwave == "provided",
    }


# -------------------------
# Display calculator
# -------------------------

@dataclass(frozen=True)
class CalculatorConfig:
    city: str = DEFAULT_RATE_ZONE
    bedrooms: int = 2
    heating: str = "natural-gas"
    cooking: str = "electric"
    water_heater: str = "natural-gas"
    air_conditioning: str = "refrigerated"
    water_included: bool = False
    sewer_included: bool = False
    trash_included: bool = True
    tenant_provides_range: bool = False
    tenant_provides_refrigerator: bool = False


@dataclass(frozen=True)
class CalculationResult:
    base_fmr: int
    breakdown: dict[str, int]
    total_utility_allowance: int
    net_rent: int


def detect_city_zone(city_name: str | None) -> str:
    """Substring match for free-text city names ("City of Oroville" -> oroville)."""
    lower = (city_name or "").lower()
    for zone in RATE_ZONES:
        if zone != DEFAULT_RATE_ZONE and zone in lower:
            return zone
    return DEFAULT_RATE_ZONE


def calculate_fmr_2026(config: CalculatorConfig, rates: dict[str, Any] | None = None) -> CalculationResult:
    r = rates or UTILITY_RATES_2026
    br = clamp_bedrooms(config.bedrooms)
    zone = rate_zone(config.city)

    def pick(utility: str, kind: str) -> int:
        return r[utility].get(kind, [0] * (MAX_BEDROOMS + 1))[br]

    breakdown = {
        "heating": pick("heating", config.heating),
        "cooking": pick("cooking", config.cooking),
        "water_heater": pick("water_heater", config.water_heater),
        "air_conditioning": pick("air_conditioning", config.air_conditioning),
        "water": 0 if config.water_included else r["water"][zone][br],
        "sewer": 0 if config.sewer_included else r["sewer"][zone][br],
        "trash": 0 if config.trash_included else r["trash"][br],
        "range": r["range"][br] if config.tenant_provides_range else 0,
        "refrigerator": r["refrigerator"][br] if config.tenant_provides_refrigerator else 0,
    }
    total = sum(breakdown.values())
    base = FMR_2026[br]

    return CalculationResult(base_fmr=base, breakdown=breakdown, total_utility_allowance=total, net_rent=base - total)


def has_gas(config: CalculatorConfig) -> bool:
    return "natural-gas" in (config.heating, config.cooking, config.water_heater)


def total_with_fees(result: CalculationResult, config: CalculatorConfig, other_fees: int = 0) -> int:
    gas_charge = GAS_CUSTOMER_CHARGE if has_gas(config) else 0
    return result.total_utility_allowance + other_fees + gas_charge + ELECTRIC_CUSTOMER_CHARGE
