import dataclasses

from app.domain.types import IncludedCharge
from app.domain.utilities import (
    DEFAULT_BASE_FMR,
    FMR_2026,
    UTILITY_RATES_2026,
    CalculatorConfig,
    UtilityAllowanceEngine,
    calculate_fmr_2026,
    detect_city_zone,
    manual_utility_config,
    rate_zone,
    total_with_fees,
)


def test_import_allowance_for_two_bedroom_chico():
    engine = UtilityAllowanceEngine()
    config, fmr = engine.for_import("Chico", 2)

    # heat 40 + cook 9 + water heater 23 + AC 43 + other 15 + water 38 + sewer 40 + trash 30
    assert fmr.utility_allowance == 238
    assert fmr.base_fmr == FMR_2026[2]
    assert fmr.adjusted_fmr == FMR_2026[2] - 238
    assert config.heating.type == "natural-gas"
    assert config.air_conditioning.type == "refrigerated"


def test_included_charges_are_not_summed():
    engine = UtilityAllowanceEngine()
    config = engine.compute_utilities("Chico", 2)
    included = dataclasses.replace(config, water=IncludedCharge(True, config.water.amount))
    assert engine.sum_allowance(included) == engine.sum_allowance(config) - config.water.amount


def test_bedrooms_clamped_for_rates_but_not_for_base_fmr():
    engine = UtilityAllowanceEngine()
    assert engine.compute_utilities("Chico", 9) == engine.compute_utilities("Chico", 5)
    assert engine.compute_utilities("Chico", -1) == engine.compute_utilities("Chico", 0)
    assert engine.base_fmr(9) == DEFAULT_BASE_FMR


def test_unknown_city_priced_as_chico():
    assert rate_zone("Atlantis") == "chico"
    assert rate_zone(" Oroville ") == "oroville"
    engine = UtilityAllowanceEngine()
    assert engine.compute_utilities("Atlantis", 2) == engine.compute_utilities("Chico", 2)


def test_rate_rows_are_non_decreasing():
    def rows(node):
        if isinstance(node, list):
            yield node
        else:
            for v in node.values():
                yield from rows(v)

    for row in rows(UTILITY_RATES_2026):
        assert len(row) == 6
        assert row == sorted(row)


def test_display_calculator_defaults():
    config = CalculatorConfig()
    res = calculate_fmr_2026(config)

    assert res.breakdown["cooking"] == 13  # electric
    assert res.breakdown["trash"] == 0  # included by default
    assert res.total_utility_allowance == 197
    assert res.net_rent == FMR_2026[2] - 197
    # gas customer charge + electric customer charge
    assert total_with_fees(res, config) == 197 + 4 + 12


def test_display_calculator_without_gas():
    config = CalculatorConfig(heating="electric", water_heater="electric", cooking="electric")
    res = calculate_fmr_2026(config)
    assert total_with_fees(res, config, other_fees=10) == res.total_utility_allowance + 10 + 12


def test_detect_city_zone():
    assert detect_city_zone("City of Oroville") == "oroville"
    assert detect_city_zone("Magalia Ridge") == "magalia"
    assert detect_city_zone(None) == "chico"


def test_manual_utility_config():
    cfg = manual_utility_config(
        heating="electric",
        cooking="none",
        air_conditioning="evaporative",
        water_heater="natural-gas",
        water_included=True,
        trash_included=False,
        refrigerator="tenant",
        range_microwave="provided",
    )
    assert cfg["heating"] == {"type": "electric", "tenant_pays": True}
    assert cfg["cooking"]["tenant_pays"] is False
    assert cfg["water_sewer"] == "included"
    assert cfg["trash"] == "not-included"
    assert cfg["refrigerator_provided"] is False
    assert cfg["range_provided"] is True


def test_adjusted_fmr_is_not_clamped_at_zero():
    engine = UtilityAllowanceEngine(fmr_table={2: 100})
    config = engine.compute_utilities("Chico", 2)
    fmr = engine.compute_fmr(2, config)

    assert fmr.base_fmr == 100
    assert fmr.utility_allowance == 238
    assert fmr.adjusted_fmr == 100 - 238
    assert fmr.adjusted_fmr < 0
