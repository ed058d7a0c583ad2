from app.domain.geo import (
    CITY_CENTROIDS,
    ZIP_CENTROIDS,
    NoJitter,
    UniformJitter,
    city_fallback,
    known_city_fallback,
    manual_entry_location,
    zip_fallback,
)


def test_zip_fallback_always_returns_coordinates():
    c = zip_fallback("95973", NoJitter())
    assert (c.latitude, c.longitude) == ZIP_CENTROIDS["95973"]

    for z in ("99999", None, ""):
        c = zip_fallback(z, NoJitter())
        assert (c.latitude, c.longitude) == ZIP_CENTROIDS["95928"]


def test_city_fallbacks():
    c = city_fallback("Atlantis", NoJitter())
    assert (c.latitude, c.longitude) == CITY_CENTROIDS["Chico"]

    assert known_city_fallback("Atlantis", NoJitter()) is None
    assert known_city_fallback(None, NoJitter()) is None
    k = known_city_fallback("Oroville", NoJitter())
    assert (k.latitude, k.longitude) == CITY_CENTROIDS["Oroville"]


def test_jitter_stays_within_half_magnitude():
    jitter = UniformJitter.seeded(42)
    offsets = [jitter.offset(0.008) for _ in range(500)]
    assert all(-0.004 <= o < 0.004 for o in offsets)
    assert len(set(offsets)) > 1


def test_seeded_jitter_is_reproducible():
    a = zip_fallback("95926", UniformJitter.seeded(1))
    b = zip_fallback("95926", UniformJitter.seeded(1))
    assert a == b


def test_manual_entry_location_carries_zip():
    coords, zip_code = manual_entry_location("Palermo", NoJitter())
    assert zip_code == "95968"
    assert coords.latitude == 39.4333

    _, default_zip = manual_entry_location("Atlantis", NoJitter())
    assert default_zip == "95926"
