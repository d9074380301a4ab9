import pytest

from miledesigns.services.estimator import estimate_cost


def test_premium_new_build():
    est = estimate_cost(2000, "Premium", "New")
    assert est.total == 500_000
    assert {l.category: l.value for l in est.breakdown} == {
        "Materials": 225_000,
        "Labor": 175_000,
        "Permits & Design": 60_000,
        "Contingency": 40_000,
    }
    assert sum(l.value for l in est.breakdown) == pytest.approx(est.total)


def test_renovation_multiplier():
    assert estimate_cost(1000, "Standard", "Renovation").total == pytest.approx(97_500)
    assert estimate_cost(1000, "Luxury", "New").total == 450_000


@pytest.mark.parametrize("area", [499, 10_001])
def test_area_bounds(area):
    with pytest.raises(ValueError):
        estimate_cost(area)
