import math

import pytest

from carbon_tracker.domain.carbon import DEFAULT_FACTORS, CarbonEstimator, estimate


@pytest.mark.parametrize(
    ("activity_type", "unit", "factor"),
    [("transport", "km", 0.2), ("electricity", "kWh", 0.5), ("food", "kg", 2.5)],
)
def test_known_pairs_use_table_factor(activity_type, unit, factor):
    assert estimate(activity_type, 12.0, unit) == pytest.approx(12.0 * factor)


def test_transport_ten_km():
    assert estimate("transport", 10, "km") == pytest.approx(2.0)


@pytest.mark.parametrize(
    ("activity_type", "unit"),
    [("transport", "miles"), ("electricity", "kwh"), ("water", "l"), ("food", "km")],
)
def test_unknown_pairs_fall_back_to_one(activity_type, unit):
    """Lookup is by the exact (type, unit) pair, case included."""
    assert estimate(activity_type, 7.5, unit) == 7.5


def test_values_are_not_validated():
    assert estimate("food", -2, "kg") == pytest.approx(-5.0)
    assert math.isnan(estimate("transport", float("nan"), "km"))


def test_custom_factor_table():
    estimator = CarbonEstimator({("bike", "km"): 0.0})
    assert estimator.estimate("bike", 30, "km") == 0.0
    assert estimator.estimate("transport", 10, "km") == 10


def test_factor_table_is_read_only():
    estimator = CarbonEstimator()
    assert dict(estimator.factors) == dict(DEFAULT_FACTORS)
    with pytest.raises(TypeError):
        estimator.factors[("transport", "km")] = 1.0  # type: ignore[index]
