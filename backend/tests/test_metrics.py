import pytest

from workshop.services.metrics import energy_consumption, estimate_co2, estimate_cost


@pytest.mark.parametrize("tokens", [0, 1, 750, 123456])
def test_estimates_are_linear_in_tokens(tokens):
    assert estimate_co2(tokens) == tokens * 0.0004
    assert estimate_cost(tokens) == tokens * 0.00002


def test_energy_consumption_sums_input_and_output():
    energy = energy_consumption(500, 250)
    assert energy.tokens == 750
    assert energy.estimated_co2 == 750 * 0.0004
    assert energy.estimated_cost == 750 * 0.00002


def test_energy_consumption_is_repeatable():
    assert energy_consumption(12, 30) == energy_consumption(12, 30)


def test_missing_usage_counts_as_zero():
    assert energy_consumption(None, None).tokens == 0
