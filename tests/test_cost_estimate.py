"""Tests for rebalancing cost estimates."""

import pytest

from portfolio_rebalancer import CostEstimator, calculate_rebalancing, estimate_rebalancing_cost
from rebalancer_config import CostEstimateConfig, load_config

pytestmark = pytest.mark.unit


@pytest.fixture
def drifted_result(drifted_positions):
    return calculate_rebalancing(drifted_positions)


def test_commission_free_estimate(drifted_result):
    estimate = estimate_rebalancing_cost(drifted_result)

    assert estimate.trades_needed == 3
    assert estimate.buy_count == 2
    assert estimate.sell_count == 1
    assert estimate.trading_costs == 0
    assert [s.ticker for s in estimate.sell_estimates] == ["VTI"]
    assert estimate.sell_estimates[0].sell_amount == pytest.approx(2000)
    assert estimate.capital_gains == pytest.approx(400)
    assert estimate.estimated_taxes == pytest.approx(60)
    assert estimate.total_cost == pytest.approx(60)
    assert estimate.cost_as_percentage == pytest.approx(60 / 55000 * 100)
    assert estimate.cost_level == "Low"


@pytest.mark.parametrize("fee, total, level", [
    (10, 90, "Low"),
    (100, 360, "Moderate"),
    (1000, 3060, "High"),
])
def test_fee_per_trade(drifted_result, fee, total, level):
    estimate = estimate_rebalancing_cost(drifted_result, fee_per_trade=fee)

    assert estimate.trading_costs == pytest.approx(fee * 3)
    assert estimate.total_cost == pytest.approx(total)
    assert estimate.cost_level == level


def test_balanced_portfolio_costs_nothing(balanced_positions):
    estimate = estimate_rebalancing_cost(calculate_rebalancing(balanced_positions), fee_per_trade=5)

    assert estimate.trades_needed == 0
    assert estimate.sell_estimates == []
    assert estimate.total_cost == 0
    assert estimate.cost_level == "Low"


def test_small_differences_are_not_trades(near_target_positions):
    result = calculate_rebalancing(near_target_positions)
    config = CostEstimateConfig(fee_per_trade=1, trade_threshold_usd=25)
    estimate = CostEstimator(config).estimate(result)

    # CASH is only $20 over target
    assert estimate.trades_needed == 2
    assert estimate.trading_costs == 2
    assert estimate.sell_count == 2


def test_custom_tax_assumptions(drifted_result):
    config = CostEstimateConfig(cost_basis_ratio=0.5, capital_gains_rate=0.2)
    estimate = estimate_rebalancing_cost(drifted_result, config=config)

    assert estimate.capital_gains == pytest.approx(1000)
    assert estimate.estimated_taxes == pytest.approx(200)


def test_add_only_result_has_no_tax(drifted_positions):
    result = calculate_rebalancing(drifted_positions, "add-only")
    estimate = estimate_rebalancing_cost(result)

    assert estimate.trades_needed == 2
    assert estimate.sell_count == 0
    assert estimate.estimated_taxes == 0


def test_uses_loaded_configuration(tmp_path, drifted_result):
    config_file = tmp_path / "rebalancer.yaml"
    config_file.write_text("cost_estimate:\n  fee_per_trade: 5\n")
    load_config(config_file)

    estimate = estimate_rebalancing_cost(drifted_result)
    assert estimate.trading_costs == 15
