"""Tests for asset class mapping and grouping."""

import pytest

from portfolio_rebalancer import (
    Action,
    Position,
    calculate_rebalancing,
    get_asset_class,
    get_asset_class_color,
    get_unique_asset_classes,
    group_by_asset_class,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def mixed_result():
    positions = [
        Position(ticker="VTI", amount=35000, target_percent=30),
        Position(ticker="voo", amount=5000, target_percent=30),
        Position(ticker="BND", amount=10000, target_percent=30),
        Position(ticker="ZZZZ", amount=0, target_percent=10),
    ]
    return calculate_rebalancing(positions)


@pytest.mark.parametrize("ticker, expected", [
    ("VTI", "US Stocks"),
    ("vxus", "International Stocks"),
    ("Tlt", "Bonds"),
    ("GLDM", "Gold/Commodities"),
    ("SPAXX", "Cash"),
    ("VNQ", "Real Estate"),
    ("ARKK", "Other"),
])
def test_get_asset_class(ticker, expected):
    assert get_asset_class(ticker) == expected


def test_groups_sum_members_and_sort_by_current_amount(mixed_result):
    groups = group_by_asset_class(mixed_result.positions)

    assert [g.asset_class for g in groups] == ["US Stocks", "Bonds", "Other"]

    us = groups[0]
    assert us.tickers == ["VTI", "voo"]
    assert us.ticker == "US Stocks"
    assert us.current_amount == 40000
    assert us.current_percent == pytest.approx(80)
    assert us.target_percent == 60
    assert us.target_amount == pytest.approx(30000)
    assert us.difference == pytest.approx(-10000)
    assert us.action == Action.SELL
    assert [p.ticker for p in us.positions] == ["VTI", "voo"]

    assert groups[1].action == Action.BUY
    assert groups[2].action == Action.BUY
    assert groups[2].tickers == ["ZZZZ"]


def test_group_action_can_differ_from_members():
    positions = [
        Position(ticker="VTI", amount=30000, target_percent=50),
        Position(ticker="VOO", amount=20000, target_percent=50),
    ]
    result = calculate_rebalancing(positions)
    groups = group_by_asset_class(result.positions)

    assert {p.action for p in result.positions} == {Action.BUY, Action.SELL}
    assert len(groups) == 1
    assert groups[0].difference == 0
    assert groups[0].action == Action.HOLD


def test_single_ticker_classes_keep_position_percentages(balanced_positions):
    result = calculate_rebalancing(balanced_positions)
    groups = {g.asset_class: g for g in group_by_asset_class(result.positions)}

    for position in result.positions:
        group = groups[get_asset_class(position.ticker)]
        assert group.current_percent == position.current_percent
        assert group.target_percent == position.target_percent
        assert group.difference == position.difference

    assert sum(g.current_percent for g in groups.values()) == pytest.approx(
        sum(p.current_percent for p in result.positions)
    )


def test_empty_input():
    assert group_by_asset_class([]) == []


def test_colors_are_deterministic():
    assert get_asset_class_color("Bonds") == "#10B981"
    assert get_asset_class_color("Bonds") == get_asset_class_color("Bonds")
    assert get_asset_class_color("Other") == "#EC4899"
    assert get_asset_class_color("Crypto") == "#9CA3AF"


def test_unique_asset_classes(mixed_result):
    assert get_unique_asset_classes(mixed_result.positions) == ["Bonds", "Other", "US Stocks"]
