"""Shared fixtures for rebalancer tests."""

import pytest

from portfolio_rebalancer import Position
from rebalancer_config import reset_config


@pytest.fixture(autouse=True)
def _default_config():
    """Every test starts and ends without a loaded configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def balanced_positions():
    """$50,000 portfolio already at its 60/30/10 targets."""
    return [
        Position(ticker="VTI", amount=30000, target_percent=60),
        Position(ticker="BND", amount=15000, target_percent=30),
        Position(ticker="CASH", amount=5000, target_percent=10),
    ]


@pytest.fixture
def drifted_positions():
    """Same targets with VTI grown to $35,000 ($55,000 total)."""
    return [
        Position(ticker="VTI", amount=35000, target_percent=60),
        Position(ticker="BND", amount=15000, target_percent=30),
        Position(ticker="CASH", amount=5000, target_percent=10),
    ]


@pytest.fixture
def overweight_positions():
    """VTI far above target so a small contribution cannot reach it."""
    return [
        Position(ticker="VTI", amount=80000, target_percent=50),
        Position(ticker="VXUS", amount=10000, target_percent=30),
        Position(ticker="BND", amount=10000, target_percent=20),
    ]


@pytest.fixture
def near_target_positions():
    """$10,000 portfolio with differences of -150, +170 and -20 dollars."""
    return [
        Position(ticker="VTI", amount=6150, target_percent=60),
        Position(ticker="BND", amount=2830, target_percent=30),
        Position(ticker="CASH", amount=1020, target_percent=10),
    ]
