"""Tests for configuration models and the YAML loader."""

import pytest
from pydantic import ValidationError

from rebalancer_config import (
    AppConfig,
    CalculationConfig,
    LoggingConfig,
    get_config,
    load_config,
    reset_config,
)

pytestmark = pytest.mark.unit


def test_defaults():
    config = AppConfig()

    assert config.calculation.hold_tolerance == 0.0
    assert config.validation.target_sum_tolerance == 0.01
    assert config.validation.max_ticker_length == 10
    assert config.cost_estimate.cost_basis_ratio == 0.8
    assert config.cost_estimate.capital_gains_rate == 0.15
    assert config.comparison.stocks_threshold_percent == 5
    assert config.logging.level == "INFO"
    assert config.logging.format == "text"


def test_get_config_returns_defaults_before_loading():
    assert get_config() == AppConfig()


def test_load_config(tmp_path, caplog):
    config_file = tmp_path / "rebalancer.yaml"
    config_file.write_text(
        "calculation:\n"
        "  hold_tolerance: 0.01\n"
        "validation:\n"
        "  target_sum_tolerance: 0.05\n"
        "logging:\n"
        "  level: debug\n"
        "  format: json\n"
    )

    with caplog.at_level("INFO", logger="rebalancer_config.loader"):
        config = load_config(config_file)

    assert config.calculation.hold_tolerance == 0.01
    assert config.validation.target_sum_tolerance == 0.05
    assert config.logging.level == "DEBUG"
    assert config.logging.format == "json"
    assert get_config() is config
    assert "Configuration loaded successfully" in caplog.text

    reset_config()
    assert get_config() == AppConfig()


def test_empty_file_gives_defaults(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")
    assert load_config(str(config_file)) == AppConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("content", [
    "calculation:\n  hold_tolerance: -1\n",
    "validation:\n  max_ticker_length: 0\n",
    "cost_estimate:\n  capital_gains_rate: 2\n",
    "logging:\n  format: xml\n",
    "- just\n- a list\n",
])
def test_invalid_config(tmp_path, content):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text(content)

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(config_file)


def test_log_level_validation():
    assert LoggingConfig(level="warning").level == "WARNING"
    with pytest.raises(ValidationError, match="Invalid log level 'LOUD'"):
        LoggingConfig(level="LOUD")


def test_section_bounds():
    with pytest.raises(ValidationError):
        CalculationConfig(hold_tolerance=1000)
