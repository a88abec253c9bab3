"""Configuration loader with validation and singleton access."""

import logging
import yaml
from pathlib import Path
from typing import Optional

from .models import AppConfig

logger = logging.getLogger(__name__)

# Global config singleton
_config: Optional[AppConfig] = None


def load_config(config_path: str | Path) -> AppConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to the rebalancer YAML file

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config validation fails
        yaml.YAMLError: If YAML parsing fails
    """
    global _config

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        logger.error(f"Configuration root must be a mapping, got {type(raw_config).__name__}")
        raise ValueError(f"Invalid configuration: expected a mapping at the top level of {config_path}")

    try:
        _config = AppConfig(**raw_config)
    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ValueError(f"Invalid configuration: {e}") from e

    # Log loaded configuration for audit trail
    logger.info("Configuration loaded successfully:")
    logger.info(f"  Hold tolerance: ${_config.calculation.hold_tolerance}")
    logger.info(f"  Target sum tolerance: {_config.validation.target_sum_tolerance}%")
    logger.info(f"  Max ticker length: {_config.validation.max_ticker_length}")
    logger.info(f"  Fee per trade: ${_config.cost_estimate.fee_per_trade}")
    logger.info(f"  Cost basis ratio: {_config.cost_estimate.cost_basis_ratio * 100}%")
    logger.info(f"  Capital gains rate: {_config.cost_estimate.capital_gains_rate * 100}%")
    logger.info(f"  Log level: {_config.logging.level} ({_config.logging.format})")

    return _config


def get_config() -> AppConfig:
    """
    Get the current loaded configuration.

    Returns:
        Current AppConfig instance, or a defaults instance if
        load_config() has not been called
    """
    if _config is None:
        return AppConfig()
    return _config


def reset_config() -> None:
    """Forget any loaded configuration so get_config() returns defaults again."""
    global _config
    _config = None
