"""Configuration management for the portfolio rebalancer."""

from .models import (
    AppConfig,
    CalculationConfig,
    ValidationConfig,
    CostEstimateConfig,
    ComparisonConfig,
    LoggingConfig,
)
from .loader import load_config, get_config, reset_config

__all__ = [
    "AppConfig",
    "CalculationConfig",
    "ValidationConfig",
    "CostEstimateConfig",
    "ComparisonConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
]
