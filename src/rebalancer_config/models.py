"""Pydantic models for rebalancer configuration with validation."""

from typing import Literal
from pydantic import BaseModel, Field, field_validator


class CalculationConfig(BaseModel):
    """Rebalancing engine parameters."""

    hold_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Differences within this many dollars are classified as HOLD (0 = exact zero only)"
    )


class ValidationConfig(BaseModel):
    """Input boundary checks applied before the engine runs."""

    target_sum_tolerance: float = Field(
        default=0.01,
        ge=0.0,
        le=1.0,
        description="Allowed deviation of summed target percentages from 100"
    )
    max_ticker_length: int = Field(
        default=10,
        ge=1,
        le=32,
        description="Maximum accepted ticker length"
    )
    max_target_percent: float = Field(
        default=100.0,
        gt=0.0,
        le=100.0,
        description="Upper bound for a single target percentage"
    )


class CostEstimateConfig(BaseModel):
    """Trading fee and tax assumptions for cost estimates."""

    fee_per_trade: float = Field(
        default=0.0,
        ge=0.0,
        le=1000.0,
        description="Flat fee charged per trade in USD"
    )
    cost_basis_ratio: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Assumed cost basis as a fraction of the sale amount"
    )
    capital_gains_rate: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Assumed long-term capital gains tax rate"
    )
    trade_threshold_usd: float = Field(
        default=0.01,
        ge=0.0,
        le=100.0,
        description="Differences at or below this amount do not count as trades"
    )


class ComparisonConfig(BaseModel):
    """Thresholds for model portfolio suggestions."""

    stocks_threshold_percent: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="Stock allocation gap that triggers an aggressiveness note"
    )
    asset_class_threshold_percent: float = Field(
        default=10.0,
        ge=0.0,
        le=100.0,
        description="Per asset class gap that triggers an over/underweight note"
    )
    bonds_threshold_percent: float = Field(
        default=10.0,
        ge=0.0,
        le=100.0,
        description="Bond allocation gap that triggers a stability note"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Root log level"
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="Log line format: text=human readable, json=structured"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level is one of the standard logging level names."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level


class AppConfig(BaseModel):
    """Root rebalancer configuration."""

    calculation: CalculationConfig = Field(
        default_factory=CalculationConfig,
        description="Rebalancing engine settings"
    )
    validation: ValidationConfig = Field(
        default_factory=ValidationConfig,
        description="Input validation settings"
    )
    cost_estimate: CostEstimateConfig = Field(
        default_factory=CostEstimateConfig,
        description="Cost estimate assumptions"
    )
    comparison: ComparisonConfig = Field(
        default_factory=ComparisonConfig,
        description="Model portfolio comparison settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )
