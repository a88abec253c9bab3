"""Model portfolio definitions and comparison of a user's asset-class mix against them"""

import logging
from typing import Dict, List, Optional, Sequence

from rebalancer_config import ComparisonConfig, get_config
from .exceptions import UnknownModelPortfolioError
from .models import AssetClassGroup, ClosestModel, ModelComparison, ModelPortfolio

logger = logging.getLogger(__name__)

MODEL_PORTFOLIOS: Dict[str, ModelPortfolio] = {
    "60-40-classic": ModelPortfolio(
        key="60-40-classic",
        name="60/40 Classic",
        description="Traditional balanced portfolio",
        allocations={"US Stocks": 60, "Bonds": 40},
        risk_level="Moderate",
    ),
    "three-fund": ModelPortfolio(
        key="three-fund",
        name="Three-Fund Portfolio",
        description="Diversified global portfolio",
        allocations={"US Stocks": 60, "International Stocks": 30, "Bonds": 10},
        risk_level="Moderate",
    ),
    "aggressive-growth": ModelPortfolio(
        key="aggressive-growth",
        name="Aggressive Growth",
        description="High equity allocation",
        allocations={"US Stocks": 60, "International Stocks": 20, "Bonds": 20},
        risk_level="Aggressive",
    ),
    "conservative": ModelPortfolio(
        key="conservative",
        name="Conservative",
        description="Low risk, income focused",
        allocations={"US Stocks": 25, "International Stocks": 15, "Bonds": 60},
        risk_level="Conservative",
    ),
    "moderate": ModelPortfolio(
        key="moderate",
        name="Moderate",
        description="Balanced growth and income",
        allocations={"US Stocks": 42, "International Stocks": 18, "Bonds": 40},
        risk_level="Moderate",
    ),
}


def calculate_asset_class_allocations(groups: Sequence[AssetClassGroup]) -> Dict[str, float]:
    return {group.asset_class: group.current_percent for group in groups}


def calculate_total_stocks(allocations: Dict[str, float]) -> float:
    """US plus international stock percentage"""
    return allocations.get("US Stocks", 0.0) + allocations.get("International Stocks", 0.0)


def calculate_total_bonds(allocations: Dict[str, float]) -> float:
    return allocations.get("Bonds", 0.0)


def compare_to_model(groups: Sequence[AssetClassGroup], model_key: str) -> ModelComparison:
    """
    Compare grouped positions to a model portfolio.

    Differences are user minus model for every asset class present on
    either side, in first-seen order (user classes first).

    Raises:
        UnknownModelPortfolioError: If model_key is not a known model
    """
    model = MODEL_PORTFOLIOS.get(model_key)
    if model is None:
        raise UnknownModelPortfolioError(f"Unknown model portfolio '{model_key}'")

    user_allocations = calculate_asset_class_allocations(groups)
    model_allocations = dict(model.allocations)

    all_asset_classes = list(dict.fromkeys([*user_allocations, *model_allocations]))
    differences = {
        asset_class: user_allocations.get(asset_class, 0.0) - model_allocations.get(asset_class, 0.0)
        for asset_class in all_asset_classes
    }

    return ModelComparison(
        model=model,
        user_allocations=user_allocations,
        model_allocations=model_allocations,
        differences=differences,
        stocks_diff=calculate_total_stocks(user_allocations) - calculate_total_stocks(model_allocations),
        bonds_diff=calculate_total_bonds(user_allocations) - calculate_total_bonds(model_allocations),
        all_asset_classes=all_asset_classes,
    )


def generate_suggestions(comparison: ModelComparison, config: Optional[ComparisonConfig] = None) -> List[str]:
    """Human readable notes on how the portfolio differs from the model"""
    config = config or get_config().comparison
    name = comparison.model.name
    suggestions = []

    stocks_diff = comparison.stocks_diff
    if abs(stocks_diff) > config.stocks_threshold_percent:
        if stocks_diff > 0:
            suggestions.append(
                f"Your portfolio is {abs(stocks_diff):.1f}% more aggressive than {name} (higher stock allocation)"
            )
        else:
            suggestions.append(
                f"Your portfolio is {abs(stocks_diff):.1f}% more conservative than {name} (lower stock allocation)"
            )

    for asset_class, diff in comparison.differences.items():
        if abs(diff) > config.asset_class_threshold_percent:
            weight = "overweight" if diff > 0 else "underweight"
            suggestions.append(
                f"You're {weight} {asset_class} by {abs(diff):.1f}% compared to {name}"
            )

    bonds_diff = comparison.bonds_diff
    if abs(bonds_diff) > config.bonds_threshold_percent:
        if bonds_diff > 0:
            suggestions.append(
                f"You have {abs(bonds_diff):.1f}% more bonds than {name}, "
                f"providing more stability but potentially lower returns"
            )
        else:
            suggestions.append(
                f"You have {abs(bonds_diff):.1f}% fewer bonds than {name}, "
                f"increasing growth potential but also volatility"
            )

    if not suggestions:
        suggestions.append(f"Your portfolio closely matches the {name} allocation")

    return suggestions


def find_closest_model(groups: Sequence[AssetClassGroup]) -> ClosestModel:
    """Model portfolio with the smallest total absolute allocation difference"""
    closest: Optional[ClosestModel] = None

    for key, model in MODEL_PORTFOLIOS.items():
        comparison = compare_to_model(groups, key)
        total_diff = sum(abs(diff) for diff in comparison.differences.values())
        if closest is None or total_diff < closest.difference:
            closest = ClosestModel(key=key, model=model, difference=total_diff)

    logger.debug(f"Closest model portfolio: {closest.key} (total difference {closest.difference:.1f}%)")
    return closest
