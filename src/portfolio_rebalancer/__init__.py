from .calculator import RebalanceCalculator, calculate_rebalancing
from .asset_classes import get_asset_class, group_by_asset_class, get_asset_class_color, get_unique_asset_classes
from .health import calculate_portfolio_health, calculate_drift
from .model_portfolios import MODEL_PORTFOLIOS, compare_to_model, generate_suggestions, find_closest_model
from .cost_estimate import CostEstimator, estimate_rebalancing_cost
from .inputs import parse_position, parse_csv, parse_text, validate_target_total, prepare_request
from .report import format_currency, format_percent, summarize_result
from .models import (
    # Input models
    Position,
    RebalanceRequest,
    RebalanceMode,
    # Engine output models
    Action,
    CalculatedPosition,
    RebalancingResult,
    AddOnlyData,
    SellOnlyData,
    ContributionData,
    WithdrawalData,
    # Derived views
    AssetClassGroup,
    HealthScore,
    DriftResult,
    ModelPortfolio,
    ModelComparison,
    ClosestModel,
    CostEstimate,
    SellEstimate,
)
from .exceptions import (
    RebalancerError,
    InvalidPositionError,
    PortfolioImportError,
    TargetAllocationError,
    ModeAmountError,
    UnknownModeError,
    UnknownModelPortfolioError,
)

__version__ = "1.0.0"

__all__ = [
    "RebalanceCalculator",
    "calculate_rebalancing",
    "get_asset_class",
    "group_by_asset_class",
    "get_asset_class_color",
    "get_unique_asset_classes",
    "calculate_portfolio_health",
    "calculate_drift",
    "MODEL_PORTFOLIOS",
    "compare_to_model",
    "generate_suggestions",
    "find_closest_model",
    "CostEstimator",
    "estimate_rebalancing_cost",
    "parse_position",
    "parse_csv",
    "parse_text",
    "validate_target_total",
    "prepare_request",
    "format_currency",
    "format_percent",
    "summarize_result",
    "Position",
    "RebalanceRequest",
    "RebalanceMode",
    "Action",
    "CalculatedPosition",
    "RebalancingResult",
    "AddOnlyData",
    "SellOnlyData",
    "ContributionData",
    "WithdrawalData",
    "AssetClassGroup",
    "HealthScore",
    "DriftResult",
    "ModelPortfolio",
    "ModelComparison",
    "ClosestModel",
    "CostEstimate",
    "SellEstimate",
    "RebalancerError",
    "InvalidPositionError",
    "PortfolioImportError",
    "TargetAllocationError",
    "ModeAmountError",
    "UnknownModeError",
    "UnknownModelPortfolioError",
    "__version__",
]
