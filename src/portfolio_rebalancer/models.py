from enum import Enum
from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnknownModeError


class Action(str, Enum):
    """Trade direction for a position or asset class"""
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RebalanceMode(str, Enum):
    """Rebalancing policies governing which trades are permitted"""
    STANDARD = "standard"
    ADD_ONLY = "add-only"
    SELL_ONLY = "sell-only"
    CONTRIBUTION = "contribution"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def parse(cls, value: Union[str, "RebalanceMode"]) -> "RebalanceMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise UnknownModeError(f"Unknown rebalancing mode '{value}'. Expected one of: {allowed}") from None


# Input models
class Position(BaseModel):
    """A holding with parsed numeric amount and target percentage"""
    model_config = ConfigDict(frozen=True)

    ticker: str
    amount: float
    target_percent: float


class RebalanceRequest(BaseModel):
    """Validated engine input produced by the input boundary"""
    model_config = ConfigDict(frozen=True)

    positions: List[Position]
    mode: RebalanceMode = RebalanceMode.STANDARD
    mode_amount: float = 0.0


# Engine output models
class CalculatedPosition(BaseModel):
    """Per-position rebalancing calculation"""
    model_config = ConfigDict(frozen=True)

    ticker: str
    current_amount: float
    current_percent: float
    target_percent: float
    target_amount: float
    difference: float
    action: Action
    new_amount: Optional[float] = None  # contribution/withdrawal only
    new_percent: Optional[float] = None


class AddOnlyData(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_to_add: float
    new_total_value: float


class SellOnlyData(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_to_sell: float
    new_total_value: float


class ContributionData(BaseModel):
    model_config = ConfigDict(frozen=True)

    contribution_amount: float
    new_total_value: float
    total_allocated: float


class WithdrawalData(BaseModel):
    model_config = ConfigDict(frozen=True)

    withdrawal_amount: float
    new_total_value: float
    total_sold: float


ModeData = Union[AddOnlyData, SellOnlyData, ContributionData, WithdrawalData]


class RebalancingResult(BaseModel):
    """Result of a rebalancing calculation"""
    model_config = ConfigDict(frozen=True)

    total_value: float
    positions: List[CalculatedPosition]
    mode: RebalanceMode
    mode_data: Optional[ModeData] = None
    narrative: Optional[str] = None  # attached by callers, never by the engine

    def with_narrative(self, narrative: str) -> "RebalancingResult":
        """Return a copy carrying an externally produced explanation"""
        return self.model_copy(update={"narrative": narrative})


# Derived views
class AssetClassGroup(BaseModel):
    """Positions aggregated under one asset class"""
    asset_class: str
    tickers: List[str] = Field(default_factory=list)
    current_amount: float = 0.0
    current_percent: float = 0.0
    target_percent: float = 0.0
    target_amount: float = 0.0
    difference: float = 0.0
    positions: List[CalculatedPosition] = Field(default_factory=list)
    action: Action = Action.HOLD

    @property
    def ticker(self) -> str:
        """Asset class name, so groups can be rendered like positions"""
        return self.asset_class


class HealthScore(BaseModel):
    score: int = Field(ge=0, le=100)
    issues: List[str] = Field(default_factory=list)
    rating: Literal["Excellent", "Good", "Fair", "Needs Attention"]
    color: Literal["green", "blue", "yellow", "red"]


class DriftResult(BaseModel):
    percentage: float
    status: Literal["Minimal", "Moderate", "Significant", "High"]
    color: Literal["green", "yellow", "red"]


class ModelPortfolio(BaseModel):
    """Reference asset-class allocation"""
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str
    allocations: Dict[str, float]
    risk_level: Literal["Conservative", "Moderate", "Aggressive"]


class ModelComparison(BaseModel):
    """User allocation compared against a model portfolio"""
    model_config = ConfigDict(protected_namespaces=())

    model: ModelPortfolio
    user_allocations: Dict[str, float]
    model_allocations: Dict[str, float]
    differences: Dict[str, float]
    stocks_diff: float
    bonds_diff: float
    all_asset_classes: List[str]


class ClosestModel(BaseModel):
    key: str
    model: ModelPortfolio
    difference: float


class SellEstimate(BaseModel):
    ticker: str
    sell_amount: float
    estimated_gain: float


class CostEstimate(BaseModel):
    """Estimated fees and taxes triggered by a rebalancing result"""
    trades_needed: int
    buy_count: int
    sell_count: int
    trading_costs: float
    sell_estimates: List[SellEstimate] = Field(default_factory=list)
    capital_gains: float
    estimated_taxes: float
    total_cost: float
    cost_as_percentage: float
    cost_level: Literal["Low", "Moderate", "High"]
