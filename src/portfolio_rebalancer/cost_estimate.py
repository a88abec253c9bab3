"""Trading fee and capital gains tax estimate for a rebalancing result"""

from typing import Optional
import logging

from rebalancer_config import CostEstimateConfig, get_config
from .calculator import percent_of
from .models import Action, CostEstimate, RebalancingResult, SellEstimate


class CostEstimator:
    """Estimate what executing a rebalancing result would cost"""

    def __init__(self, config: Optional[CostEstimateConfig] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or get_config().cost_estimate

    def estimate(self, result: RebalancingResult, fee_per_trade: Optional[float] = None) -> CostEstimate:
        """
        Estimate fees and taxes for the trades in result.

        Gains assume a cost basis of cost_basis_ratio times the sale amount
        and are taxed at capital_gains_rate. Only SELL positions are taxed.
        """
        fee = self.config.fee_per_trade if fee_per_trade is None else fee_per_trade
        positions = result.positions

        trades_needed = sum(1 for p in positions if abs(p.difference) > self.config.trade_threshold_usd)
        trading_costs = trades_needed * fee

        sell_estimates = []
        for position in positions:
            if position.action != Action.SELL:
                continue
            sell_amount = abs(position.difference)
            cost_basis = sell_amount * self.config.cost_basis_ratio
            sell_estimates.append(SellEstimate(
                ticker=position.ticker,
                sell_amount=sell_amount,
                estimated_gain=sell_amount - cost_basis,
            ))

        capital_gains = sum(s.estimated_gain for s in sell_estimates)
        estimated_taxes = capital_gains * self.config.capital_gains_rate
        total_cost = trading_costs + estimated_taxes
        cost_as_percentage = percent_of(total_cost, result.total_value)

        if cost_as_percentage > 1:
            cost_level = "High"
            self.logger.info(f"Rebalancing cost {cost_as_percentage:.3f}% of portfolio exceeds 1%")
        elif cost_as_percentage > 0.5:
            cost_level = "Moderate"
        else:
            cost_level = "Low"

        return CostEstimate(
            trades_needed=trades_needed,
            buy_count=sum(1 for p in positions if p.action == Action.BUY),
            sell_count=len(sell_estimates),
            trading_costs=trading_costs,
            sell_estimates=sell_estimates,
            capital_gains=capital_gains,
            estimated_taxes=estimated_taxes,
            total_cost=total_cost,
            cost_as_percentage=cost_as_percentage,
            cost_level=cost_level,
        )


def estimate_rebalancing_cost(result: RebalancingResult, fee_per_trade: Optional[float] = None,
                              config: Optional[CostEstimateConfig] = None) -> CostEstimate:
    return CostEstimator(config).estimate(result, fee_per_trade)
