"""Rebalancing calculation engine for standard, add-only, sell-only, contribution and withdrawal modes"""

from typing import List, Optional, Sequence, Union
import logging
import math
from rebalancer_config import CalculationConfig, get_config
from .models import (
    Action,
    AddOnlyData,
    CalculatedPosition,
    ContributionData,
    ModeData,
    Position,
    RebalanceMode,
    RebalanceRequest,
    RebalancingResult,
    SellOnlyData,
    WithdrawalData,
)


def _ratio(part: float, whole: float) -> float:
    """Division that yields nan/inf for a zero denominator instead of raising"""
    if whole == 0:
        if part == 0 or math.isnan(part):
            return math.nan
        return math.copysign(math.inf, part)
    return part / whole


def percent_of(amount: float, total: float) -> float:
    return _ratio(amount, total) * 100


class RebalanceCalculator:
    """Calculate buy/sell/hold actions that move holdings toward target allocations"""

    def __init__(self, config: Optional[CalculationConfig] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or get_config().calculation

    def calculate_request(self, request: RebalanceRequest) -> RebalancingResult:
        """Calculate a validated request produced by the input boundary"""
        return self.calculate(request.positions, request.mode, request.mode_amount)

    def calculate(self, positions: Sequence[Position],
                  mode: Union[RebalanceMode, str] = RebalanceMode.STANDARD,
                  mode_amount: Optional[float] = 0.0) -> RebalancingResult:
        """
        Calculate rebalancing actions for the given positions.

        Contribution and withdrawal modes need a positive mode_amount; with a
        non-positive amount they produce standard actions under their own mode
        label and no mode data. Input is assumed to be validated already, so a
        zero total value yields nan/inf percentages rather than an error.
        """
        mode = RebalanceMode.parse(mode)
        amount = mode_amount or 0.0
        total_value = sum(p.amount for p in positions)

        self.logger.debug(f"Calculating {mode.value} rebalance for {len(positions)} positions "
                          f"(total ${total_value:,.2f})")

        if mode == RebalanceMode.CONTRIBUTION and amount > 0:
            return self._calculate_contribution(positions, total_value, amount)

        if mode == RebalanceMode.WITHDRAWAL and amount > 0:
            return self._calculate_withdrawal(positions, total_value, amount)

        if mode in (RebalanceMode.CONTRIBUTION, RebalanceMode.WITHDRAWAL):
            self.logger.warning(f"{mode.value} requested with non-positive amount {amount}; "
                                f"falling back to standard actions")

        calculated = [self._calculate_position(pos, total_value, mode) for pos in positions]

        return RebalancingResult(
            total_value=total_value,
            positions=calculated,
            mode=mode,
            mode_data=self._summarize_mode(mode, calculated, total_value),
        )

    def _classify(self, difference: float) -> Action:
        """BUY/SELL by sign; HOLD at zero or within the configured tolerance"""
        tolerance = self.config.hold_tolerance
        if difference > tolerance:
            return Action.BUY
        if difference < -tolerance:
            return Action.SELL
        return Action.HOLD

    def _calculate_position(self, position: Position, total_value: float,
                            mode: RebalanceMode) -> CalculatedPosition:
        current_amount = position.amount
        target_amount = position.target_percent / 100 * total_value
        difference = target_amount - current_amount
        action = self._classify(difference)

        # Mode filters never show the direction the mode forbids
        if mode == RebalanceMode.ADD_ONLY and difference <= 0:
            action, difference = Action.HOLD, 0.0
        elif mode == RebalanceMode.SELL_ONLY and difference >= 0:
            action, difference = Action.HOLD, 0.0

        return CalculatedPosition(
            ticker=position.ticker,
            current_amount=current_amount,
            current_percent=percent_of(current_amount, total_value),
            target_percent=position.target_percent,
            target_amount=target_amount,
            difference=difference,
            action=action,
        )

    def _summarize_mode(self, mode: RebalanceMode, calculated: List[CalculatedPosition],
                        total_value: float) -> Optional[ModeData]:
        if mode == RebalanceMode.ADD_ONLY:
            total_to_add = sum(p.difference for p in calculated if p.action == Action.BUY)
            return AddOnlyData(total_to_add=total_to_add, new_total_value=total_value + total_to_add)

        if mode == RebalanceMode.SELL_ONLY:
            total_to_sell = sum(abs(p.difference) for p in calculated if p.action == Action.SELL)
            return SellOnlyData(total_to_sell=total_to_sell, new_total_value=total_value - total_to_sell)

        return None

    def _fit_to_amount(self, trades: List[float], weights: List[float], amount: float, label: str) -> List[float]:
        """
        Make first-pass trade sizes add up to exactly amount.

        An overshoot scales every trade down proportionally. A shortfall is
        spread over all positions proportionally to weights.

        Note: the overshoot branch is a behaviour change. The earlier calculator
        only redistributed shortfalls and let an overshoot exceed amount.
        """
        allocated = sum(trades)

        if allocated > amount:
            factor = _ratio(amount, allocated)
            self.logger.debug(f"  {label}: first pass needs ${allocated:,.2f} of ${amount:,.2f}, "
                              f"scaling by factor {factor:.4f}")
            return [trade * factor for trade in trades]

        if allocated < amount:
            remainder = amount - allocated
            total_weight = sum(weights)
            self.logger.debug(f"  {label}: distributing remainder ${remainder:,.2f} across all positions")
            return [trade + _ratio(weight, total_weight) * remainder
                    for trade, weight in zip(trades, weights)]

        return trades

    def _calculate_contribution(self, positions: Sequence[Position], total_value: float,
                                contribution: float) -> RebalancingResult:
        """Allocate new cash toward underweight positions without selling anything"""
        new_total = total_value + contribution
        target_amounts = [p.target_percent / 100 * new_total for p in positions]
        to_add = [max(0.0, target - p.amount) for p, target in zip(positions, target_amounts)]

        # Remainder follows target weights, not the shortfall
        to_add = self._fit_to_amount(
            to_add, [p.target_percent for p in positions], contribution, "Contribution"
        )

        calculated = []
        for position, target_amount, difference in zip(positions, target_amounts, to_add):
            new_amount = position.amount + difference
            calculated.append(CalculatedPosition(
                ticker=position.ticker,
                current_amount=position.amount,
                current_percent=percent_of(position.amount, total_value),
                target_percent=position.target_percent,
                target_amount=target_amount,
                difference=difference,
                action=self._classify(difference),
                new_amount=new_amount,
                new_percent=percent_of(new_amount, new_total),
            ))

        self.logger.info(f"Contribution of ${contribution:,.2f} allocated across "
                         f"{sum(1 for p in calculated if p.action == Action.BUY)} buys "
                         f"(new total ${new_total:,.2f})")

        return RebalancingResult(
            total_value=total_value,
            positions=calculated,
            mode=RebalanceMode.CONTRIBUTION,
            mode_data=ContributionData(
                contribution_amount=contribution,
                new_total_value=new_total,
                total_allocated=contribution,
            ),
        )

    def _calculate_withdrawal(self, positions: Sequence[Position], total_value: float,
                              withdrawal: float) -> RebalancingResult:
        """Raise cash by selling overweight positions without buying anything"""
        new_total = total_value - withdrawal
        target_amounts = [p.target_percent / 100 * new_total for p in positions]
        to_sell = [max(0.0, p.amount - target) for p, target in zip(positions, target_amounts)]

        # Remainder follows current holdings, not target weights
        to_sell = self._fit_to_amount(
            to_sell, [p.amount for p in positions], withdrawal, "Withdrawal"
        )

        calculated = []
        for position, target_amount, sale in zip(positions, target_amounts, to_sell):
            new_amount = position.amount - sale
            calculated.append(CalculatedPosition(
                ticker=position.ticker,
                current_amount=position.amount,
                current_percent=percent_of(position.amount, total_value),
                target_percent=position.target_percent,
                target_amount=target_amount,
                difference=-sale,
                action=self._classify(-sale),
                new_amount=new_amount,
                new_percent=percent_of(new_amount, new_total),
            ))

        self.logger.info(f"Withdrawal of ${withdrawal:,.2f} raised from "
                         f"{sum(1 for p in calculated if p.action == Action.SELL)} sells "
                         f"(new total ${new_total:,.2f})")

        return RebalancingResult(
            total_value=total_value,
            positions=calculated,
            mode=RebalanceMode.WITHDRAWAL,
            mode_data=WithdrawalData(
                withdrawal_amount=withdrawal,
                new_total_value=new_total,
                total_sold=withdrawal,
            ),
        )


def calculate_rebalancing(positions: Sequence[Position],
                          mode: Union[RebalanceMode, str] = RebalanceMode.STANDARD,
                          mode_amount: Optional[float] = 0.0,
                          config: Optional[CalculationConfig] = None) -> RebalancingResult:
    """Calculate rebalancing actions with a fresh calculator"""
    return RebalanceCalculator(config).calculate(positions, mode, mode_amount)
