"""Currency/percent formatting and plain-text summaries of rebalancing results"""

from typing import List

from .models import (
    Action,
    AddOnlyData,
    ContributionData,
    RebalanceMode,
    RebalancingResult,
    SellOnlyData,
    WithdrawalData,
)


def format_currency(value: float) -> str:
    """Format as US dollars, e.g. 1234.5 -> '$1,234.50' and -2000 -> '-$2,000.00'"""
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"${value:,.2f}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def summarize_result(result: RebalancingResult) -> List[str]:
    """
    Describe a result the way the results banner reads, one line per entry.

    The first line always carries the total portfolio value; the rest depend
    on the mode. Positions that hold are omitted.
    """
    lines = [f"Total Portfolio Value: {format_currency(result.total_value)}"]
    data = result.mode_data
    buys = [p for p in result.positions if p.action == Action.BUY]
    sells = [p for p in result.positions if p.action == Action.SELL]

    if result.mode == RebalanceMode.ADD_ONLY and isinstance(data, AddOnlyData):
        if data.total_to_add > 0:
            lines.append(f"Total to add: {format_currency(data.total_to_add)}")
            lines.extend(f"  {p.ticker}: +{format_currency(p.difference)}" for p in buys)
        else:
            lines.append("No purchases needed")

    elif result.mode == RebalanceMode.SELL_ONLY and isinstance(data, SellOnlyData):
        if data.total_to_sell > 0:
            lines.append(f"Total to sell: {format_currency(data.total_to_sell)}")
            lines.extend(f"  {p.ticker}: {format_currency(abs(p.difference))}" for p in sells)
        else:
            lines.append("No sales needed")

    elif result.mode == RebalanceMode.CONTRIBUTION and isinstance(data, ContributionData):
        lines.append(f"Invest {format_currency(data.contribution_amount)}")
        lines.extend(f"  {p.ticker}: {format_currency(p.difference)}" for p in buys)
        lines.append(f"New portfolio value: {format_currency(data.new_total_value)}")

    elif result.mode == RebalanceMode.WITHDRAWAL and isinstance(data, WithdrawalData):
        lines.append(f"Withdraw {format_currency(data.withdrawal_amount)}")
        lines.extend(f"  {p.ticker}: Sell {format_currency(abs(p.difference))}" for p in sells)
        lines.append(f"New portfolio value: {format_currency(data.new_total_value)}")

    else:
        trades = [p for p in result.positions if p.action != Action.HOLD]
        if not trades:
            lines.append("Portfolio is balanced; no trades needed")
        for p in trades:
            lines.append(
                f"  {p.action.value} {p.ticker}: {format_currency(abs(p.difference))} "
                f"({format_percent(p.current_percent)} -> {format_percent(p.target_percent)})"
            )

    return lines
