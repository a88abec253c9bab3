"""Asset class detection and grouping of calculated positions"""

from typing import Dict, List, Sequence

from .models import Action, AssetClassGroup, CalculatedPosition

OTHER = "Other"

ASSET_CLASS_MAP: Dict[str, str] = {
    # US Stocks
    "VTI": "US Stocks",
    "VOO": "US Stocks",
    "SPY": "US Stocks",
    "VTSAX": "US Stocks",
    "VT": "US Stocks",
    "VTSMX": "US Stocks",
    "SCHB": "US Stocks",
    "ITOT": "US Stocks",
    "IVV": "US Stocks",
    "VUG": "US Stocks",
    "VTV": "US Stocks",

    # International Stocks
    "VXUS": "International Stocks",
    "VTIAX": "International Stocks",
    "VEU": "International Stocks",
    "VGTSX": "International Stocks",
    "IXUS": "International Stocks",
    "SCHF": "International Stocks",
    "VWO": "International Stocks",
    "VWILX": "International Stocks",
    "IEMG": "International Stocks",

    # Bonds
    "BND": "Bonds",
    "AGG": "Bonds",
    "VBTLX": "Bonds",
    "VBMFX": "Bonds",
    "BIV": "Bonds",
    "VCIT": "Bonds",
    "VCLT": "Bonds",
    "TLT": "Bonds",
    "IEF": "Bonds",
    "SHY": "Bonds",
    "VGIT": "Bonds",
    "VGLT": "Bonds",

    # Gold/Commodities
    "GLD": "Gold/Commodities",
    "IAU": "Gold/Commodities",
    "GLDM": "Gold/Commodities",
    "SLV": "Gold/Commodities",
    "DBC": "Gold/Commodities",
    "GSG": "Gold/Commodities",

    # Cash
    "CASH": "Cash",
    "VMFXX": "Cash",
    "VMMXX": "Cash",
    "SPAXX": "Cash",
    "FDRXX": "Cash",

    # Real Estate
    "VNQ": "Real Estate",
    "VGSLX": "Real Estate",
    "REIT": "Real Estate",
    "SCHH": "Real Estate",
    "IYR": "Real Estate",
}

ASSET_CLASS_COLORS: Dict[str, str] = {
    "US Stocks": "#3B82F6",
    "International Stocks": "#8B5CF6",
    "Bonds": "#10B981",
    "Gold/Commodities": "#F59E0B",
    "Cash": "#6B7280",
    "Real Estate": "#EF4444",
    OTHER: "#EC4899",
}

DEFAULT_COLOR = "#9CA3AF"


def get_asset_class(ticker: str) -> str:
    """Map a ticker to its asset class, case-insensitively; unknown tickers are Other"""
    return ASSET_CLASS_MAP.get(ticker.upper(), OTHER)


def group_by_asset_class(positions: Sequence[CalculatedPosition]) -> List[AssetClassGroup]:
    """
    Aggregate calculated positions by asset class.

    Amounts, percentages and differences are summed per class and the action
    is re-derived from the summed difference, so a group can hold even when
    its members buy and sell. Groups are ordered largest current amount first.
    """
    groups: Dict[str, AssetClassGroup] = {}

    for position in positions:
        asset_class = get_asset_class(position.ticker)
        group = groups.get(asset_class)
        if group is None:
            group = groups[asset_class] = AssetClassGroup(asset_class=asset_class)

        group.tickers.append(position.ticker)
        group.current_amount += position.current_amount
        group.current_percent += position.current_percent
        group.target_percent += position.target_percent
        group.target_amount += position.target_amount
        group.difference += position.difference
        group.positions.append(position)

    for group in groups.values():
        if group.difference > 0:
            group.action = Action.BUY
        elif group.difference < 0:
            group.action = Action.SELL
        else:
            group.action = Action.HOLD

    return sorted(groups.values(), key=lambda g: g.current_amount, reverse=True)


def get_asset_class_color(asset_class: str) -> str:
    """Chart colour for an asset class"""
    return ASSET_CLASS_COLORS.get(asset_class, DEFAULT_COLOR)


def get_unique_asset_classes(positions: Sequence[CalculatedPosition]) -> List[str]:
    return sorted({get_asset_class(p.ticker) for p in positions})
