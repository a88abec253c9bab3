"""Exceptions raised by the rebalancer input boundary and engine"""

from typing import List, Optional


class RebalancerError(Exception):
    """Base class for all rebalancer errors"""
    pass


class InvalidPositionError(RebalancerError, ValueError):
    """Raised when a single position has an unusable ticker, amount or target"""
    pass


class PortfolioImportError(RebalancerError, ValueError):
    """Raised when imported CSV or free text contains unparseable lines"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class TargetAllocationError(RebalancerError, ValueError):
    """Raised when target percentages do not add up to 100%"""

    def __init__(self, message: str, total: float):
        super().__init__(message)
        self.total = total


class ModeAmountError(RebalancerError, ValueError):
    """Raised when a contribution or withdrawal amount is missing or out of range"""
    pass


class UnknownModeError(RebalancerError, ValueError):
    """Raised when a rebalancing mode name is not recognised"""
    pass


class UnknownModelPortfolioError(RebalancerError, KeyError):
    """Raised when a model portfolio key does not exist"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
