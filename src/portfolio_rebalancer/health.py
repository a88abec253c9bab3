"""Portfolio health scoring and drift calculation"""

import math
from typing import Sequence

from .models import CalculatedPosition, DriftResult, HealthScore


def total_drift(positions: Sequence[CalculatedPosition]) -> float:
    """Sum of absolute allocation gaps, halved since every over-weight is matched by an under-weight"""
    return sum(abs(p.current_percent - p.target_percent) for p in positions) / 2


def calculate_portfolio_health(positions: Sequence[CalculatedPosition]) -> HealthScore:
    """
    Score a portfolio from 0 to 100.

    Penalties stack: concentration in the largest position, drift from
    target, and too few or too many positions.
    """
    score = 100.0
    issues = []

    max_position = max((p.current_percent for p in positions), default=0.0)
    if max_position > 70:
        score -= min(30.0, (max_position - 70) * 2)
        issues.append(f"High concentration: {max_position:.1f}% in one position")
    elif max_position > 50:
        score -= min(15.0, max_position - 50)
        issues.append("Moderate concentration in top position")

    drift = total_drift(positions)
    if drift > 20:
        score -= 25
        issues.append(f"High portfolio drift: {drift:.1f}%")
    elif drift > 10:
        score -= 15
        issues.append(f"Moderate portfolio drift: {drift:.1f}%")
    elif drift > 5:
        score -= 5
        issues.append(f"Minor portfolio drift: {drift:.1f}%")

    count = len(positions)
    if count < 3:
        score -= 20
        issues.append(f"Low diversification: only {count} position{'' if count == 1 else 's'}")
    elif count > 20:
        score -= 10
        issues.append(f"Over-diversification: {count} positions")

    # Round half up
    final = int(math.floor(min(100.0, max(0.0, score)) + 0.5))

    return HealthScore(
        score=final,
        issues=issues,
        rating=get_health_rating(final),
        color=get_health_color(final),
    )


def calculate_drift(positions: Sequence[CalculatedPosition]) -> DriftResult:
    drift = total_drift(positions)
    return DriftResult(
        percentage=drift,
        status=get_drift_status(drift),
        color=get_drift_color(drift),
    )


def get_health_rating(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Needs Attention"


def get_health_color(score: float) -> str:
    if score >= 90:
        return "green"
    if score >= 70:
        return "blue"
    if score >= 50:
        return "yellow"
    return "red"


def get_drift_status(drift: float) -> str:
    if drift < 5:
        return "Minimal"
    if drift < 10:
        return "Moderate"
    if drift < 20:
        return "Significant"
    return "High"


def get_drift_color(drift: float) -> str:
    if drift < 5:
        return "green"
    if drift < 10:
        return "yellow"
    return "red"
