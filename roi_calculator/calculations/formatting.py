"""
Display Formatting

Formatting rules shared by the calculator display and the exported report.
Both consumers must render a value identically, so every rounding rule lives
here.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

from roi_calculator.calculations.roi import DerivedMetrics

NOT_APPLICABLE = "N/A"


def _round_half_up(value: float, places: int = 0) -> Decimal:
    """Round away from zero on ties, using the exact binary value."""
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    # Drop the sign of negative zero
    return rounded if rounded != 0 else abs(rounded)


def _round_to_int(value: float) -> int:
    """Round ties toward positive infinity."""
    return math.floor(value + 0.5)


def format_currency(value: float) -> str:
    """Whole-dollar currency with thousands separators, e.g. $1,234,500."""
    rounded = _round_half_up(value)
    if rounded < 0:
        return f"-${-rounded:,.0f}"
    return f"${rounded:,.0f}"


def format_currency_compact(value: float) -> str:
    """
    Short currency used for chart axes and headline figures.

    Millions keep one decimal ("1.2M"), thousands are rounded ("12K"),
    anything smaller falls back to format_currency.
    """
    if abs(value) >= 1_000_000:
        return f"{_round_half_up(value / 1_000_000, 1)}M"
    if abs(value) >= 1_000:
        return f"{_round_to_int(value / 1_000)}K"
    return format_currency(value)


def format_percent(value: float) -> str:
    return f"{_round_to_int(value)}%"


def format_months(value: Optional[float]) -> str:
    """Break-even period with one decimal, or N/A when there is none."""
    if value is None or not math.isfinite(value) or value <= 0:
        return NOT_APPLICABLE
    return f"{_round_half_up(value, 1)} mo"


def format_number(value: float) -> str:
    return f"{_round_half_up(value):,.0f}"


def format_hours(value: float) -> str:
    return f"{format_number(value)} hrs"


def format_years(value: int) -> str:
    return f"{value} years"


def format_metrics(metrics: DerivedMetrics) -> Dict[str, str]:
    """
    Headline display strings for a set of metrics.

    Returns:
        Dict keyed like the DerivedMetrics fields they render
    """
    return {
        "annual_cost": format_currency(metrics.annual_cost),
        "total_investment": format_currency(metrics.total_investment),
        "productivity_gains": format_currency(metrics.productivity_gains),
        "turnover_reduction_savings": format_currency(
            metrics.turnover_reduction_savings
        ),
        "training_time_savings": format_currency(metrics.training_time_savings),
        "total_benefit": format_currency(metrics.total_benefit),
        "net_benefit": format_currency_compact(metrics.net_benefit),
        "total_roi_percent": format_percent(metrics.total_roi_percent),
        "months_to_break_even": format_months(metrics.months_to_break_even),
    }
