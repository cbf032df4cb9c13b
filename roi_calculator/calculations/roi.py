"""
ROI Calculations

Turns a set of deployment assumptions into a multi-year cost/benefit
projection for a PowerShops subscription. The same result feeds the live
calculator and the exported report, so everything here is a pure function
of its input.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

# Model constants
PRODUCTIVITY_BOOST_RATE = 0.05
TURNOVER_REDUCTION_RATE = 0.20
TRAINING_HOURS_SAVED_PER_EMPLOYEE = 10
WORKING_HOURS_PER_YEAR = 2080  # 52 weeks * 40 hours

# Per-employee subscription price for contract years 1-5
ANNUAL_COST_PER_EMPLOYEE_BY_YEAR = (500, 475, 450, 425, 400)

# (min, max, step) for each assumption as offered by the calculator sliders
ASSUMPTION_RANGES: Dict[str, Tuple[int, int, int]] = {
    "employees": (10, 2000, 10),
    "salary": (20000, 200000, 1000),
    "training_hours": (0, 100, 1),
    "turnover": (0, 100, 1),
    "replace_cost": (5000, 100000, 1000),
    "term": (1, 5, 1),
}


@dataclass(frozen=True)
class Assumptions:
    """Business assumptions describing a hypothetical deployment."""

    employees: int
    salary: float  # Annual salary per employee
    training_hours: int  # Training hours per employee per year
    turnover: float  # Annual attrition rate, 0-100
    replace_cost: float  # Cost to replace one employee
    term: int  # Subscription term in years

    def clamped(self) -> "Assumptions":
        """
        Return a copy with every field clamped into its slider range.

        The term only has a lower bound; the engine holds the last price
        tier for terms longer than the published table.
        """
        values = {}
        for name, (low, high, _step) in ASSUMPTION_RANGES.items():
            value = getattr(self, name)
            if name == "term":
                values[name] = max(low, value)
            else:
                values[name] = min(max(value, low), high)
        return replace(self, **values)


DEFAULT_ASSUMPTIONS = Assumptions(
    **{name: low for name, (low, _high, _step) in ASSUMPTION_RANGES.items()}
)


@dataclass(frozen=True)
class CashFlowPoint:
    """Cumulative benefit and cost at the end of a contract year."""

    year: int
    cumulative_benefit: float
    cumulative_cost: float

    @property
    def year_label(self) -> str:
        return f"Year {self.year}"

    @property
    def net_cash_flow(self) -> float:
        return self.cumulative_benefit - self.cumulative_cost

    def to_dict(self) -> Dict:
        return {
            "year": self.year_label,
            "cumulative_benefit": self.cumulative_benefit,
            "cumulative_cost": self.cumulative_cost,
            "net_cash_flow": self.net_cash_flow,
        }


@dataclass(frozen=True)
class DerivedMetrics:
    """Financial outputs computed from one Assumptions value."""

    annual_cost: float
    total_investment: float
    annual_benefit: float
    productivity_gains: float
    turnover_reduction_savings: float
    training_time_savings: float
    total_benefit: float
    net_benefit: float
    total_roi_percent: float
    months_to_break_even: Optional[float]  # None when there is no break-even
    cash_flow_series: Tuple[CashFlowPoint, ...]

    @property
    def productivity_share_percent(self) -> int:
        """Productivity gains as a rounded percentage of total benefit."""
        if self.total_benefit <= 0:
            return 0
        return int(self.productivity_gains / self.total_benefit * 100 + 0.5)

    def benefit_breakdown(self) -> List[Dict]:
        """
        Benefit components with their share of the total benefit.

        Returns:
            List of {"label", "value", "percentage"} rows in display order
        """
        components = [
            ("Productivity Gains", self.productivity_gains),
            ("Turnover Reduction Savings", self.turnover_reduction_savings),
            ("Training Time Savings", self.training_time_savings),
        ]
        return [
            {
                "label": label,
                "value": value,
                "percentage": (
                    value / self.total_benefit * 100 if self.total_benefit > 0 else 0.0
                ),
            }
            for label, value in components
        ]

    def to_dict(self) -> Dict:
        return {
            "annual_cost": self.annual_cost,
            "total_investment": self.total_investment,
            "annual_benefit": self.annual_benefit,
            "productivity_gains": self.productivity_gains,
            "turnover_reduction_savings": self.turnover_reduction_savings,
            "training_time_savings": self.training_time_savings,
            "total_benefit": self.total_benefit,
            "net_benefit": self.net_benefit,
            "total_roi_percent": self.total_roi_percent,
            "months_to_break_even": self.months_to_break_even,
            "cash_flow_series": [point.to_dict() for point in self.cash_flow_series],
        }


def cost_rate_for_year(year: int) -> int:
    """
    Per-employee subscription price for a contract year.

    Args:
        year: Contract year, 1-based

    Returns:
        Price for that year; years past the table reuse the final tier
    """
    index = min(max(year, 1), len(ANNUAL_COST_PER_EMPLOYEE_BY_YEAR)) - 1
    return ANNUAL_COST_PER_EMPLOYEE_BY_YEAR[index]


def annual_cost_for_year(employees: int, year: int) -> float:
    """Subscription cost for the whole headcount in a given contract year."""
    return employees * cost_rate_for_year(year)


def calculate_total_investment(employees: int, term: int) -> float:
    """Sum of tiered yearly subscription costs over the term."""
    return sum(annual_cost_for_year(employees, year) for year in range(1, term + 1))


def calculate_annual_benefits(assumptions: Assumptions) -> Dict[str, float]:
    """
    Calculate the yearly benefit components.

    Training savings use a fixed number of hours saved per employee;
    the training_hours assumption does not enter the formula.

    Returns:
        Dict with productivity, turnover and training components
    """
    hourly_rate = assumptions.salary / WORKING_HOURS_PER_YEAR
    return {
        "productivity": (
            assumptions.employees * assumptions.salary * PRODUCTIVITY_BOOST_RATE
        ),
        "turnover": (
            assumptions.employees
            * (assumptions.turnover / 100)
            * TURNOVER_REDUCTION_RATE
            * assumptions.replace_cost
        ),
        "training": (
            assumptions.employees * TRAINING_HOURS_SAVED_PER_EMPLOYEE * hourly_rate
        ),
    }


def calculate_break_even_months(
    total_investment: float, annual_benefit: float, annual_cost: float
) -> Optional[float]:
    """
    Months until cumulative benefit overtakes cumulative cost.

    Only defined when the benefit run-rate exceeds the average yearly cost.

    Returns:
        Months as a positive float, or None if there is no break-even
    """
    if annual_benefit <= 0 or annual_benefit <= annual_cost:
        return None

    months = total_investment / (annual_benefit - annual_cost) * 12
    if months <= 0 or months == float("inf"):
        return None
    return months


def generate_cash_flow_series(
    employees: int, term: int, annual_benefit: float
) -> Tuple[CashFlowPoint, ...]:
    """
    Build cumulative benefit and cost for years 0 through term.

    Costs are accumulated year by year from the price tiers rather than
    projected from the average cost.
    """
    series = [CashFlowPoint(year=0, cumulative_benefit=0.0, cumulative_cost=0.0)]
    cumulative_cost = 0.0

    for year in range(1, term + 1):
        cumulative_cost += annual_cost_for_year(employees, year)
        series.append(
            CashFlowPoint(
                year=year,
                cumulative_benefit=annual_benefit * year,
                cumulative_cost=cumulative_cost,
            )
        )

    return tuple(series)


def compute(assumptions: Assumptions) -> DerivedMetrics:
    """
    Calculate all ROI metrics for a set of assumptions.

    Benefits are a flat annual run-rate scaled by the term; costs follow
    the declining per-employee price tiers.

    Args:
        assumptions: Deployment assumptions, already clamped by the caller

    Returns:
        Freshly built DerivedMetrics
    """
    term = assumptions.term

    total_investment = calculate_total_investment(assumptions.employees, term)
    annual_cost = total_investment / term if term > 0 else 0.0

    annual = calculate_annual_benefits(assumptions)
    annual_benefit = annual["productivity"] + annual["turnover"] + annual["training"]

    productivity_gains = annual["productivity"] * term
    turnover_reduction_savings = annual["turnover"] * term
    training_time_savings = annual["training"] * term
    total_benefit = productivity_gains + turnover_reduction_savings + training_time_savings

    net_benefit = total_benefit - total_investment
    total_roi_percent = (
        net_benefit / total_investment * 100 if total_investment > 0 else 0.0
    )

    return DerivedMetrics(
        annual_cost=annual_cost,
        total_investment=total_investment,
        annual_benefit=annual_benefit,
        productivity_gains=productivity_gains,
        turnover_reduction_savings=turnover_reduction_savings,
        training_time_savings=training_time_savings,
        total_benefit=total_benefit,
        net_benefit=net_benefit,
        total_roi_percent=total_roi_percent,
        months_to_break_even=calculate_break_even_months(
            total_investment, annual_benefit, annual_cost
        ),
        cash_flow_series=generate_cash_flow_series(
            assumptions.employees, term, annual_benefit
        ),
    )
