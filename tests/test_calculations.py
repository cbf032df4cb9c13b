"""
Tests for the ROI calculation engine.
"""

import itertools

import pytest
from dataclasses import FrozenInstanceError, replace

from roi_calculator.calculations.roi import (
    ANNUAL_COST_PER_EMPLOYEE_BY_YEAR,
    DEFAULT_ASSUMPTIONS,
    Assumptions,
    annual_cost_for_year,
    calculate_annual_benefits,
    calculate_break_even_months,
    calculate_total_investment,
    compute,
    cost_rate_for_year,
    generate_cash_flow_series,
)


class TestInvestmentSchedule:
    """Test the tiered subscription cost lookup."""

    def test_rates_follow_published_tiers(self):
        """Years 1-5 use the published per-employee prices."""
        rates = [cost_rate_for_year(year) for year in range(1, 6)]
        assert rates == [500, 475, 450, 425, 400]

    def test_years_past_table_reuse_last_tier(self):
        """Year 6 and beyond hold the final tier instead of failing."""
        last_tier = ANNUAL_COST_PER_EMPLOYEE_BY_YEAR[-1]
        assert cost_rate_for_year(6) == last_tier
        assert cost_rate_for_year(25) == last_tier

    def test_year_below_one_uses_first_tier(self):
        """The lookup index is clamped at the bottom too."""
        assert cost_rate_for_year(0) == 500

    def test_annual_cost_scales_with_headcount(self):
        """Cost for a year is headcount times that year's rate."""
        assert annual_cost_for_year(100, 2) == 47500

    def test_total_investment_three_years(self):
        """Total investment sums each year's tier."""
        assert calculate_total_investment(250, 3) == 250 * (500 + 475 + 450)

    def test_total_investment_six_years(self):
        """A six-year term charges the year-5 rate for year 6."""
        total = calculate_total_investment(100, 6)
        assert total == 100 * (500 + 475 + 450 + 425 + 400 + 400)


class TestBenefits:
    """Test the annual benefit components."""

    def test_annual_components(self, typical_assumptions):
        """Each component follows its formula."""
        annual = calculate_annual_benefits(typical_assumptions)
        assert annual["productivity"] == pytest.approx(750000)
        assert annual["turnover"] == pytest.approx(150000)
        assert annual["training"] == pytest.approx(250 * 10 * 60000 / 2080)

    def test_zero_turnover_gives_zero_savings(self, minimum_assumptions):
        """Turnover savings are exactly zero, not missing."""
        annual = calculate_annual_benefits(minimum_assumptions)
        assert annual["turnover"] == 0

    def test_training_hours_do_not_change_savings(self, typical_assumptions):
        """Training savings use the fixed hours-saved constant."""
        low = compute(replace(typical_assumptions, training_hours=0))
        high = compute(replace(typical_assumptions, training_hours=100))
        assert low.training_time_savings == high.training_time_savings
        assert low == high

    def test_benefits_scale_with_term(self, typical_assumptions):
        """Cumulative benefits are the annual run-rate times the term."""
        metrics = compute(typical_assumptions)
        assert metrics.productivity_gains == pytest.approx(750000 * 3)
        assert metrics.turnover_reduction_savings == pytest.approx(150000 * 3)
        assert metrics.total_benefit == pytest.approx(metrics.annual_benefit * 3)


class TestROIMetrics:
    """Test headline ROI metrics."""

    def test_minimum_slider_scenario(self, minimum_assumptions):
        """Ten employees on $20k for one year."""
        metrics = compute(minimum_assumptions)

        assert metrics.total_investment == 5000
        assert metrics.annual_cost == 5000
        assert metrics.productivity_gains == pytest.approx(10000)
        assert metrics.turnover_reduction_savings == 0
        assert metrics.training_time_savings == pytest.approx(961.538, abs=0.001)
        assert metrics.total_benefit == pytest.approx(10961.538, abs=0.001)
        assert metrics.net_benefit == pytest.approx(5961.538, abs=0.001)
        assert metrics.total_roi_percent == pytest.approx(119.23, abs=0.01)

    def test_typical_scenario(self, typical_assumptions):
        """A 250-person deployment over three years."""
        metrics = compute(typical_assumptions)

        assert metrics.total_investment == 356250
        assert metrics.annual_cost == pytest.approx(118750)
        assert metrics.total_benefit == pytest.approx(2916346.15, abs=0.01)
        assert metrics.net_benefit == pytest.approx(2560096.15, abs=0.01)
        assert metrics.total_roi_percent == pytest.approx(718.62, abs=0.01)

    def test_zero_investment_gives_zero_roi(self, minimum_assumptions):
        """No headcount means no investment and an ROI of 0, not NaN."""
        metrics = compute(replace(minimum_assumptions, employees=0))
        assert metrics.total_investment == 0
        assert metrics.total_roi_percent == 0
        assert metrics.months_to_break_even is None

    def test_zero_term_does_not_raise(self, minimum_assumptions):
        """A zero term is out of domain but still returns numbers."""
        metrics = compute(replace(minimum_assumptions, term=0))
        assert metrics.annual_cost == 0
        assert metrics.total_roi_percent == 0
        assert len(metrics.cash_flow_series) == 1

    def test_productivity_share(self, minimum_assumptions):
        """Productivity share is rounded to a whole percent."""
        metrics = compute(minimum_assumptions)
        assert metrics.productivity_share_percent == 91

    def test_benefit_breakdown(self, typical_assumptions):
        """Breakdown percentages add up to 100."""
        rows = compute(typical_assumptions).benefit_breakdown()
        assert [row["label"] for row in rows] == [
            "Productivity Gains",
            "Turnover Reduction Savings",
            "Training Time Savings",
        ]
        assert sum(row["percentage"] for row in rows) == pytest.approx(100)

    def test_benefit_breakdown_without_benefit(self, minimum_assumptions):
        """No benefit means every share is zero."""
        metrics = compute(replace(minimum_assumptions, employees=0))
        assert all(row["percentage"] == 0 for row in metrics.benefit_breakdown())
        assert metrics.productivity_share_percent == 0


class TestBreakEven:
    """Test break-even months."""

    def test_break_even_minimum_scenario(self, minimum_assumptions):
        """Investment divided by the annual surplus, in months."""
        metrics = compute(minimum_assumptions)
        expected = 5000 / (metrics.annual_benefit - 5000) * 12
        assert metrics.months_to_break_even == pytest.approx(expected)
        assert metrics.months_to_break_even == pytest.approx(10.06, abs=0.01)

    def test_no_break_even_when_benefit_below_cost(self, minimum_assumptions):
        """A low salary leaves the benefit under the subscription cost."""
        metrics = compute(replace(minimum_assumptions, salary=5000))
        assert metrics.annual_benefit <= metrics.annual_cost
        assert metrics.months_to_break_even is None

    def test_no_break_even_when_equal(self):
        """Benefit exactly matching cost has no break-even."""
        assert calculate_break_even_months(1000, 500, 500) is None

    def test_no_break_even_without_benefit(self):
        assert calculate_break_even_months(1000, 0, 0) is None


class TestCashFlowSeries:
    """Test the cumulative cash-flow series."""

    def test_series_length_and_baseline(self, typical_assumptions):
        """Years 0..term inclusive, starting from zero."""
        series = compute(typical_assumptions).cash_flow_series
        assert len(series) == 4
        assert series[0].year_label == "Year 0"
        assert series[0].cumulative_benefit == 0
        assert series[0].cumulative_cost == 0

    def test_costs_follow_tiers(self, typical_assumptions):
        """Cumulative cost is summed per year, not averaged."""
        series = compute(typical_assumptions).cash_flow_series
        assert [point.cumulative_cost for point in series] == [
            0,
            125000,
            243750,
            356250,
        ]

    def test_final_cost_matches_total_investment(self, typical_assumptions):
        metrics = compute(typical_assumptions)
        assert metrics.cash_flow_series[-1].cumulative_cost == metrics.total_investment

    def test_six_year_series_uses_floor_tier(self):
        """Year 6 adds the year-5 rate."""
        series = generate_cash_flow_series(100, 6, 1000.0)
        assert len(series) == 7
        assert series[6].cumulative_cost - series[5].cumulative_cost == 40000

    def test_net_cash_flow(self, minimum_assumptions):
        point = compute(minimum_assumptions).cash_flow_series[1]
        assert point.net_cash_flow == pytest.approx(5961.538, abs=0.001)
        assert point.to_dict()["year"] == "Year 1"


class TestInvariants:
    """Properties that hold for every valid set of assumptions."""

    GRID = list(
        itertools.product(
            (10, 500, 2000),  # employees
            (20000, 200000),  # salary
            (0, 15, 100),  # turnover
            (5000, 100000),  # replace_cost
            (1, 3, 5, 6),  # term
        )
    )

    @pytest.mark.parametrize("employees,salary,turnover,replace_cost,term", GRID)
    def test_invariants(self, employees, salary, turnover, replace_cost, term):
        """Non-negative outputs, exact sums and increasing cumulative series."""
        metrics = compute(
            Assumptions(
                employees=employees,
                salary=salary,
                training_hours=20,
                turnover=turnover,
                replace_cost=replace_cost,
                term=term,
            )
        )

        for value in (
            metrics.total_investment,
            metrics.productivity_gains,
            metrics.turnover_reduction_savings,
            metrics.training_time_savings,
            metrics.total_benefit,
        ):
            assert value >= 0

        assert metrics.total_benefit == (
            metrics.productivity_gains
            + metrics.turnover_reduction_savings
            + metrics.training_time_savings
        )
        assert metrics.net_benefit == metrics.total_benefit - metrics.total_investment

        series = metrics.cash_flow_series
        assert len(series) == term + 1
        for previous, current in zip(series, series[1:]):
            assert current.cumulative_cost > previous.cumulative_cost
            assert current.cumulative_benefit > previous.cumulative_benefit

        if metrics.months_to_break_even is not None:
            assert metrics.months_to_break_even > 0

    def test_idempotent(self, typical_assumptions):
        """Same assumptions, identical metrics."""
        assert compute(typical_assumptions) == compute(typical_assumptions)

    def test_more_employees_never_decreases_totals(self, typical_assumptions):
        previous = None
        for employees in range(10, 2001, 190):
            metrics = compute(replace(typical_assumptions, employees=employees))
            if previous is not None:
                assert metrics.total_benefit >= previous.total_benefit
                assert metrics.total_investment >= previous.total_investment
            previous = metrics

    def test_metrics_are_immutable(self, typical_assumptions):
        metrics = compute(typical_assumptions)
        with pytest.raises(FrozenInstanceError):
            metrics.net_benefit = 0


class TestAssumptions:
    """Test assumption defaults and clamping."""

    def test_defaults_are_slider_minimums(self, minimum_assumptions):
        assert DEFAULT_ASSUMPTIONS == minimum_assumptions

    def test_clamped_limits_each_field(self):
        """Values are pulled back into their slider ranges."""
        clamped = Assumptions(
            employees=5000,
            salary=1000,
            training_hours=-4,
            turnover=150,
            replace_cost=250000,
            term=0,
        ).clamped()
        assert clamped == Assumptions(
            employees=2000,
            salary=20000,
            training_hours=0,
            turnover=100,
            replace_cost=100000,
            term=1,
        )

    def test_clamped_keeps_long_terms(self, typical_assumptions):
        """Terms past the price table are tolerated."""
        assert replace(typical_assumptions, term=8).clamped().term == 8
