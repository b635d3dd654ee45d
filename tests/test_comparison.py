"""Tests for baseline vs. strategy comparison."""

from datetime import date
from decimal import Decimal

import pytest

from prepay_planner.comparison import compare_strategy, format_duration, suggested_monthly_policy
from prepay_planner.data_models import PrepaymentPolicy
from prepay_planner.engine import compute_schedule


class TestCompareStrategy:
    def test_savings(self, five_year_loan, monthly_prepayment, today):
        result = compare_strategy(five_year_loan, monthly_prepayment, today=today)
        assert result.baseline.total_periods == 60
        assert result.months_saved == 60 - result.strategy.total_periods
        assert result.months_saved > 20
        assert result.interest_saved > 0
        assert result.interest_saved == result.baseline.total_interest - result.strategy.total_interest
        # Principal is repaid in full either way, so the saving is all interest.
        assert abs(result.total_saved - result.interest_saved) < Decimal("1e-12")
        assert Decimal("0") < result.percent_interest_saved < Decimal("100")

    def test_matches_independent_calls(self, five_year_loan, monthly_prepayment, today):
        result = compare_strategy(five_year_loan, monthly_prepayment, today=today)
        baseline = compute_schedule(five_year_loan, None, today=today)
        strategy = compute_schedule(five_year_loan, monthly_prepayment, today=today)
        assert (result.baseline, result.baseline_schedule) == baseline
        assert (result.strategy, result.strategy_schedule) == strategy

    def test_no_policy_saves_nothing(self, one_year_loan, today):
        result = compare_strategy(one_year_loan, None, today=today)
        assert result.interest_saved == 0
        assert result.months_saved == 0
        assert result.interest_saved_by_period() == [Decimal("0")] * 12

    def test_zero_rate_percent(self, zero_rate_loan, today):
        policy = PrepaymentPolicy(amount=Decimal("100"))
        result = compare_strategy(zero_rate_loan, policy, today=today)
        assert result.percent_interest_saved == 0
        assert result.months_saved == 6

    def test_period_savings(self, five_year_loan, monthly_prepayment, today):
        result = compare_strategy(five_year_loan, monthly_prepayment, today=today)
        by_period = result.interest_saved_by_period()
        assert len(by_period) == result.strategy.total_periods
        # Same opening balance in period 1, so nothing saved yet.
        assert by_period[0] == 0
        assert all(saving >= 0 for saving in by_period)
        assert by_period[-1] > by_period[1]
        last_baseline = result.baseline_schedule[-1]
        assert result.period_savings(60) == last_baseline.interest_component
        assert result.period_savings(61) == 0
        assert result.period_savings(0) == 0

    def test_as_dict(self, five_year_loan, monthly_prepayment, today):
        data = compare_strategy(five_year_loan, monthly_prepayment, today=today).as_dict()
        assert set(data) == {"interest_saved", "total_saved", "months_saved", "time_saved", "percent_interest_saved"}
        assert isinstance(data["interest_saved"], float)


class TestFormatDuration:
    @pytest.mark.parametrize(
        "months, expected",
        [(0, "0m"), (5, "5m"), (12, "1y"), (38, "3y 2m"), (-14, "-1y 2m")],
    )
    def test_format(self, months, expected):
        assert format_duration(months) == expected


class TestSuggestedPolicy:
    def test_starts_next_month(self):
        policy = suggested_monthly_policy(Decimal("5000"), today=date(2024, 12, 18))
        assert policy.amount == Decimal("5000")
        assert policy.frequency == "monthly"
        assert policy.effective_start == date(2025, 1, 1)

    def test_accepts_plain_numbers(self):
        policy = suggested_monthly_policy(2500, today=date(2024, 3, 31))
        assert policy.amount == Decimal("2500")
        assert policy.effective_start == date(2024, 4, 1)
