"""Baseline versus prepayment-strategy comparison.

The baseline is the same loan with no prepayment. Both schedules come from
two independent calls to :func:`compute_schedule`; nothing is shared between
them, the savings are read off the two results afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .data_models import AmortizationRow, LoanSummary, LoanTerms, PrepaymentPolicy
from .engine import compute_schedule
from .utils import add_months, month_start


@dataclass
class StrategyComparison:
    baseline: LoanSummary
    strategy: LoanSummary
    baseline_schedule: List[AmortizationRow] = field(repr=False)
    strategy_schedule: List[AmortizationRow] = field(repr=False)

    @property
    def interest_saved(self) -> Decimal:
        return self.baseline.total_interest - self.strategy.total_interest

    @property
    def total_saved(self) -> Decimal:
        return self.baseline.total_payment - self.strategy.total_payment

    @property
    def months_saved(self) -> int:
        return self.baseline.total_periods - self.strategy.total_periods

    @property
    def percent_interest_saved(self) -> Decimal:
        if self.baseline.total_interest == 0:
            return Decimal("0")
        return self.interest_saved / self.baseline.total_interest * 100

    def period_savings(self, period: int) -> Decimal:
        """Interest saved in ``period`` relative to the baseline's same period.

        Periods past the baseline's end save nothing; periods past the
        strategy's payoff save the baseline's whole interest for that period.
        """
        if period < 1 or period > len(self.baseline_schedule):
            return Decimal("0")
        original = self.baseline_schedule[period - 1].interest_component
        if period > len(self.strategy_schedule):
            return original
        current = self.strategy_schedule[period - 1].interest_component
        return max(Decimal("0"), original - current)

    def interest_saved_by_period(self) -> List[Decimal]:
        return [self.period_savings(row.period) for row in self.strategy_schedule]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "interest_saved": float(self.interest_saved),
            "total_saved": float(self.total_saved),
            "months_saved": self.months_saved,
            "time_saved": format_duration(self.months_saved),
            "percent_interest_saved": float(self.percent_interest_saved),
        }


def compare_strategy(
    terms: LoanTerms,
    policy: Optional[PrepaymentPolicy],
    *,
    today: Optional[date] = None,
) -> StrategyComparison:
    """Compute the baseline and the strategy schedules for ``terms``."""
    today = today or date.today()
    baseline_summary, baseline_schedule = compute_schedule(terms, None, today=today)
    strategy_summary, strategy_schedule = compute_schedule(terms, policy, today=today)
    return StrategyComparison(
        baseline=baseline_summary,
        strategy=strategy_summary,
        baseline_schedule=baseline_schedule,
        strategy_schedule=strategy_schedule,
    )


def format_duration(months: int) -> str:
    """Render a month count as ``"3y 2m"``; negative counts keep their sign."""
    sign = "-" if months < 0 else ""
    years, rest = divmod(abs(months), 12)
    if years and rest:
        return f"{sign}{years}y {rest}m"
    if years:
        return f"{sign}{years}y"
    return f"{sign}{rest}m"


def suggested_monthly_policy(amount, *, today: Optional[date] = None) -> PrepaymentPolicy:
    """Turn a suggested extra amount into a monthly policy starting next month."""
    today = today or date.today()
    return PrepaymentPolicy(
        amount=amount,
        frequency="monthly",
        effective_start=add_months(month_start(today), 1),
    )
