"""Output helpers for the prepayment planner.

This module provides simple functions to render amortization schedules,
summaries and baseline comparisons in a tabular text format. We rely only on
built‑in printing and string formatting.
"""

from __future__ import annotations

from typing import Iterable

from .comparison import StrategyComparison, format_duration
from .data_models import AmortizationRow, LoanSummary


def print_summary(summary: LoanSummary) -> None:
    """Print a summary of loan metrics in a human‑readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Loan category      : {summary.loan_category}")
    print(f"Monthly installment: {summary.installment:.2f}")
    print(f"Total interest     : {summary.total_interest:.2f}")
    if summary.total_prepayment:
        print(f"Total prepayment   : {summary.total_prepayment:.2f}")
    print(f"Total payment      : {summary.total_payment:.2f}")
    if summary.scheduled_end_date:
        print(f"Scheduled end date : {summary.scheduled_end_date.strftime('%Y-%m')}")
    print(f"Payoff date        : {summary.payoff_date.strftime('%Y-%m')}")
    print(f"Payments made      : {summary.total_periods}")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationRow]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = [
        "Period",
        "Date",
        "OpenBal",
        "Installment",
        "Extra",
        "Principal",
        "Interest",
        "CloseBal",
        "CumInterest",
        "Past",
    ]
    print("\t".join(headers))
    for row in schedule:
        cells = [
            str(row.period),
            row.date.strftime("%Y-%m"),
            f"{row.opening_balance:.2f}",
            f"{row.installment:.2f}",
            f"{row.extra_payment:.2f}",
            f"{row.principal_component:.2f}",
            f"{row.interest_component:.2f}",
            f"{row.closing_balance:.2f}",
            f"{row.cumulative_interest:.2f}",
            "Yes" if row.is_past else "No",
        ]
        print("\t".join(cells))


def print_comparison(comparison: StrategyComparison) -> None:
    """Print the baseline and the strategy side by side.

    The difference column is strategy minus baseline, so a negative value
    means the prepayment strategy is cheaper or shorter.
    """
    baseline, strategy = comparison.baseline, comparison.strategy
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':20s} {'Baseline':>15s} {'Strategy':>15s} {'Difference':>15s}")
    for label, v1, v2 in (
        ("total_payment", baseline.total_payment, strategy.total_payment),
        ("total_interest", baseline.total_interest, strategy.total_interest),
        ("total_periods", baseline.total_periods, strategy.total_periods),
    ):
        print(f"{label:20s} {v1:15.2f} {v2:15.2f} {v2 - v1:15.2f}")
    print("=" * 72)
    print(f"Interest saved     : {comparison.interest_saved:.2f} ({comparison.percent_interest_saved:.1f}%)")
    print(f"Total saved        : {comparison.total_saved:.2f}")
    if comparison.months_saved > 0:
        print(f"Time saved         : {format_duration(comparison.months_saved)} earlier")
    print(f"Payoff date        : {baseline.payoff_date.strftime('%Y-%m')} -> {strategy.payoff_date.strftime('%Y-%m')}")
