"""Core calculation engine for the prepayment planner.

This module implements the financial logic required to build a monthly
amortization schedule for a fixed-rate installment loan, optionally
accelerated by a recurring prepayment policy. The calculation is a pure
function of its inputs: results are returned as a ``LoanSummary`` together
with a list of ``AmortizationRow`` objects and nothing is cached or shared
between calls, so baseline and strategy schedules can be computed
independently (even concurrently).
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, getcontext
from typing import List, Optional, Tuple

from . import config
from .data_models import (
    FREQUENCY_MONTHS,
    TERM_UNITS,
    AmortizationRow,
    LoanSummary,
    LoanTerms,
    PrepaymentPolicy,
)
from .utils import add_months, month_start, months_between, parse_date_or_default

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def calculate_installment(principal: Decimal, annual_rate: Decimal, months: int) -> Decimal:
    """Return the fixed monthly installment for a loan.

    The formula is:

        installment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. A zero rate has no such formula (it
    would divide by zero) and repays the principal in equal parts ``P / n``.
    """
    if months <= 0:
        raise ValueError("Term must be positive")
    rate_per_month = annual_rate / Decimal(12) / Decimal(100)
    if rate_per_month == 0:
        return principal / Decimal(months)
    factor = (1 + rate_per_month) ** months
    return principal * (rate_per_month * factor) / (factor - 1)


def frequency_months(frequency: str) -> int:
    """Return the number of months between two due prepayments."""
    try:
        return FREQUENCY_MONTHS[frequency]
    except KeyError:
        raise ValueError(
            f"Prepayment frequency must be one of {', '.join(FREQUENCY_MONTHS)}; got {frequency!r}"
        ) from None


def is_prepayment_due(row_date: date, policy: Optional[PrepaymentPolicy], effective_month: date) -> bool:
    """Return whether the policy's extra payment falls due in ``row_date``'s month.

    The cadence counts from the policy's own effective month, not from the
    loan start: the first due period is the effective month itself and the
    payment recurs every ``frequency`` months after it.
    """
    if policy is None or not policy.is_active:
        return False
    row_month = month_start(row_date)
    if row_month < effective_month:
        return False
    elapsed = months_between(effective_month, row_month)
    return elapsed % frequency_months(policy.frequency) == 0


def _validate(terms: LoanTerms, policy: Optional[PrepaymentPolicy]) -> None:
    if terms.term_unit not in TERM_UNITS:
        raise ValueError(f"Term unit must be 'months' or 'years'; got {terms.term_unit!r}")
    if terms.total_months <= 0:
        raise ValueError("Term must be positive")
    if terms.principal <= 0:
        raise ValueError("Principal must be positive")
    if terms.annual_rate < 0:
        raise ValueError("Interest rate cannot be negative")
    if policy is not None:
        if policy.amount < 0:
            raise ValueError("Prepayment amount cannot be negative")
        if policy.is_active:
            frequency_months(policy.frequency)


def compute_schedule(
    terms: LoanTerms,
    policy: Optional[PrepaymentPolicy] = None,
    *,
    today: Optional[date] = None,
    safety_multiplier: Optional[float] = None,
    epsilon: Optional[Decimal] = None,
) -> Tuple[LoanSummary, List[AmortizationRow]]:
    """Compute the amortization schedule and summary for a loan.

    Parameters
    ----------
    terms: LoanTerms
        The loan's principal, rate, term and start date.
    policy: PrepaymentPolicy, optional
        Recurring extra payment. ``None`` and a zero amount give identical
        results.
    today: date, optional
        Reference date for ``is_past`` and for a missing start date.
        Defaults to ``date.today()``.
    safety_multiplier: float, optional
        The loop never produces more than ``safety_multiplier`` times the
        scheduled number of periods. Defaults to ``config.SAFETY_MULTIPLIER``.
    epsilon: Decimal, optional
        Balances at or below this amount count as repaid. Defaults to
        ``config.BALANCE_EPSILON``.

    Returns
    -------
    summary: LoanSummary
        Installment, total interest, total payment, payoff date and number
        of periods.
    schedule: List[AmortizationRow]
        One row per month, starting at period 1.

    Raises
    ------
    ValueError
        If the terms or the policy are outside the supported domain
        (non-positive principal or term, negative rate or prepayment,
        unknown term unit or frequency).
    """
    _validate(terms, policy)

    today = today or date.today()
    multiplier = config.SAFETY_MULTIPLIER if safety_multiplier is None else safety_multiplier
    epsilon = config.BALANCE_EPSILON if epsilon is None else epsilon

    principal = terms.principal
    total_months = terms.total_months
    rate_per_month = terms.annual_rate / Decimal(12) / Decimal(100)
    start_date = parse_date_or_default(terms.start_date, today)

    effective_month = month_start(start_date)
    if policy is not None and policy.is_active:
        effective_month = month_start(parse_date_or_default(policy.effective_start, start_date))

    zero_rate = rate_per_month == 0
    if zero_rate:
        installment = principal / Decimal(total_months)
    else:
        installment = calculate_installment(principal, terms.annual_rate, total_months)

    max_periods = int(multiplier * total_months)
    logger.debug(
        "Computing schedule: principal=%s rate=%s%% months=%d installment=%s max_periods=%d",
        principal, terms.annual_rate, total_months, installment, max_periods,
    )

    schedule: List[AmortizationRow] = []
    balance = principal
    period = 1
    cumulative_interest = ZERO
    cumulative_principal = ZERO
    cumulative_total = ZERO
    total_prepayment = ZERO

    while balance > epsilon and period <= max_periods:
        row_date = add_months(start_date, period - 1)
        extra_due = policy.amount if is_prepayment_due(row_date, policy, effective_month) else ZERO

        outflow = installment + extra_due
        if zero_rate:
            interest_payment = ZERO
            principal_payment = outflow
        else:
            interest_payment = balance * rate_per_month
            principal_payment = outflow - interest_payment

        # Final period: pay exactly what is left, never past zero.
        extra_applied = extra_due
        if principal_payment > balance:
            principal_payment = balance
            extra_applied = max(ZERO, principal_payment + interest_payment - installment)

        paid = principal_payment + interest_payment

        closing_balance = max(ZERO, balance - principal_payment)
        if closing_balance <= epsilon:
            closing_balance = ZERO

        cumulative_interest += interest_payment
        cumulative_principal += principal_payment
        cumulative_total += paid
        total_prepayment += extra_applied

        schedule.append(
            AmortizationRow(
                period=period,
                date=row_date,
                is_past=row_date < today,
                opening_balance=balance,
                installment=installment,
                extra_payment=extra_applied,
                principal_component=principal_payment,
                interest_component=interest_payment,
                closing_balance=closing_balance,
                cumulative_interest=cumulative_interest,
                cumulative_principal=cumulative_principal,
                cumulative_total_paid=cumulative_total,
            )
        )

        balance = closing_balance
        period += 1

    if balance > epsilon:
        logger.warning(
            "Stopped after %d periods with %s outstanding (safety bound %d)",
            len(schedule), balance, max_periods,
        )

    scheduled_end_date = add_months(start_date, total_months - 1)
    if not schedule:
        summary = LoanSummary(
            installment=installment,
            total_interest=ZERO,
            total_payment=ZERO,
            payoff_date=start_date,
            total_periods=0,
            scheduled_end_date=scheduled_end_date,
            loan_category=terms.loan_category,
        )
        return summary, schedule

    summary = LoanSummary(
        installment=installment,
        total_interest=cumulative_interest,
        total_payment=cumulative_total,
        payoff_date=schedule[-1].date,
        total_periods=len(schedule),
        total_prepayment=total_prepayment,
        scheduled_end_date=scheduled_end_date,
        loan_category=terms.loan_category,
    )
    logger.debug(
        "Schedule complete: %d periods, total interest %s, payoff %s",
        summary.total_periods, summary.total_interest, summary.payoff_date.isoformat(),
    )
    return summary, schedule
