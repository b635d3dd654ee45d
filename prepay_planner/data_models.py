"""Data models for the prepayment planner.

This module defines dataclasses representing the entities used by the
calculator: the loan terms, the recurring prepayment policy, individual
schedule rows and the loan summary. Inputs are frozen so one calculation can
never alter another's inputs; outputs are built fresh on every call.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from .utils import decimal_from_str

TERM_UNITS = ("months", "years")

# Month-count of each prepayment cadence.
FREQUENCY_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "yearly": 12,
}

LOAN_CATEGORIES = (
    "Home Loan",
    "Personal Loan",
    "Car Loan",
    "Education Loan",
    "Business Loan",
)


@dataclass(frozen=True)
class LoanTerms:
    """Terms of a fixed-rate installment loan.

    Attributes
    ----------
    principal: Decimal
        The amount borrowed. Must be positive.
    annual_rate: Decimal
        Nominal annual interest rate in percent (``8.5`` means 8.5 %). Zero is
        allowed and switches the engine to straight-line repayment.
    term_length: int | Decimal
        Length of the term, in ``term_unit``. Must come to a whole number
        of months.
    term_unit: str
        ``"months"`` or ``"years"``.
    start_date: date | str | None
        Date of the first payment period. Missing or unparseable values fall
        back to today's date when the schedule is computed.
    loan_category: str
        Display tag only; it does not affect any calculation.
    """

    principal: Decimal
    annual_rate: Decimal
    term_length: Union[int, float, Decimal, str]
    term_unit: str = "months"
    start_date: Union[date, str, None] = None
    loan_category: str = "Home Loan"

    def __post_init__(self) -> None:
        object.__setattr__(self, "principal", decimal_from_str(self.principal))
        object.__setattr__(self, "annual_rate", decimal_from_str(self.annual_rate))
        object.__setattr__(self, "term_unit", str(self.term_unit).lower())

    @property
    def total_months(self) -> int:
        """Scheduled number of monthly periods.

        Fractional years are fine as long as they come to whole months
        (1.5 years is 18 months). Anything else raises ``ValueError``.
        """
        months = decimal_from_str(self.term_length)
        if self.term_unit == "years":
            months *= 12
        if months != months.to_integral_value():
            raise ValueError(f"Term must be a whole number of months; got {months} months")
        return int(months)


@dataclass(frozen=True)
class PrepaymentPolicy:
    """A recurring extra payment applied entirely to principal.

    Attributes
    ----------
    amount: Decimal
        Extra amount paid on each due period. ``0`` disables the policy.
    frequency: str
        ``"monthly"``, ``"quarterly"`` or ``"yearly"``.
    effective_start: date | str | None
        First month in which the extra payment is due. Only the year and
        month matter. When missing, the loan's start month is used.
    """

    amount: Decimal = Decimal("0")
    frequency: str = "monthly"
    effective_start: Union[date, str, None] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", decimal_from_str(self.amount))
        object.__setattr__(self, "frequency", str(self.frequency).lower())

    @property
    def is_active(self) -> bool:
        return self.amount > 0


@dataclass
class AmortizationRow:
    """One period of the amortization schedule.

    ``extra_payment`` is the extra money actually applied, which can be less
    than the policy amount on the final period. The cumulative columns
    include this row.
    """

    period: int
    date: date
    is_past: bool
    opening_balance: Decimal
    installment: Decimal
    extra_payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    closing_balance: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    cumulative_total_paid: Decimal

    @property
    def total_paid(self) -> Decimal:
        return self.principal_component + self.interest_component

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation of the row."""
        return {
            "period": self.period,
            "date": self.date.strftime("%Y-%m"),
            "is_past": self.is_past,
            "opening_balance": float(self.opening_balance),
            "installment": float(self.installment),
            "extra_payment": float(self.extra_payment),
            "principal": float(self.principal_component),
            "interest": float(self.interest_component),
            "closing_balance": float(self.closing_balance),
            "cumulative_interest": float(self.cumulative_interest),
            "cumulative_principal": float(self.cumulative_principal),
            "cumulative_total_paid": float(self.cumulative_total_paid),
        }


@dataclass
class LoanSummary:
    """Aggregate figures for one computed schedule."""

    installment: Decimal
    total_interest: Decimal
    total_payment: Decimal
    payoff_date: date
    total_periods: int
    total_prepayment: Decimal = Decimal("0")
    scheduled_end_date: Optional[date] = None
    loan_category: str = field(default="Home Loan")

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Decimal):
                data[key] = float(value)
            elif isinstance(value, date):
                data[key] = value.strftime("%Y-%m")
        return data
