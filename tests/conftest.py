"""Shared fixtures.

Reference loan: 100,000 at 12 % over 12 months starting January 2024, with
"today" pinned to the loan start so results never depend on the clock.
"""

from datetime import date
from decimal import Decimal

import pytest

from prepay_planner.data_models import LoanTerms, PrepaymentPolicy


@pytest.fixture
def today() -> date:
    return date(2024, 1, 1)


@pytest.fixture
def one_year_loan() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        annual_rate=Decimal("12"),
        term_length=12,
        term_unit="months",
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def five_year_loan() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        annual_rate=Decimal("10"),
        term_length=5,
        term_unit="years",
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def zero_rate_loan() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("1200"),
        annual_rate=Decimal("0"),
        term_length=12,
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def monthly_prepayment() -> PrepaymentPolicy:
    return PrepaymentPolicy(
        amount=Decimal("2000"),
        frequency="monthly",
        effective_start=date(2024, 1, 1),
    )
