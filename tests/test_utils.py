from datetime import date, datetime
from decimal import Decimal

import pytest

from prepay_planner.data_models import LoanTerms, PrepaymentPolicy
from prepay_planner.utils import (
    add_months,
    decimal_from_str,
    month_start,
    months_between,
    parse_date,
    parse_date_or_default,
)


class TestParseDate:
    def test_full_date(self):
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_year_month(self):
        assert parse_date("2024-03") == date(2024, 3, 1)

    def test_date_and_datetime_pass_through(self):
        assert parse_date(date(2024, 3, 15)) == date(2024, 3, 15)
        assert parse_date(datetime(2024, 3, 15, 10, 30)) == date(2024, 3, 15)

    @pytest.mark.parametrize("value", ["", None, "2024", "2024-13-01", "march", "2024-02-30", "2024-01-15xyz", "2024-01-1x"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_date(value)

    def test_default_on_bad_input(self):
        fallback = date(2020, 1, 1)
        assert parse_date_or_default("not a date", fallback) == fallback
        assert parse_date_or_default(None, fallback) == fallback
        assert parse_date_or_default("2024-05", fallback) == date(2024, 5, 1)


class TestMonths:
    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_crosses_year(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)

    def test_month_start(self):
        assert month_start(date(2024, 7, 19)) == date(2024, 7, 1)

    def test_months_between(self):
        assert months_between(date(2023, 11, 1), date(2024, 2, 28)) == 3
        assert months_between(date(2024, 2, 1), date(2023, 11, 1)) == -3


class TestDecimalFromStr:
    def test_commas(self):
        assert decimal_from_str("1,250,000.50") == Decimal("1250000.50")

    def test_float_goes_through_str(self):
        assert decimal_from_str(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", "", "nan", "inf"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            decimal_from_str(value)


class TestModels:
    def test_terms_coerce_numbers(self):
        terms = LoanTerms(principal=250000, annual_rate=8.5, term_length=20, term_unit="Years")
        assert terms.principal == Decimal("250000")
        assert terms.annual_rate == Decimal("8.5")
        assert terms.term_unit == "years"
        assert terms.total_months == 240

    def test_policy_defaults_inactive(self):
        policy = PrepaymentPolicy()
        assert not policy.is_active
        assert policy.frequency == "monthly"
