"""Command‑line interface for the prepayment planner.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compute full amortization schedules, view summaries or
compare a prepayment strategy against the no‑prepayment baseline. Results
can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click

from . import config
from .comparison import compare_strategy
from .data_models import (
    FREQUENCY_MONTHS,
    LOAN_CATEGORIES,
    TERM_UNITS,
    AmortizationRow,
    LoanSummary,
    LoanTerms,
    PrepaymentPolicy,
)
from .engine import compute_schedule
from .formatter import print_comparison, print_schedule, print_summary
from .utils import decimal_from_str

logger = logging.getLogger(__name__)


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain floats ("500000") and shorthand with ``k``/``m`` suffixes
    (e.g., "500k" meaning 500_000). Returns a float.
    """
    value = str(value).strip().lower()
    value = value.replace(",", "")
    factor = 1.0
    if value.endswith("k"):
        factor = 1_000.0
        value = value[:-1]
    elif value.endswith("m"):
        factor = 1_000_000.0
        value = value[:-1]
    try:
        return float(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def build_terms_from_options(
    principal: str,
    rate: float,
    term: float,
    unit: str = "months",
    start_date: Optional[str] = None,
    category: str = "Home Loan",
) -> LoanTerms:
    # Start date stays a string: the engine falls back to today if it is bad.
    return LoanTerms(
        principal=decimal_from_str(str(parse_amount(principal))),
        annual_rate=decimal_from_str(str(rate)),
        term_length=decimal_from_str(str(term)),
        term_unit=unit.lower(),
        start_date=start_date or None,
        loan_category=category,
    )


def build_policy_from_options(
    prepayment: Optional[str],
    frequency: str = "monthly",
    prepayment_start: Optional[str] = None,
) -> Optional[PrepaymentPolicy]:
    if not prepayment:
        return None
    amount = parse_amount(prepayment)
    if amount < 0:
        raise click.BadParameter(f"Prepayment cannot be negative: {prepayment}")
    return PrepaymentPolicy(
        amount=decimal_from_str(str(amount)),
        frequency=frequency.lower(),
        effective_start=prepayment_start or None,
    )


def export_to_json(path: Path, schedule: List[AmortizationRow], summary: LoanSummary) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary.as_dict(), "schedule": [row.as_dict() for row in schedule]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[AmortizationRow]) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Period",
        "Date",
        "Opening_Balance",
        "Installment",
        "Extra_Payment",
        "Principal",
        "Interest",
        "Closing_Balance",
        "Cumulative_Interest",
        "Cumulative_Principal",
        "Cumulative_Total_Paid",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in schedule:
            writer.writerow(
                [
                    row.period,
                    row.date.strftime("%Y-%m"),
                    f"{row.opening_balance:.2f}",
                    f"{row.installment:.2f}",
                    f"{row.extra_payment:.2f}",
                    f"{row.principal_component:.2f}",
                    f"{row.interest_component:.2f}",
                    f"{row.closing_balance:.2f}",
                    f"{row.cumulative_interest:.2f}",
                    f"{row.cumulative_principal:.2f}",
                    f"{row.cumulative_total_paid:.2f}",
                ]
            )


def loan_options(func: Callable) -> Callable:
    """Attach the loan and prepayment options shared by every command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 500k, 1.2m)"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", required=True, type=float, help="Loan term length (1.5 years is 18 months)"),
        click.option("--unit", "unit", type=click.Choice(TERM_UNITS), default="months", help="Unit of --term"),
        click.option("--start-date", "-s", "start_date", help="First payment date (YYYY-MM or YYYY-MM-DD); defaults to today"),
        click.option("--category", "category", type=click.Choice(LOAN_CATEGORIES), default="Home Loan", help="Loan category (display only)"),
        click.option("--prepayment", "prepayment", help="Extra amount paid on each due period"),
        click.option("--frequency", "frequency", type=click.Choice(list(FREQUENCY_MONTHS)), default="monthly", help="Prepayment frequency"),
        click.option("--prepayment-start", "prepayment_start", help="First prepayment month (YYYY-MM); defaults to the loan start"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _run(params: Dict[str, Any]):
    logger.debug("Loan options: %s", params)
    try:
        terms = build_terms_from_options(
            params["principal"],
            params["rate"],
            params["term"],
            params["unit"],
            params["start_date"],
            params["category"],
        )
        policy = build_policy_from_options(params["prepayment"], params["frequency"], params["prepayment_start"])
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    return terms, policy


@click.group()
@click.option("--log-level", "log_level", default=config.LOG_LEVEL, show_default=True, help="Logging level")
def cli(log_level: str) -> None:
    """A command‑line loan calculator with recurring prepayments."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--all", "show_all", is_flag=True, help="Print every row instead of a preview")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(show_all: bool, output: Optional[str], **params: Any) -> None:
    """Compute and print the full amortization schedule."""
    terms, policy = _run(params)
    try:
        summary_data, rows = compute_schedule(terms, policy)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, rows, summary_data)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, rows)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return
    print_summary(summary_data)
    # Limit schedule length printed to avoid flooding the terminal
    max_rows = config.SCHEDULE_PREVIEW_ROWS
    if not show_all and len(rows) > max_rows:
        click.echo(f"Schedule has {len(rows)} rows; showing first {max_rows} rows.")
        print_schedule(rows[:max_rows])
    else:
        print_schedule(rows)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(output: Optional[str], **params: Any) -> None:
    """Compute and print only the summary metrics for a loan."""
    terms, policy = _run(params)
    try:
        summary_data, _ = compute_schedule(terms, policy)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data.as_dict()}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
def compare(**params: Any) -> None:
    """Compare a prepayment strategy with the no‑prepayment baseline.

    Example:

        prepay-planner compare -p 5m -r 8.5 -t 20 --unit years --prepayment 10k
    """
    terms, policy = _run(params)
    if policy is None or not policy.is_active:
        raise click.BadParameter("compare needs a positive --prepayment", param_hint="--prepayment")
    try:
        result = compare_strategy(terms, policy, today=date.today())
    except ValueError as exc:
        raise click.ClickException(str(exc))
    print_comparison(result)


if __name__ == "__main__":
    cli()
