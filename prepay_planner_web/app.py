import logging
import os
from datetime import date
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from prepay_planner import config as planner_config
from prepay_planner.comparison import compare_strategy
from prepay_planner.data_models import LoanTerms, PrepaymentPolicy
from prepay_planner.engine import compute_schedule
from prepay_planner.utils import decimal_from_str

logger = logging.getLogger(__name__)


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _field(data: Dict[str, Any], name: str, default: Any = "") -> Any:
    value = data.get(name, default)
    if isinstance(value, str):
        value = value.strip()
    return default if value in ("", None) else value


def _payload_to_terms(data: Dict[str, Any]) -> LoanTerms:
    return LoanTerms(
        principal=decimal_from_str(_field(data, "principal", "0")),
        annual_rate=decimal_from_str(_field(data, "rate", "0")),
        term_length=decimal_from_str(_field(data, "term", "0")),
        term_unit=_field(data, "term_unit", "months"),
        start_date=_field(data, "start_date", None),
        loan_category=_field(data, "loan_category", "Home Loan"),
    )


def _payload_to_policy(data: Dict[str, Any]) -> Optional[PrepaymentPolicy]:
    amount = _field(data, "prepayment_amount", None)
    if amount is None:
        return None
    return PrepaymentPolicy(
        amount=decimal_from_str(amount),
        frequency=_field(data, "prepayment_frequency", "monthly"),
        effective_start=_field(data, "prepayment_start_date", None),
    )


def _schedule_view(schedule: list, show_full_schedule: bool) -> Dict[str, Any]:
    preview = schedule if show_full_schedule else schedule[: planner_config.SCHEDULE_PREVIEW_ROWS]
    return {
        "schedule": [row.as_dict() for row in preview],
        "truncated": len(schedule) - len(preview),
    }


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    if config:
        app.config.update(config)

    @app.errorhandler(ValueError)
    def handle_value_error(exc: ValueError):
        logger.info("Rejected loan request: %s", exc)
        return jsonify({"error": str(exc)}), 400

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.post("/api/schedule")
    def schedule():
        data = _payload()
        terms = _payload_to_terms(data)
        policy = _payload_to_policy(data)
        summary, rows = compute_schedule(terms, policy)
        body = {"summary": summary.as_dict()}
        body.update(_schedule_view(rows, str(data.get("show_full_schedule", "")) in ("1", "true", "True")))
        return jsonify(body)

    @app.post("/api/compare")
    def compare():
        data = _payload()
        terms = _payload_to_terms(data)
        policy = _payload_to_policy(data)
        result = compare_strategy(terms, policy, today=date.today())
        savings = result.as_dict()
        savings["by_period"] = [float(value) for value in result.interest_saved_by_period()]
        return jsonify(
            {
                "baseline": result.baseline.as_dict(),
                "strategy": result.strategy.as_dict(),
                "savings": savings,
            }
        )

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=planner_config.LOG_LEVEL)
    print("Starting prepayment planner API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
