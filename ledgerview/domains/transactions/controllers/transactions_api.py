"""Transactions JSON API."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ledgerview.domains.transactions.mappers import map_transaction
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    BulkActionRequest,
    TransactionListQuery,
)
from ledgerview.domains.transactions.services.stats_service import (
    calc_net_total_per_currency,
    calc_turnover_per_currency,
)
from ledgerview.domains.transactions.services.transaction_service import (
    apply_bulk_action,
    list_transactions,
)
from ledgerview.extensions import limiter

transactions_api_bp = Blueprint("transactions_api", __name__)


@transactions_api_bp.get("")
def list_transactions_endpoint():
    """
    List transactions with per-currency totals.

    Query Parameters:
    - ordering: field code for ascending, ``-code`` for descending (optional)

    Returns:
    {
      "ok": true,
      "ordering": "-issuedAt",
      "transactions": [...],
      "net_total_per_currency": {"USD": 6000},
      "turnover_per_currency": {"USD": 14000}
    }
    """
    try:
        query = TransactionListQuery.model_validate(request.args.to_dict())
    except ValidationError:
        return jsonify({"ok": False, "error": "invalid_query"}), 400

    transactions = list_transactions(
        query.ordering, limit=current_app.config.get("TRANSACTIONS_LIST_LIMIT")
    )
    return jsonify(
        {
            "ok": True,
            "ordering": query.ordering,
            "transactions": [map_transaction(t) for t in transactions],
            "net_total_per_currency": calc_net_total_per_currency(transactions),
            "turnover_per_currency": calc_turnover_per_currency(transactions),
        }
    )


@transactions_api_bp.post("/bulk")
@limiter.limit("60/minute")
def bulk_action_endpoint():
    """
    Apply a bulk action to a set of transactions.

    Request Body:
    {"action": "delete" | "set_category" | "set_project", "ids": ["..."], "value": "code"}
    """
    payload = request.get_json(silent=True) or {}
    try:
        data = BulkActionRequest.model_validate(payload)
    except ValidationError:
        return jsonify({"ok": False, "error": "validation_error"}), 400

    try:
        affected = apply_bulk_action(data.action, data.ids, data.value)
    except ValueError as exc:
        code = str(exc)
        status = 404 if code == "not_found" else 400
        return jsonify({"ok": False, "error": code}), status
    return jsonify({"ok": True, "affected": affected})
