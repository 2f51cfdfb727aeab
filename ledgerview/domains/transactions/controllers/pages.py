"""Transaction list HTML pages.

Selection lives in the session; sort state lives in the ``ordering`` query
parameter. Every interaction is a small POST that rebuilds the list view,
applies one transition and redirects back.
"""

from __future__ import annotations

from typing import Optional

from flask import Blueprint, abort, current_app, redirect, render_template, request, session, url_for
from pydantic import ValidationError

from ledgerview.domains.transactions.models.transaction_models import Category, Project
from ledgerview.domains.transactions.schemas.transaction_schemas import TransactionListQuery
from ledgerview.domains.transactions.services.list_service import TransactionListView
from ledgerview.domains.transactions.services.stats_service import incomplete_transaction_fields
from ledgerview.domains.transactions.services.transaction_service import (
    BULK_ACTIONS,
    apply_bulk_action,
    get_transaction,
    list_field_definitions,
    list_transactions,
)
from ledgerview.extensions import limiter

transactions_pages_bp = Blueprint("transactions_pages", __name__)

SELECTION_SESSION_KEY = "transactions.selected_ids"


class RedirectRouter:
    """Collects the location the list view navigates to."""

    def __init__(self) -> None:
        self.location: Optional[str] = None

    def push(self, location: str) -> None:
        self.location = location


def _list_path() -> str:
    return url_for("transactions_pages.transactions_list")


def _list_args() -> dict[str, str]:
    # Route arguments of the row and sort endpoints cannot be query keys.
    return {k: v for k, v in request.args.items() if k not in ("code", "transaction_id")}


def _build_view(router: RedirectRouter) -> TransactionListView:
    try:
        query = TransactionListQuery.model_validate(request.args.to_dict())
    except ValidationError:
        abort(400, description="invalid_query")
    transactions = list_transactions(
        query.ordering, limit=current_app.config.get("TRANSACTIONS_LIST_LIMIT")
    )
    return TransactionListView(
        transactions,
        list_field_definitions(),
        router,
        query_params=request.args.items(multi=True),
        selected_ids=session.get(SELECTION_SESSION_KEY, []),
        base_path=_list_path(),
    )


def _store_selection(view: TransactionListView) -> None:
    session[SELECTION_SESSION_KEY] = view.selected_ids


def _back_to_list(view: TransactionListView):
    return redirect(view.list_url(view.sorting))


@transactions_pages_bp.get("")
def transactions_list():
    view = _build_view(RedirectRouter())
    _store_selection(view)
    return render_template(
        "transactions/list.html",
        view=view,
        header=view.header(),
        rows=view.rows(),
        footer=view.footer(),
        list_args=_list_args(),
        bulk_actions=BULK_ACTIONS,
        categories=Category.query.order_by(Category.name.asc()).all(),
        projects=Project.query.order_by(Project.name.asc()).all(),
    )


@transactions_pages_bp.post("/sort/<code>")
@limiter.limit("120/minute")
def sort(code: str):
    router = RedirectRouter()
    view = _build_view(router)
    view.handle_sort(code)
    return redirect(router.location or view.list_url(view.sorting))


@transactions_pages_bp.post("/select-all")
def toggle_all():
    view = _build_view(RedirectRouter())
    view.toggle_all_rows()
    _store_selection(view)
    return _back_to_list(view)


@transactions_pages_bp.post("/select/<transaction_id>")
def toggle_one(transaction_id: str):
    view = _build_view(RedirectRouter())
    view.toggle_one_row(transaction_id)
    _store_selection(view)
    return _back_to_list(view)


@transactions_pages_bp.post("/bulk")
@limiter.limit("60/minute")
def bulk_action():
    view = _build_view(RedirectRouter())
    try:
        apply_bulk_action(
            request.form.get("action", ""),
            view.selected_ids,
            request.form.get("value") or None,
        )
    except ValueError as exc:
        abort(400, description=str(exc))
    view.on_bulk_action_complete()
    _store_selection(view)
    return _back_to_list(view)


@transactions_pages_bp.get("/open/<transaction_id>")
def open_row(transaction_id: str):
    router = RedirectRouter()
    TransactionListView([], [], router, base_path=_list_path()).open_row(transaction_id)
    return redirect(router.location)


@transactions_pages_bp.get("/<transaction_id>")
def transaction_detail(transaction_id: str):
    transaction = get_transaction(transaction_id)
    if transaction is None:
        abort(404, description="not_found")
    fields = list_field_definitions()
    # The detail page shows every field, not only the list columns.
    view = TransactionListView(
        [transaction],
        [field.model_copy(update={"is_visible_in_list": True}) for field in fields],
        RedirectRouter(),
        base_path=_list_path(),
    )
    return render_template(
        "transactions/detail.html",
        transaction=transaction,
        columns=list(zip(view.header(), view.rows()[0].cells)),
        missing=incomplete_transaction_fields(fields, transaction),
    )
