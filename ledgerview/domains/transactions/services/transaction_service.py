"""Transaction loading and bulk actions."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import sqlalchemy as sa

from ledgerview.domains.transactions.models.transaction_models import (
    Category,
    Field,
    Project,
    Transaction,
)
from ledgerview.domains.transactions.ordering import SortState, parse_ordering
from ledgerview.domains.transactions.renderers import sortable_codes
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    FieldDefinition,
    TransactionRecord,
    attribute_for_code,
)
from ledgerview.extensions import db

logger = logging.getLogger(__name__)

BULK_ACTIONS = ("delete", "set_category", "set_project")


def list_field_definitions() -> List[FieldDefinition]:
    rows = Field.query.order_by(Field.position.asc(), Field.code.asc()).all()
    return [FieldDefinition.model_validate(row) for row in rows]


def _order_by_clause(state: SortState):
    if state.field not in sortable_codes():
        return None
    column = getattr(Transaction, attribute_for_code(state.field), None)
    if column is None:
        return None
    return column.desc() if state.direction == "desc" else column.asc()


def list_transactions(ordering: Optional[str] = None, limit: Optional[int] = None) -> List[TransactionRecord]:
    """Load transactions ordered by an ``ordering`` token.

    Unknown or non-sortable tokens fall back to newest first.
    """
    state = parse_ordering(ordering)
    clause = _order_by_clause(state)
    query = Transaction.query
    if clause is None:
        if state.is_sorted:
            logger.debug("Unsupported ordering %r; using default order", ordering)
        query = query.order_by(Transaction.issued_at.desc(), Transaction.created_at.desc())
    else:
        query = query.order_by(clause, Transaction.id.asc())
    if limit:
        query = query.limit(limit)
    return [TransactionRecord.model_validate(row) for row in query.all()]


def get_transaction(transaction_id: str) -> Optional[TransactionRecord]:
    row = db.session.get(Transaction, transaction_id)
    return TransactionRecord.model_validate(row) if row else None


def _ensure_exists(model, code: Optional[str]) -> None:
    if code is not None and db.session.get(model, code) is None:
        raise ValueError("not_found")


def apply_bulk_action(action: str, ids: Sequence[str], value: Optional[str] = None) -> int:
    """Apply ``action`` to the transactions in ``ids`` and return the row count.

    Raises ValueError("invalid_action") for unknown actions and
    ValueError("not_found") when the target category/project does not exist.
    """
    if action not in BULK_ACTIONS:
        raise ValueError("invalid_action")
    ids = list(ids)
    if not ids:
        return 0

    if action == "delete":
        stmt = sa.delete(Transaction).where(Transaction.id.in_(ids))
    elif action == "set_category":
        _ensure_exists(Category, value)
        stmt = sa.update(Transaction).where(Transaction.id.in_(ids)).values(category_code=value)
    else:
        _ensure_exists(Project, value)
        stmt = sa.update(Transaction).where(Transaction.id.in_(ids)).values(project_code=value)

    result = db.session.execute(stmt)
    db.session.commit()
    db.session.expire_all()
    logger.info("Bulk action %s applied to %d transactions", action, result.rowcount)
    return result.rowcount
