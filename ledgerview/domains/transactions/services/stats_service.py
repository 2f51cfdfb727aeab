"""Per-currency aggregations and completeness checks for transactions."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ledgerview.domains.transactions.schemas.transaction_schemas import (
    FieldDefinition,
    TransactionRecord,
)


def calc_net_total_per_currency(transactions: Iterable[TransactionRecord]) -> Dict[str, int]:
    """Signed sum of totals grouped by currency code, in first-seen order.

    Records without a total or a currency code do not contribute.
    """
    totals: Dict[str, int] = {}
    for transaction in transactions:
        if transaction.total is None or not transaction.currency_code:
            continue
        code = transaction.currency_code
        totals[code] = totals.get(code, 0) + transaction.total
    return totals


def calc_turnover_per_currency(transactions: Iterable[TransactionRecord]) -> Dict[str, int]:
    """Sum of absolute totals grouped by currency code, in first-seen order."""
    totals: Dict[str, int] = {}
    for transaction in transactions:
        if transaction.total is None or not transaction.currency_code:
            continue
        code = transaction.currency_code
        totals[code] = totals.get(code, 0) + abs(transaction.total)
    return totals


def _is_blank(value) -> bool:
    return value is None or value == "" or value == []


def incomplete_transaction_fields(
    fields: Iterable[FieldDefinition], transaction: TransactionRecord
) -> List[FieldDefinition]:
    """Return the required fields that have no value on ``transaction``."""
    missing: List[FieldDefinition] = []
    for field in fields:
        if not field.is_required:
            continue
        if field.is_extra:
            value = transaction.extra.get(field.code)
        else:
            value = transaction.value_for(field.code)
        if _is_blank(value):
            missing.append(field)
    return missing


def is_transaction_incomplete(
    fields: Iterable[FieldDefinition], transaction: TransactionRecord
) -> bool:
    return bool(incomplete_transaction_fields(fields, transaction))
