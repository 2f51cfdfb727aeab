"""DTO ↔ JSON mappers for the transactions domain."""

from __future__ import annotations

from ledgerview.domains.transactions.schemas.transaction_schemas import TransactionRecord


def map_transaction(transaction: TransactionRecord) -> dict:
    return {
        "id": transaction.id,
        "name": transaction.name,
        "merchant": transaction.merchant,
        "issued_at": transaction.issued_at.isoformat() if transaction.issued_at else None,
        "total": transaction.total,
        "currency_code": transaction.currency_code,
        "converted_total": transaction.converted_total,
        "converted_currency_code": transaction.converted_currency_code,
        "type": transaction.type,
        "project_code": transaction.project_code,
        "category_code": transaction.category_code,
        "files": list(transaction.files),
        "extra": dict(transaction.extra),
    }
