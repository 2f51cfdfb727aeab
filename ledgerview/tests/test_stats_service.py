from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit

from ledgerview.core.utils.money import format_currency
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    FieldDefinition,
    TransactionRecord,
)
from ledgerview.domains.transactions.services.stats_service import (
    calc_net_total_per_currency,
    calc_turnover_per_currency,
    incomplete_transaction_fields,
    is_transaction_incomplete,
)

SAMPLE = [
    TransactionRecord(id="1", total=100, currency_code="USD"),
    TransactionRecord(id="2", total=-40, currency_code="USD"),
    TransactionRecord(id="3", total=50, currency_code="EUR"),
]


def test_net_total_per_currency():
    assert calc_net_total_per_currency(SAMPLE) == {"USD": 60, "EUR": 50}


def test_turnover_per_currency():
    assert calc_turnover_per_currency(SAMPLE) == {"USD": 140, "EUR": 50}


def test_currencies_keep_first_seen_order():
    assert list(calc_net_total_per_currency(SAMPLE)) == ["USD", "EUR"]


def test_records_without_total_or_currency_are_skipped():
    records = SAMPLE + [
        TransactionRecord(id="4", total=None, currency_code="USD"),
        TransactionRecord(id="5", total=999),
    ]
    assert calc_net_total_per_currency(records) == {"USD": 60, "EUR": 50}
    assert calc_turnover_per_currency(records) == {"USD": 140, "EUR": 50}
    assert calc_net_total_per_currency([]) == {}


def test_incomplete_fields_checks_required_standard_and_extra_fields():
    fields = [
        FieldDefinition(code="name", name="Name", is_required=True),
        FieldDefinition(code="issuedAt", name="Date", is_required=True),
        FieldDefinition(code="merchant", name="Merchant"),
        FieldDefinition(code="vat", name="VAT", is_extra=True, is_required=True),
    ]
    transaction = TransactionRecord(id="1", name="Lunch", extra={"vat": ""})

    missing = incomplete_transaction_fields(fields, transaction)
    assert [field.code for field in missing] == ["issuedAt", "vat"]
    assert is_transaction_incomplete(fields, transaction)


def test_complete_transaction():
    fields = [FieldDefinition(code="name", name="Name", is_required=True)]
    assert not is_transaction_incomplete(fields, TransactionRecord(id="1", name="Lunch"))
    assert not is_transaction_incomplete([], TransactionRecord(id="1"))


@pytest.mark.parametrize(
    "amount, code, expected",
    [
        (123450, "usd", "USD 1,234.50"),
        (-40, "EUR", "EUR -0.40"),
        (0, "GBP", "GBP 0.00"),
        (5, "", "0.05"),
    ],
)
def test_format_currency(amount, code, expected):
    assert format_currency(amount, code) == expected
