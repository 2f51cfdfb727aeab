"""Field renderer registry behaviour."""

from __future__ import annotations

from datetime import datetime

import pytest

pytestmark = pytest.mark.unit

from ledgerview.domains.transactions.renderers import (
    STANDARD_FIELD_RENDERERS,
    get_field_renderer,
    sortable_codes,
)
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    CategoryRef,
    FieldDefinition,
    ProjectRef,
    TransactionRecord,
)


def _txn(**kwargs) -> TransactionRecord:
    kwargs.setdefault("id", "t1")
    return TransactionRecord(**kwargs)


@pytest.mark.parametrize("code", ["custom1", "vat_rate", "Total", ""])
def test_unknown_code_gets_plain_non_sortable_renderer(code):
    renderer = get_field_renderer(FieldDefinition(code=code, name="Custom"))
    assert renderer.name == "Custom"
    assert renderer.code == code
    assert renderer.sortable is False
    assert renderer.format_value is None
    assert renderer.footer_value is None


def test_standard_codes_resolve_to_registry_entries():
    for code, renderer in STANDARD_FIELD_RENDERERS.items():
        assert get_field_renderer(FieldDefinition(code=code, name="ignored")) is renderer
    assert sortable_codes() == frozenset(STANDARD_FIELD_RENDERERS) - {"files"}


def test_issued_at_formats_date_and_tolerates_missing():
    renderer = STANDARD_FIELD_RENDERERS["issuedAt"]
    assert renderer.format_value(_txn(issued_at=datetime(2024, 2, 29, 13, 5))) == "2024-02-29"
    assert renderer.format_value(_txn()) == ""


def test_project_and_category_badges():
    project = STANDARD_FIELD_RENDERERS["projectCode"]
    category = STANDARD_FIELD_RENDERERS["categoryCode"]

    assert project.format_value(_txn()) == "-"
    assert category.format_value(_txn()) == "-"

    html = project.format_value(
        _txn(project_code="studio", project=ProjectRef(code="studio", name="Studio <B>", color="#123456"))
    )
    assert "background-color: #123456" in html
    assert "Studio &lt;B&gt;" in html

    html = category.format_value(_txn(category_code="travel", category=CategoryRef(code="travel", name="Travel")))
    assert "Travel" in html


def test_files_renders_count():
    files = STANDARD_FIELD_RENDERERS["files"]
    assert ">2<" in files.format_value(_txn(files=["a.pdf", "b.pdf"]))
    assert ">0<" in files.format_value(_txn(files=None))


def test_total_colors_by_type_and_formats_currency():
    total = STANDARD_FIELD_RENDERERS["total"]

    income = total.format_value(_txn(total=123450, currency_code="USD", type="income"))
    assert "amount-income" in income
    assert "USD 1,234.50" in income

    expense = total.format_value(_txn(total=-500, currency_code="EUR", type="expense"))
    assert "amount-expense" in expense
    assert "EUR -5.00" in expense

    assert "amount-other" in total.format_value(_txn(total=1, currency_code="EUR"))


def test_total_without_currency_or_amount_degrades():
    total = STANDARD_FIELD_RENDERERS["total"]
    assert "<span>42</span>" in total.format_value(_txn(total=42))
    assert "<span></span>" in total.format_value(_txn())


def test_total_shows_converted_amount_only_for_other_currency():
    total = STANDARD_FIELD_RENDERERS["total"]

    converted = total.format_value(
        _txn(total=1500, currency_code="USD", converted_total=1380, converted_currency_code="EUR")
    )
    assert "(EUR 13.80)" in converted

    same = total.format_value(
        _txn(total=1500, currency_code="USD", converted_total=1500, converted_currency_code="USD")
    )
    assert "amount-converted" not in same

    missing_code = total.format_value(_txn(total=1500, currency_code="USD", converted_total=1380))
    assert "amount-converted" not in missing_code


def test_converted_total_column():
    converted = STANDARD_FIELD_RENDERERS["convertedTotal"]
    html = converted.format_value(
        _txn(converted_total=-990, converted_currency_code="EUR", type="expense")
    )
    assert "EUR -9.90" in html
    assert "amount-expense" in html
    assert converted.format_value(_txn()) == '<div class="amount amount-other"></div>'


def test_total_footer_lists_net_and_turnover_per_currency():
    footer = STANDARD_FIELD_RENDERERS["total"].footer_value(
        [
            _txn(id="1", total=100, currency_code="USD"),
            _txn(id="2", total=-40, currency_code="USD"),
            _txn(id="3", total=-50, currency_code="EUR"),
        ]
    )
    net, turnover = footer.split('<dl class="totals-turnover">')
    assert "Net Total" in net
    assert '<dd class="amount-positive">USD 0.60</dd>' in net
    assert '<dd class="amount-negative">EUR -0.50</dd>' in net
    assert "Turnover" in turnover
    assert "<dd>USD 1.40</dd>" in turnover
    assert "<dd>EUR 0.50</dd>" in turnover


def test_total_footer_for_empty_list():
    footer = STANDARD_FIELD_RENDERERS["total"].footer_value([])
    assert "<dd" not in footer
