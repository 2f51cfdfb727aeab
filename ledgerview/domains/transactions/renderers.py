"""Field renderer registry for the transaction list.

Each standard field code maps to one fixed :class:`FieldRenderer`. Codes the
registry does not know (custom or extra fields) get a plain, non-sortable
renderer built from the field definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Sequence, Union

from markupsafe import Markup

from ledgerview.core.utils.money import format_currency
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    CategoryRef,
    FieldDefinition,
    ProjectRef,
    TransactionRecord,
)
from ledgerview.domains.transactions.services.stats_service import (
    calc_net_total_per_currency,
    calc_turnover_per_currency,
)

CellValue = Union[str, Markup]
ValueFormatter = Callable[[TransactionRecord], CellValue]
FooterAggregator = Callable[[Sequence[TransactionRecord]], CellValue]

TYPE_CLASSES = {
    "income": "amount-income",
    "expense": "amount-expense",
    "other": "amount-other",
}


@dataclass(frozen=True)
class FieldRenderer:
    name: str
    code: str
    sortable: bool
    classes: str = ""
    format_value: Optional[ValueFormatter] = None
    footer_value: Optional[FooterAggregator] = None


def _type_class(transaction: TransactionRecord) -> str:
    return TYPE_CLASSES[transaction.type or "other"]


def _format_issued_at(transaction: TransactionRecord) -> CellValue:
    return transaction.issued_at.strftime("%Y-%m-%d") if transaction.issued_at else ""


def _badge(ref: Optional[Union[ProjectRef, CategoryRef]]) -> Markup:
    name = ref.name if ref else ""
    color = (ref.color if ref else None) or "#000000"
    return Markup('<span class="badge" style="background-color: {}">{}</span>').format(color, name)


def _format_project(transaction: TransactionRecord) -> CellValue:
    return _badge(transaction.project) if transaction.project_code else "-"


def _format_category(transaction: TransactionRecord) -> CellValue:
    return _badge(transaction.category) if transaction.category_code else "-"


def _format_files(transaction: TransactionRecord) -> CellValue:
    return Markup('<span class="file-count">{}</span>').format(len(transaction.files))


def _format_amount(amount: Optional[int], currency_code: Optional[str]) -> str:
    if amount is None:
        return ""
    if currency_code:
        return format_currency(amount, currency_code)
    return str(amount)


def _format_total(transaction: TransactionRecord) -> CellValue:
    html = Markup('<div class="amount {}"><span>{}</span>').format(
        _type_class(transaction),
        _format_amount(transaction.total, transaction.currency_code),
    )
    if (
        transaction.converted_total is not None
        and transaction.converted_currency_code
        and transaction.converted_currency_code != transaction.currency_code
    ):
        html += Markup('<span class="amount-converted">({})</span>').format(
            format_currency(transaction.converted_total, transaction.converted_currency_code)
        )
    return html + Markup("</div>")


def _format_converted_total(transaction: TransactionRecord) -> CellValue:
    return Markup('<div class="amount {}">{}</div>').format(
        _type_class(transaction),
        _format_amount(transaction.converted_total, transaction.converted_currency_code),
    )


def _total_footer(transactions: Sequence[TransactionRecord]) -> CellValue:
    net = calc_net_total_per_currency(transactions)
    turnover = calc_turnover_per_currency(transactions)

    html = Markup('<dl class="totals-net"><dt>Net Total</dt>')
    for currency, total in net.items():
        html += Markup('<dd class="{}">{}</dd>').format(
            "amount-positive" if total >= 0 else "amount-negative",
            format_currency(total, currency),
        )
    html += Markup('</dl><dl class="totals-turnover"><dt>Turnover</dt>')
    for currency, total in turnover.items():
        html += Markup("<dd>{}</dd>").format(format_currency(total, currency))
    return html + Markup("</dl>")


STANDARD_FIELD_RENDERERS: Dict[str, FieldRenderer] = {
    renderer.code: renderer
    for renderer in (
        FieldRenderer(name="Name", code="name", sortable=True, classes="col-name"),
        FieldRenderer(name="Merchant", code="merchant", sortable=True, classes="col-merchant"),
        FieldRenderer(
            name="Date",
            code="issuedAt",
            sortable=True,
            classes="col-date",
            format_value=_format_issued_at,
        ),
        FieldRenderer(
            name="Project", code="projectCode", sortable=True, format_value=_format_project
        ),
        FieldRenderer(
            name="Category", code="categoryCode", sortable=True, format_value=_format_category
        ),
        FieldRenderer(name="Files", code="files", sortable=False, format_value=_format_files),
        FieldRenderer(
            name="Total",
            code="total",
            sortable=True,
            classes="text-right",
            format_value=_format_total,
            footer_value=_total_footer,
        ),
        FieldRenderer(
            name="Converted Total",
            code="convertedTotal",
            sortable=True,
            classes="text-right",
            format_value=_format_converted_total,
        ),
        FieldRenderer(name="Currency", code="currencyCode", sortable=True, classes="text-right"),
    )
}


def get_field_renderer(field: FieldDefinition) -> FieldRenderer:
    standard = STANDARD_FIELD_RENDERERS.get(field.code)
    if standard is not None:
        return standard
    return FieldRenderer(name=field.name, code=field.code, sortable=False)


def sortable_codes() -> FrozenSet[str]:
    return frozenset(code for code, renderer in STANDARD_FIELD_RENDERERS.items() if renderer.sortable)
