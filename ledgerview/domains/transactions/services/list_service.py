"""Transaction list orchestration: columns, cells, footer, sort and selection.

A :class:`TransactionListView` is built per request from the records and
field definitions supplied by the data-fetching layer. Rows are rendered in
the order given; sorting itself happens upstream against the ``ordering``
token, so a sort change here only re-encodes the token and asks the router to
navigate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple, Union
from urllib.parse import quote, urlencode

from ledgerview.domains.transactions.ordering import (
    Direction,
    SortState,
    encode_ordering,
    next_sort_state,
    parse_ordering,
)
from ledgerview.domains.transactions.renderers import CellValue, FieldRenderer, get_field_renderer
from ledgerview.domains.transactions.schemas.transaction_schemas import (
    FieldDefinition,
    TransactionRecord,
)
from ledgerview.domains.transactions.selection import SelectionState
from ledgerview.domains.transactions.services.stats_service import is_transaction_incomplete

logger = logging.getLogger(__name__)

ORDERING_PARAM = "ordering"
INCOMPLETE_ROW_CLASS = "row-incomplete"
SELECTED_ROW_CLASS = "row-selected"

IncompletePredicate = Callable[[Sequence[FieldDefinition], TransactionRecord], bool]
QueryParams = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class Router(Protocol):
    def push(self, location: str) -> None: ...


@dataclass(frozen=True)
class FieldWithRenderer:
    field: FieldDefinition
    renderer: FieldRenderer

    @property
    def code(self) -> str:
        return self.field.code

    @property
    def label(self) -> str:
        return self.field.name or self.renderer.name


@dataclass(frozen=True)
class HeaderCell:
    code: str
    label: str
    classes: str
    sortable: bool
    direction: Optional[Direction]


@dataclass(frozen=True)
class ListRow:
    transaction: TransactionRecord
    cells: List[CellValue]
    selected: bool
    incomplete: bool

    @property
    def classes(self) -> str:
        classes = []
        if self.incomplete:
            classes.append(INCOMPLETE_ROW_CLASS)
        if self.selected:
            classes.append(SELECTED_ROW_CLASS)
        return " ".join(classes)


class TransactionListView:
    def __init__(
        self,
        transactions: Sequence[TransactionRecord],
        fields: Sequence[FieldDefinition],
        router: Router,
        *,
        query_params: Optional[QueryParams] = None,
        selected_ids: Iterable[str] = (),
        is_incomplete: IncompletePredicate = is_transaction_incomplete,
        base_path: str = "/transactions",
    ) -> None:
        self.transactions = list(transactions)
        self._router = router
        self._is_incomplete = is_incomplete
        self._base_path = base_path.rstrip("/")
        if isinstance(query_params, Mapping):
            self._query = list(query_params.items())
        else:
            self._query = list(query_params or ())
        token = next((value for key, value in self._query if key == ORDERING_PARAM), None)
        self.sorting: SortState = parse_ordering(token)
        self.selection = SelectionState([t.id for t in self.transactions], selected_ids)
        self.fields = fields

    # ---- columns ---------------------------------------------------------

    @property
    def fields(self) -> List[FieldDefinition]:
        return self._fields

    @fields.setter
    def fields(self, fields: Sequence[FieldDefinition]) -> None:
        self._fields = list(fields)
        self.visible_fields: List[FieldWithRenderer] = [
            FieldWithRenderer(field=field, renderer=get_field_renderer(field))
            for field in self._fields
            if field.is_visible_in_list
        ]

    def header(self) -> List[HeaderCell]:
        return [
            HeaderCell(
                code=column.code,
                label=column.label,
                classes=column.renderer.classes,
                sortable=column.renderer.sortable,
                direction=self.sorting.direction_for(column.code) if column.renderer.sortable else None,
            )
            for column in self.visible_fields
        ]

    # ---- cells -----------------------------------------------------------

    def render_cell(self, transaction: TransactionRecord, column: FieldWithRenderer) -> CellValue:
        if column.field.is_extra:
            value = transaction.extra.get(column.code)
            return "" if value is None else value
        if column.renderer.format_value is not None:
            return column.renderer.format_value(transaction)
        value = transaction.value_for(column.code)
        return "" if value is None else str(value)

    def rows(self) -> List[ListRow]:
        definitions = [column.field for column in self.visible_fields]
        return [
            ListRow(
                transaction=transaction,
                cells=[self.render_cell(transaction, column) for column in self.visible_fields],
                selected=transaction.id in self.selection,
                incomplete=self._is_incomplete(definitions, transaction),
            )
            for transaction in self.transactions
        ]

    def footer(self) -> List[CellValue]:
        return [
            column.renderer.footer_value(self.transactions) if column.renderer.footer_value else ""
            for column in self.visible_fields
        ]

    # ---- sorting ---------------------------------------------------------

    def _renderer_for(self, code: str) -> FieldRenderer:
        for column in self.visible_fields:
            if column.code == code:
                return column.renderer
        return get_field_renderer(FieldDefinition(code=code))

    def list_url(self, state: SortState) -> str:
        params = [(key, value) for key, value in self._query if key != ORDERING_PARAM]
        token = encode_ordering(state)
        if token:
            params.append((ORDERING_PARAM, token))
        if not params:
            return self._base_path
        return f"{self._base_path}?{urlencode(params)}"

    def handle_sort(self, code: str) -> bool:
        """Advance the sort cycle for ``code`` and navigate to the new ordering.

        Returns False without navigating when the column is not sortable.
        """
        if not self._renderer_for(code).sortable:
            logger.debug("Ignoring sort on non-sortable field %s", code)
            return False
        self.sorting = next_sort_state(self.sorting, code)
        self._router.push(self.list_url(self.sorting))
        return True

    # ---- selection -------------------------------------------------------

    @property
    def selected_ids(self) -> List[str]:
        return self.selection.ids

    @property
    def all_selected(self) -> bool:
        return self.selection.all_selected

    def toggle_all_rows(self) -> None:
        self.selection.toggle_all()

    def toggle_one_row(self, transaction_id: str) -> None:
        self.selection.toggle_one(transaction_id)

    def on_bulk_action_complete(self) -> None:
        self.selection.clear()

    # ---- navigation ------------------------------------------------------

    def detail_url(self, transaction_id: str) -> str:
        return f"{self._base_path}/{quote(transaction_id, safe='')}"

    def open_row(self, transaction_id: str) -> None:
        self._router.push(self.detail_url(transaction_id))
