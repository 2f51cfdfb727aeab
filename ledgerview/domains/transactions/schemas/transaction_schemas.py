"""Pydantic schemas for the transactions domain."""

from __future__ import annotations

import datetime as dt
import re
from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def attribute_for_code(code: str) -> str:
    """Map a camelCase field code (``issuedAt``) to its attribute (``issued_at``)."""
    return _CAMEL_BOUNDARY.sub("_", code).lower()


class ProjectRef(BaseModel):
    code: str
    name: str
    color: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class CategoryRef(BaseModel):
    code: str
    name: str
    color: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class TransactionRecord(BaseModel):
    """Immutable view of one transaction as shown in the list."""

    id: str
    name: Optional[str] = None
    merchant: Optional[str] = None
    issued_at: Optional[dt.datetime] = None
    total: Optional[int] = None
    currency_code: Optional[str] = None
    converted_total: Optional[int] = None
    converted_currency_code: Optional[str] = None
    project_code: Optional[str] = None
    project: Optional[ProjectRef] = None
    category_code: Optional[str] = None
    category: Optional[CategoryRef] = None
    files: List[str] = Field(default_factory=list)
    type: Optional[Literal["income", "expense", "other"]] = None
    extra: Mapping[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("files", "extra", mode="before")
    @classmethod
    def _none_is_empty(cls, value, info):
        if value is None:
            return [] if info.field_name == "files" else {}
        return value

    def value_for(self, code: str) -> Any:
        """Return the standard attribute addressed by a field code, or None."""
        attribute = attribute_for_code(code)
        if attribute not in type(self).model_fields:
            return None
        return getattr(self, attribute)

    def extra_value(self, code: str) -> Any:
        return self.extra.get(code, "")


class FieldDefinition(BaseModel):
    code: str
    name: str = ""
    is_visible_in_list: bool = True
    is_extra: bool = False
    is_required: bool = False
    position: int = 0

    model_config = ConfigDict(from_attributes=True, frozen=True)


class TransactionListQuery(BaseModel):
    """Query parameters accepted by the transaction list."""

    ordering: Optional[str] = Field(default=None, max_length=128)

    @field_validator("ordering", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BulkActionRequest(BaseModel):
    """Request body for a bulk action over selected transactions."""

    action: Literal["delete", "set_category", "set_project"]
    ids: List[str] = Field(min_length=1, max_length=1000)
    value: Optional[str] = Field(default=None, max_length=64)
