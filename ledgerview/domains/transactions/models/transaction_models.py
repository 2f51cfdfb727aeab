"""Transaction list models: transactions, custom fields, projects, categories."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerview.extensions import db


def _new_id() -> str:
    return str(uuid.uuid4())


class Project(db.Model):
    __tablename__ = "project"

    code: Mapped[str] = mapped_column(db.String(64), primary_key=True)
    name: Mapped[str] = mapped_column(db.String(128), nullable=False)
    color: Mapped[str] = mapped_column(db.String(16), nullable=False, default="#000000")


class Category(db.Model):
    __tablename__ = "category"

    code: Mapped[str] = mapped_column(db.String(64), primary_key=True)
    name: Mapped[str] = mapped_column(db.String(128), nullable=False)
    color: Mapped[str] = mapped_column(db.String(16), nullable=False, default="#000000")


class Field(db.Model):
    """A column definition for the transaction list.

    ``code`` is either a standard transaction attribute code (``issuedAt``,
    ``total``, ...) or, when ``is_extra`` is set, a key of ``Transaction.extra``.
    """

    __tablename__ = "field"

    code: Mapped[str] = mapped_column(db.String(64), primary_key=True)
    name: Mapped[str] = mapped_column(db.String(128), nullable=False)
    position: Mapped[int] = mapped_column(default=0, nullable=False)
    is_visible_in_list: Mapped[bool] = mapped_column(default=True, nullable=False)
    is_extra: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_required: Mapped[bool] = mapped_column(default=False, nullable=False)


class Transaction(db.Model):
    __tablename__ = "transaction"
    __table_args__ = (
        db.Index("ix_transaction_issued_at", "issued_at"),
        db.Index("ix_transaction_project_code", "project_code"),
        db.Index("ix_transaction_category_code", "category_code"),
    )

    id: Mapped[str] = mapped_column(db.String(36), primary_key=True, default=_new_id)
    name: Mapped[str | None] = mapped_column(db.String(255))
    merchant: Mapped[str | None] = mapped_column(db.String(255))
    issued_at: Mapped[datetime | None] = mapped_column(nullable=True)
    # Amounts are stored in minor units (cents).
    total: Mapped[int | None] = mapped_column(db.BigInteger, nullable=True)
    currency_code: Mapped[str | None] = mapped_column(db.String(8))
    converted_total: Mapped[int | None] = mapped_column(db.BigInteger, nullable=True)
    converted_currency_code: Mapped[str | None] = mapped_column(db.String(8))
    type: Mapped[str | None] = mapped_column(db.String(16), default="expense")
    # Values: 'income', 'expense', 'other'
    project_code: Mapped[str | None] = mapped_column(
        db.ForeignKey("project.code", ondelete="SET NULL"), nullable=True
    )
    category_code: Mapped[str | None] = mapped_column(
        db.ForeignKey("category.code", ondelete="SET NULL"), nullable=True
    )
    files: Mapped[list] = mapped_column(db.JSON, default=list, nullable=False)
    extra: Mapped[dict | None] = mapped_column(db.JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)

    project: Mapped[Project | None] = relationship("Project", lazy="joined")
    category: Mapped[Category | None] = relationship("Category", lazy="joined")
