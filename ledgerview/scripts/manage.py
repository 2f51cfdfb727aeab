"""CLI commands for database setup and demo data.

Usage:
    flask init-db
    flask seed-demo
    flask seed-demo --reset
"""

from __future__ import annotations

from datetime import datetime, timedelta

import click
from flask.cli import with_appcontext

STANDARD_FIELDS = [
    # code, name, visible, required
    ("name", "Name", True, True),
    ("merchant", "Merchant", True, False),
    ("issuedAt", "Date", True, True),
    ("projectCode", "Project", True, False),
    ("categoryCode", "Category", True, False),
    ("files", "Files", True, False),
    ("total", "Total", True, True),
    ("convertedTotal", "Converted Total", False, False),
    ("currencyCode", "Currency", False, True),
]


def seed_demo_data() -> int:
    """Insert demo fields, projects, categories and transactions.

    Returns the number of transactions created.
    """
    from ledgerview.domains.transactions.models.transaction_models import (
        Category,
        Field,
        Project,
        Transaction,
    )
    from ledgerview.extensions import db

    for position, (code, name, visible, required) in enumerate(STANDARD_FIELDS):
        db.session.merge(
            Field(
                code=code,
                name=name,
                position=position,
                is_visible_in_list=visible,
                is_required=required,
            )
        )
    db.session.merge(
        Field(
            code="vat_rate",
            name="VAT rate",
            position=len(STANDARD_FIELDS),
            is_visible_in_list=True,
            is_extra=True,
        )
    )
    db.session.merge(Project(code="personal", name="Personal", color="#1e6091"))
    db.session.merge(Project(code="studio", name="Studio", color="#99582a"))
    db.session.merge(Category(code="travel", name="Travel", color="#2a9d8f"))
    db.session.merge(Category(code="income", name="Income", color="#52b788"))
    db.session.merge(Category(code="software", name="Software", color="#9d4edd"))

    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    rows = [
        Transaction(
            name="Invoice #42",
            merchant="Acme Corp",
            issued_at=today - timedelta(days=3),
            total=250000,
            currency_code="EUR",
            type="income",
            project_code="studio",
            category_code="income",
            files=["invoice-42.pdf"],
            extra={"vat_rate": "19%"},
        ),
        Transaction(
            name="Train to Berlin",
            merchant="Deutsche Bahn",
            issued_at=today - timedelta(days=10),
            total=-8990,
            currency_code="EUR",
            type="expense",
            project_code="studio",
            category_code="travel",
            files=["db-ticket.pdf"],
        ),
        Transaction(
            name="Design tool subscription",
            merchant="Figma",
            issued_at=today - timedelta(days=12),
            total=-1500,
            currency_code="USD",
            converted_total=-1380,
            converted_currency_code="EUR",
            type="expense",
            category_code="software",
        ),
        Transaction(
            name="Coffee",
            issued_at=today - timedelta(days=1),
            total=-450,
            currency_code="EUR",
            type="expense",
            project_code="personal",
        ),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return len(rows)


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create database tables."""
    from ledgerview.extensions import db

    db.create_all()
    click.echo("Database tables created.")


@click.command("seed-demo")
@click.option("--reset", is_flag=True, help="Drop and recreate tables before seeding")
@with_appcontext
def seed_demo_command(reset: bool):
    """Seed demo fields and transactions."""
    from ledgerview.extensions import db

    if reset:
        db.drop_all()
    db.create_all()
    created = seed_demo_data()
    click.echo(f"Seeded {created} transactions.")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)
