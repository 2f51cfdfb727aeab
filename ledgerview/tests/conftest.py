import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ledgerview import create_app
from ledgerview.domains.transactions.models.transaction_models import (
    Category,
    Field,
    Project,
    Transaction,
)
from ledgerview.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, HTTP)")


@pytest.fixture()
def app():
    """Per-test app bound to a fresh in-memory database."""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def seeded(app):
    """Fields, a project, a category and three transactions in two currencies."""
    db.session.add_all(
        [
            Field(code="name", name="Name", position=0, is_required=True),
            Field(code="issuedAt", name="Date", position=1),
            Field(code="files", name="Files", position=2),
            Field(code="total", name="Total", position=3),
            Field(code="categoryCode", name="Category", position=4, is_required=True),
            Field(code="vat", name="VAT", position=5, is_extra=True),
            Field(code="notes", name="Notes", position=6, is_visible_in_list=False),
            Project(code="studio", name="Studio", color="#99582a"),
            Category(code="travel", name="Travel", color="#2a9d8f"),
        ]
    )
    rows = {
        "a": Transaction(
            id="a",
            name="Alpha",
            issued_at=datetime(2024, 3, 1),
            total=100,
            currency_code="USD",
            type="income",
            category_code="travel",
            extra={"vat": "19%"},
        ),
        "b": Transaction(
            id="b",
            name="Bravo",
            issued_at=datetime(2024, 3, 3),
            total=-40,
            currency_code="USD",
            type="expense",
            category_code="travel",
            project_code="studio",
        ),
        "c": Transaction(
            id="c",
            name="Charlie",
            issued_at=datetime(2024, 3, 2),
            total=50,
            currency_code="EUR",
            type="other",
        ),
    }
    db.session.add_all(rows.values())
    db.session.commit()
    return rows
