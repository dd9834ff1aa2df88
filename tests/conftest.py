"""
Shared pytest fixtures.

Every test runs against a fresh in-memory SQLite database; the API client
shares the test's session so data set up through the crud layer is visible
to requests.
"""

import os
import tempfile

# Must be set before the application modules are imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "ledger-test-logs"))

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from crud import chart_of_accounts as accounts_crud
from crud import journal_entry as journal_crud
from crud import parties as parties_crud
from database import Base, SessionLocal, engine, get_db
from main import app
from schemas.chart_of_accounts import ChartOfAccountsCreate
from schemas.journal_entry import JournalEntryCreate
from schemas.party import PartyCreate
from utils import schema_capabilities


@pytest.fixture
def db():
    """Fresh schema and session per test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    schema_capabilities.reset()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def make_token(role: str = "admin", username: str = "tester") -> str:
    return jwt.encode({"sub": username, "username": username, "role": role}, "test-secret", algorithm="HS256")


@pytest.fixture
def bearer_for():
    """Authorization header value for a user holding `role`."""
    def _bearer(role: str) -> str:
        return f"Bearer {make_token(role=role)}"
    return _bearer


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        test_client.headers.update({"Authorization": f"Bearer {make_token()}"})
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(db):
    """Create an account through the registry."""
    def _make(code, name, category, account_type="general", **kwargs):
        return accounts_crud.create_account(
            db,
            ChartOfAccountsCreate(
                account_code=code, account_name=name, category=category, account_type=account_type, **kwargs
            ),
        )
    return _make


@pytest.fixture
def make_party(db):
    def _make(party_type, name, code, **kwargs):
        return parties_crud.create_party(db, PartyCreate(party_type=party_type, name=name, code=code, **kwargs))
    return _make


@pytest.fixture
def post_entry(db):
    """Post a journal; lines are (account_code, debit, credit) or (account_code, debit, credit, party_id)."""
    def _post(entry_date, description, lines, reference_id=None):
        payload_lines = []
        for line in lines:
            code, debit, credit = line[:3]
            payload_lines.append({
                "account_code": code,
                "debit": Decimal(str(debit)),
                "credit": Decimal(str(credit)),
                "party_id": line[3] if len(line) > 3 else None,
            })
        entry = JournalEntryCreate(
            date=entry_date, description=description, reference_id=reference_id, lines=payload_lines
        )
        return journal_crud.create_journal_entry(db, entry)
    return _post


@pytest.fixture
def cash_and_revenue(make_account):
    cash = make_account("1000", "Cash", "asset", "current_asset")
    revenue = make_account("4000", "Revenue", "revenue", "sales_revenue")
    return cash, revenue


@pytest.fixture
def sale_date():
    return date(2024, 1, 15)
