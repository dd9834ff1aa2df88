"""Account registry: creation, updates, deletion rules and cash accounts."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from crud import chart_of_accounts as accounts_crud
from database import build_engine
from exceptions import DuplicateCode, HasChildren, InvalidInput, NotFound, ParentNotFound, SelfParent
from models.journal_line import JournalLine
from schemas.chart_of_accounts import ChartOfAccountsCreate, ChartOfAccountsUpdate
from utils import schema_capabilities


class TestCreateAccount:
    def test_create_and_fetch_with_parent(self, db, make_account):
        parent = make_account("1000", "Current Assets", "asset", "current_asset")
        child = make_account("1010", "Petty Cash", "asset", "current_asset", parent_id=parent.id)

        fetched = accounts_crud.get_account(db, child.id)
        assert fetched.parent.account_code == "1000"
        assert fetched.is_active is True

    def test_duplicate_code_rejected_and_first_untouched(self, db, make_account):
        first = make_account("1000", "Cash", "asset")

        with pytest.raises(DuplicateCode):
            make_account("1000", "Other Cash", "asset")

        assert accounts_crud.get_account(db, first.id).account_name == "Cash"
        assert len(accounts_crud.get_accounts(db)) == 1

    def test_concurrent_duplicate_maps_to_duplicate_code(self, db, make_account, monkeypatch):
        first = make_account("1000", "Cash", "asset")
        # Another writer inserted the code after the existence check ran.
        monkeypatch.setattr(accounts_crud, "get_account_by_code", lambda *args, **kwargs: None)

        with pytest.raises(DuplicateCode) as exc_info:
            make_account("1000", "Other Cash", "asset")

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert accounts_crud.get_account(db, first.id).account_name == "Cash"

    def test_missing_parent(self, make_account):
        with pytest.raises(ParentNotFound):
            make_account("1010", "Orphan", "asset", parent_id=999)

    def test_blank_name_is_invalid(self, db):
        with pytest.raises(InvalidInput):
            accounts_crud.create_account(
                db, ChartOfAccountsCreate(account_code="1000", account_name=" ", category="asset", account_type="x")
            )

    def test_unknown_category_rejected_by_schema(self):
        with pytest.raises(ValueError):
            ChartOfAccountsCreate(account_code="1", account_name="X", category="income", account_type="x")

    def test_listing_is_ordered_and_filterable(self, db, make_account):
        make_account("5000", "COGS", "expense")
        make_account("1000", "Cash", "asset")
        make_account("4000", "Sales", "revenue")

        assert [a.account_code for a in accounts_crud.get_accounts(db)] == ["1000", "4000", "5000"]
        assert [a.account_code for a in accounts_crud.get_accounts(db, category="revenue")] == ["4000"]


class TestUpdateAccount:
    def test_self_parent_rejected(self, db, make_account):
        account = make_account("1000", "Cash", "asset")
        with pytest.raises(SelfParent):
            accounts_crud.update_account(db, account.id, ChartOfAccountsUpdate(parent_id=account.id))

    def test_code_collision(self, db, make_account):
        make_account("1000", "Cash", "asset")
        bank = make_account("1010", "Bank", "asset")
        with pytest.raises(DuplicateCode):
            accounts_crud.update_account(db, bank.id, ChartOfAccountsUpdate(account_code="1000"))

    def test_concurrent_rename_collision(self, db, make_account, monkeypatch):
        make_account("1000", "Cash", "asset")
        bank = make_account("1010", "Bank", "asset")
        monkeypatch.setattr(accounts_crud, "get_account_by_code", lambda *args, **kwargs: None)

        with pytest.raises(DuplicateCode):
            accounts_crud.update_account(db, bank.id, ChartOfAccountsUpdate(account_code="1000"))

        assert accounts_crud.get_account(db, bank.id).account_code == "1010"

    def test_partial_update_keeps_other_fields(self, db, make_account):
        account = make_account("1000", "Cash", "asset", "current_asset")
        updated = accounts_crud.update_account(db, account.id, ChartOfAccountsUpdate(account_name="Cash on Hand"))
        assert updated.account_name == "Cash on Hand"
        assert updated.account_type == "current_asset"

    def test_blank_required_field_is_ignored(self, db, make_account):
        account = make_account("1000", "Cash", "asset")
        updated = accounts_crud.update_account(db, account.id, ChartOfAccountsUpdate(account_name=""))
        assert updated.account_name == "Cash"

    def test_rename_moves_postings(self, db, cash_and_revenue, post_entry, sale_date):
        cash, _ = cash_and_revenue
        post_entry(sale_date, "Sale", [("1000", 100, 0), ("4000", 0, 100)])

        accounts_crud.update_account(db, cash.id, ChartOfAccountsUpdate(account_code="1001"))

        codes = {line.account_code for line in db.query(JournalLine).all()}
        assert codes == {"1001", "4000"}

    def test_unknown_account(self, db):
        with pytest.raises(NotFound):
            accounts_crud.update_account(db, 42, ChartOfAccountsUpdate(account_name="X"))


class TestDeleteAccount:
    def test_unused_account_is_removed(self, db, make_account):
        account = make_account("1000", "Cash", "asset")
        assert accounts_crud.delete_account(db, account.id) == "deleted"
        with pytest.raises(NotFound):
            accounts_crud.get_account(db, account.id)

    def test_account_with_postings_is_deactivated(self, db, cash_and_revenue, post_entry, sale_date):
        cash, _ = cash_and_revenue
        post_entry(sale_date, "Sale", [("1000", 100, 0), ("4000", 0, 100)])

        assert accounts_crud.delete_account(db, cash.id) == "deactivated"

        retained = accounts_crud.get_account(db, cash.id)
        assert retained.is_active is False
        assert db.query(JournalLine).filter(JournalLine.account_code == "1000").count() == 1

    def test_account_with_children_is_refused(self, db, make_account):
        parent = make_account("1000", "Assets", "asset")
        make_account("1010", "Cash", "asset", parent_id=parent.id)

        with pytest.raises(HasChildren):
            accounts_crud.delete_account(db, parent.id)

        unchanged = accounts_crud.get_account(db, parent.id)
        assert unchanged.is_active is True
        assert unchanged.account_name == "Assets"


class TestCashAccounts:
    def test_sub_type_match(self, db, make_account):
        make_account("1000", "Cash", "asset", sub_type="Checking & Saving")
        make_account("1010", "Bank", "asset", sub_type="Checking & Saving")
        make_account("1100", "Receivables", "asset", "Checking Receivable")
        inactive = make_account("1020", "Closed Bank", "asset", sub_type="Checking & Saving")
        accounts_crud.deactivate_account(db, inactive.id)

        assert [a.account_code for a in accounts_crud.get_cash_accounts(db)] == ["1000", "1010"]

    @pytest.fixture
    def legacy_db(self):
        """A chart_of_accounts table migrated before sub_type existed."""
        legacy_engine = build_engine("sqlite://")
        with legacy_engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE chart_of_accounts ("
                "id INTEGER PRIMARY KEY, account_code VARCHAR(20) NOT NULL UNIQUE, "
                "account_name VARCHAR(100) NOT NULL, category VARCHAR(20) NOT NULL, "
                "account_type VARCHAR(50) NOT NULL, parent_id INTEGER, is_active BOOLEAN NOT NULL, "
                "created_at DATETIME NOT NULL, updated_at DATETIME NOT NULL)"
            ))
            conn.execute(
                text(
                    "INSERT INTO chart_of_accounts "
                    "(account_code, account_name, category, account_type, is_active, created_at, updated_at) "
                    "VALUES (:code, :name, 'asset', :account_type, :active, '2024-01-01 00:00:00', '2024-01-01 00:00:00')"
                ),
                [
                    {"code": "1000", "name": "Cash", "account_type": "Cash", "active": 1},
                    {"code": "1010", "name": "Savings", "account_type": "Bank Saving", "active": 1},
                    {"code": "1020", "name": "Lowercase", "account_type": "petty cash", "active": 1},
                    {"code": "1030", "name": "Closed Checking", "account_type": "Checking", "active": 0},
                    {"code": "1100", "name": "Receivables", "account_type": "current_asset", "active": 1},
                ],
            )
        schema_capabilities.reset()
        session = sessionmaker(bind=legacy_engine)()
        try:
            yield session
        finally:
            session.close()
            schema_capabilities.reset()
            legacy_engine.dispose()

    def test_account_type_fallback_without_sub_type_column(self, legacy_db):
        accounts = accounts_crud.get_cash_accounts(legacy_db)

        assert schema_capabilities.account_sub_type_supported(legacy_db.get_bind()) is False
        assert [(a.account_code, a.account_name) for a in accounts] == [("1000", "Cash"), ("1010", "Savings")]


class TestDefaultChart:
    def test_seeding_is_idempotent(self, db):
        created = accounts_crud.initialize_default_accounts(db)
        assert "1000" in created and "4000" in created
        assert accounts_crud.initialize_default_accounts(db) == []

    def test_dry_run_writes_nothing(self, db):
        planned = accounts_crud.initialize_default_accounts(db, dry_run=True)
        assert len(planned) == len(accounts_crud.DEFAULT_ACCOUNTS)
        assert accounts_crud.get_accounts(db) == []
