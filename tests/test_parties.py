"""Party registry: creation, normalization, listing and deactivation."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from crud import parties as parties_crud
from exceptions import DuplicateCode, InvalidInput, NotFound
from schemas.party import PartyCreate, PartyUpdate


class TestCreateParty:
    def test_optional_fields_are_normalized(self, make_party):
        party = make_party(
            "employee", "Dana", "E-1",
            email="", phone="555-0100", credit_limit="not a number", hire_date="2023-03-01",
        )

        assert party.email is None
        assert party.phone == "555-0100"
        assert party.credit_limit is None
        assert party.hire_date == date(2023, 3, 1)
        assert party.is_active is True

    def test_numeric_credit_limit_kept(self, make_party):
        party = make_party("customer", "Acme", "C-1", credit_limit="1500.50")
        assert party.credit_limit == Decimal("1500.50")

    def test_invalid_date_is_dropped(self, make_party):
        party = make_party("employee", "Lee", "E-2", hire_date="someday")
        assert party.hire_date is None

    def test_invalid_type(self, make_party):
        with pytest.raises(InvalidInput):
            make_party("supplier", "Acme", "S-1")

    def test_missing_name(self, db):
        with pytest.raises(InvalidInput):
            parties_crud.create_party(db, PartyCreate(party_type="customer", code="C-1"))

    def test_bad_email_rejected(self):
        with pytest.raises(ValueError):
            PartyCreate(party_type="customer", name="Acme", code="C-1", email="not-an-email")

    def test_valid_email_kept(self, make_party):
        party = make_party("customer", "Acme", "C-1", email="billing@acme.com")
        assert party.email == "billing@acme.com"

    def test_blank_email_becomes_none(self):
        assert PartyCreate(party_type="vendor", name="Parts Co", code="V-1", email="   ").email is None

    def test_concurrent_duplicate_maps_to_duplicate_code(self, db, make_party, monkeypatch):
        make_party("customer", "Acme", "C-1")
        monkeypatch.setattr(parties_crud, "get_party_by_type_and_code", lambda *args, **kwargs: None)

        with pytest.raises(DuplicateCode) as exc_info:
            make_party("customer", "Acme Again", "C-1")

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        _, total, _ = parties_crud.get_parties(db)
        assert total == 1

    def test_code_unique_per_type(self, make_party):
        make_party("customer", "Acme", "P-1")
        make_party("vendor", "Acme Supplies", "P-1")

        with pytest.raises(DuplicateCode):
            make_party("customer", "Acme Again", "P-1")


class TestUpdateParty:
    def test_update_and_deactivate(self, db, make_party):
        party = make_party("vendor", "Parts Co", "V-1", city="Austin")

        updated = parties_crud.update_party(db, party.id, PartyUpdate(name="Parts Company", city=""))
        assert updated.name == "Parts Company"
        assert updated.city is None

        deactivated = parties_crud.deactivate_party(db, party.id)
        assert deactivated.is_active is False
        assert parties_crud.get_party(db, party.id).is_active is False

    def test_code_collision_on_update(self, db, make_party):
        make_party("vendor", "One", "V-1")
        other = make_party("vendor", "Two", "V-2")
        with pytest.raises(DuplicateCode):
            parties_crud.update_party(db, other.id, PartyUpdate(code="V-1"))

    def test_unknown_party(self, db):
        with pytest.raises(NotFound):
            parties_crud.get_party(db, 404)


class TestListParties:
    def test_pagination_and_balances(self, db, make_party, make_account, post_entry):
        make_account("1100", "Receivables", "asset")
        make_account("4000", "Sales", "revenue")
        customers = [make_party("customer", f"Customer {i}", f"C-{i}") for i in range(3)]
        make_party("vendor", "Vendor", "V-1")
        post_entry(date(2024, 2, 1), "Invoice", [("1100", 250, 0, customers[0].id), ("4000", 0, 250)])

        page, total, balances = parties_crud.get_parties(db, party_type="customer", page=1, limit=2)
        assert total == 3
        assert [p.code for p in page] == ["C-0", "C-1"]
        assert balances == {customers[0].id: Decimal("250.00")}

        page, total, _ = parties_crud.get_parties(db, party_type="customer", page=2, limit=2)
        assert [p.code for p in page] == ["C-2"]

    def test_filter_by_active(self, db, make_party):
        active = make_party("customer", "Active", "C-1")
        retired = make_party("customer", "Retired", "C-2")
        parties_crud.deactivate_party(db, retired.id)

        page, total, _ = parties_crud.get_parties(db, is_active=True)
        assert total == 1
        assert page[0].id == active.id
