from sqlalchemy.orm import Session
from typing import Iterable
import logging

from crud import ledger
from crud.chart_of_accounts import get_account_by_code
from database import atomic
from exceptions import (
    AccountNotFound,
    AmbiguousLine,
    EmptyLine,
    InvalidInput,
    NegativeAmount,
    NotFound,
    Unbalanced,
)
from models.general_journal import GeneralJournal
from models.party import Party
from schemas.journal_entry import JournalEntryCreate
from utils.money import ZERO, is_balanced, is_whole_cents, to_decimal

logger = logging.getLogger(__name__)


def validate_balance(lines: Iterable) -> dict:
    """Totals for a batch of lines and whether they balance within a cent."""
    lines = list(lines)
    total_debit = sum((to_decimal(line.debit) for line in lines), ZERO)
    total_credit = sum((to_decimal(line.credit) for line in lines), ZERO)
    return {
        "is_balanced": is_balanced(total_debit, total_credit),
        "total_debit": total_debit,
        "total_credit": total_credit,
    }


def validate_entry(db: Session, entry: JournalEntryCreate):
    """
    Check a whole journal entry before anything is written.

    Order: required fields and cent precision, batch balance, per-line
    amounts, then account and party references.
    """
    if not entry.date or not entry.description or not entry.description.strip():
        raise InvalidInput("Missing required fields: date, description, and at least 2 journal lines")
    if not entry.lines or len(entry.lines) < 2:
        raise InvalidInput("Missing required fields: date, description, and at least 2 journal lines")
    for line in entry.lines:
        if not line.account_code:
            raise InvalidInput("Every journal line needs an account_code")
        if not (is_whole_cents(line.debit) and is_whole_cents(line.credit)):
            raise InvalidInput(
                f"Amounts on account {line.account_code} have more than 2 decimal places"
            )

    check = validate_balance(entry.lines)
    if not check["is_balanced"]:
        raise Unbalanced(check["total_debit"], check["total_credit"])

    for line in entry.lines:
        debit, credit = to_decimal(line.debit), to_decimal(line.credit)
        if debit < ZERO or credit < ZERO:
            raise NegativeAmount("Debit and credit amounts must be non-negative")
        if debit > ZERO and credit > ZERO:
            raise AmbiguousLine("A journal line cannot have both debit and credit amounts")
        if debit == ZERO and credit == ZERO:
            raise EmptyLine("A journal line must have either a debit or credit amount")

    for line in entry.lines:
        if get_account_by_code(db, line.account_code, active_only=True) is None:
            raise AccountNotFound(line.account_code)

    party_ids = {line.party_id for line in entry.lines if line.party_id}
    if party_ids:
        found = {party_id for (party_id,) in db.query(Party.id).filter(Party.id.in_(party_ids))}
        missing = sorted(party_ids - found)
        if missing:
            raise NotFound(f"Party {missing[0]} not found")


def create_journal_entry(db: Session, entry: JournalEntryCreate) -> GeneralJournal:
    """
    Validate and commit a journal entry with its lines as one transaction.
    """
    try:
        validate_entry(db, entry)
    except Unbalanced as exc:
        logger.warning(f"Rejected unbalanced journal '{entry.description}': {exc.detail}")
        raise

    with atomic(db):
        db_journal = ledger.create_journal(db, entry.date, entry.description.strip(), entry.reference_id or None)
        ledger.bulk_create_lines(db, db_journal.id, entry.lines)

    logger.info(
        f"Journal {db_journal.id} '{db_journal.description}' dated {db_journal.date} "
        f"created with {len(entry.lines)} lines"
    )
    return ledger.get_journal(db, db_journal.id)


def delete_journal_entry(db: Session, journal_id: int) -> int:
    """Hard-delete a journal and all of its lines; returns the number of lines removed."""
    with atomic(db):
        db_journal = ledger.get_journal(db, journal_id, with_lines=False)
        removed = ledger.delete_lines_by_journal(db, db_journal)
        ledger.delete_journal(db, db_journal)

    logger.info(f"Journal {journal_id} deleted with {removed} lines")
    return removed
