"""
Ledger store: persistence for journal headers and their lines.

Nothing here validates postings or opens transactions; callers that write
(the journal service) wrap these calls in ``database.atomic``.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session, contains_eager, selectinload
from typing import Dict, Iterable, List, Optional, Tuple
from datetime import date

from exceptions import NotFound
from models.general_journal import GeneralJournal
from models.journal_line import JournalLine
from utils.money import to_decimal, to_money

# Signed-contribution formulas for subsidiary ledgers.
DEBIT_MINUS_CREDIT = "debit_minus_credit"
CREDIT_MINUS_DEBIT = "credit_minus_debit"


def direction_for(party_type: str) -> str:
    """Customers accrue receivables (debit side); vendors and employees accrue payables."""
    return DEBIT_MINUS_CREDIT if party_type == "customer" else CREDIT_MINUS_DEBIT


def signed_contribution(direction: str, debit, credit):
    debit, credit = to_decimal(debit), to_decimal(credit)
    return debit - credit if direction == DEBIT_MINUS_CREDIT else credit - debit


def _date_range(query, start_date: Optional[date] = None, end_date: Optional[date] = None):
    if start_date:
        query = query.filter(GeneralJournal.date >= start_date)
    if end_date:
        query = query.filter(GeneralJournal.date <= end_date)
    return query


def get_journal(db: Session, journal_id: int, with_lines: bool = True) -> GeneralJournal:
    query = db.query(GeneralJournal)
    if with_lines:
        query = query.options(selectinload(GeneralJournal.lines).joinedload(JournalLine.account))
    journal = query.filter(GeneralJournal.id == journal_id).first()
    if journal is None:
        raise NotFound(f"Journal entry {journal_id} not found")
    return journal


def get_journals(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = 1,
    limit: int = 50,
) -> Tuple[List[GeneralJournal], int]:
    """Page of journals, newest first, with lines and their accounts loaded."""
    query = _date_range(db.query(GeneralJournal), start_date, end_date)
    total = query.count()

    journals = query.options(
        selectinload(GeneralJournal.lines).joinedload(JournalLine.account)
    ).order_by(
        GeneralJournal.date.desc(), GeneralJournal.created_at.desc(), GeneralJournal.id.desc()
    ).offset((page - 1) * limit).limit(limit).all()

    return journals, total


def create_journal(db: Session, journal_date: date, description: str, reference_id: Optional[str] = None) -> GeneralJournal:
    db_journal = GeneralJournal(date=journal_date, description=description, reference_id=reference_id)
    db.add(db_journal)
    db.flush()  # Flush to get the ID for the header before creating its lines
    return db_journal


def bulk_create_lines(db: Session, journal_id: int, lines: Iterable) -> List[JournalLine]:
    db_lines = [
        JournalLine(
            journal_id=journal_id,
            account_code=line.account_code,
            debit=to_decimal(line.debit),
            credit=to_decimal(line.credit),
            description=line.description or None,
            party_id=line.party_id or None,
        )
        for line in lines
    ]
    db.add_all(db_lines)
    db.flush()
    return db_lines


def delete_lines_by_journal(db: Session, journal: GeneralJournal) -> int:
    lines = db.query(JournalLine).filter(JournalLine.journal_id == journal.id).all()
    for line in lines:
        db.delete(line)
    db.flush()
    # Reload the collection so the header delete sees no lines left.
    db.expire(journal, ["lines"])
    return len(lines)


def delete_journal(db: Session, journal: GeneralJournal):
    db.delete(journal)
    db.flush()


def get_lines_by_account(
    db: Session,
    account_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = 1,
    limit: int = 50,
) -> Tuple[List[JournalLine], int]:
    query = _date_range(
        db.query(JournalLine).join(JournalLine.journal).filter(JournalLine.account_code == account_code),
        start_date,
        end_date,
    )
    total = query.count()
    lines = query.options(contains_eager(JournalLine.journal)).order_by(
        JournalLine.created_at.desc(), JournalLine.id.desc()
    ).offset((page - 1) * limit).limit(limit).all()
    return lines, total


def get_lines_by_party(
    db: Session,
    party_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[JournalLine]:
    """Party lines in statement order: journal date, journal creation, line id."""
    query = _date_range(
        db.query(JournalLine).join(JournalLine.journal).filter(JournalLine.party_id == party_id),
        start_date,
        end_date,
    )
    return query.options(contains_eager(JournalLine.journal)).order_by(
        GeneralJournal.date.asc(), GeneralJournal.created_at.asc(), GeneralJournal.id.asc(), JournalLine.id.asc()
    ).all()


def sum_by_account(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    account_codes: Optional[Iterable[str]] = None,
) -> Dict[str, Tuple]:
    """{account_code: (total_debit, total_credit)} over lines in the date range."""
    query = db.query(
        JournalLine.account_code,
        func.coalesce(func.sum(JournalLine.debit), 0),
        func.coalesce(func.sum(JournalLine.credit), 0),
    ).join(JournalLine.journal)
    query = _date_range(query, start_date, end_date)
    if account_codes is not None:
        query = query.filter(JournalLine.account_code.in_(list(account_codes)))

    return {
        code: (to_money(debit), to_money(credit))
        for code, debit, credit in query.group_by(JournalLine.account_code).all()
    }


def sum_by_party(
    db: Session,
    party_ids: Iterable[int],
    direction: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[int, object]:
    """{party_id: signed balance} using the given contribution formula."""
    party_ids = list(party_ids)
    if not party_ids:
        return {}

    if direction == DEBIT_MINUS_CREDIT:
        formula = JournalLine.debit - JournalLine.credit
    elif direction == CREDIT_MINUS_DEBIT:
        formula = JournalLine.credit - JournalLine.debit
    else:
        raise ValueError(f"Unknown balance direction: {direction}")

    query = db.query(JournalLine.party_id, func.coalesce(func.sum(formula), 0)).join(JournalLine.journal)
    query = _date_range(query, start_date, end_date).filter(JournalLine.party_id.in_(party_ids))

    return {
        party_id: to_money(balance)
        for party_id, balance in query.group_by(JournalLine.party_id).all()
    }
