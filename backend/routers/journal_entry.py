from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from crud import journal_entry as journal_entry_crud
from crud import ledger
from database import get_db
from schemas.journal_entry import (
    BalanceCheck,
    BalanceCheckRequest,
    JournalEntry,
    JournalEntryCreate,
    JournalEntryList,
)
from schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination
from utils.auth_utils import get_current_user, get_user_identifier, require_role

router = APIRouter(
    prefix="/accounting/journal-entries",
    tags=["Journal Entries"],
)
logger = logging.getLogger("journal_entries")


@router.post("", response_model=JournalEntry, status_code=status.HTTP_201_CREATED)
def create_journal_entry(
    entry: JournalEntryCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """
    Create a new journal entry.
    The entry is validated as a whole (balance, line shapes, accounts) before
    anything is written.
    """
    db_journal = journal_entry_crud.create_journal_entry(db, entry)
    logger.info(f"Journal {db_journal.id} created by user {get_user_identifier(user)}")
    return db_journal


@router.post("/validate", response_model=BalanceCheck)
def validate_journal_balance(
    request: BalanceCheckRequest,
    user: dict = Depends(get_current_user)
):
    """Pre-submission balance check; nothing is persisted."""
    return journal_entry_crud.validate_balance(request.lines)


@router.get("", response_model=JournalEntryList)
def get_journal_entries(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """
    Retrieve a page of journal entries, newest first.
    """
    journals, total = ledger.get_journals(db, start_date=start_date, end_date=end_date, page=page, limit=limit)
    return {"journals": journals, "pagination": Pagination.build(total, page, limit)}


@router.get("/{entry_id}", response_model=JournalEntry)
def get_journal_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return ledger.get_journal(db, entry_id)


@router.delete("/{entry_id}")
def delete_journal_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_role(["admin"]))
):
    removed = journal_entry_crud.delete_journal_entry(db, entry_id)
    logger.info(f"Journal {entry_id} ({removed} lines) deleted by user {get_user_identifier(user)}")
    return {"message": "Journal entry deleted successfully"}
