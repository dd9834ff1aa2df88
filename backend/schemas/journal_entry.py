from pydantic import BaseModel
from typing import List, Optional
import datetime
from decimal import Decimal
from .journal_line import JournalLineCreate, JournalLine
from .pagination import Pagination


class JournalEntryBase(BaseModel):
    date: Optional[datetime.date] = None
    description: Optional[str] = None
    reference_id: Optional[str] = None


class JournalEntryCreate(JournalEntryBase):
    # Shape checks (line count, balance, per-line amounts) run in the journal
    # service so that every failure maps onto the accounting error kinds.
    lines: Optional[List[JournalLineCreate]] = None


class JournalEntry(BaseModel):
    id: int
    date: datetime.date
    description: str
    reference_id: Optional[str] = None
    created_at: datetime.datetime
    lines: List[JournalLine] = []

    class Config:
        from_attributes = True


class JournalEntryList(BaseModel):
    journals: List[JournalEntry]
    pagination: Pagination


class BalanceCheckRequest(BaseModel):
    lines: List[JournalLineCreate]


class BalanceCheck(BaseModel):
    is_balanced: bool
    total_debit: Decimal
    total_credit: Decimal
