from pydantic import BaseModel
from decimal import Decimal
from typing import Optional
from datetime import date, datetime


class JournalLineBase(BaseModel):
    account_code: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    description: Optional[str] = None
    party_id: Optional[int] = None


class JournalLineCreate(JournalLineBase):
    pass


class JournalLine(JournalLineBase):
    id: int
    journal_id: int
    account_name: Optional[str] = None
    account_category: Optional[str] = None

    class Config:
        from_attributes = True


class AccountLedgerLine(BaseModel):
    id: int
    journal_id: int
    account_code: str
    debit: Decimal
    credit: Decimal
    description: Optional[str] = None
    journal_date: date
    journal_description: str
    created_at: datetime
