from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional

from .journal_line import AccountLedgerLine
from .pagination import Pagination
from .party import PartyHeader


# Account ledger
class AccountBalance(BaseModel):
    debit: Decimal
    credit: Decimal
    balance: Decimal


class AccountBalanceReport(BaseModel):
    account_code: str
    balance: AccountBalance
    as_of_date: date


class AccountLedger(BaseModel):
    entries: List[AccountLedgerLine]
    pagination: Pagination


# Trial balance
class TrialBalanceItem(BaseModel):
    account_code: str
    account_name: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


class TrialBalance(BaseModel):
    trial_balance: List[TrialBalanceItem]
    as_of_date: date
    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool


# Party statement
class StatementLine(BaseModel):
    id: int
    date: date
    memo: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


class StatementSummary(BaseModel):
    total_debit: Decimal
    total_credit: Decimal
    ending_balance: Decimal


class PartyStatement(BaseModel):
    party: PartyHeader
    statement: List[StatementLine]
    summary: StatementSummary
    from_date: Optional[date] = None
    to_date: Optional[date] = None
