from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from crud import financial_reports as crud_financial_reports
from crud import ledger
from database import get_db
from schemas.financial_reports import BalanceSheet, IncomeStatement
from schemas.ledgers import AccountBalanceReport, AccountLedger, TrialBalance
from schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination
from utils.auth_utils import get_current_user

router = APIRouter(
    prefix="/accounting",
    tags=["Financial Reports"],
)


@router.get("/accounts/{account_code}/balance", response_model=AccountBalanceReport)
def get_account_balance(
    account_code: str,
    as_of_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return {
        "account_code": account_code,
        "balance": crud_financial_reports.get_account_balance(db, account_code, as_of_date),
        "as_of_date": as_of_date or date.today(),
    }


@router.get("/accounts/{account_code}/entries", response_model=AccountLedger)
def get_account_entries(
    account_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    lines, total = ledger.get_lines_by_account(
        db, account_code, start_date=start_date, end_date=end_date, page=page, limit=limit
    )
    entries = [
        {
            "id": line.id,
            "journal_id": line.journal_id,
            "account_code": line.account_code,
            "debit": line.debit,
            "credit": line.credit,
            "description": line.description,
            "journal_date": line.journal.date,
            "journal_description": line.journal.description,
            "created_at": line.created_at,
        }
        for line in lines
    ]
    return {"entries": entries, "pagination": Pagination.build(total, page, limit)}


@router.get("/trial-balance", response_model=TrialBalance)
def get_trial_balance(
    as_of_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return crud_financial_reports.get_trial_balance_report(db, as_of_date)


@router.get("/balance-sheet", response_model=BalanceSheet)
def get_balance_sheet(
    as_of_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return crud_financial_reports.get_balance_sheet(db=db, as_of_date=as_of_date)


@router.get("/income-statement", response_model=IncomeStatement)
def get_income_statement(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return crud_financial_reports.get_income_statement(db=db, start_date=start_date, end_date=end_date)
