from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from crud import chart_of_accounts as chart_of_accounts_crud
from database import get_db
from schemas.chart_of_accounts import (
    AccountDeleteResult,
    CashAccountList,
    ChartOfAccounts,
    ChartOfAccountsCreate,
    ChartOfAccountsList,
    ChartOfAccountsUpdate,
)
from utils.auth_utils import get_current_user, get_user_identifier, require_role

router = APIRouter(
    prefix="/accounting",
    tags=["Chart of Accounts"],
)
logger = logging.getLogger("chart_of_accounts")


@router.get("/chart-of-accounts", response_model=ChartOfAccountsList)
def get_accounts(
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    accounts = chart_of_accounts_crud.get_accounts(db, category=category, is_active=is_active)
    return {"accounts": accounts}


@router.get("/chart-of-accounts/{account_id}", response_model=ChartOfAccounts)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return chart_of_accounts_crud.get_account(db, account_id)


@router.post("/chart-of-accounts", response_model=ChartOfAccounts, status_code=status.HTTP_201_CREATED)
def create_account(
    account: ChartOfAccountsCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_account = chart_of_accounts_crud.create_account(db, account)
    logger.info(f"Account {db_account.account_code} created by user {get_user_identifier(user)}")
    return db_account


@router.put("/chart-of-accounts/{account_id}", response_model=ChartOfAccounts)
def update_account(
    account_id: int,
    account_update: ChartOfAccountsUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_account = chart_of_accounts_crud.update_account(db, account_id, account_update)
    logger.info(f"Account {db_account.account_code} (ID: {account_id}) updated by user {get_user_identifier(user)}")
    return db_account


@router.post("/chart-of-accounts/{account_id}/deactivate", response_model=ChartOfAccounts)
def deactivate_account(
    account_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_account = chart_of_accounts_crud.deactivate_account(db, account_id)
    logger.info(f"Account {db_account.account_code} (ID: {account_id}) deactivated by user {get_user_identifier(user)}")
    return db_account


@router.delete("/chart-of-accounts/{account_id}", response_model=AccountDeleteResult)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_role(["admin"]))
):
    outcome = chart_of_accounts_crud.delete_account(db, account_id)
    logger.info(f"Account ID {account_id} {outcome} by user {get_user_identifier(user)}")
    if outcome == "deactivated":
        return {"outcome": outcome, "message": "Account deactivated successfully (has existing journal entries)"}
    return {"outcome": outcome, "message": "Account deleted successfully"}


@router.get("/cash-accounts", response_model=CashAccountList)
def get_cash_accounts(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return {"accounts": chart_of_accounts_crud.get_cash_accounts(db)}
