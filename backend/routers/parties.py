from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from crud import financial_reports as crud_financial_reports
from crud import parties as parties_crud
from database import get_db
from schemas.ledgers import PartyStatement
from schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination
from schemas.party import Party, PartyCreate, PartyList, PartyUpdate
from utils.auth_utils import get_current_user, get_user_identifier
from utils.money import ZERO

router = APIRouter(prefix="/parties", tags=["Parties"])
logger = logging.getLogger("parties")


def _with_balance(db_party, balance) -> Party:
    party = Party.model_validate(db_party)
    party.balance = balance
    return party


@router.get("", response_model=PartyList)
def read_parties(
    party_type: Optional[str] = None,
    is_active: Optional[bool] = None,
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    parties, total, balances = parties_crud.get_parties(
        db, party_type=party_type, is_active=is_active, page=page, limit=limit
    )
    return {
        "data": [_with_balance(p, balances.get(p.id, ZERO)) for p in parties],
        "pagination": Pagination.build(total, page, limit),
    }


@router.get("/{party_id}", response_model=Party)
def read_party(
    party_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_party = parties_crud.get_party(db, party_id)
    return _with_balance(db_party, crud_financial_reports.get_party_balance(db, party_id))


@router.post("", response_model=Party, status_code=status.HTTP_201_CREATED)
def create_party(
    party: PartyCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_party = parties_crud.create_party(db, party)
    logger.info(f"Party '{db_party.name}' created by user {get_user_identifier(user)}")
    return _with_balance(db_party, ZERO)


@router.put("/{party_id}", response_model=Party)
def update_party(
    party_id: int,
    party_update: PartyUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_party = parties_crud.update_party(db, party_id, party_update)
    logger.info(f"Party '{db_party.name}' (ID: {party_id}) updated by user {get_user_identifier(user)}")
    return _with_balance(db_party, crud_financial_reports.get_party_balance(db, party_id))


@router.post("/{party_id}/deactivate", response_model=Party)
def deactivate_party(
    party_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    db_party = parties_crud.deactivate_party(db, party_id)
    logger.info(f"Party '{db_party.name}' (ID: {party_id}) deactivated by user {get_user_identifier(user)}")
    return _with_balance(db_party, crud_financial_reports.get_party_balance(db, party_id))


@router.delete("/{party_id}")
def delete_party(
    party_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    # Parties carry ledger history; delete only switches them off.
    db_party = parties_crud.deactivate_party(db, party_id)
    logger.info(f"Party '{db_party.name}' (ID: {party_id}) deactivated via delete by user {get_user_identifier(user)}")
    return {"message": "Party deactivated successfully"}


@router.get("/{party_id}/statement", response_model=PartyStatement)
def read_party_statement(
    party_id: int,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    return crud_financial_reports.get_party_statement(db, party_id, from_date, to_date)
