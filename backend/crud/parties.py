from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
import logging

from crud import ledger
from database import atomic
from exceptions import DuplicateCode, InvalidInput, NotFound
from models.party import Party, PartyType
from schemas.party import PartyCreate, PartyUpdate
from utils.normalize import OMIT, normalize_date, normalize_numeric, normalize_value

logger = logging.getLogger(__name__)

VALID_PARTY_TYPES = [t.value for t in PartyType]

TEXT_FIELDS = [
    "email", "phone", "address", "city", "state", "zip_code", "country",
    "tax_id", "payment_terms", "vendor_number", "employee_id", "department",
]


def _normalized_fields(data: dict) -> dict:
    """Apply form normalization to whichever optional fields were supplied."""
    fields = {}
    for key in TEXT_FIELDS:
        if key in data:
            fields[key] = normalize_value(data[key])
    if "credit_limit" in data:
        value = normalize_numeric(data["credit_limit"])
        if value is not OMIT:
            fields["credit_limit"] = value
    if "hire_date" in data:
        value = normalize_date(data["hire_date"])
        if value is not OMIT:
            fields["hire_date"] = value
    return fields


def get_party_by_type_and_code(db: Session, party_type: str, code: str) -> Optional[Party]:
    return db.query(Party).filter(Party.party_type == party_type, Party.code == code).first()


def get_party(db: Session, party_id: int) -> Party:
    party = db.query(Party).filter(Party.id == party_id).first()
    if party is None:
        raise NotFound(f"Party {party_id} not found")
    return party


def get_party_balances(db: Session, parties: List[Party]) -> dict:
    """Current balance per party id, using each party type's sign convention."""
    balances = {}
    for direction in (ledger.DEBIT_MINUS_CREDIT, ledger.CREDIT_MINUS_DEBIT):
        ids = [p.id for p in parties if ledger.direction_for(p.party_type) == direction]
        balances.update(ledger.sum_by_party(db, ids, direction))
    return balances


def get_parties(
    db: Session,
    party_type: str = None,
    is_active: Optional[bool] = None,
    page: int = 1,
    limit: int = 50,
) -> Tuple[List[Party], int, dict]:
    query = db.query(Party)
    if party_type:
        query = query.filter(Party.party_type == party_type)
    if is_active is not None:
        query = query.filter(Party.is_active.is_(is_active))

    total = query.count()
    parties = query.order_by(Party.party_type.asc(), Party.name.asc(), Party.id.asc()).offset(
        (page - 1) * limit
    ).limit(limit).all()

    return parties, total, get_party_balances(db, parties)


def create_party(db: Session, party: PartyCreate) -> Party:
    if not party.party_type or not party.name or not party.code:
        raise InvalidInput("Missing required fields: party_type, name, code")
    if party.party_type not in VALID_PARTY_TYPES:
        raise InvalidInput("Invalid party type. Must be customer, vendor, or employee")
    if get_party_by_type_and_code(db, party.party_type, party.code):
        raise DuplicateCode(f'Party with code "{party.code}" already exists for this type')

    db_party = Party(
        party_type=party.party_type,
        name=party.name,
        code=party.code,
        is_active=True,
        **_normalized_fields(party.model_dump()),
    )
    with atomic(db):
        db.add(db_party)
        try:
            db.flush()
        except IntegrityError as exc:
            raise DuplicateCode(f'Party with code "{party.code}" already exists for this type') from exc
    db.refresh(db_party)
    logger.info(f"Party '{db_party.name}' ({db_party.party_type} {db_party.code}) created")
    return db_party


def update_party(db: Session, party_id: int, party_update: PartyUpdate) -> Party:
    db_party = get_party(db, party_id)
    data = party_update.model_dump(exclude_unset=True)

    if data.get("code") and data["code"] != db_party.code:
        if get_party_by_type_and_code(db, db_party.party_type, data["code"]):
            raise DuplicateCode(f'Party with code "{data["code"]}" already exists for this type')

    updates = _normalized_fields(data)
    for key in ("name", "code"):
        if data.get(key):
            updates[key] = data[key]
    if data.get("is_active") is not None:
        updates["is_active"] = data["is_active"]

    with atomic(db):
        for key, value in updates.items():
            setattr(db_party, key, value)
        try:
            db.flush()
        except IntegrityError as exc:
            raise DuplicateCode(f'Party with code "{updates.get("code")}" already exists for this type') from exc
    db.refresh(db_party)
    logger.info(f"Party '{db_party.name}' (ID: {party_id}) updated: {sorted(updates)}")
    return db_party


def deactivate_party(db: Session, party_id: int) -> Party:
    """Parties are never hard-deleted; they are switched off."""
    db_party = get_party(db, party_id)
    with atomic(db):
        db_party.is_active = False
    db.refresh(db_party)
    logger.info(f"Party '{db_party.name}' (ID: {party_id}) deactivated")
    return db_party
