from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, load_only
from typing import Optional
import logging

from database import atomic
from exceptions import DuplicateCode, HasChildren, InvalidInput, NotFound, ParentNotFound, SelfParent
from models.chart_of_accounts import ChartOfAccounts
from models.journal_line import JournalLine
from schemas.chart_of_accounts import ChartOfAccountsCreate, ChartOfAccountsUpdate
from utils import schema_capabilities

logger = logging.getLogger(__name__)

CASH_SUB_TYPE = "Checking & Saving"
CASH_TYPE_MARKERS = ("Checking", "Saving", "Cash")


def get_account(db: Session, account_id: int) -> ChartOfAccounts:
    account = db.query(ChartOfAccounts).options(joinedload(ChartOfAccounts.parent)).filter(
        ChartOfAccounts.id == account_id
    ).first()
    if not account:
        raise NotFound(f"Account with id {account_id} not found")
    return account


def get_account_by_code(db: Session, account_code: str, active_only: bool = False) -> Optional[ChartOfAccounts]:
    query = db.query(ChartOfAccounts).filter(ChartOfAccounts.account_code == account_code)
    if active_only:
        query = query.filter(ChartOfAccounts.is_active.is_(True))
    return query.first()


def get_accounts(db: Session, category: str = None, is_active: Optional[bool] = None):
    """List the chart ordered by code, each with its parent resolved."""
    query = db.query(ChartOfAccounts).options(joinedload(ChartOfAccounts.parent))

    if category:
        query = query.filter(ChartOfAccounts.category == category)
    if is_active is not None:
        query = query.filter(ChartOfAccounts.is_active.is_(is_active))

    return query.order_by(ChartOfAccounts.account_code.asc()).all()


def count_children(db: Session, account_id: int) -> int:
    return db.query(ChartOfAccounts).filter(ChartOfAccounts.parent_id == account_id).count()


def count_postings(db: Session, account_code: str) -> int:
    return db.query(JournalLine).filter(JournalLine.account_code == account_code).count()


def _check_parent(db: Session, parent_id: int):
    if db.query(ChartOfAccounts.id).filter(ChartOfAccounts.id == parent_id).first() is None:
        raise ParentNotFound(f"Parent account {parent_id} not found")


def create_account(db: Session, account: ChartOfAccountsCreate) -> ChartOfAccounts:
    for field in ("account_code", "account_name", "category", "account_type"):
        if not (getattr(account, field) or "").strip():
            raise InvalidInput(f"Missing required field: {field}")

    if get_account_by_code(db, account.account_code):
        raise DuplicateCode(f"Account code {account.account_code} already exists")

    if account.parent_id is not None:
        _check_parent(db, account.parent_id)

    account_data = account.model_dump()
    account_data['sub_type'] = account_data.get('sub_type') or None
    db_account = ChartOfAccounts(**account_data)
    with atomic(db):
        db.add(db_account)
        try:
            db.flush()
        except IntegrityError as exc:
            raise DuplicateCode(f"Account code {account.account_code} already exists") from exc
    db.refresh(db_account)
    logger.info(f"Account {db_account.account_code} '{db_account.account_name}' created")
    return db_account


def update_account(db: Session, account_id: int, account_update: ChartOfAccountsUpdate) -> ChartOfAccounts:
    db_account = get_account(db, account_id)
    update_data = account_update.model_dump(exclude_unset=True)

    old_code = db_account.account_code
    new_code = update_data.get('account_code')
    if new_code and new_code != old_code:
        if get_account_by_code(db, new_code):
            raise DuplicateCode(f"Account code {new_code} already exists")

    if 'parent_id' in update_data:
        parent_id = update_data['parent_id'] or None
        update_data['parent_id'] = parent_id
        if parent_id is not None and parent_id != db_account.parent_id:
            if parent_id == db_account.id:
                raise SelfParent("Account cannot be its own parent")
            _check_parent(db, parent_id)

    if 'sub_type' in update_data:
        update_data['sub_type'] = update_data['sub_type'] or None

    # Required columns are only overwritten with real values.
    for key in ('account_code', 'account_name', 'category', 'account_type', 'is_active'):
        if key in update_data and update_data[key] in (None, ""):
            del update_data[key]

    with atomic(db):
        for key, value in update_data.items():
            setattr(db_account, key, value)
        try:
            db.flush()
        except IntegrityError as exc:
            raise DuplicateCode(f"Account code {new_code} already exists") from exc
        if new_code and new_code != old_code:
            # Postings reference the code, so they follow the rename.
            db.query(JournalLine).filter(JournalLine.account_code == old_code).update(
                {JournalLine.account_code: new_code}, synchronize_session=False
            )
    db.refresh(db_account)
    logger.info(f"Account {db_account.account_code} (ID: {account_id}) updated: {sorted(update_data)}")
    return db_account


def deactivate_account(db: Session, account_id: int) -> ChartOfAccounts:
    db_account = get_account(db, account_id)
    with atomic(db):
        db_account.is_active = False
    db.refresh(db_account)
    logger.info(f"Account {db_account.account_code} (ID: {account_id}) deactivated")
    return db_account


def delete_account(db: Session, account_id: int) -> str:
    """
    Remove an account from the chart.

    Accounts with children are refused. Accounts with postings are kept and
    deactivated instead. Returns "deleted" or "deactivated".
    """
    db_account = get_account(db, account_id)

    if count_children(db, account_id) > 0:
        logger.warning(f"Refused to delete account {db_account.account_code}: it has child accounts")
        raise HasChildren(
            "Cannot delete account with child accounts. Please reassign or delete child accounts first."
        )

    if count_postings(db, db_account.account_code) > 0:
        with atomic(db):
            db_account.is_active = False
        logger.warning(f"Account {db_account.account_code} has journal lines; deactivated instead of deleted")
        return "deactivated"

    with atomic(db):
        db.delete(db_account)
    logger.info(f"Account {db_account.account_code} (ID: {account_id}) deleted")
    return "deleted"


def get_cash_accounts(db: Session):
    """Active cash-equivalent accounts, ordered by code."""
    query = db.query(ChartOfAccounts).filter(ChartOfAccounts.is_active.is_(True)).order_by(ChartOfAccounts.account_code.asc())

    if schema_capabilities.account_sub_type_supported(db.get_bind()):
        return query.filter(ChartOfAccounts.sub_type == CASH_SUB_TYPE).all()

    # Older tables lack sub_type, so only the columns they share are selected.
    # Case-sensitive substring match; SQL LIKE folds case on some backends.
    query = query.options(load_only(
        ChartOfAccounts.account_code, ChartOfAccounts.account_name, ChartOfAccounts.account_type
    ))
    return [
        account for account in query.all()
        if any(marker in account.account_type for marker in CASH_TYPE_MARKERS)
    ]


DEFAULT_ACCOUNTS = [
    {"account_code": "1000", "account_name": "Cash", "category": "asset", "account_type": "current_asset", "sub_type": CASH_SUB_TYPE},
    {"account_code": "1010", "account_name": "Bank Checking", "category": "asset", "account_type": "current_asset", "sub_type": CASH_SUB_TYPE},
    {"account_code": "1100", "account_name": "Accounts Receivable", "category": "asset", "account_type": "current_asset"},
    {"account_code": "1200", "account_name": "Inventory", "category": "asset", "account_type": "current_asset"},
    {"account_code": "1500", "account_name": "Equipment", "category": "asset", "account_type": "fixed_asset"},
    {"account_code": "2000", "account_name": "Accounts Payable", "category": "liability", "account_type": "current_liability"},
    {"account_code": "2100", "account_name": "Accrued Payroll", "category": "liability", "account_type": "current_liability"},
    {"account_code": "3000", "account_name": "Owner's Equity", "category": "equity", "account_type": "owners_equity"},
    {"account_code": "4000", "account_name": "Sales Revenue", "category": "revenue", "account_type": "sales_revenue"},
    {"account_code": "5000", "account_name": "Cost of Goods Sold", "category": "expense", "account_type": "cost_of_goods_sold"},
    {"account_code": "6000", "account_name": "Operating Expenses", "category": "expense", "account_type": "operating_expense"},
]


def initialize_default_accounts(db: Session, dry_run: bool = False):
    """Seed the standard small-business chart; existing codes are left alone."""
    created = []
    for account_data in DEFAULT_ACCOUNTS:
        if get_account_by_code(db, account_data["account_code"]):
            continue
        if dry_run:
            created.append(account_data["account_code"])
            continue
        create_account(db, ChartOfAccountsCreate(**account_data))
        created.append(account_data["account_code"])

    return created
