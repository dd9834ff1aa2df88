"""
Balance engine: read-only reports derived from the ledger.

Every function here is a pure read of the persisted journals, lines and
accounts; nothing is written and no locks are taken.
"""

from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from crud import ledger
from crud.parties import get_party
from models.chart_of_accounts import ChartOfAccounts
from utils.money import ZERO, is_balanced

# Natural-sign side per category: debit-normal or credit-normal.
DEBIT_NORMAL = {"asset", "expense"}
CREDIT_NORMAL = {"liability", "equity", "revenue"}


def get_account_balance(db: Session, account_code: str, as_of_date: Optional[date] = None) -> dict:
    totals = ledger.sum_by_account(db, end_date=as_of_date, account_codes=[account_code])
    debit, credit = totals.get(account_code, (ZERO, ZERO))
    return {"debit": debit, "credit": credit, "balance": debit - credit}


def get_trial_balance(db: Session, as_of_date: Optional[date] = None) -> List[dict]:
    """Active accounts with any activity up to the date, ordered by code."""
    totals = ledger.sum_by_account(db, end_date=as_of_date)
    accounts = db.query(ChartOfAccounts).filter(ChartOfAccounts.is_active.is_(True)).all()

    rows = []
    for account in accounts:
        debit, credit = totals.get(account.account_code, (ZERO, ZERO))
        if debit == ZERO and credit == ZERO:
            continue
        rows.append({
            "account_code": account.account_code,
            "account_name": account.account_name,
            "debit": debit,
            "credit": credit,
            "balance": debit - credit,
        })

    return sorted(rows, key=lambda row: row["account_code"])


def get_trial_balance_report(db: Session, as_of_date: Optional[date] = None) -> dict:
    rows = get_trial_balance(db, as_of_date)
    total_debits = sum((row["debit"] for row in rows), ZERO)
    total_credits = sum((row["credit"] for row in rows), ZERO)
    return {
        "trial_balance": rows,
        "as_of_date": as_of_date or date.today(),
        "total_debits": total_debits,
        "total_credits": total_credits,
        "is_balanced": is_balanced(total_debits, total_credits),
    }


def get_party_balance(
    db: Session, party_id: int, from_date: Optional[date] = None, to_date: Optional[date] = None
) -> Decimal:
    party = get_party(db, party_id)
    direction = ledger.direction_for(party.party_type)
    balances = ledger.sum_by_party(db, [party.id], direction, from_date, to_date)
    return balances.get(party.id, ZERO)


def get_party_statement(
    db: Session, party_id: int, from_date: Optional[date] = None, to_date: Optional[date] = None
) -> dict:
    """Chronological postings for one party with a running balance."""
    party = get_party(db, party_id)
    direction = ledger.direction_for(party.party_type)

    running_balance = ZERO
    total_debit = ZERO
    total_credit = ZERO
    statement = []
    for line in ledger.get_lines_by_party(db, party.id, from_date, to_date):
        running_balance += ledger.signed_contribution(direction, line.debit, line.credit)
        total_debit += line.debit
        total_credit += line.credit
        statement.append({
            "id": line.id,
            "date": line.journal.date,
            "memo": line.description or line.journal.description or "",
            "debit": line.debit,
            "credit": line.credit,
            "running_balance": running_balance,
        })

    return {
        "party": party,
        "statement": statement,
        "summary": {
            "total_debit": total_debit,
            "total_credit": total_credit,
            "ending_balance": running_balance,
        },
        "from_date": from_date,
        "to_date": to_date,
    }


def natural_balance(category: str, debit: Decimal, credit: Decimal) -> Decimal:
    if category in DEBIT_NORMAL:
        return debit - credit
    return credit - debit


def get_category_balance(
    db: Session, category: str, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> Decimal:
    """Sum of a category's lines in its natural sign."""
    codes = [code for (code,) in db.query(ChartOfAccounts.account_code).filter(ChartOfAccounts.category == category)]
    totals = ledger.sum_by_account(db, start_date, end_date, account_codes=codes)
    return sum((natural_balance(category, debit, credit) for debit, credit in totals.values()), ZERO)


def build_account_tree(
    db: Session, category: str, start_date: Optional[date] = None, end_date: Optional[date] = None
) -> List[dict]:
    """
    Hierarchical rollup of one category.

    Each node's ``balance`` is its own natural-sign balance and ``total`` is
    |own balance| plus its children's totals. A node is shown when its total
    is non-zero or it has child accounts.
    """
    accounts = db.query(ChartOfAccounts).filter(ChartOfAccounts.category == category).order_by(
        ChartOfAccounts.account_code.asc()
    ).all()
    totals = ledger.sum_by_account(db, start_date, end_date, account_codes=[a.account_code for a in accounts])

    by_id = {account.id: account for account in accounts}
    children: Dict[int, List[ChartOfAccounts]] = {account.id: [] for account in accounts}
    roots = []
    for account in accounts:
        if account.parent_id in by_id and account.parent_id != account.id:
            children[account.parent_id].append(account)
        else:
            roots.append(account)

    visited = set()

    def build(account):
        visited.add(account.id)
        debit, credit = totals.get(account.account_code, (ZERO, ZERO))
        balance = natural_balance(category, debit, credit)
        child_nodes = [build(child) for child in children[account.id] if child.id not in visited]
        total = abs(balance) + sum((node["total"] for node in child_nodes), ZERO)
        return {
            "id": account.id,
            "account_code": account.account_code,
            "account_name": account.account_name,
            "account_type": account.account_type,
            "balance": balance,
            "total": total,
            "children": [node for node in child_nodes if node["_shown"]],
            "_shown": total != ZERO or bool(children[account.id]),
        }

    nodes = [build(root) for root in roots]
    # Parent chains that loop never reach a root; surface them from their lowest code.
    for account in accounts:
        if account.id not in visited:
            nodes.append(build(account))

    return [_strip(node) for node in nodes if node["_shown"]]


def _strip(node: dict) -> dict:
    node = {key: value for key, value in node.items() if key != "_shown"}
    node["children"] = [_strip(child) for child in node["children"]]
    return node


def _section(db: Session, category: str, start_date: Optional[date], end_date: Optional[date]) -> dict:
    return {
        "accounts": build_account_tree(db, category, start_date, end_date),
        "total": get_category_balance(db, category, start_date, end_date),
    }


def get_income_statement(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict:
    end_date = end_date or date.today()
    revenue = _section(db, "revenue", start_date, end_date)
    expenses = _section(db, "expense", start_date, end_date)
    return {
        "start_date": start_date,
        "end_date": end_date,
        "revenue": revenue,
        "expenses": expenses,
        "net_income": revenue["total"] - expenses["total"],
    }


def get_balance_sheet(db: Session, as_of_date: Optional[date] = None) -> dict:
    as_of_date = as_of_date or date.today()
    assets = _section(db, "asset", None, as_of_date)
    liabilities = _section(db, "liability", None, as_of_date)
    equity = _section(db, "equity", None, as_of_date)

    net_income = (
        get_category_balance(db, "revenue", None, as_of_date)
        - get_category_balance(db, "expense", None, as_of_date)
    )
    equity_total = equity["total"] + net_income

    return {
        "as_of_date": as_of_date,
        "assets": assets,
        "liabilities": liabilities,
        "equity": {
            "accounts": equity["accounts"],
            "recorded_total": equity["total"],
            "net_income": net_income,
            "total": equity_total,
        },
        "total_liabilities_and_equity": liabilities["total"] + equity_total,
    }
