from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from decimal import Decimal


class AccountNode(BaseModel):
    id: int
    account_code: str
    account_name: str
    account_type: str
    balance: Decimal
    total: Decimal
    children: List['AccountNode'] = []


class ReportSection(BaseModel):
    accounts: List[AccountNode]
    total: Decimal


class EquitySection(ReportSection):
    recorded_total: Decimal
    net_income: Decimal


class BalanceSheet(BaseModel):
    as_of_date: date
    assets: ReportSection
    liabilities: ReportSection
    equity: EquitySection
    total_liabilities_and_equity: Decimal


class IncomeStatement(BaseModel):
    start_date: Optional[date] = None
    end_date: date
    revenue: ReportSection
    expenses: ReportSection
    net_income: Decimal


AccountNode.model_rebuild()
