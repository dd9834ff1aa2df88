from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import datetime

VALID_CATEGORIES = ["asset", "liability", "equity", "revenue", "expense"]


def _check_category(v):
    if v is not None and v not in VALID_CATEGORIES:
        raise ValueError(f"category must be one of {VALID_CATEGORIES}")
    return v


class ChartOfAccountsBase(BaseModel):
    account_code: str
    account_name: str
    category: str  # asset, liability, equity, revenue, expense
    account_type: str  # current_asset, fixed_asset, ...
    sub_type: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: bool = True

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)


class ChartOfAccountsCreate(ChartOfAccountsBase):
    pass


class ChartOfAccountsUpdate(BaseModel):
    account_code: Optional[str] = None
    account_name: Optional[str] = None
    category: Optional[str] = None
    account_type: Optional[str] = None
    sub_type: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)


class ParentAccount(BaseModel):
    id: int
    account_code: str
    account_name: str

    class Config:
        from_attributes = True


class ChartOfAccounts(ChartOfAccountsBase):
    id: int
    parent: Optional[ParentAccount] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChartOfAccountsList(BaseModel):
    accounts: List[ChartOfAccounts]


class CashAccount(BaseModel):
    account_code: str
    account_name: str

    class Config:
        from_attributes = True


class CashAccountList(BaseModel):
    accounts: List[CashAccount]


class AccountDeleteResult(BaseModel):
    outcome: str  # "deleted" or "deactivated"
    message: str
