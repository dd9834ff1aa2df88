from pydantic import BaseModel, EmailStr, field_validator
from typing import Any, List, Optional
from datetime import date, datetime
from decimal import Decimal

from models.party import PartyType
from .pagination import Pagination


class PartyFields(BaseModel):
    # Raw optional fields as they arrive from forms; normalized before writing.
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    tax_id: Optional[str] = None
    payment_terms: Optional[str] = None
    credit_limit: Optional[Any] = None
    vendor_number: Optional[str] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[Any] = None

    @field_validator('email', mode='before')
    @classmethod
    def blank_email_is_none(cls, v):
        # Untouched form inputs arrive as empty strings.
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class PartyCreate(PartyFields):
    # Checked by the registry so missing fields surface as InvalidInput.
    party_type: Optional[str] = None
    name: Optional[str] = None
    code: Optional[str] = None


class PartyUpdate(PartyFields):
    name: Optional[str] = None
    code: Optional[str] = None
    is_active: Optional[bool] = None


class Party(BaseModel):
    id: int
    party_type: PartyType
    name: str
    code: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    tax_id: Optional[str] = None
    payment_terms: Optional[str] = None
    credit_limit: Optional[Decimal] = None
    vendor_number: Optional[str] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    is_active: bool
    balance: Decimal = Decimal("0")
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PartyList(BaseModel):
    data: List[Party]
    pagination: Pagination


class PartyHeader(BaseModel):
    id: int
    party_type: PartyType
    name: str
    code: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    class Config:
        from_attributes = True
