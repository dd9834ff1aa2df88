from sqlalchemy import Column, Integer, String, Boolean, Date, Numeric, UniqueConstraint
from database import Base
import enum
from models.audit_mixin import TimestampMixin


class PartyType(str, enum.Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    EMPLOYEE = "employee"


class Party(Base, TimestampMixin):
    __tablename__ = "parties"

    id = Column(Integer, primary_key=True, index=True)
    party_type = Column(String(20), nullable=False, index=True)
    name = Column(String, nullable=False)
    code = Column(String(50), nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    country = Column(String, nullable=True)
    tax_id = Column(String, nullable=True)

    # Customer
    payment_terms = Column(String, nullable=True)
    credit_limit = Column(Numeric(15, 2), nullable=True)
    # Vendor
    vendor_number = Column(String, nullable=True)
    # Employee
    employee_id = Column(String, nullable=True)
    department = Column(String, nullable=True)
    hire_date = Column(Date, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint('party_type', 'code', name='unique_party_code_per_type'),
    )
