from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class ChartOfAccounts(Base, TimestampMixin):
    __tablename__ = "chart_of_accounts"

    id = Column(Integer, primary_key=True, index=True)
    account_code = Column(String(20), nullable=False, unique=True, index=True)
    account_name = Column(String(100), nullable=False)
    category = Column(String(20), nullable=False)  # asset, liability, equity, revenue, expense
    account_type = Column(String(50), nullable=False)  # current_asset, fixed_asset, ...
    sub_type = Column(String(50), nullable=True)  # e.g. "Checking & Saving"
    parent_id = Column(Integer, ForeignKey("chart_of_accounts.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    parent = relationship("ChartOfAccounts", remote_side=[id], back_populates="children")
    children = relationship("ChartOfAccounts", back_populates="parent")
