from sqlalchemy import Column, Integer, Numeric, ForeignKey, CheckConstraint, String
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin

# Money columns; amounts are Decimal end to end.
MONEY = Numeric(18, 2)


class JournalLine(Base, TimestampMixin):
    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True, index=True)
    journal_id = Column(Integer, ForeignKey("general_journals.id", ondelete="CASCADE"), nullable=False, index=True)
    account_code = Column(String(20), ForeignKey("chart_of_accounts.account_code", onupdate="CASCADE"), nullable=False, index=True)
    debit = Column(MONEY, CheckConstraint('debit >= 0'), nullable=False, default=0)
    credit = Column(MONEY, CheckConstraint('credit >= 0'), nullable=False, default=0)
    description = Column(String, nullable=True)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=True, index=True)

    # Relationships
    journal = relationship("GeneralJournal", back_populates="lines")
    account = relationship("ChartOfAccounts")
    party = relationship("Party")

    @property
    def account_name(self):
        return self.account.account_name if self.account else None

    @property
    def account_category(self):
        return self.account.category if self.account else None
