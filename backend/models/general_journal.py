from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class GeneralJournal(Base, TimestampMixin):
    __tablename__ = "general_journals"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    reference_id = Column(String, nullable=True)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by="JournalLine.id",
    )
