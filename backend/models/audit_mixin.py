from sqlalchemy import Column, DateTime
from datetime import datetime
import os
import pytz

APP_TIMEZONE = pytz.timezone(os.getenv("APP_TIMEZONE", "UTC"))


def now_local():
    return datetime.now(APP_TIMEZONE)


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    Ledger rows carry no soft-delete columns: accounts and parties are
    deactivated through ``is_active`` and journals are hard-deleted with their
    lines.
    """
    # DateTime(timezone=True) keeps the zone info where the backend supports it.
    created_at = Column(DateTime(timezone=True), default=now_local, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_local, onupdate=now_local, nullable=False)
