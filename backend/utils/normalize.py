"""Form-field normalization for optional party attributes.

Forms submit empty strings for untouched inputs. Free-text fields store
those as NULL; numeric and date fields that are empty or unparseable are
left out of the write altogether.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

# Sentinel for "leave this column out of the write".
OMIT = object()


def normalize_value(value):
    if value is None or value == "":
        return None
    return value


def normalize_numeric(value):
    if value is None or value == "":
        return OMIT
    if isinstance(value, bool):
        return OMIT
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return OMIT
    return number if number.is_finite() else OMIT


def normalize_date(value):
    if value is None or value == "":
        return OMIT
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError):
        return OMIT
