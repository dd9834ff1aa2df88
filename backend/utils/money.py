from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# Business rule: a journal is balanced when debits and credits differ by
# less than one cent.
BALANCE_TOLERANCE = Decimal("0.01")
CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """Coerce a DB aggregate or request value to Decimal; None becomes zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid amount: {value!r}")


def to_money(value) -> Decimal:
    """Decimal rounded to cents, for aggregates read back from the database."""
    return to_decimal(value).quantize(CENT)


def is_whole_cents(value) -> bool:
    """True when the amount can be stored in a two-place money column unchanged."""
    amount = to_decimal(value)
    return amount.is_finite() and amount == amount.quantize(CENT)


def is_balanced(total_debit: Decimal, total_credit: Decimal) -> bool:
    return abs(total_debit - total_credit) < BALANCE_TOLERANCE
