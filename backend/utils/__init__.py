from .money import BALANCE_TOLERANCE, ZERO, is_balanced, to_decimal

__all__ = ['BALANCE_TOLERANCE', 'ZERO', 'is_balanced', 'to_decimal']
