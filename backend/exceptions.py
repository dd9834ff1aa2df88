"""Accounting error taxonomy.

Every failure raised by the registries, the ledger store and the journal
service is one of these. Each carries the HTTP status the API layer renders
it with and a short ``kind`` tag for clients.
"""

from decimal import Decimal


class AccountingError(Exception):
    """Base class for every scoped, per-operation failure."""

    status_code = 500
    kind = "AccountingError"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInput(AccountingError):
    status_code = 400
    kind = "InvalidInput"


class DuplicateCode(AccountingError):
    status_code = 409
    kind = "DuplicateCode"


class NotFound(AccountingError):
    status_code = 404
    kind = "NotFound"


class ParentNotFound(AccountingError):
    status_code = 404
    kind = "ParentNotFound"


class SelfParent(AccountingError):
    status_code = 400
    kind = "SelfParent"


class HasChildren(AccountingError):
    status_code = 400
    kind = "HasChildren"


class Unbalanced(AccountingError):
    status_code = 400
    kind = "Unbalanced"

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        super().__init__(
            f"Journal entry is not balanced. Total debits: {total_debit:.2f}, "
            f"Total credits: {total_credit:.2f}"
        )
        self.total_debit = total_debit
        self.total_credit = total_credit


class NegativeAmount(AccountingError):
    status_code = 400
    kind = "NegativeAmount"


class AmbiguousLine(AccountingError):
    status_code = 400
    kind = "AmbiguousLine"


class EmptyLine(AccountingError):
    status_code = 400
    kind = "EmptyLine"


class AccountNotFound(AccountingError):
    status_code = 404
    kind = "AccountNotFound"

    def __init__(self, account_code: str):
        super().__init__(f"Account {account_code} not found or inactive")
        self.account_code = account_code


class TransactionFailure(AccountingError):
    status_code = 500
    kind = "TransactionFailure"
