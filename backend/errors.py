# backend/errors.py
"""
Exceptions raised by the ledger and settlement code.

The web layer turns every LedgerError into a 400 response.
"""


class LedgerError(Exception):
    """Base exception for ledger and settlement errors."""
    pass


class MalformedExpenseError(LedgerError):
    """Raised when an expense cannot be applied to the balances."""
    pass


class InvalidPayloadError(LedgerError):
    """Raised when request JSON can't be turned into ledger records."""
    pass
