"""Exceptions shared across account-ledger."""


class LedgerError(Exception):
    """Base class for account-ledger errors."""


class InvalidHostError(LedgerError):
    """Raised when a controller is bound to a missing or incomplete host widget."""
