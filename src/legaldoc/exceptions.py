"""Custom exceptions for legaldoc."""


class LegalDocError(Exception):
    """Base exception for legaldoc operations."""


class HydrationError(LegalDocError):
    """Persisted structure could not be decoded."""


class InvariantError(LegalDocError):
    """Document tree violates a structural invariant.

    Signals a programming error, not a recoverable runtime condition.
    """
