"""Error taxonomy for the ledger core.

Each error carries a stable ``category`` so boundary layers can map it to
their own protocol codes without knowing the storage technology.
"""


class LedgerError(Exception):
    """Base class for errors raised by the ledger core."""

    category = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerError):
    """A referenced entity does not exist or is not visible to the caller."""

    category = "not_found"


class ValidationError(LedgerError):
    """Input was rejected before any store access."""

    category = "validation"


class ForbiddenError(LedgerError):
    """The caller referenced an entity it may not use."""

    category = "forbidden"


class InternalError(LedgerError):
    """Unexpected storage failure; details are only in the logs."""

    category = "internal"


__all__ = [
    "LedgerError",
    "NotFoundError",
    "ValidationError",
    "ForbiddenError",
    "InternalError",
]
