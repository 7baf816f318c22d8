"""
Error taxonomy.

* :class:`DomainRangeError`: scoring engine input outside the formula's
  valid domain.  Always recoverable by the caller.
* :class:`PersistenceFault`: the durable medium failed a read or write.
  Raised by storage backends and swallowed by the key-value store.
* :class:`CollaboratorFault`: a remote text-generation call failed.
* :class:`InvalidRequestError`: a collaborator request was rejected
  before any remote call was made.
"""

from typing import Optional


class Big3Error(Exception):
    """Base class for all application errors."""


class DomainRangeError(Big3Error, ValueError):
    """An argument is outside the range a formula is defined for."""

    def __init__(self, argument: str, value: float, valid_range: str):
        self.argument = argument
        self.value = value
        self.valid_range = valid_range
        super().__init__(f"{argument} must be {valid_range} (got {value})")


class PersistenceFault(Big3Error):
    """Read or write against the durable medium failed."""

    def __init__(self, key: str, operation: str, detail: str = ""):
        self.key = key
        self.operation = operation
        message = f"{operation} failed for key '{key}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CollaboratorFault(Big3Error):
    """A remote text-generation service could not produce a usable answer."""

    def __init__(self, service: str, user_message: str, detail: Optional[str] = None):
        self.service = service
        self.user_message = user_message
        self.detail = detail
        super().__init__(f"{service}: {detail or user_message}")


class InvalidRequestError(Big3Error, ValueError):
    """A request to a collaborator failed local validation."""
