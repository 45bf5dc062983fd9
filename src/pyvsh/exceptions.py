"""Custom exception hierarchy for pyvsh."""

from __future__ import annotations

from typing import ClassVar


class LedgerError(Exception):
    """Base exception for all pyvsh errors.

    Every rejected ledger operation raises a subclass of this error before
    any state is touched, so a caught ``LedgerError`` always means the
    operation had no effect.
    """

    code: ClassVar[str] = "LEDGER_ERROR"

    def __init__(self, reason: str, *, operation: str = "") -> None:
        self.reason = reason
        self.operation = operation
        super().__init__(reason)


class LedgerConfigError(LedgerError):
    """Invalid configuration, missing deployment info or unknown ledger address."""

    code = "CONFIG"


class UnauthorizedError(LedgerError):
    """Caller is not the owner, or not an active service center."""

    code = "UNAUTHORIZED"


class InvalidArgumentError(LedgerError):
    """Malformed principal, empty required string or non-positive mileage."""

    code = "INVALID_ARGUMENT"


class AlreadyExistsError(LedgerError):
    """Service center is already active."""

    code = "ALREADY_EXISTS"


class NotFoundError(LedgerError):
    """Service center is not currently active."""

    code = "NOT_FOUND"


class OutOfBoundsError(LedgerError):
    """Record index is outside the vehicle's history."""

    code = "OUT_OF_BOUNDS"
