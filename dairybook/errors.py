"""Exception types shared across the package."""

from __future__ import annotations


class DairyBookError(Exception):
    """Base class for errors raised by dairybook."""


class InvalidInputError(DairyBookError, ValueError):
    """A user-supplied value was rejected before any state change."""


class InvalidAmountError(InvalidInputError):
    """A payment or quantity amount is not a positive finite number."""


class RecordNotFoundError(DairyBookError, LookupError):
    """The requested record does not exist for this account."""

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"{table} record not found: {record_id}")
        self.table = table
        self.record_id = record_id


class ConfirmationRequired(DairyBookError):
    """An action needs explicit user confirmation before it can proceed.

    ``details`` holds the values the prompt should show (amounts, names).
    """

    def __init__(self, message: str, **details) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
