"""Data item service error hierarchy."""

from typing import Any


class DataItemServiceError(Exception):
    """Base exception for data item service errors."""

    code = "DATA_ITEM_INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(DataItemServiceError):
    """Invalid query parameters or entity values."""

    code = "DATA_ITEM_INVALID_REQUEST"


class NotFoundError(DataItemServiceError):
    """Resource not found."""

    code = "DATA_ITEM_NOT_FOUND"


class ConfigurationError(DataItemServiceError):
    """A required collaborator was not provided at construction time.

    Fatal: raised once during wiring and never retried.
    """

    code = "DATA_ITEM_CONFIGURATION_ERROR"


class RowMappingError(DataItemServiceError):
    """A result row could not be mapped into a complete domain record."""

    code = "DATA_ITEM_ROW_MAPPING_ERROR"

    def __init__(
        self,
        message: str,
        column: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details={**(details or {}), "column": column})
        self.column = column
