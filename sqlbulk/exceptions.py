from typing import Any, Optional

__all__ = (
    "ImproperConfigurationError",
    "IntegrityError",
    "InvalidArgumentError",
    "OperationalError",
    "ParameterError",
    "RecordShapeError",
    "SQLBuilderError",
    "SQLBulkError",
    "StorageError",
    "UnsupportedVendorError",
)


class SQLBulkError(Exception):
    """Base exception class from which all sqlbulk exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBulkError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class InvalidArgumentError(SQLBulkError, ValueError):
    """An argument was rejected before any SQL was built."""

    argument: Optional[str]

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        detail_message = message
        if argument:
            detail_message = f"{message} (argument: {argument})"
        super().__init__(detail=detail_message)
        self.argument = argument


class UnsupportedVendorError(SQLBulkError, LookupError):
    """No vendor profile is known for the requested vendor id."""

    vendor_id: str

    def __init__(self, vendor_id: str, available: "Optional[list[str]]" = None) -> None:
        message = f"Unsupported vendor: {vendor_id!r}."
        if available:
            message = f"{message} Available: {', '.join(available)}"
        super().__init__(detail=message)
        self.vendor_id = vendor_id


class RecordShapeError(SQLBulkError):
    """A record does not match the shape the operation expects.

    Raised when records in one batch expose different field signatures, or when a
    result row cannot populate a required field of the target type.
    """


class ParameterError(SQLBulkError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class SQLBuilderError(SQLBulkError):
    """Issues building or generating SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class ImproperConfigurationError(SQLBulkError):
    """Improper configuration error.

    Raised when a registry or configuration object is used in an unsupported way.
    """


class StorageError(SQLBulkError):
    """Base class for errors raised by storage adapters."""


class IntegrityError(StorageError):
    """Data integrity error."""


class OperationalError(StorageError):
    """Operational storage error (locked database, malformed SQL, lost connection)."""
