"""Error handling framework for the CodeLab schema patcher.

Provides custom exception types, the classifier that sorts a failed DDL
statement into "already applied" or "real error", and a context
manager for standardized error logging and wrapping.
"""

import logging

logger = logging.getLogger(__name__)

# SQLite reports "duplicate column name: <col>" when ADD COLUMN targets an existing column
DUPLICATE_COLUMN_MARKER = "duplicate column"


# Custom Exception Hierarchy
class CodelabError(Exception):
    """Base exception for all CodeLab schema patch errors."""

    pass


class DatabaseConnectionError(CodelabError):
    """The database file could not be opened.

    Fatal for a run: no statement is attempted.
    """

    pass


class StatementError(CodelabError):
    """A schema statement failed for a reason other than an existing column.

    Raised for syntax errors, missing tables, locked databases, etc.
    """

    def __init__(self, message: str, statement: str | None = None):
        super().__init__(message)
        self.statement = statement


class DuplicateColumnError(StatementError):
    """The column a statement tries to add already exists.

    Expected on re-runs; the statement is treated as already applied.
    """

    pass


class MigrationStateError(CodelabError):
    """The migration runner was driven out of order."""

    pass


def is_duplicate_column_error(error: BaseException) -> bool:
    """Return True if the error message says the column already exists."""
    return DUPLICATE_COLUMN_MARKER in str(error).lower()


def classify_statement_error(error: BaseException, statement: str | None = None) -> StatementError:
    """Convert a driver exception into a StatementError or DuplicateColumnError."""
    if isinstance(error, StatementError):
        return error
    # SQLAlchemy DBAPIError carries the driver exception in .orig; its str has no SQL suffix
    message = str(getattr(error, "orig", None) or error)
    if is_duplicate_column_error(message):
        return DuplicateColumnError(message, statement)
    return StatementError(message, statement)


# Context Manager for Error Handling
class error_context:
    """Context manager for error handling in specific code blocks.

    Example:
        with error_context(
            error_types=(SQLAlchemyError, OSError),
            default_message="Failed to open database",
            wrap_as=DatabaseConnectionError,
        ):
            # ... code that might raise errors ...
    """

    def __init__(
        self,
        *,
        error_types: tuple[type[Exception], ...],
        default_message: str,
        log_level: str = "error",
        wrap_as: type[CodelabError] | None = None,
    ):
        self.error_types = error_types
        self.default_message = default_message
        self.log_level = log_level
        self.wrap_as = wrap_as

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and issubclass(exc_type, self.error_types):
            log_func = getattr(logger, self.log_level)
            log_func(
                f"{self.default_message}: {exc_val}",
                exc_info=(self.log_level == "error"),
            )
            if self.wrap_as:
                raise self.wrap_as(f"{self.default_message}: {exc_val}") from exc_val
            return False
        return False
