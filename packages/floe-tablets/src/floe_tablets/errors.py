"""Custom exceptions for floe-tablets.

This module defines the exception hierarchy:
- FloeCatalogError (base)
- InvalidArgumentError
- DependencyFailureError
- TableAlreadyExistsError
- SubmissionError
- CreationTimeoutError
- CatalogConnectionError
"""

from __future__ import annotations


class FloeCatalogError(Exception):
    """Base exception for all table creation operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     client.new_table_creator().table_name("app.orders").create()
        ... except FloeCatalogError as e:
        ...     print(f"Catalog error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize FloeCatalogError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidArgumentError(FloeCatalogError):
    """A required part of the table specification is missing or malformed.

    Raised before any collaborator is contacted, so it is always safe to fix
    the specification and call again.

    Example:
        >>> try:
        ...     creator.table_name("app.").create()
        ... except InvalidArgumentError as e:
        ...     print(e)
        Missing table name
    """


class DependencyFailureError(FloeCatalogError):
    """A collaborator needed to build the request failed.

    Raised when:
    - The topology service cannot recommend a tablet count
    - The schema provider cannot be converted to its wire form
    """

    def __init__(
        self,
        message: str,
        *,
        dependency: str,
        cause: str | None = None,
    ) -> None:
        """Initialize DependencyFailureError.

        Args:
            message: Human-readable error description.
            dependency: Name of the collaborator that failed.
            cause: The underlying failure.
        """
        details = {"dependency": dependency}
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.dependency = dependency
        self.cause = cause


class TableAlreadyExistsError(FloeCatalogError):
    """The catalog already holds a table with the requested name.

    Catalog implementations raise this from ``create_table``. The submitter
    absorbs it so that a retried create observes success.

    Attributes:
        table: Qualified table name.
        table_id: Id of the existing table, when the catalog reports it.
    """

    def __init__(
        self,
        table: str,
        *,
        table_id: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize TableAlreadyExistsError.

        Args:
            table: Qualified table name.
            table_id: Id of the existing table, if known.
            message: Optional custom error message.
        """
        msg = message or f"Table already exists: {table}"
        details = {"table": table}
        if table_id:
            details["table_id"] = table_id
        super().__init__(msg, details=details)
        self.table = table
        self.table_id = table_id


class SubmissionError(FloeCatalogError):
    """The catalog rejected the create request.

    The original catalog error is kept as ``__cause__`` and its text is
    carried in the message, prefixed with the object type and name.
    """

    def __init__(self, object_type: str, table: str, cause: str) -> None:
        """Initialize SubmissionError.

        Args:
            object_type: "table" or "index".
            table: Qualified table name.
            cause: Text of the catalog failure.
        """
        super().__init__(f"Error creating {object_type} {table} on the catalog: {cause}")
        self.object_type = object_type
        self.table = table
        self.cause = cause


class CreationTimeoutError(FloeCatalogError):
    """The deadline elapsed before the table was created or became ready.

    The table may still have been durably created. Callers may retry with a
    fresh deadline; the retry will observe an already-existing table.
    """

    def __init__(
        self,
        table: str,
        *,
        timeout_seconds: float | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize CreationTimeoutError.

        Args:
            table: Qualified table name.
            timeout_seconds: The budget that was exceeded.
            message: Optional custom error message.
        """
        msg = message or f"Timed out waiting for table {table}"
        details = {"table": table}
        if timeout_seconds is not None:
            details["timeout_seconds"] = f"{timeout_seconds:g}"
        super().__init__(msg, details=details)
        self.table = table
        self.timeout_seconds = timeout_seconds


class CatalogConnectionError(FloeCatalogError):
    """Failed to reach the catalog service.

    Example:
        >>> raise CatalogConnectionError(uri="catalog-0:7100", cause="refused")
    """

    def __init__(
        self,
        message: str = "Failed to connect to catalog",
        *,
        uri: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize CatalogConnectionError.

        Args:
            message: Human-readable error description.
            uri: The catalog address that was unreachable.
            cause: The underlying cause of the connection failure.
        """
        details: dict[str, str] = {}
        if uri:
            details["uri"] = uri
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.uri = uri
        self.cause = cause
