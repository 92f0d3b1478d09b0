"""
Custom exceptions for the IP check-in function.

Every failure inside a request is raised as one of these and translated
into exactly one HTTP response at the handler boundary.

Exception Hierarchy:
    CheckinError (base)
    ├── ClientInputError - Bad method, content type or body (4xx)
    │   └── MethodNotAllowedError - GET while legacy GET is disabled
    ├── ConfigurationError - Missing or malformed store configuration (500)
    ├── StoreFault - Table Storage failed or timed out (500)
    └── StoreRejection - Upsert answered with a non-success status (400)
"""

from typing import Optional


class CheckinError(Exception):
    """
    Base exception for all check-in errors.

    Attributes:
        message: Human-readable error description
        status_code: HTTP status the handler answers with
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ClientInputError(CheckinError):
    """
    Raised when the request itself is unusable.

    The message is returned verbatim as the response body, so it must
    never contain anything read from the store.
    """

    status_code = 400


class MethodNotAllowedError(ClientInputError):
    """Raised for GET requests while legacy GET support is switched off."""

    status_code = 405

    def __init__(self, method: str):
        self.method = method
        super().__init__("Method not allowed. Use POST")


class ConfigurationError(CheckinError):
    """
    Raised when the store connection is not configured or cannot be parsed.

    Example:
        >>> CheckinStore.from_settings(Settings(AzureTableConnectionString=None))
        ConfigurationError: AzureTableConnectionString environment variable not set
    """

    status_code = 500


class StoreFault(CheckinError):
    """
    Raised when Table Storage cannot serve a lookup or upsert.

    The original SDK exception is chained as ``__cause__`` and only
    ever logged.

    Attributes:
        operation: Store operation that failed ("get" or "upsert")
    """

    status_code = 500

    def __init__(self, message: str, operation: str):
        self.operation = operation
        super().__init__(f"{message} [operation={operation}]")


class StoreRejection(CheckinError):
    """
    Raised when an upsert completes but reports neither 200 nor 204.

    Attributes:
        upsert_status: Status code reported by Table Storage
    """

    status_code = 400

    def __init__(self, upsert_status: int):
        self.upsert_status = upsert_status
        super().__init__("Failed to add or update entity in table storage")
