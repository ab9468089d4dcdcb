from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """
    Categorical failure codes surfaced by the completion clients.
    Only OVERLOAD is considered transient and retried inside the client.
    """

    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    RATE_LIMIT = "rate_limit"
    MALFORMED_REQUEST = "malformed_request"
    OVERLOAD = "overload"
    UNKNOWN = "unknown"


_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.MALFORMED_REQUEST,
    401: ErrorCode.AUTHENTICATION,
    403: ErrorCode.PERMISSION,
    404: ErrorCode.MALFORMED_REQUEST,
    413: ErrorCode.MALFORMED_REQUEST,
    422: ErrorCode.MALFORMED_REQUEST,
    429: ErrorCode.RATE_LIMIT,
    503: ErrorCode.OVERLOAD,
    529: ErrorCode.OVERLOAD,
}


def error_code_from_status(status_code: int | None) -> ErrorCode:
    """
    Map an HTTP status code from any provider to an ErrorCode.
    """
    if status_code is None:
        return ErrorCode.UNKNOWN
    return _STATUS_CODES.get(status_code, ErrorCode.UNKNOWN)


class FlowscopeError(Exception):
    """Base class for all flowscope-related exceptions."""

    pass


class RecordSetError(FlowscopeError):
    """Raised when a record set cannot be analyzed (empty or invalid input)."""

    pass


class ParseError(FlowscopeError):
    """
    Raised when the parser is misused (e.g. handed a non-string).
    Model prose that deviates from the requested grammar is never an error.
    """

    pass


class ProviderError(FlowscopeError):
    """
    Exception raised when a completion provider rejects or fails a request.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        provider: str | None = None,
        status_code: int | None = None,
        attempts: int = 1,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.provider = provider
        self.status_code = status_code
        self.attempts = attempts

    @property
    def retryable(self) -> bool:
        return self.code is ErrorCode.OVERLOAD

    def __str__(self) -> str:
        prefix = f"[{self.provider}] " if self.provider else ""
        status = f" (HTTP {self.status_code})" if self.status_code else ""
        return f"{prefix}{self.code.value}{status}: {self.message}"
