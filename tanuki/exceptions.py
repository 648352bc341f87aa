"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Exception hierarchy for Tanuki.

All custom exceptions inherit from TanukiError base class.
"""

from typing import Any, Optional


class TanukiError(Exception):
    """Base exception for all Tanuki errors."""
    pass


# Configuration Errors
class ConfigurationError(TanukiError):
    """Raised when client configuration is invalid."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when a configuration file is invalid or malformed."""
    pass


class ConfigurationLoadError(ConfigurationError):
    """Raised when loading configuration fails."""
    pass


# Request Errors
class InvalidParameterError(TanukiError):
    """Raised when a request parameter cannot be serialized."""
    pass


# Transport Errors
class NetworkError(TanukiError):
    """
    Raised when the network round trip fails.

    Connection refused, DNS failure, TLS failure and protocol errors are all
    collapsed into this kind. The underlying exception is kept on ``cause``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NetworkTimeoutError(NetworkError):
    """Raised when the round trip exceeds its deadline."""
    pass


# Response Errors
class MalformedBodyError(TanukiError):
    """Raised when a success body is not valid JSON."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class APIError(TanukiError):
    """
    Base exception for errors driven by the HTTP status code.

    Attributes:
        kind: Stable machine-readable error kind
        http_status: Status code returned by the server
        message: Human-readable message extracted from the body
        raw_body: Decoded JSON body, or None if the body was not JSON
    """

    kind = "api_error"

    def __init__(
        self,
        message: str,
        http_status: int,
        raw_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.raw_body = raw_body

    def __str__(self) -> str:
        return f"{self.http_status}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(http_status={self.http_status!r}, "
            f"message={self.message!r})"
        )


class ValidationError(APIError):
    """Raised on 400 and 422: the server rejected client-supplied data."""
    kind = "validation"


class UnauthorizedError(APIError):
    """Raised on 401: missing or invalid credential."""
    kind = "unauthorized"


class ForbiddenError(APIError):
    """Raised on 403: authenticated but not permitted."""
    kind = "forbidden"


class NotFoundError(APIError):
    """Raised on 404."""
    kind = "not_found"


class ConflictError(APIError):
    """Raised on 409."""
    kind = "conflict"


class RateLimitedError(APIError):
    """
    Raised on 429.

    ``retry_after`` holds the Retry-After header value exactly as the server
    sent it, or None when absent. The client never sleeps or retries.
    """

    kind = "rate_limited"

    def __init__(
        self,
        message: str,
        http_status: int = 429,
        raw_body: Any = None,
        retry_after: Optional[str] = None,
    ):
        super().__init__(message, http_status, raw_body)
        self.retry_after = retry_after


class ServerError(APIError):
    """Raised on 5xx responses."""
    kind = "server_error"


class UnexpectedStatusError(APIError):
    """Raised for any status code outside the documented set."""
    kind = "unexpected_status"
