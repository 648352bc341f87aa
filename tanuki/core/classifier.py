"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Response classification.

Maps a raw status code to success or to one error kind of the API error
family. The decision is made from the status code alone; the body is only
consulted for the error message.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Type

from tanuki.exceptions import (
    APIError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
    ValidationError,
)

if TYPE_CHECKING:
    from tanuki.adapters.base import RawResponse


STATUS_ERRORS: Dict[int, Type[APIError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitedError,
}

MESSAGE_FIELDS = ("message", "error", "error_description")


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def error_class_for(status_code: int) -> Optional[Type[APIError]]:
    """
    Error class for a status code, or None on success.

    >>> error_class_for(404).__name__
    'NotFoundError'
    """
    if is_success(status_code):
        return None
    if status_code in STATUS_ERRORS:
        return STATUS_ERRORS[status_code]
    if 500 <= status_code <= 599:
        return ServerError
    return UnexpectedStatusError


def _flatten_message(message: Any) -> str:
    # GitLab validation failures: {"name": ["has already been taken"], ...}
    if isinstance(message, dict):
        parts = []
        for key, value in message.items():
            if isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            elif isinstance(value, dict):
                value = _flatten_message(value)
            parts.append(f"{key} {value}")
        return "; ".join(parts)
    if isinstance(message, list):
        return ", ".join(_flatten_message(m) for m in message)
    return str(message)


def extract_error_message(body: bytes, reason: str = "") -> Tuple[str, Any]:
    """
    Extract a human-readable message from an error body.

    Returns:
        (message, raw_body): raw_body is the decoded JSON, or None when the
        body is not JSON, in which case the message is the body text verbatim.
    """
    text = body.decode("utf-8", errors="replace") if body else ""
    if not text.strip():
        return reason, None

    try:
        decoded = json.loads(text)
    except ValueError:
        return text, None

    if isinstance(decoded, dict):
        for name in MESSAGE_FIELDS:
            if decoded.get(name) not in (None, "", [], {}):
                return _flatten_message(decoded[name]), decoded
    return text, decoded


def build_error(response: RawResponse) -> APIError:
    """Construct the API error for a non-success response."""
    error_class = error_class_for(response.status_code) or UnexpectedStatusError
    reason = response.reason
    if not reason:
        try:
            reason = HTTPStatus(response.status_code).phrase
        except ValueError:
            reason = f"HTTP {response.status_code}"
    message, raw_body = extract_error_message(response.body, reason)

    if error_class is RateLimitedError:
        return RateLimitedError(
            message,
            http_status=response.status_code,
            raw_body=raw_body,
            retry_after=response.header("Retry-After"),
        )
    return error_class(message, http_status=response.status_code, raw_body=raw_body)


def classify(response: RawResponse) -> None:
    """
    Raise the matching API error unless the response is a success.

    Raises:
        APIError: One of the status-driven error kinds
    """
    if not is_success(response.status_code):
        raise build_error(response)
