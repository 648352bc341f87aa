"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Client Lifecycle Hook Registry.

Lets callers observe or decorate the request lifecycle without touching the
core. Typical uses are audit logging, metrics and extra headers.

Available hooks:
- on_before_request: Fired before every outbound request; may replace it
- on_after_response: Fired after every raw response, success or not
- on_error: Fired on any error surfaced by the client
"""

from __future__ import annotations

import threading
from typing import Callable, List

from tanuki.adapters.base import RawResponse
from tanuki.core.request import PreparedRequest
from tanuki.logging_config import get_logger

logger = get_logger(__name__)


BeforeRequestCallback = Callable[[PreparedRequest], PreparedRequest]
AfterResponseCallback = Callable[[PreparedRequest, RawResponse], None]
ErrorCallback = Callable[[Exception], None]


class HookRegistry:
    """
    Manages lifecycle hooks for a GitlabClient.

    Callbacks are executed in registration order. A failing callback is
    logged and reported to the error hooks; it never aborts the request.
    """

    def __init__(self) -> None:
        self._before_request_callbacks: List[BeforeRequestCallback] = []
        self._after_response_callbacks: List[AfterResponseCallback] = []
        self._error_callbacks: List[ErrorCallback] = []
        self._lock = threading.Lock()

    # -- Registration methods ------------------------------------------------

    def on_before_request(self, callback: BeforeRequestCallback) -> BeforeRequestCallback:
        """Register a callback fired before every outbound request.

        The callback receives the prepared request and **must** return a
        ``PreparedRequest`` (possibly modified). Usable as a decorator.
        """
        with self._lock:
            self._before_request_callbacks.append(callback)
        logger.debug("Registered on_before_request hook")
        return callback

    def on_after_response(self, callback: AfterResponseCallback) -> AfterResponseCallback:
        """Register a callback fired after every raw response."""
        with self._lock:
            self._after_response_callbacks.append(callback)
        logger.debug("Registered on_after_response hook")
        return callback

    def on_error(self, callback: ErrorCallback) -> ErrorCallback:
        """Register a callback fired on any client error."""
        with self._lock:
            self._error_callbacks.append(callback)
        logger.debug("Registered on_error hook")
        return callback

    # -- Firing methods (called by the client) -------------------------------

    def fire_before_request(self, request: PreparedRequest) -> PreparedRequest:
        """Fire all on_before_request callbacks in order.

        Each callback receives the (possibly replaced) request from the
        previous callback, forming a pipeline.
        """
        current = request
        for cb in list(self._before_request_callbacks):
            try:
                result = cb(current)
            except Exception as exc:
                logger.error(f"on_before_request hook error: {exc}", exc_info=True)
                self.fire_error(exc)
                continue
            if isinstance(result, PreparedRequest):
                current = result
            else:
                logger.warning("on_before_request hook did not return a PreparedRequest; ignored")
        return current

    def fire_after_response(self, request: PreparedRequest, response: RawResponse) -> None:
        """Fire all on_after_response callbacks."""
        for cb in list(self._after_response_callbacks):
            try:
                cb(request, response)
            except Exception as exc:
                logger.error(f"on_after_response hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_error(self, error: Exception) -> None:
        """Fire all on_error callbacks."""
        for cb in list(self._error_callbacks):
            try:
                cb(error)
            except Exception:
                # Avoid infinite recursion: log only
                logger.error("on_error hook itself raised an exception", exc_info=True)
