"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

HTTP transport adapter (default).
"""

from __future__ import annotations

import threading
import time
from typing import Optional

import httpx

from tanuki.adapters.base import BaseAdapter, RawResponse
from tanuki.core.request import PreparedRequest
from tanuki.exceptions import InvalidParameterError, NetworkError, NetworkTimeoutError
from tanuki.logging_config import get_logger, log_http_request

logger = get_logger(__name__)


class HttpAdapter(BaseAdapter):
    """Default HTTP transport using ``httpx.Client``.

    The underlying client is created on first use and shared by all threads;
    its connection pool does its own locking.

    Args:
        timeout: Default round trip timeout in seconds. ``None`` disables it.
        verify_ssl: Verify TLS certificates.
        transport: Optional ``httpx.BaseTransport`` (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()
        self._connected = False

    def _ensure_client(self) -> httpx.Client:
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self._timeout,
                    verify=self._verify_ssl,
                    transport=self._transport,
                    follow_redirects=False,
                )
                self._connected = True
            return self._client

    def send(self, request: PreparedRequest, timeout: Optional[float] = None) -> RawResponse:
        client = self._ensure_client()

        effective = timeout if timeout is not None else request.timeout
        timeout_arg = effective if effective is not None else self._timeout

        start = time.monotonic()
        try:
            resp = client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=request.body,
                timeout=timeout_arg,
            )
        except httpx.TimeoutException as e:
            elapsed = round((time.monotonic() - start) * 1000, 2)
            log_http_request(logger, request.method, request.url, None, elapsed, error="timeout")
            raise NetworkTimeoutError(
                f"{request.method} {request.url} timed out after {timeout_arg}s", cause=e
            ) from e
        except httpx.HTTPError as e:
            elapsed = round((time.monotonic() - start) * 1000, 2)
            log_http_request(logger, request.method, request.url, None, elapsed, error=str(e))
            raise NetworkError(f"{request.method} {request.url} failed: {e}", cause=e) from e
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            log_http_request(logger, request.method, request.url, None, 0.0, error=str(e))
            raise InvalidParameterError(
                f"{request.method} {request.url} cannot be sent: {e}"
            ) from e

        elapsed = round((time.monotonic() - start) * 1000, 2)
        log_http_request(logger, request.method, request.url, resp.status_code, elapsed)

        return RawResponse(
            status_code=resp.status_code,
            headers=list(resp.headers.multi_items()),
            body=resp.content,
            reason=resp.reason_phrase,
            elapsed_ms=elapsed,
        )

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
