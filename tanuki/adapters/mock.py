"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Mock transport adapter for local testing.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Mapping, Optional, Tuple, Union

from tanuki.adapters.base import BaseAdapter, RawResponse
from tanuki.core.params import Params, iter_params
from tanuki.core.request import PreparedRequest
from tanuki.exceptions import NetworkError

ResponseKey = Union[Tuple[str, str], Tuple[str, str, Tuple[Tuple[str, str], ...]]]
Canned = Union[RawResponse, Exception]


def _path_key(path: str) -> str:
    return "/" + path.strip("/")


class MockAdapter(BaseAdapter):
    """In-memory mock adapter for unit tests.

    Responses are keyed by ``(method, path)`` or ``(method, path, params)``;
    a params-specific entry wins over a path-only one. A canned exception is
    raised instead of returned. Every request is recorded.

    Args:
        responses: Mapping from keys to ``RawResponse`` instances (or exceptions).

    Example::

        adapter = MockAdapter({
            ("GET", "/projects/42/deploy_keys"): RawResponse(status_code=200, body=b"[]"),
        })
    """

    def __init__(
        self,
        responses: Optional[Mapping[ResponseKey, Canned]] = None,
    ) -> None:
        self._responses: Dict[Tuple, Canned] = {}
        self._sent: List[PreparedRequest] = []
        self._lock = threading.Lock()
        for key, response in (responses or {}).items():
            self._responses[self._normalize_key(key)] = response

    @staticmethod
    def _normalize_key(key: ResponseKey) -> Tuple:
        method, path = key[0].upper(), _path_key(key[1])
        if len(key) == 3:
            return (method, path, tuple(sorted(key[2])))
        return (method, path)

    def add(
        self,
        method: str,
        path: str,
        response: Canned,
        params: Optional[Params] = None,
    ) -> None:
        """Register a canned response, optionally only for exact params."""
        if params is None:
            key: Tuple = (method.upper(), _path_key(path))
        else:
            key = (method.upper(), _path_key(path), tuple(sorted(iter_params(params))))
        with self._lock:
            self._responses[key] = response

    def add_json(
        self,
        method: str,
        path: str,
        body: Union[str, bytes],
        status_code: int = 200,
        headers: Optional[Dict[str, Union[str, List[str]]]] = None,
        params: Optional[Params] = None,
    ) -> None:
        """Register a JSON body with a status code."""
        all_headers: Dict[str, Union[str, List[str]]] = {"Content-Type": "application/json"}
        all_headers.update(headers or {})
        self.add(
            method,
            path,
            RawResponse(status_code=status_code, headers=all_headers, body=body),
            params=params,
        )

    def send(self, request: PreparedRequest, timeout: Optional[float] = None) -> RawResponse:
        path = _path_key(request.path)
        with self._lock:
            self._sent.append(request)
            canned = self._responses.get((request.method, path, request.params_key))
            if canned is None:
                canned = self._responses.get((request.method, path))

        if isinstance(canned, NetworkError):
            raise canned
        if isinstance(canned, Exception):
            raise NetworkError(f"{request.method} {request.url} failed: {canned}", cause=canned)
        if canned is not None:
            return canned
        return RawResponse(
            status_code=404,
            headers={"Content-Type": "application/json"},
            body=b'{"message":"404 Not found"}',
            reason="Not Found",
        )

    def close(self) -> None:
        with self._lock:
            self._responses.clear()
            self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> List[PreparedRequest]:
        """All requests that have been sent through this adapter."""
        with self._lock:
            return list(self._sent)

    @property
    def last_request(self) -> Optional[PreparedRequest]:
        with self._lock:
            return self._sent[-1] if self._sent else None
