"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Transport adapter base class and raw response structure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from tanuki.core.request import PreparedRequest

HeaderInput = Union[Mapping[str, Union[str, List[str]]], Iterable[Tuple[str, str]]]


def normalize_headers(headers: Optional[HeaderInput]) -> Dict[str, List[str]]:
    """Collect headers into name -> list of values, keeping repeats in order."""
    result: Dict[str, List[str]] = {}
    if not headers:
        return result
    items = headers.items() if isinstance(headers, Mapping) else headers
    for name, value in items:
        values = value if isinstance(value, list) else [value]
        result.setdefault(name, []).extend(str(v) for v in values)
    return result


@dataclass
class RawResponse:
    """Inbound response exactly as the transport received it."""
    status_code: int
    headers: Dict[str, List[str]] = field(default_factory=dict)
    body: bytes = b""
    reason: str = ""
    elapsed_ms: float = 0.0

    def __post_init__(self) -> None:
        self.headers = normalize_headers(self.headers)
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")
        elif self.body is None:
            self.body = b""

    def header_values(self, name: str) -> List[str]:
        """All values of a header, matched case-insensitively."""
        wanted = name.lower()
        values: List[str] = []
        for key, vals in self.headers.items():
            if key.lower() == wanted:
                values.extend(vals)
        return values

    def header(self, name: str) -> Optional[str]:
        """First value of a header, or None."""
        values = self.header_values(name)
        return values[0] if values else None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class BaseAdapter(ABC):
    """
    Abstract base for all transport adapters.

    An adapter performs exactly one round trip per ``send`` call. It never
    retries and never interprets the status code.
    """

    @abstractmethod
    def send(self, request: PreparedRequest, timeout: Optional[float] = None) -> RawResponse:
        """
        Send a request and return the raw response.

        Args:
            request: Fully resolved request
            timeout: Deadline in seconds overriding the request's own timeout

        Raises:
            NetworkError: On connection, DNS, TLS or protocol failure
            NetworkTimeoutError: When the deadline is exceeded
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release adapter resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter is in a usable state."""
        ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
