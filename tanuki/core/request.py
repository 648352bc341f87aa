"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Request descriptors and the request builder.

The builder turns a ``RequestDescriptor`` (method, relative path, params)
into a ``PreparedRequest`` carrying the absolute URL, headers and encoded
body. It never performs I/O.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote, quote_plus, urlencode

from tanuki.core.params import Params, merge_params
from tanuki.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from tanuki.config.settings import ClientConfig


METHODS = ("GET", "POST", "PUT", "DELETE")
QUERY_METHODS = ("GET", "DELETE")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestDescriptor:
    """
    A request relative to the configured endpoint.

    ``raw_query`` is set on descriptors derived from pagination links; it is
    sent verbatim so the issued URL is exactly the link's URL.
    """
    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    raw_query: Optional[str] = None


@dataclass
class PreparedRequest:
    """Fully resolved request ready for a transport adapter."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    path: str = ""
    params: List[Tuple[str, str]] = field(default_factory=list)
    timeout: Optional[float] = None

    @property
    def params_key(self) -> Tuple[Tuple[str, str], ...]:
        """Params as a hashable, order-insensitive key."""
        return tuple(sorted(self.params))


def join_url(endpoint: str, path: str) -> str:
    """
    Join endpoint and path with exactly one slash between them.

    >>> join_url("https://example.test/api/v4/", "/projects")
    'https://example.test/api/v4/projects'
    """
    base = endpoint.rstrip("/")
    rest = path.lstrip("/")
    if not rest:
        return base
    return f"{base}/{rest}"


def encode_pairs(pairs: List[Tuple[str, str]], space_as_plus: bool = False) -> str:
    """Percent-encode pairs, encoding slashes and unicode as well."""
    return urlencode(pairs, quote_via=quote_plus if space_as_plus else quote)


class RequestBuilder:
    """
    Builds prepared requests from descriptors against one configuration.

    Args:
        config: Client configuration supplying endpoint, credentials,
            user agent and default params.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def base_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": self._config.user_agent,
        }
        if not self._config.anonymous:
            headers[self._config.auth_header] = self._config.token
        return headers

    def build(
        self,
        descriptor: RequestDescriptor,
        json_body: Any = None,
    ) -> PreparedRequest:
        """
        Resolve a descriptor into a prepared request.

        Args:
            descriptor: Method, relative path, params and extra headers
            json_body: Optional pre-structured body for POST/PUT, sent as JSON
                instead of form-encoded params

        Returns:
            PreparedRequest ready for the transport

        Raises:
            InvalidParameterError: If the method is unsupported or a param
                value cannot be stringified
        """
        method = descriptor.method.upper() if isinstance(descriptor.method, str) else ""
        if method not in METHODS:
            raise InvalidParameterError(
                f"Unsupported HTTP method {descriptor.method!r}; expected one of {', '.join(METHODS)}"
            )
        if not isinstance(descriptor.path, str):
            raise InvalidParameterError(f"Request path must be a string, got {descriptor.path!r}")
        if descriptor.params is not None and not isinstance(descriptor.params, Mapping):
            raise InvalidParameterError(
                f"Request params must be a mapping of names to values, got {type(descriptor.params).__name__}"
            )

        url = join_url(self._config.endpoint, descriptor.path)
        headers = self.base_headers()
        headers.update(descriptor.headers or {})
        body: Optional[bytes] = None

        if descriptor.raw_query is not None:
            pairs = _parse_raw_pairs(descriptor.params)
            if descriptor.raw_query:
                url = f"{url}?{descriptor.raw_query}"
        else:
            pairs = merge_params(descriptor.params, self._config.default_params)
            if method in QUERY_METHODS:
                if pairs:
                    url = f"{url}?{encode_pairs(pairs)}"
            elif json_body is not None:
                # Query-string params still apply alongside a JSON body
                if pairs:
                    url = f"{url}?{encode_pairs(pairs)}"
            elif pairs:
                body = encode_pairs(pairs, space_as_plus=True).encode("ascii")
                headers["Content-Type"] = FORM_CONTENT_TYPE

        if json_body is not None:
            if method in QUERY_METHODS:
                raise InvalidParameterError(f"{method} requests cannot carry a JSON body")
            try:
                body = json.dumps(json_body).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(f"JSON body is not serializable: {e}") from e
            headers["Content-Type"] = JSON_CONTENT_TYPE

        return PreparedRequest(
            method=method,
            url=url,
            headers=headers,
            body=body,
            path=descriptor.path,
            params=pairs,
            timeout=self._config.timeout,
        )


def _parse_raw_pairs(params: Params) -> List[Tuple[str, str]]:
    return [(key, str(value)) for key, value in (params or {}).items()]
