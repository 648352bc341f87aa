"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Pagination extraction.

Reads ``Link`` headers such as::

    Link: <https://gitlab.example.com/api/v4/projects?page=2&per_page=20>; rel="next",
          <https://gitlab.example.com/api/v4/projects?page=5&per_page=20>; rel="last"

and turns each relation into a ready-to-issue GET descriptor relative to the
configured endpoint. Nothing here issues a request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from tanuki.core.request import RequestDescriptor, join_url
from tanuki.logging_config import get_logger

if TYPE_CHECKING:
    from tanuki.adapters.base import RawResponse

logger = get_logger(__name__)


RELATIONS = ("next", "prev", "first", "last")
_REL_ALIASES = {"previous": "prev"}

_LINK_RE = re.compile(r'<([^>]*)>\s*((?:;\s*[^;,]+)*)')
_REL_RE = re.compile(r'rel\s*=\s*(?:"([^"]*)"|([^\s;,"]+))', re.IGNORECASE)


@dataclass(frozen=True)
class PaginationDescriptor:
    """Follow-up page requests derived from one response."""
    next: Optional[RequestDescriptor] = None
    prev: Optional[RequestDescriptor] = None
    first: Optional[RequestDescriptor] = None
    last: Optional[RequestDescriptor] = None
    total: Optional[int] = None
    total_pages: Optional[int] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_prev(self) -> bool:
        return self.prev is not None


EMPTY_PAGINATION = PaginationDescriptor()


def parse_link_header(values: List[str]) -> Dict[str, str]:
    """
    Parse Link header values into relation -> URL.

    The first URL seen for a relation wins. Unknown relations are kept.
    """
    links: Dict[str, str] = {}
    for value in values:
        for match in _LINK_RE.finditer(value):
            url, attrs = match.group(1).strip(), match.group(2)
            rel_match = _REL_RE.search(attrs or "")
            if not rel_match:
                continue
            rel_value = rel_match.group(1) if rel_match.group(1) is not None else rel_match.group(2)
            for rel in rel_value.split():
                rel = _REL_ALIASES.get(rel.lower(), rel.lower())
                links.setdefault(rel, url)
    return links


def descriptor_from_url(endpoint: str, url: str) -> Optional[RequestDescriptor]:
    """
    Convert an absolute link URL into a GET descriptor relative to endpoint.

    Returns None when the URL points outside the endpoint (another scheme,
    host or path prefix).
    """
    base = urlsplit(endpoint)
    target = urlsplit(url)

    if (target.scheme.lower(), target.netloc.lower()) != (base.scheme.lower(), base.netloc.lower()):
        return None

    prefix = base.path.rstrip("/")
    if prefix and not (target.path == prefix or target.path.startswith(prefix + "/")):
        return None

    path = target.path[len(prefix):] or "/"
    params = dict(parse_qsl(target.query, keep_blank_values=True))
    return RequestDescriptor(method="GET", path=path, params=params, raw_query=target.query)


def _int_header(response: RawResponse, name: str) -> Optional[int]:
    value = response.header(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def extract_pagination(endpoint: str, response: RawResponse) -> PaginationDescriptor:
    """Build the pagination descriptor for a response."""
    links = parse_link_header(response.header_values("Link"))

    found: Dict[str, Optional[RequestDescriptor]] = {}
    for rel in RELATIONS:
        url = links.get(rel)
        if url is None:
            continue
        descriptor = descriptor_from_url(endpoint, url)
        if descriptor is None:
            logger.warning(
                "Ignoring pagination link outside the configured endpoint",
                rel=rel,
                url=url[:200],
            )
        found[rel] = descriptor

    return PaginationDescriptor(
        next=found.get("next"),
        prev=found.get("prev"),
        first=found.get("first"),
        last=found.get("last"),
        total=_int_header(response, "X-Total"),
        total_pages=_int_header(response, "X-Total-Pages"),
        page=_int_header(response, "X-Page"),
        per_page=_int_header(response, "X-Per-Page"),
        next_page=_int_header(response, "X-Next-Page"),
        prev_page=_int_header(response, "X-Prev-Page"),
    )


def link_url(endpoint: str, descriptor: RequestDescriptor) -> Tuple[str, str]:
    """Method and absolute URL a pagination descriptor will target."""
    url = join_url(endpoint, descriptor.path)
    if descriptor.raw_query:
        url = f"{url}?{descriptor.raw_query}"
    return descriptor.method, url
