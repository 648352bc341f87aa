"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Request/response core shared by every resource operation.
"""

from tanuki.core.classifier import classify, error_class_for, extract_error_message
from tanuki.core.pagination import (
    EMPTY_PAGINATION,
    PaginationDescriptor,
    extract_pagination,
    parse_link_header,
)
from tanuki.core.params import ParamValue, Params
from tanuki.core.parser import JSONValue, parse_body
from tanuki.core.request import (
    PreparedRequest,
    RequestBuilder,
    RequestDescriptor,
    join_url,
)

__all__ = [
    "EMPTY_PAGINATION",
    "JSONValue",
    "PaginationDescriptor",
    "ParamValue",
    "Params",
    "PreparedRequest",
    "RequestBuilder",
    "RequestDescriptor",
    "classify",
    "error_class_for",
    "extract_error_message",
    "extract_pagination",
    "join_url",
    "parse_body",
    "parse_link_header",
]
