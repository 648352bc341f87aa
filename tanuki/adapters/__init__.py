"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Transport Adapters.
"""

from tanuki.adapters.base import BaseAdapter, RawResponse
from tanuki.adapters.http import HttpAdapter
from tanuki.adapters.mock import MockAdapter

__all__ = [
    "BaseAdapter",
    "RawResponse",
    "HttpAdapter",
    "MockAdapter",
]
