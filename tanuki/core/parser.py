"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Body parsing.

Success bodies decode to generic JSON values; no schema is imposed here.
"""

import json
from typing import Any, Dict, List, Union

from tanuki.exceptions import MalformedBodyError

JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


def parse_body(body: bytes) -> JSONValue:
    """
    Decode a success body.

    Empty or whitespace-only bodies (e.g. 204 No Content) yield None.

    Raises:
        MalformedBodyError: If the body is non-empty and not valid UTF-8 JSON
    """
    if not body or not body.strip():
        return None
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedBodyError(
            f"Response body is not valid UTF-8: {e}",
            body=body.decode("utf-8", errors="replace"),
        ) from e
    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedBodyError(f"Response body is not valid JSON: {e}", body=text) from e
