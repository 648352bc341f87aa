"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Request parameter values.

GitLab accepts flat string parameters only, so every value handed to the
request builder must reduce to a single string.
"""

from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from tanuki.exceptions import InvalidParameterError

ParamValue = Union[str, int, float, bool, None]
Params = Mapping[str, ParamValue]


def stringify_param(key: str, value: Any) -> Optional[str]:
    """
    Convert a parameter value to its wire string.

    Args:
        key: Parameter name (used in error messages)
        value: Parameter value

    Returns:
        String form of the value, or None when the parameter is to be omitted

    Raises:
        InvalidParameterError: If the key is not a string or the value is not
            a flat scalar
    """
    if not isinstance(key, str) or not key:
        raise InvalidParameterError(f"Parameter names must be non-empty strings, got {key!r}")
    if value is None:
        return None
    if isinstance(value, Enum):
        return stringify_param(key, value.value)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise InvalidParameterError(
        f"Parameter '{key}' must be a string, number, boolean or None; "
        f"got {type(value).__name__}"
    )


def iter_params(params: Optional[Params]) -> Iterator[Tuple[str, str]]:
    """Yield (key, string value) pairs in insertion order, skipping None values."""
    if not params:
        return
    for key, value in params.items():
        text = stringify_param(key, value)
        if text is not None:
            yield key, text


def merge_params(
    params: Optional[Params],
    defaults: Optional[Params],
) -> List[Tuple[str, str]]:
    """
    Merge default parameters under caller parameters.

    Caller keys keep their order and win on collision; defaults the caller did
    not set follow in their own order. A caller value of None suppresses the
    default for that key.
    """
    pairs = list(iter_params(params))
    supplied = set(params or ())
    for key, text in iter_params(defaults):
        if key not in supplied:
            pairs.append((key, text))
    return pairs
