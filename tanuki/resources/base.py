"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Shared pieces of the resource operation sets.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Collection, Dict, Optional, Union
from urllib.parse import quote

from tanuki.exceptions import InvalidParameterError

if TYPE_CHECKING:
    from tanuki.client import GitlabClient

ProjectRef = Union[int, str]


class AccessLevel(IntEnum):
    """Project and group access levels."""
    GUEST = 10
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50


class Visibility(str, Enum):
    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def encode_segment(value: Any) -> str:
    """
    Encode one path segment.

    Project references such as ``"group/project"`` and branch names such as
    ``"feature/login"`` must travel as a single segment.

    >>> encode_segment("group/project")
    'group%2Fproject'
    """
    if isinstance(value, bool) or value is None:
        raise InvalidParameterError(f"Invalid path segment {value!r}")
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return quote(value, safe="")
    raise InvalidParameterError(f"Invalid path segment {value!r}")


def check_choice(name: str, value: Any, choices: Collection[str]) -> None:
    if value is None:
        return
    if isinstance(value, Enum):
        value = value.value
    if value not in choices:
        raise InvalidParameterError(
            f"{name} must be one of {', '.join(sorted(choices))}; got {value!r}"
        )


def check_positive(name: str, value: Optional[int], maximum: Optional[int] = None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidParameterError(f"{name} must be a positive integer; got {value!r}")
    if maximum is not None and value > maximum:
        raise InvalidParameterError(f"{name} must be at most {maximum}; got {value}")


@dataclass(frozen=True)
class Options:
    """
    Base class for per-operation option sets.

    Subclasses declare every recognized key as a field; unknown keys are a
    ``TypeError`` at construction and invalid values an
    ``InvalidParameterError``.
    """

    # Fields used to pick the endpoint path rather than sent as params
    _path_fields = ()

    def to_params(self) -> Dict[str, Any]:
        """Set fields as request params, in declaration order."""
        params: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            if f.name in self._path_fields:
                continue
            value = getattr(self, f.name)
            if value is not None:
                params[f.name] = value
        return params


@dataclass(frozen=True)
class PageOptions(Options):
    """Pagination options accepted by every list endpoint."""
    page: Optional[int] = None
    per_page: Optional[int] = None

    def __post_init__(self) -> None:
        check_positive("page", self.page)
        check_positive("per_page", self.per_page, maximum=100)


def params_of(options: Optional[Options]) -> Dict[str, Any]:
    return options.to_params() if options is not None else {}


class ResourceOperations:
    """Operation set bound to one explicit client."""

    def __init__(self, client: GitlabClient) -> None:
        self._client = client

    @property
    def client(self) -> GitlabClient:
        return self._client

    @staticmethod
    def _project(project: ProjectRef) -> str:
        return f"/projects/{encode_segment(project)}"


def require(name: str, value: Any) -> None:
    """Reject missing or empty required arguments."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidParameterError(f"{name} must not be empty")
