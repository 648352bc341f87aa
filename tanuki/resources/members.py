"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Project team member operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from tanuki.client import APIResponse
from tanuki.exceptions import InvalidParameterError
from tanuki.resources.base import (
    AccessLevel,
    Options,
    ProjectRef,
    ResourceOperations,
    check_positive,
    params_of,
)


@dataclass(frozen=True)
class MemberListOptions(Options):
    query: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def __post_init__(self) -> None:
        check_positive("page", self.page)
        check_positive("per_page", self.per_page, maximum=100)


def _access_level(access_level: Union[AccessLevel, int]) -> AccessLevel:
    try:
        return AccessLevel(access_level)
    except ValueError:
        raise InvalidParameterError(
            f"access_level must be one of {', '.join(str(a.value) for a in AccessLevel)}; "
            f"got {access_level!r}"
        ) from None


class MemberOperations(ResourceOperations):
    """Membership of users in a project's team."""

    def list(self, project: ProjectRef, options: Optional[MemberListOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/members", params_of(options))

    def get(self, project: ProjectRef, user_id: int) -> APIResponse:
        check_positive("user_id", user_id)
        return self._client.get(f"{self._project(project)}/members/{user_id}")

    def add(
        self,
        project: ProjectRef,
        user_id: int,
        access_level: Union[AccessLevel, int],
    ) -> APIResponse:
        """Add a user to the project team."""
        check_positive("user_id", user_id)
        return self._client.post(
            f"{self._project(project)}/members",
            {"user_id": user_id, "access_level": _access_level(access_level)},
        )

    def edit(
        self,
        project: ProjectRef,
        user_id: int,
        access_level: Union[AccessLevel, int],
    ) -> APIResponse:
        """Change a team member's access level."""
        check_positive("user_id", user_id)
        return self._client.put(
            f"{self._project(project)}/members/{user_id}",
            {"access_level": _access_level(access_level)},
        )

    def remove(self, project: ProjectRef, user_id: int) -> APIResponse:
        check_positive("user_id", user_id)
        return self._client.delete(f"{self._project(project)}/members/{user_id}")
