"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Project operations.

Project visibility in GitLab is private (0), internal (10) or public (20).
Projects are referenced by numeric ID or by ``namespace/name``; the latter is
path-encoded here, so pass it unencoded.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from tanuki.client import APIResponse
from tanuki.resources.base import (
    AccessLevel,
    Options,
    PageOptions,
    ProjectRef,
    ResourceOperations,
    SortOrder,
    Visibility,
    check_choice,
    check_positive,
    encode_segment,
    params_of,
    require,
)

PROJECT_SCOPES = ("owned", "starred", "all")
PROJECT_ORDER_BY = ("id", "name", "path", "created_at", "updated_at", "last_activity_at")
SEARCH_ORDER_BY = ("id", "name", "created_at", "last_activity_at")
SORT_ORDERS = tuple(s.value for s in SortOrder)
VISIBILITIES = tuple(v.value for v in Visibility)


@dataclass(frozen=True)
class ProjectListOptions(Options):
    """
    Options for listing projects.

    ``scope`` selects ``/projects/owned``, ``/projects/starred`` or
    ``/projects/all`` (admin only); it is not sent as a parameter.
    """
    scope: Optional[str] = None
    archived: Optional[bool] = None
    visibility: Optional[Union[Visibility, str]] = None
    order_by: Optional[str] = None
    sort: Optional[Union[SortOrder, str]] = None
    search: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    _path_fields = ("scope",)

    def __post_init__(self) -> None:
        check_choice("scope", self.scope, PROJECT_SCOPES)
        check_choice("visibility", self.visibility, VISIBILITIES)
        check_choice("order_by", self.order_by, PROJECT_ORDER_BY)
        check_choice("sort", self.sort, SORT_ORDERS)
        check_positive("page", self.page)
        check_positive("per_page", self.per_page, maximum=100)


@dataclass(frozen=True)
class ProjectSearchOptions(Options):
    order_by: Optional[str] = None
    sort: Optional[Union[SortOrder, str]] = None
    page: Optional[int] = None
    per_page: Optional[int] = None

    def __post_init__(self) -> None:
        check_choice("order_by", self.order_by, SEARCH_ORDER_BY)
        check_choice("sort", self.sort, SORT_ORDERS)
        check_positive("page", self.page)
        check_positive("per_page", self.per_page, maximum=100)


@dataclass(frozen=True)
class ProjectCreateOptions(Options):
    """
    Options for creating a project.

    ``user_id`` creates the project for that user (admin only) through
    ``/projects/user/:user_id``.
    """
    description: Optional[str] = None
    default_branch: Optional[str] = None
    namespace_id: Optional[int] = None
    visibility: Optional[Union[Visibility, str]] = None
    issues_enabled: Optional[bool] = None
    merge_requests_enabled: Optional[bool] = None
    wiki_enabled: Optional[bool] = None
    wall_enabled: Optional[bool] = None
    snippets_enabled: Optional[bool] = None
    public: Optional[bool] = None
    import_url: Optional[str] = None
    user_id: Optional[int] = None

    _path_fields = ("user_id",)

    def __post_init__(self) -> None:
        check_choice("visibility", self.visibility, VISIBILITIES)
        check_positive("namespace_id", self.namespace_id)
        check_positive("user_id", self.user_id)


@dataclass(frozen=True)
class ProjectEditOptions(Options):
    name: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None
    default_branch: Optional[str] = None
    visibility: Optional[Union[Visibility, str]] = None
    issues_enabled: Optional[bool] = None
    merge_requests_enabled: Optional[bool] = None
    wiki_enabled: Optional[bool] = None
    snippets_enabled: Optional[bool] = None

    def __post_init__(self) -> None:
        check_choice("visibility", self.visibility, VISIBILITIES)


class ProjectOperations(ResourceOperations):
    """Project management: listing, CRUD, stars, archiving, sharing, forks."""

    def list(self, options: Optional[ProjectListOptions] = None) -> APIResponse:
        """List projects visible to the authenticated user."""
        scope = options.scope if options is not None else None
        path = f"/projects/{scope}" if scope else "/projects"
        return self._client.get(path, params_of(options))

    def owned(self, options: Optional[ProjectListOptions] = None) -> APIResponse:
        """Projects owned by the authenticated user."""
        return self.list(_with_scope(options, "owned"))

    def starred(self, options: Optional[ProjectListOptions] = None) -> APIResponse:
        """Projects starred by the authenticated user."""
        return self.list(_with_scope(options, "starred"))

    def all(self, options: Optional[ProjectListOptions] = None) -> APIResponse:
        """Every project on the instance (admin only)."""
        return self.list(_with_scope(options, "all"))

    def get(self, project: ProjectRef) -> APIResponse:
        return self._client.get(self._project(project))

    def events(self, project: ProjectRef, options: Optional[PageOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/events", params_of(options))

    def create(self, name: str, options: Optional[ProjectCreateOptions] = None) -> APIResponse:
        """Create a project, for another user when ``options.user_id`` is set."""
        require("name", name)
        user_id = options.user_id if options is not None else None
        path = f"/projects/user/{user_id}" if user_id else "/projects"
        params = {"name": name}
        params.update(params_of(options))
        return self._client.post(path, params)

    def edit(self, project: ProjectRef, options: Optional[ProjectEditOptions] = None) -> APIResponse:
        return self._client.put(self._project(project), params_of(options))

    def fork(self, project: ProjectRef, sudo: Optional[str] = None) -> APIResponse:
        """Fork a project into the user namespace (``sudo`` forks for another user)."""
        return self._client.post(f"/projects/fork/{encode_segment(project)}", {"sudo": sudo})

    def star(self, project: ProjectRef) -> APIResponse:
        return self._client.post(f"{self._project(project)}/star")

    def unstar(self, project: ProjectRef) -> APIResponse:
        return self._client.delete(f"{self._project(project)}/star")

    def archive(self, project: ProjectRef) -> APIResponse:
        return self._client.post(f"{self._project(project)}/archive")

    def unarchive(self, project: ProjectRef) -> APIResponse:
        return self._client.post(f"{self._project(project)}/unarchive")

    def share(
        self,
        project: ProjectRef,
        group_id: int,
        group_access: Optional[Union[AccessLevel, int]] = None,
    ) -> APIResponse:
        """Share a project with a group."""
        check_positive("group_id", group_id)
        return self._client.post(
            f"{self._project(project)}/share",
            {"group_id": group_id, "group_access": group_access},
        )

    def search(self, query: str, options: Optional[ProjectSearchOptions] = None) -> APIResponse:
        """Search projects by name."""
        require("query", query)
        return self._client.get(f"/projects/search/{encode_segment(query)}", params_of(options))

    def delete(self, project: ProjectRef) -> APIResponse:
        return self._client.delete(self._project(project))

    def create_fork_from(self, project: ProjectRef, forked_from_id: int) -> APIResponse:
        """Record a forked-from relation between existing projects (admin only)."""
        check_positive("forked_from_id", forked_from_id)
        return self._client.post(f"{self._project(project)}/fork/{forked_from_id}")

    def remove_fork_from(self, project: ProjectRef) -> APIResponse:
        """Delete a forked-from relation (admin only)."""
        return self._client.delete(f"{self._project(project)}/fork")


def _with_scope(options: Optional[ProjectListOptions], scope: str) -> ProjectListOptions:
    if options is None:
        return ProjectListOptions(scope=scope)
    return replace(options, scope=scope)
