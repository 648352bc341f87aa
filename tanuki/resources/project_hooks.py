"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Project web hook operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tanuki.client import APIResponse
from tanuki.resources.base import (
    Options,
    PageOptions,
    ProjectRef,
    ResourceOperations,
    check_positive,
    params_of,
    require,
)


@dataclass(frozen=True)
class ProjectHookOptions(Options):
    """Events a hook subscribes to; unset flags keep the server default."""
    push_events: Optional[bool] = None
    issues_events: Optional[bool] = None
    merge_requests_events: Optional[bool] = None
    tag_push_events: Optional[bool] = None
    note_events: Optional[bool] = None
    enable_ssl_verification: Optional[bool] = None
    token: Optional[str] = None


class ProjectHookOperations(ResourceOperations):

    def list(self, project: ProjectRef, options: Optional[PageOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/hooks", params_of(options))

    def get(self, project: ProjectRef, hook_id: int) -> APIResponse:
        check_positive("hook_id", hook_id)
        return self._client.get(f"{self._project(project)}/hooks/{hook_id}")

    def add(
        self,
        project: ProjectRef,
        url: str,
        options: Optional[ProjectHookOptions] = None,
    ) -> APIResponse:
        """Register a hook that POSTs event payloads to ``url``."""
        require("url", url)
        params = {"url": url}
        params.update(params_of(options))
        return self._client.post(f"{self._project(project)}/hooks", params)

    def edit(
        self,
        project: ProjectRef,
        hook_id: int,
        url: str,
        options: Optional[ProjectHookOptions] = None,
    ) -> APIResponse:
        check_positive("hook_id", hook_id)
        require("url", url)
        params = {"url": url}
        params.update(params_of(options))
        return self._client.put(f"{self._project(project)}/hooks/{hook_id}", params)

    def remove(self, project: ProjectRef, hook_id: int) -> APIResponse:
        check_positive("hook_id", hook_id)
        return self._client.delete(f"{self._project(project)}/hooks/{hook_id}")
