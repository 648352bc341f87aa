"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Project deploy key operations.
"""

from __future__ import annotations

from typing import Optional

from tanuki.client import APIResponse
from tanuki.resources.base import (
    PageOptions,
    ProjectRef,
    ResourceOperations,
    check_positive,
    params_of,
    require,
)


class DeployKeyOperations(ResourceOperations):
    """Deploy keys grant read access to a project's repository over SSH."""

    def list(self, project: ProjectRef, options: Optional[PageOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/deploy_keys", params_of(options))

    def get(self, project: ProjectRef, key_id: int) -> APIResponse:
        check_positive("key_id", key_id)
        return self._client.get(f"{self._project(project)}/deploy_keys/{key_id}")

    def create(self, project: ProjectRef, title: str, key: str) -> APIResponse:
        """
        Create a deploy key.

        Args:
            project: Project ID or ``namespace/name``
            title: Key title
            key: Public SSH key

        Returns:
            APIResponse with the created key
        """
        require("title", title)
        require("key", key)
        return self._client.post(
            f"{self._project(project)}/deploy_keys",
            {"title": title, "key": key},
        )

    def remove(self, project: ProjectRef, key_id: int) -> APIResponse:
        check_positive("key_id", key_id)
        return self._client.delete(f"{self._project(project)}/deploy_keys/{key_id}")

    def enable(self, project: ProjectRef, key_id: int) -> APIResponse:
        """Enable a deploy key that already exists on another project."""
        check_positive("key_id", key_id)
        return self._client.post(f"{self._project(project)}/deploy_keys/{key_id}/enable")

    def disable(self, project: ProjectRef, key_id: int) -> APIResponse:
        check_positive("key_id", key_id)
        return self._client.post(f"{self._project(project)}/deploy_keys/{key_id}/disable")
