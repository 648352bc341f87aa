"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Repository branch operations.

Branch names may contain slashes (``feature/login``); they are sent as one
encoded path segment.
"""

from __future__ import annotations

from typing import Optional

from tanuki.client import APIResponse
from tanuki.resources.base import (
    PageOptions,
    ProjectRef,
    ResourceOperations,
    encode_segment,
    params_of,
    require,
)


class BranchOperations(ResourceOperations):

    def _branch(self, project: ProjectRef, branch: str) -> str:
        require("branch", branch)
        return f"{self._project(project)}/repository/branches/{encode_segment(branch)}"

    def list(self, project: ProjectRef, options: Optional[PageOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/repository/branches", params_of(options))

    def get(self, project: ProjectRef, branch: str) -> APIResponse:
        return self._client.get(self._branch(project, branch))

    def protect(self, project: ProjectRef, branch: str) -> APIResponse:
        """Protect a branch from force pushes and deletion."""
        return self._client.put(f"{self._branch(project, branch)}/protect")

    def unprotect(self, project: ProjectRef, branch: str) -> APIResponse:
        return self._client.put(f"{self._branch(project, branch)}/unprotect")
