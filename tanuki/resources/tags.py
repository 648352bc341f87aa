"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Repository tag and release note operations.
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


class TagOperations(ResourceOperations):

    def _tag(self, project: ProjectRef, tag_name: str) -> str:
        require("tag_name", tag_name)
        return f"{self._project(project)}/repository/tags/{encode_segment(tag_name)}"

    def list(self, project: ProjectRef, options: Optional[PageOptions] = None) -> APIResponse:
        return self._client.get(f"{self._project(project)}/repository/tags", params_of(options))

    def get(self, project: ProjectRef, tag_name: str) -> APIResponse:
        return self._client.get(self._tag(project, tag_name))

    def create(
        self,
        project: ProjectRef,
        tag_name: str,
        ref: str,
        message: Optional[str] = None,
        release_description: Optional[str] = None,
    ) -> APIResponse:
        """
        Create a tag at ``ref``.

        A ``message`` makes an annotated tag; without one the tag is
        lightweight. ``release_description`` attaches release notes.
        """
        require("tag_name", tag_name)
        require("ref", ref)
        return self._client.post(
            f"{self._project(project)}/repository/tags",
            {
                "tag_name": tag_name,
                "ref": ref,
                "message": message,
                "release_description": release_description,
            },
        )

    def delete(self, project: ProjectRef, tag_name: str) -> APIResponse:
        return self._client.delete(self._tag(project, tag_name))

    def create_release_notes(self, project: ProjectRef, tag_name: str, description: str) -> APIResponse:
        require("description", description)
        return self._client.post(
            f"{self._tag(project, tag_name)}/release",
            {"description": description},
        )

    def update_release_notes(self, project: ProjectRef, tag_name: str, description: str) -> APIResponse:
        require("description", description)
        return self._client.put(
            f"{self._tag(project, tag_name)}/release",
            {"description": description},
        )
