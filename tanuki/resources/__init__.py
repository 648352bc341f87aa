"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Resource operation sets built on the client primitives.
"""

from tanuki.resources.base import (
    AccessLevel,
    Options,
    PageOptions,
    ResourceOperations,
    SortOrder,
    Visibility,
    encode_segment,
)
from tanuki.resources.branches import BranchOperations
from tanuki.resources.deploy_keys import DeployKeyOperations
from tanuki.resources.members import MemberListOptions, MemberOperations
from tanuki.resources.project_hooks import ProjectHookOperations, ProjectHookOptions
from tanuki.resources.projects import (
    ProjectCreateOptions,
    ProjectEditOptions,
    ProjectListOptions,
    ProjectOperations,
    ProjectSearchOptions,
)
from tanuki.resources.tags import TagOperations

__all__ = [
    "AccessLevel",
    "BranchOperations",
    "DeployKeyOperations",
    "MemberListOptions",
    "MemberOperations",
    "Options",
    "PageOptions",
    "ProjectCreateOptions",
    "ProjectEditOptions",
    "ProjectHookOperations",
    "ProjectHookOptions",
    "ProjectListOptions",
    "ProjectOperations",
    "ProjectSearchOptions",
    "ResourceOperations",
    "SortOrder",
    "TagOperations",
    "Visibility",
    "encode_segment",
]
