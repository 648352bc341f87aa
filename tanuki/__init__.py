"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Tanuki - GitLab API client

Tanuki maps the GitLab REST API onto typed method calls. Every resource
operation delegates to a small request/response core that builds the
request, executes it through a pluggable transport adapter, classifies the
response and decodes the JSON body together with its pagination links.

Quick start::

    from tanuki import ClientConfig, GitlabClient

    config = ClientConfig(endpoint="https://gitlab.example.com/api/v4", token="T")
    with GitlabClient(config) as client:
        keys, pages = client.deploy_keys.list(42)
"""

from tanuki._version import __version__
from tanuki.client import APIResponse, GitlabClient
from tanuki.config.settings import ClientConfig

__all__ = ["__version__", "APIResponse", "ClientConfig", "GitlabClient"]
