"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

GitLab client facade.

``GitlabClient`` composes the request builder, a transport adapter, the
response classifier, the body parser and the pagination extractor into four
primitives (``get``, ``post``, ``put``, ``delete``). Every resource operation
calls exactly one primitive and returns its result unchanged.

Quick start::

    config = ClientConfig(endpoint="https://gitlab.example.com/api/v4", token="T")
    with GitlabClient(config) as client:
        keys, pages = client.get("/projects/42/deploy_keys")
        while pages.next is not None:
            more, pages = client.execute(pages.next)

Tests inject a deterministic transport::

    adapter = MockAdapter({("GET", "/projects/42"): RawResponse(200, body=b"{}")})
    client = GitlabClient(config, adapter=adapter)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Optional

from tanuki.adapters.base import BaseAdapter, RawResponse
from tanuki.adapters.http import HttpAdapter
from tanuki.config.settings import ClientConfig
from tanuki.core.classifier import build_error, is_success
from tanuki.core.pagination import PaginationDescriptor, extract_pagination
from tanuki.core.params import Params
from tanuki.core.parser import JSONValue, parse_body
from tanuki.core.request import PreparedRequest, RequestBuilder, RequestDescriptor
from tanuki.exceptions import APIError, ConfigurationError, TanukiError
from tanuki.hooks import HookRegistry
from tanuki.logging_config import get_logger, log_api_error

if TYPE_CHECKING:
    from tanuki.resources.branches import BranchOperations
    from tanuki.resources.deploy_keys import DeployKeyOperations
    from tanuki.resources.members import MemberOperations
    from tanuki.resources.project_hooks import ProjectHookOperations
    from tanuki.resources.projects import ProjectOperations
    from tanuki.resources.tags import TagOperations

logger = get_logger(__name__)


class APIResponse(NamedTuple):
    """Decoded body and pagination links of one successful call."""
    value: JSONValue
    pagination: PaginationDescriptor


class GitlabClient:
    """Client facade for the GitLab REST API.

    Holds no mutable state besides the transport's connection pool, so one
    instance may be shared by many threads.

    Args:
        config: Immutable client configuration.
        adapter: Optional transport adapter. Defaults to an ``HttpAdapter``
            built from the configuration's timeout and TLS settings.
        hooks: Optional lifecycle hook registry.
    """

    def __init__(
        self,
        config: ClientConfig,
        adapter: Optional[BaseAdapter] = None,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        if not isinstance(config, ClientConfig):
            raise ConfigurationError(
                f"GitlabClient requires a ClientConfig, got {type(config).__name__}"
            )
        self._config = config
        self._builder = RequestBuilder(config)
        self._adapter = adapter or HttpAdapter(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )
        self._hooks = hooks or HookRegistry()
        self._resources: dict = {}
        logger.info(
            "GitlabClient initialized",
            endpoint=config.endpoint,
            anonymous=config.anonymous,
            adapter=type(self._adapter).__name__,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def adapter(self) -> BaseAdapter:
        return self._adapter

    # -- Primitives ----------------------------------------------------------

    def get(self, path: str, params: Optional[Params] = None) -> APIResponse:
        """Issue a GET; params go to the query string."""
        return self.request("GET", path, params)

    def post(self, path: str, params: Optional[Params] = None) -> APIResponse:
        """Issue a POST; params are form-encoded in the body."""
        return self.request("POST", path, params)

    def put(self, path: str, params: Optional[Params] = None) -> APIResponse:
        """Issue a PUT; params are form-encoded in the body."""
        return self.request("PUT", path, params)

    def delete(self, path: str, params: Optional[Params] = None) -> APIResponse:
        """Issue a DELETE; params go to the query string."""
        return self.request("DELETE", path, params)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Params] = None,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> APIResponse:
        """
        Issue one request.

        Args:
            method: GET, POST, PUT or DELETE
            path: Resource path relative to the endpoint
            params: Flat parameters (query string or form body)
            json: Optional pre-structured body for POST/PUT
            timeout: Per-call deadline in seconds

        Returns:
            APIResponse(value, pagination)

        Raises:
            InvalidParameterError: If the request cannot be built
            NetworkError: If the round trip fails
            APIError: If the status code is not a success
            MalformedBodyError: If a success body is not JSON
        """
        if params is None:
            params = {}
        elif isinstance(params, Mapping):
            params = dict(params)
        descriptor = RequestDescriptor(method=method, path=path, params=params)
        return self.execute(descriptor, json=json, timeout=timeout)

    def execute(
        self,
        descriptor: RequestDescriptor,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> APIResponse:
        """Issue a request descriptor, e.g. ``pagination.next``."""
        try:
            prepared = self._builder.build(descriptor, json_body=json)
            prepared = self._hooks.fire_before_request(prepared)
            response = self._adapter.send(prepared, timeout=timeout)
            self._hooks.fire_after_response(prepared, response)
            return self._handle_response(prepared, response)
        except TanukiError as exc:
            self._hooks.fire_error(exc)
            raise

    def _handle_response(self, request: PreparedRequest, response: RawResponse) -> APIResponse:
        if not is_success(response.status_code):
            error: APIError = build_error(response)
            log_api_error(
                logger,
                kind=error.kind,
                http_status=error.http_status,
                message=error.message,
                method=request.method,
                url=request.url,
            )
            raise error

        value = parse_body(response.body)
        pagination = extract_pagination(self._config.endpoint, response)
        return APIResponse(value=value, pagination=pagination)

    # -- Resource accessors --------------------------------------------------

    def _resource(self, name: str, factory):
        resource = self._resources.get(name)
        if resource is None:
            resource = self._resources.setdefault(name, factory(self))
        return resource

    @property
    def projects(self) -> ProjectOperations:
        """Project operations."""
        from tanuki.resources.projects import ProjectOperations
        return self._resource("projects", ProjectOperations)

    @property
    def members(self) -> MemberOperations:
        """Project member operations."""
        from tanuki.resources.members import MemberOperations
        return self._resource("members", MemberOperations)

    @property
    def project_hooks(self) -> ProjectHookOperations:
        """Project web hook operations."""
        from tanuki.resources.project_hooks import ProjectHookOperations
        return self._resource("project_hooks", ProjectHookOperations)

    @property
    def branches(self) -> BranchOperations:
        """Repository branch operations."""
        from tanuki.resources.branches import BranchOperations
        return self._resource("branches", BranchOperations)

    @property
    def deploy_keys(self) -> DeployKeyOperations:
        """Deploy key operations."""
        from tanuki.resources.deploy_keys import DeployKeyOperations
        return self._resource("deploy_keys", DeployKeyOperations)

    @property
    def tags(self) -> TagOperations:
        """Repository tag operations."""
        from tanuki.resources.tags import TagOperations
        return self._resource("tags", TagOperations)

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Release all resources."""
        self._adapter.close()
        logger.info("GitlabClient closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"GitlabClient(endpoint={self._config.endpoint!r})"
