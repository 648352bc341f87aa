"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Tests for deploy key, tag and branch operations.
"""

from urllib.parse import parse_qsl

import pytest

from tanuki.exceptions import InvalidParameterError, NotFoundError
from tanuki.resources.base import PageOptions


def form(request):
    return dict(parse_qsl(request.body.decode())) if request.body else {}


class TestDeployKeyOperations:
    def test_list(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/42/deploy_keys", fixture("project_keys"))

        keys, _ = client.deploy_keys.list(42)

        assert keys[0]["id"] == 2
        assert keys[0]["title"] == "Key Title"
        assert keys[0]["key"].startswith("ssh-rsa ")

    def test_list_paged(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/42/deploy_keys", fixture("project_keys"),
                              params={"page": 2, "per_page": 10})
        keys, _ = client.deploy_keys.list(42, PageOptions(page=2, per_page=10))
        assert len(keys) == 1

    def test_get(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/42/deploy_keys/2", fixture("project_key"))
        key, _ = client.deploy_keys.get(42, 2)
        assert key["title"] == "Key Title"

    def test_create(self, client, mock_adapter, fixture):
        mock_adapter.add_json("POST", "/projects/42/deploy_keys", fixture("project_key"), status_code=201)

        key, _ = client.deploy_keys.create(42, "Key Title", "ssh-rsa AAAA")

        assert key["id"] == 2
        assert form(mock_adapter.last_request) == {"title": "Key Title", "key": "ssh-rsa AAAA"}

    def test_remove(self, client, mock_adapter, fixture):
        mock_adapter.add_json("DELETE", "/projects/42/deploy_keys/2", fixture("project_key"))
        key, _ = client.deploy_keys.remove(42, 2)
        assert key["id"] == 2

    def test_remove_unknown(self, client):
        with pytest.raises(NotFoundError) as exc_info:
            client.deploy_keys.remove(42, 999)
        assert exc_info.value.message == "404 Not found"

    def test_enable_disable(self, client, mock_adapter, fixture):
        mock_adapter.add_json("POST", "/projects/42/deploy_keys/2/enable", fixture("project_key"), status_code=201)
        mock_adapter.add_json("POST", "/projects/42/deploy_keys/2/disable", fixture("project_key"))

        assert client.deploy_keys.enable(42, 2).value["id"] == 2
        assert client.deploy_keys.disable(42, 2).value["id"] == 2

    def test_create_requires_key(self, client, mock_adapter):
        with pytest.raises(InvalidParameterError, match="key"):
            client.deploy_keys.create(42, "Key Title", "")
        assert mock_adapter.sent_requests == []

    @pytest.mark.parametrize("key_id", [0, -1, "2", True])
    def test_invalid_key_id(self, client, key_id):
        with pytest.raises(InvalidParameterError):
            client.deploy_keys.get(42, key_id)


class TestTagOperations:
    def test_list(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/3/repository/tags", fixture("project_tags"))
        tags, _ = client.tags.list(3)
        assert tags[0]["name"] == "v2.8.2"

    def test_get(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/3/repository/tags/v1.0.0", fixture("project_tag_lightweight"))
        tag, _ = client.tags.get(3, "v1.0.0")
        assert tag["name"] == "v1.0.0"

    def test_create_lightweight(self, client, mock_adapter, fixture):
        mock_adapter.add_json("POST", "/projects/3/repository/tags", fixture("project_tag_lightweight"), status_code=201)

        tag, _ = client.tags.create(3, "v1.0.0", "2695effb5807a22ff3d138d593fd856244e155e7")

        assert tag["name"] == "v1.0.0"
        assert tag["message"] is None
        assert form(mock_adapter.last_request) == {
            "tag_name": "v1.0.0",
            "ref": "2695effb5807a22ff3d138d593fd856244e155e7",
        }

    def test_create_annotated(self, client, mock_adapter, fixture):
        mock_adapter.add_json("POST", "/projects/3/repository/tags", fixture("project_tag_annotated"), status_code=201)

        tag, _ = client.tags.create(
            3,
            "v1.1.0",
            "2695effb5807a22ff3d138d593fd856244e155e7",
            message="Release 1.1.0",
        )

        assert tag["name"] == "v1.1.0"
        assert tag["message"] == "Release 1.1.0"
        assert form(mock_adapter.last_request)["message"] == "Release 1.1.0"

    def test_delete_uses_plural_path(self, client, mock_adapter, fixture):
        mock_adapter.add_json("DELETE", "/projects/3/repository/tags/v1.0.0", fixture("project_tag_lightweight"))
        tag, _ = client.tags.delete(3, "v1.0.0")
        assert tag["name"] == "v1.0.0"

    def test_release_notes(self, client, mock_adapter, fixture):
        mock_adapter.add_json("POST", "/projects/3/repository/tags/v1.0.0/release", fixture("release"), status_code=201)
        mock_adapter.add_json("PUT", "/projects/3/repository/tags/v1.0.0/release", fixture("release"))

        created, _ = client.tags.create_release_notes(3, "v1.0.0", "Amazing release. Wow")
        assert form(mock_adapter.last_request) == {"description": "Amazing release. Wow"}
        updated, _ = client.tags.update_release_notes(3, "v1.0.0", "Amazing release. Wow")

        assert created == updated == {"tag_name": "v1.0.0", "description": "Amazing release. Wow"}
        assert mock_adapter.last_request.method == "PUT"

    def test_tag_name_encoded(self, client, mock_adapter):
        mock_adapter.add_json("GET", "/projects/group%2Fproject/repository/tags/release%2F1.0", b"{}")
        client.tags.get("group/project", "release/1.0")
        assert mock_adapter.last_request.url == (
            "https://example.test/api/v1/projects/group%2Fproject/repository/tags/release%2F1.0"
        )


class TestBranchOperations:
    def test_list(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/3/repository/branches", b"[" + fixture("branch") + b"]")
        branches, _ = client.branches.list(3)
        assert branches[0]["name"] == "feature/login"

    def test_get_encodes_slashes(self, client, mock_adapter, fixture):
        mock_adapter.add_json("GET", "/projects/3/repository/branches/feature%2Flogin", fixture("branch"))
        branch, _ = client.branches.get(3, "feature/login")
        assert branch["protected"] is True

    def test_protect_unprotect(self, client, mock_adapter, fixture):
        mock_adapter.add_json("PUT", "/projects/3/repository/branches/main/protect", fixture("branch"))
        mock_adapter.add_json("PUT", "/projects/3/repository/branches/main/unprotect", fixture("branch"))

        client.branches.protect(3, "main")
        assert mock_adapter.last_request.method == "PUT"
        assert mock_adapter.last_request.body is None
        client.branches.unprotect(3, "main")
        assert mock_adapter.last_request.path.endswith("/unprotect")

    def test_branch_required(self, client):
        with pytest.raises(InvalidParameterError, match="branch"):
            client.branches.get(3, " ")
