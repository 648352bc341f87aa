"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Tests for Transport Adapters.
"""

import httpx
import pytest

from tanuki.adapters.base import RawResponse, normalize_headers
from tanuki.adapters.http import HttpAdapter
from tanuki.adapters.mock import MockAdapter
from tanuki.core.request import PreparedRequest
from tanuki.exceptions import InvalidParameterError, NetworkError, NetworkTimeoutError


def make_request(method="GET", path="/projects", params=None, body=None) -> PreparedRequest:
    return PreparedRequest(
        method=method,
        url=f"https://example.test/api/v1{path}",
        headers={"PRIVATE-TOKEN": "T"},
        body=body,
        path=path,
        params=list(params or []),
    )


class TestRawResponse:
    def test_headers_case_insensitive(self):
        response = RawResponse(status_code=200, headers={"Content-Type": "application/json"})
        assert response.header("content-type") == "application/json"
        assert response.header("missing") is None

    def test_repeated_headers_kept(self):
        headers = normalize_headers([("Link", "<a>; rel=next"), ("link", "<b>; rel=last")])
        response = RawResponse(status_code=200, headers=headers)
        assert response.header_values("LINK") == ["<a>; rel=next", "<b>; rel=last"]

    def test_str_body_encoded(self):
        response = RawResponse(status_code=200, body='{"a": "é"}')
        assert response.body == '{"a": "é"}'.encode("utf-8")
        assert response.text == '{"a": "é"}'


class TestMockAdapter:
    def test_returns_mocked_response(self):
        expected = RawResponse(status_code=200, body=b"[]")
        adapter = MockAdapter(responses={("GET", "/projects/42/deploy_keys"): expected})
        assert adapter.is_connected is True

        result = adapter.send(make_request(path="/projects/42/deploy_keys"))
        assert result is expected

    def test_returns_404_for_unmocked(self):
        adapter = MockAdapter()
        result = adapter.send(make_request(path="/unknown"))
        assert result.status_code == 404
        assert result.body == b'{"message":"404 Not found"}'

    def test_params_specific_response_wins(self):
        adapter = MockAdapter()
        adapter.add_json("GET", "/projects", b'["page one"]')
        adapter.add_json("GET", "/projects", b'["page two"]', params={"page": 2})

        assert adapter.send(make_request()).body == b'["page one"]'
        assert adapter.send(make_request(params=[("page", "2")])).body == b'["page two"]'

    def test_path_normalized(self):
        adapter = MockAdapter({("get", "projects/"): RawResponse(status_code=204)})
        assert adapter.send(make_request()).status_code == 204

    def test_tracks_sent_requests(self):
        adapter = MockAdapter()
        adapter.send(make_request(method="DELETE", path="/projects/42/deploy_keys/2"))
        assert len(adapter.sent_requests) == 1
        assert adapter.last_request.path == "/projects/42/deploy_keys/2"

    def test_canned_network_error_raised(self):
        adapter = MockAdapter()
        adapter.add("GET", "/projects", NetworkTimeoutError("timed out"))
        with pytest.raises(NetworkTimeoutError):
            adapter.send(make_request())

    def test_other_exceptions_wrapped(self):
        adapter = MockAdapter()
        cause = ConnectionResetError("reset")
        adapter.add("GET", "/projects", cause)
        with pytest.raises(NetworkError) as exc_info:
            adapter.send(make_request())
        assert exc_info.value.cause is cause

    def test_close_clears_state(self):
        adapter = MockAdapter(responses={("GET", "/x"): RawResponse(status_code=200)})
        adapter.send(make_request(path="/x"))
        adapter.close()
        assert adapter.sent_requests == []
        assert adapter.is_connected is True  # mock is always "connected"


class TestHttpAdapter:
    def test_not_connected_until_first_use(self):
        adapter = HttpAdapter()
        assert adapter.is_connected is False

    def test_send_round_trip(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("PRIVATE-TOKEN")
            seen["body"] = request.content
            return httpx.Response(
                201,
                headers=[("Link", "<a>; rel=next"), ("Link", "<b>; rel=last")],
                content=b'{"id": 2}',
            )

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        request = make_request(method="POST", path="/projects/42/deploy_keys", body=b"title=Key")

        response = adapter.send(request)

        assert seen == {
            "method": "POST",
            "url": "https://example.test/api/v1/projects/42/deploy_keys",
            "token": "T",
            "body": b"title=Key",
        }
        assert response.status_code == 201
        assert response.body == b'{"id": 2}'
        assert response.reason == "Created"
        assert response.header_values("link") == ["<a>; rel=next", "<b>; rel=last"]
        assert adapter.is_connected is True

    def test_error_status_returned_not_raised(self):
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(500, content=b"boom")))
        response = adapter.send(make_request())
        assert response.status_code == 500
        assert response.text == "boom"

    def test_timeout_translated(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        adapter = HttpAdapter(timeout=0.5, transport=httpx.MockTransport(handler))
        with pytest.raises(NetworkTimeoutError) as exc_info:
            adapter.send(make_request())
        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)

    def test_connection_error_translated(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        adapter = HttpAdapter(transport=httpx.MockTransport(handler))
        with pytest.raises(NetworkError) as exc_info:
            adapter.send(make_request())
        assert not isinstance(exc_info.value, NetworkTimeoutError)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_invalid_url_translated(self):
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        request = make_request()
        request.url = "https://host:notaport/api/projects"

        with pytest.raises(InvalidParameterError, match="cannot be sent"):
            adapter.send(request)

    def test_non_ascii_header_translated(self):
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        request = make_request()
        request.headers["PRIVATE-TOKEN"] = "t\u00f6ken"

        with pytest.raises(InvalidParameterError):
            adapter.send(request)

    def test_close(self):
        adapter = HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        adapter.send(make_request())
        adapter.close()
        assert adapter.is_connected is False

    def test_context_manager_closes(self):
        with HttpAdapter(transport=httpx.MockTransport(lambda r: httpx.Response(204))) as adapter:
            adapter.send(make_request())
        assert adapter.is_connected is False
