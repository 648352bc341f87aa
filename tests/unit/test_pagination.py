"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Tests for Link header parsing and pagination descriptors.
"""

from tanuki.adapters.base import RawResponse
from tanuki.core.pagination import (
    EMPTY_PAGINATION,
    descriptor_from_url,
    extract_pagination,
    link_url,
    parse_link_header,
)

ENDPOINT = "https://example.test/api/v1"


class TestParseLinkHeader:
    def test_gitlab_header(self):
        header = (
            '<https://example.test/api/v1/projects?page=2&per_page=20>; rel="next", '
            '<https://example.test/api/v1/projects?page=1&per_page=20>; rel="first", '
            '<https://example.test/api/v1/projects?page=5&per_page=20>; rel="last"'
        )
        links = parse_link_header([header])
        assert links == {
            "next": "https://example.test/api/v1/projects?page=2&per_page=20",
            "first": "https://example.test/api/v1/projects?page=1&per_page=20",
            "last": "https://example.test/api/v1/projects?page=5&per_page=20",
        }

    def test_previous_alias_and_unquoted_rel(self):
        links = parse_link_header(['<https://example.test/api/v1/p?page=1>; rel=previous'])
        assert links == {"prev": "https://example.test/api/v1/p?page=1"}

    def test_multiple_relations_in_one_link(self):
        links = parse_link_header(['<https://example.test/api/v1/p?page=1>; rel="first prev"'])
        assert links["first"] == links["prev"] == "https://example.test/api/v1/p?page=1"

    def test_repeated_header_values(self):
        links = parse_link_header([
            '<https://example.test/api/v1/p?page=3>; rel="next"',
            '<https://example.test/api/v1/p?page=9>; rel="next"',
        ])
        assert links["next"] == "https://example.test/api/v1/p?page=3"

    def test_link_without_rel_ignored(self):
        assert parse_link_header(['<https://example.test/api/v1/p>; title="x"']) == {}

    def test_garbage(self):
        assert parse_link_header(["not a link header", ""]) == {}


class TestDescriptorFromUrl:
    def test_relative_to_endpoint(self):
        descriptor = descriptor_from_url(ENDPOINT, "https://example.test/api/v1/projects?page=2&per_page=20")
        assert descriptor.method == "GET"
        assert descriptor.path == "/projects"
        assert descriptor.params == {"page": "2", "per_page": "20"}
        assert descriptor.raw_query == "page=2&per_page=20"

    def test_other_host_rejected(self):
        assert descriptor_from_url(ENDPOINT, "https://evil.test/api/v1/projects?page=2") is None

    def test_other_scheme_rejected(self):
        assert descriptor_from_url(ENDPOINT, "http://example.test/api/v1/projects?page=2") is None

    def test_other_prefix_rejected(self):
        assert descriptor_from_url(ENDPOINT, "https://example.test/api/v10/projects") is None

    def test_link_url_reproduces_original(self):
        url = "https://example.test/api/v1/projects/42/deploy_keys?id=42&page=2&per_page=20"
        assert link_url(ENDPOINT, descriptor_from_url(ENDPOINT, url)) == ("GET", url)


class TestExtractPagination:
    def test_no_headers(self):
        pagination = extract_pagination(ENDPOINT, RawResponse(status_code=200, body=b"[]"))
        assert pagination == EMPTY_PAGINATION
        assert pagination.has_next is False
        assert pagination.has_prev is False

    def test_links_and_counters(self):
        response = RawResponse(
            status_code=200,
            headers=[
                ("Link", '<https://example.test/api/v1/projects?page=3>; rel="next"'),
                ("Link", '<https://example.test/api/v1/projects?page=1>; rel="prev"'),
                ("X-Total", "47"),
                ("X-Total-Pages", "5"),
                ("X-Page", "2"),
                ("X-Per-Page", "10"),
                ("X-Next-Page", "3"),
                ("X-Prev-Page", "1"),
            ],
        )
        pagination = extract_pagination(ENDPOINT, response)

        assert pagination.has_next and pagination.has_prev
        assert pagination.next.raw_query == "page=3"
        assert pagination.prev.raw_query == "page=1"
        assert pagination.first is None
        assert pagination.last is None
        assert (pagination.total, pagination.total_pages) == (47, 5)
        assert (pagination.page, pagination.per_page) == (2, 10)
        assert (pagination.next_page, pagination.prev_page) == (3, 1)

    def test_blank_or_invalid_counters(self):
        response = RawResponse(status_code=200, headers={"X-Total": "", "X-Page": "two"})
        pagination = extract_pagination(ENDPOINT, response)
        assert pagination.total is None
        assert pagination.page is None

    def test_link_outside_endpoint_dropped(self):
        response = RawResponse(
            status_code=200,
            headers={"Link": '<https://other.test/api/v1/projects?page=2>; rel="next"'},
        )
        assert extract_pagination(ENDPOINT, response).next is None
