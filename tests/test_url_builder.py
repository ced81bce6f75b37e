"""
Unit tests for URL construction from command-line tokens
"""

from urllib.parse import parse_qs

import pytest

from gdhttp.url_builder import (
    build_url,
    expand_shorthand,
    fill_url,
    is_valid_method,
    parse_format_item,
    parse_positional_arguments,
    parse_query_item,
)
from gdhttp.templating import substitute
from gdhttp.exceptions import MalformedURL, UsageError


class TestTemplating:
    """Test template substitution"""

    def test_substitute(self):
        """Test tokens are replaced"""
        assert substitute("/api/v1/jobs/<id>", {"id": "123"}) == "/api/v1/jobs/123"

    def test_missing_token_becomes_empty(self):
        """Test unknown tokens are removed"""
        assert substitute("/jobs/<id>/tasks/<task>", {"id": "1"}) == "/jobs/1/tasks/"

    def test_single_pass(self):
        """Test substituted values are not expanded again"""
        assert substitute("/<a>", {"a": "<b>", "b": "x"}) == "/<b>"

    def test_nested_brackets_not_tokens(self):
        """Test only innermost bracket pairs are tokens"""
        assert substitute("/<<id>>", {"id": "1"}) == "/<1>"


class TestRequestItems:
    """Test request item classification"""

    def test_query_item(self):
        """Test key=value items"""
        assert parse_query_item("search=httpie") == ("search", "httpie")
        assert parse_query_item("empty=") == ("empty", "")
        assert parse_query_item("expr=a=b") == ("expr", "a=b")

    def test_format_item(self):
        """Test key==value items"""
        assert parse_format_item("id==42") == ("id", "42")
        assert parse_format_item("id==") == ("id", "")
        assert parse_query_item("id==42") is None

    def test_malformed_items(self):
        """Test tokens of neither form"""
        for item in ["novalue", "=value", "==value", ""]:
            assert parse_query_item(item) is None
            assert parse_format_item(item) is None


class TestBuildUrl:
    """Test URL normalization"""

    def test_port_shorthand(self):
        """Test :PORT/path expands to localhost"""
        url = build_url(":3000/foo", [])

        assert url.scheme == "http"
        assert url.hostname == "localhost"
        assert url.port == 3000
        assert url.path == "/foo"

    def test_path_shorthand(self):
        """Test :/path expands to localhost"""
        assert build_url(":/foo").geturl() == "http://localhost/foo"

    def test_bare_port_shorthand(self):
        """Test :PORT expands to localhost"""
        assert expand_shorthand(":3000") == "http://localhost:3000"

    def test_default_scheme(self):
        """Test http:// is added when missing"""
        assert build_url("example.com/api").geturl() == "http://example.com/api"

    def test_existing_scheme_kept(self):
        """Test https URLs are not changed"""
        assert build_url("https://example.com/api").geturl() == "https://example.com/api"

    def test_template_substitution(self):
        """Test path templates are filled from key==value items"""
        assert build_url("example.com/jobs/<id>", ["id==42"]).geturl() == "http://example.com/jobs/42"

    def test_unresolved_template(self):
        """Test unresolved templates become empty"""
        assert build_url("example.com/jobs/<id>", []).geturl() == "http://example.com/jobs/"

    def test_query_items_accumulate(self):
        """Test repeated query keys keep all values"""
        url = build_url("example.com", ["search=httpie", "search=cli"])
        assert parse_qs(url.query) == {"search": ["httpie", "cli"]}

    def test_existing_query_preserved(self):
        """Test existing query parameters are kept when items are added"""
        url = build_url("example.com/api?b=1", ["a=2", "b=3"])
        assert url.query == "a=2&b=1&b=3"

    def test_existing_query_untouched_without_items(self):
        """Test the query string is left as typed without query items"""
        assert build_url("example.com/api?b=1&a=2").query == "b=1&a=2"

    def test_mixed_items(self):
        """Test template and query items together"""
        url = build_url(":8000/jobs/<id>", ["id==7", "verbose=1", "junk"])
        assert url.geturl() == "http://localhost:8000/jobs/7?verbose=1"

    def test_query_values_encoded(self):
        """Test query values are form-encoded"""
        assert build_url("example.com", ["q=a b&c"]).query == "q=a+b%26c"

    def test_idempotent(self):
        """Test normalizing a normalized URL returns it unchanged"""
        first = build_url(":3000/jobs/<id>", ["id==1", "a=2"]).geturl()
        assert build_url(first, []).geturl() == first

    def test_fill_url(self):
        """Test shorthand expansion and substitution without parsing"""
        assert fill_url(":/<name>", ["name==x"]) == "http://localhost/x"

    def test_malformed_port(self):
        """Test invalid ports are rejected"""
        with pytest.raises(MalformedURL) as exc_info:
            build_url("example.com:abc/path")
        assert exc_info.value.url == "http://example.com:abc/path"

    def test_malformed_ipv6(self):
        """Test unbalanced IPv6 brackets are rejected"""
        with pytest.raises(MalformedURL):
            build_url("http://[::1/path")

    def test_missing_host(self):
        """Test empty URLs are rejected"""
        with pytest.raises(MalformedURL):
            build_url("")

    def test_space_in_host(self):
        """Test whitespace in the host is rejected"""
        with pytest.raises(MalformedURL):
            build_url("exa mple.com")

    def test_undecodable_query_item(self):
        """Test undecodable argument bytes are percent-encoded as-is"""
        url = build_url("example.com", ["q=\udcff"])
        assert url.geturl() == "http://example.com?q=%FF"

    def test_undecodable_path(self):
        """Test undecodable bytes in the path are rejected"""
        with pytest.raises(MalformedURL, match="invalid UTF-8"):
            build_url("example.com/jobs/<id>", ["id==\udcff"])


class TestPositionalArguments:
    """Test method resolution"""

    def test_valid_methods(self):
        """Test known methods, case-insensitive"""
        for method in ["GET", "head", "Post", "PUT", "patch", "DELETE", "options", "CONNECT", "trace"]:
            assert is_valid_method(method)
        assert not is_valid_method("FETCH")

    def test_url_only(self):
        """Test a single token is the URL"""
        result = parse_positional_arguments(["example.com"])

        assert result.http_method == "GET"
        assert result.url.geturl() == "http://example.com"
        assert result.request_items == []

    def test_method_and_url(self):
        """Test method, URL and items"""
        result = parse_positional_arguments(["post", ":8000/jobs/<id>", "id==5", "dry=1"])

        assert result.http_method == "POST"
        assert result.url.geturl() == "http://localhost:8000/jobs/5?dry=1"
        assert result.request_items == ["id==5", "dry=1"]

    def test_first_token_not_a_method(self):
        """Test a non-method first token is the URL and the rest are items"""
        result = parse_positional_arguments(["example.com", "search=httpie", "page=2"])

        assert result.http_method == "GET"
        assert result.url.path == ""
        assert result.url.query == "page=2&search=httpie"
        assert result.request_items == ["search=httpie", "page=2"]

    def test_single_method_token_is_url(self):
        """Test a lone method name is treated as the URL"""
        result = parse_positional_arguments(["delete"])

        assert result.http_method == "GET"
        assert result.url.hostname == "delete"

    def test_no_arguments(self):
        """Test missing URL"""
        with pytest.raises(UsageError, match="too few arguments"):
            parse_positional_arguments([])
