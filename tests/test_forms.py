"""Tests for restroute.http.forms — request body parsing."""

import pytest

from restroute.errors import BadRequest
from restroute.http.forms import parse_request_body


class TestFormBodies:
    def test_urlencoded(self) -> None:
        params = parse_request_body(
            "POST", "application/x-www-form-urlencoded", "name=jim+bob&tag=a&tag=b"
        )
        assert params["name"] == "jim bob"
        assert params.get_list("tag") == ["a", "b"]

    def test_missing_content_type_reads_form(self) -> None:
        params = parse_request_body("PUT", None, "a=1")
        assert params["a"] == "1"

    @pytest.mark.parametrize("method", ["GET", "DELETE", "OPTIONS"])
    def test_bodiless_methods_ignore_body(self, method: str) -> None:
        assert len(parse_request_body(method, None, "a=1")) == 0

    def test_empty_body(self) -> None:
        assert len(parse_request_body("POST", "application/json", "")) == 0


class TestJsonBodies:
    def test_object_members(self) -> None:
        body = '{"name": "jim", "age": 4, "ratio": 1.5, "admin": true, "gone": null}'
        params = parse_request_body("POST", "application/json; charset=utf-8", body)
        assert params["name"] == "jim"
        assert params["age"] == "4"
        assert params["ratio"] == "1.5"
        assert params["admin"] == "true"
        assert "gone" not in params

    def test_nested_values_become_compact_json(self) -> None:
        params = parse_request_body("PATCH", "application/json", '{"tags": ["a", "b"], "o": {"k": 1}}')
        assert params["tags"] == '["a","b"]'
        assert params["o"] == '{"k":1}'

    def test_vendor_json_type(self) -> None:
        params = parse_request_body("POST", "application/vnd.api+json", '{"a": "b"}')
        assert params["a"] == "b"

    def test_non_object_document(self) -> None:
        assert len(parse_request_body("POST", "application/json", "[1, 2]")) == 0

    def test_invalid_json(self) -> None:
        with pytest.raises(BadRequest, match="not valid JSON"):
            parse_request_body("POST", "application/json", "{nope")

    def test_deeply_nested_json(self) -> None:
        with pytest.raises(BadRequest, match="not valid JSON"):
            parse_request_body("POST", "application/json", "[" * 200_000)
