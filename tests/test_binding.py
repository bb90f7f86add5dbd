"""Tests for restroute.routing.params — path parameter binding and decoding."""

import pytest

from restroute.errors import BadRequest
from restroute.http.method import Method
from restroute.http.request import Request
from restroute.routing.params import bind_path_parameters, decode_segment
from restroute.routing.route import Route, RouteConfig
from restroute.routing.router import parse_pattern


def _route(path: str) -> Route:
    return Route(
        config=RouteConfig(path=path, method=Method.GET),
        handler=lambda request: None,
        pattern=parse_pattern(path),
    )


def _bound(pattern: str, path: str) -> Request:
    request = Request.create("GET", path)
    bind_path_parameters(request, _route(pattern))
    return request


class TestDecodeSegment:
    def test_encoded_slash_is_not_resplit(self) -> None:
        assert decode_segment("456%2F7") == "456/7"

    def test_encoded_dollar(self) -> None:
        assert decode_segment("%241") == "$1"

    def test_plus_is_literal(self) -> None:
        assert decode_segment("a+b") == "a+b"

    def test_utf8(self) -> None:
        assert decode_segment("caf%C3%A9") == "café"


class TestBinding:
    @pytest.mark.parametrize("pattern", ["/first/{id}", "/first/:id", "/first/@id"])
    def test_name_and_index(self, pattern: str) -> None:
        request = _bound(pattern, "/first/123")
        assert request.get_path_parameter("id") == "123"
        assert request.get_path_parameter(1) == "123"

    def test_encoded_slash_stays_in_one_parameter(self) -> None:
        request = _bound("/second/{id}/test", "/second/456%2F7/test")
        assert request.get_path_parameter("id") == "456/7"
        assert request.get_path_parameter(1) == "456/7"
        assert request.get_path_parameter(2) == "test"

    def test_encoded_dollar(self) -> None:
        request = _bound("/third/{id}", "/third/%241")
        assert request.get_path_parameter("id") == "$1"

    def test_literal_encoded_segment_by_index(self) -> None:
        request = _bound("/a/b%2Fc/d", "a/b%2Fc/d")
        assert request.path_segments == ("a", "b%2Fc", "d")
        assert request.get_path_parameter(1) == "b/c"

    def test_literal_segment_by_index(self) -> None:
        request = _bound("/person/{id}", "/person/7")
        assert request.get_path_parameter(0) == "person"

    def test_multiple_parameters(self) -> None:
        request = _bound("/a/{x}/b/:y", "/a/1/b/2")
        assert request.path_parameters == {"x": "1", 1: "1", "y": "2", 3: "2"}

    def test_returns_bound_mapping(self) -> None:
        request = Request.create("GET", "/first/9")
        bound = bind_path_parameters(request, _route("/first/{id}"))
        assert bound == {"id": "9", 1: "9"}

    def test_unknown_name(self) -> None:
        request = _bound("/first/{id}", "/first/1")
        with pytest.raises(BadRequest, match="Unknown path parameter"):
            request.get_path_parameter("other")

    def test_index_out_of_range(self) -> None:
        request = _bound("/first/{id}", "/first/1")
        with pytest.raises(BadRequest, match="Invalid path parameter index"):
            request.get_path_parameter(5)

    def test_negative_index(self) -> None:
        request = _bound("/first/{id}", "/first/1")
        with pytest.raises(BadRequest):
            request.get_path_parameter(-1)

    def test_binding_twice(self) -> None:
        request = _bound("/first/{id}", "/first/1")
        with pytest.raises(RuntimeError, match="already bound"):
            bind_path_parameters(request, _route("/first/{id}"))
