"""Tests for restroute.http.params — immutable request parameters."""

import pytest

from restroute.errors import BadRequest
from restroute.http.params import Parameters


class TestParameters:
    def test_of_mapping(self) -> None:
        params = Parameters.of({"name": "jim", "age": "4"})
        assert params["name"] == "jim"
        assert len(params) == 2

    def test_of_drops_none_values(self) -> None:
        params = Parameters.of({"name": None, "age": "4"})
        assert "name" not in params
        assert list(params) == ["age"]

    def test_of_none_name_raises(self) -> None:
        with pytest.raises(TypeError, match="cannot be None"):
            Parameters.of({None: "x"})  # type: ignore[dict-item]

    def test_from_query_string(self) -> None:
        params = Parameters.from_query_string("?a=1&b=&a=2&c=x%20y")
        assert params["a"] == "1"
        assert params.get_list("a") == ["1", "2"]
        assert params["b"] == ""
        assert params["c"] == "x y"

    def test_merged_keeps_own_values_first(self) -> None:
        body = Parameters.of({"a": "body"})
        url = Parameters.from_query_string("a=url&b=2")
        merged = body.merged(url)
        assert merged["a"] == "body"
        assert merged.get_list("a") == ["body", "url"]
        assert merged["b"] == "2"
        # Inputs are untouched
        assert body.get_list("a") == ["body"]

    def test_get_required(self) -> None:
        assert Parameters.of({"name": "jim"}).get_required("name") == "jim"

    @pytest.mark.parametrize("data", [{}, {"name": ""}])
    def test_get_required_missing_or_blank(self, data: dict[str, str]) -> None:
        with pytest.raises(BadRequest, match="name"):
            Parameters.of(data).get_required("name")

    def test_get_optional(self) -> None:
        params = Parameters.of({"blank": "", "set": "v"})
        assert params.get_optional("missing") == ""
        assert params.get_optional("blank", "d") == "d"
        assert params.get_optional("set", "d") == "v"

    def test_get_int(self) -> None:
        params = Parameters.of({"n": "42", "bad": "x"})
        assert params.get_int("n") == 42
        assert params.get_int("bad", 7) == 7
        assert params.get_int("missing") is None

    def test_get_bool(self) -> None:
        params = Parameters.of({"a": "true", "b": "On", "c": "no"})
        assert params.get_bool("a") is True
        assert params.get_bool("b") is True
        assert params.get_bool("c") is False
        assert params.get_bool("missing", False) is False
