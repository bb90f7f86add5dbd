"""Tests for restroute.errors — hierarchy, error kinds and cause-chain classification."""

import pytest

from restroute.errors import (
    BadRequest,
    ConfigurationError,
    DuplicateRouteError,
    ErrorKind,
    RestError,
    classify,
    is_caused_by,
)


class TestHierarchy:
    def test_duplicate_is_configuration_error(self) -> None:
        assert issubclass(DuplicateRouteError, ConfigurationError)
        assert issubclass(ConfigurationError, RestError)

    def test_bad_request_default_detail(self) -> None:
        assert str(BadRequest()) == "Bad Request"

    def test_bad_request_custom_detail(self) -> None:
        exc = BadRequest("Missing required parameter: name")
        assert exc.detail == "Missing required parameter: name"
        assert str(exc) == "Missing required parameter: name"

    def test_bad_request_is_raisable(self) -> None:
        with pytest.raises(RestError):
            raise BadRequest("nope")


class TestErrorKind:
    @pytest.mark.parametrize(
        ("kind", "status"),
        [
            (ErrorKind.PATH_NOT_FOUND, 404),
            (ErrorKind.METHOD_NOT_SUPPORTED, 405),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.INVALID_PARAMETERS, 400),
            (ErrorKind.INTERNAL_FAILURE, 500),
        ],
    )
    def test_status(self, kind: ErrorKind, status: int) -> None:
        assert kind.status == status


def _wrapped(inner: BaseException, *, explicit: bool = True) -> BaseException:
    """Raise *inner*, then wrap it in a RuntimeError, and return the wrapper."""
    try:
        try:
            raise inner
        except BaseException as exc:
            if explicit:
                raise RuntimeError("wrapper") from exc
            raise RuntimeError("wrapper")  # noqa: B904
    except RuntimeError as wrapper:
        return wrapper
    raise AssertionError("unreachable")


class TestClassify:
    def test_direct_bad_request(self) -> None:
        assert classify(BadRequest()) is ErrorKind.INVALID_PARAMETERS

    def test_other_exception_is_internal(self) -> None:
        assert classify(ValueError("boom")) is ErrorKind.INTERNAL_FAILURE

    def test_bad_request_as_explicit_cause(self) -> None:
        assert classify(_wrapped(BadRequest())) is ErrorKind.INVALID_PARAMETERS

    def test_bad_request_as_implicit_context(self) -> None:
        wrapper = _wrapped(BadRequest(), explicit=False)
        assert classify(wrapper) is ErrorKind.INVALID_PARAMETERS

    def test_bad_request_deep_in_chain(self) -> None:
        wrapper = _wrapped(_wrapped(_wrapped(BadRequest())))
        assert is_caused_by(wrapper, BadRequest)

    def test_suppressed_context_is_not_followed(self) -> None:
        try:
            try:
                raise BadRequest()
            except BadRequest:
                raise RuntimeError("hidden") from None
        except RuntimeError as exc:
            assert classify(exc) is ErrorKind.INTERNAL_FAILURE

    def test_cyclic_chain_terminates(self) -> None:
        first = ValueError("a")
        second = ValueError("b")
        first.__cause__ = second
        second.__cause__ = first
        assert classify(first) is ErrorKind.INTERNAL_FAILURE
