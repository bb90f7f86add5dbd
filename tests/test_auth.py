"""Tests for restroute.auth — authorization checks."""

import logging

from restroute.auth import PUBLIC, RoleCheck, split_roles
from restroute.http.request import Request


def _roles_from_header(request: Request) -> list[str]:
    return (request.get_header("X-Roles") or "").split(",")


class TestSplitRoles:
    def test_single(self) -> None:
        assert split_roles("admin") == frozenset({"admin"})

    def test_list_with_spaces(self) -> None:
        assert split_roles(" admin , editor,") == frozenset({"admin", "editor"})

    def test_empty(self) -> None:
        assert split_roles("") == frozenset()


class TestPublic:
    def test_admits_everything(self) -> None:
        assert PUBLIC(Request.create("GET", "/"), "admin")


class TestRoleCheck:
    def test_granted(self) -> None:
        check = RoleCheck(_roles_from_header)
        request = Request.create("GET", "/", headers={"X-Roles": "user,admin"})
        assert check(request, "admin")

    def test_any_listed_role_suffices(self) -> None:
        check = RoleCheck(_roles_from_header)
        request = Request.create("GET", "/", headers={"X-Roles": "editor"})
        assert check(request, "admin, editor")

    def test_denied_is_logged(self, caplog) -> None:
        check = RoleCheck(_roles_from_header)
        request = Request.create("GET", "/secret", headers={"X-Roles": "user"})
        with caplog.at_level(logging.DEBUG, logger="restroute.auth"):
            assert not check(request, "admin")
        assert any("Denied GET /secret" in r.message for r in caplog.records)

    def test_no_roles(self) -> None:
        check = RoleCheck(lambda request: ())
        assert not check(Request.create("GET", "/"), "admin")
