"""Tests for mirage.context — request-scoped ContextVars."""

import pytest

from mirage.config import SandboxConfig
from mirage.context import (
    get_host,
    get_query_var,
    get_request,
    locate_template,
    request_scope,
)
from mirage.request import ParsedRequest
from mirage.sandbox import SandboxHost


class TestOutsideRequest:
    def test_get_request_raises(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    def test_get_host_raises(self) -> None:
        with pytest.raises(LookupError):
            get_host()

    def test_get_query_var_raises(self) -> None:
        with pytest.raises(LookupError):
            get_query_var("login_page")


class TestRequestScope:
    def test_sets_and_resets(self) -> None:
        host = SandboxHost()
        request = ParsedRequest(path="/login", query_vars={"login_page": "login"})
        with request_scope(host, request) as current:
            assert current is request
            assert get_request() is request
            assert get_host() is host
        with pytest.raises(LookupError):
            get_request()

    def test_resets_on_error(self) -> None:
        with pytest.raises(RuntimeError), request_scope(SandboxHost(), ParsedRequest(path="/")):
            raise RuntimeError("boom")
        with pytest.raises(LookupError):
            get_host()

    def test_nested_scopes_restore_outer(self) -> None:
        host = SandboxHost()
        outer = ParsedRequest(path="/outer")
        inner = ParsedRequest(path="/inner")
        with request_scope(host, outer):
            with request_scope(host, inner):
                assert get_request() is inner
            assert get_request() is outer

    def test_get_query_var(self) -> None:
        request = ParsedRequest(path="/login", query_vars={"login_page": "login"})
        with request_scope(SandboxHost(), request):
            assert get_query_var("login_page") == "login"
            assert get_query_var("missing") == ""
            assert get_query_var("missing", "fallback") == "fallback"

    def test_locate_template_uses_current_host(self, tmp_path) -> None:
        (tmp_path / "page-login.html").write_text("login")
        host = SandboxHost(SandboxConfig(template_dirs=(tmp_path,)))
        with request_scope(host, ParsedRequest(path="/login")):
            assert locate_template("missing.html", "page-login.html") == str(tmp_path / "page-login.html")
            assert locate_template("missing.html") == ""
