"""The virtual page contract.

Subclass ``VirtualPage`` to add a URL surface with no backing content::

    from mirage import VirtualPage, get_query_var, locate_template


    class LoginPage(VirtualPage):
        def get_name(self) -> str:
            return "login_page"

        def get_rewrite_rules(self):
            return [{"regex": "^login/?$", "query": "index.php?login_page=login"}]

        def get_query_vars(self):
            return ["login_page"]

        def template_include(self, template: str) -> str:
            if get_query_var("login_page") == "login":
                return locate_template("page-login.html") or template
            return template

Pages that also define ``parse_request(request)`` satisfy
``SupportsParseRequest`` and are called once per request before template
selection.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from mirage.request import ParsedRequest
from mirage.rules import RewriteRule


class VirtualPage(ABC):
    """Base class for virtual pages.

    Instances are constructed once by the registry, with no arguments,
    and are treated as immutable afterwards.
    """

    @abstractmethod
    def get_name(self) -> str:
        """Return the page's unique, non-empty identifier."""

    def get_rewrite_rules(self) -> Sequence[RewriteRule | Mapping[str, Any]]:
        """Return the rewrite rules that route URLs to this page.

        Each entry is a ``RewriteRule`` or a mapping with ``regex``,
        ``query`` and optionally ``priority`` (``"top"`` or ``"bottom"``).
        """
        return ()

    def get_query_vars(self) -> Sequence[str]:
        """Return the query vars the host must whitelist for this page."""
        return ()

    def add_query_vars(self, query_vars: list[str]) -> list[str]:
        """Add this page's query vars to the accumulated list.

        Override to customise how the page contributes to the whitelist.
        """
        new_query_vars = self.get_query_vars()
        if new_query_vars:
            query_vars = [*query_vars, *new_query_vars]
        return query_vars

    @abstractmethod
    def template_include(self, template: str) -> str:
        """Return the template to render, or *template* unchanged to decline."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_name()!r}>"


@runtime_checkable
class SupportsParseRequest(Protocol):
    """Optional capability: inspect the parsed request before templating.

    Typical uses are side effects such as handling a logout action,
    redirecting, or calling ``trigger_404()``.
    """

    def parse_request(self, request: ParsedRequest) -> None: ...
