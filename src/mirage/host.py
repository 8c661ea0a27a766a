"""Host lifecycle adapter.

The host CMS owns routing, query parsing and templating. It exposes named
extension points; ``bind()`` attaches a registry to the four that virtual
pages need::

    init              -> registry.add_rewrite_rules(host)
    query_vars        -> registry.filter_query_vars(query_vars)
    parse_request     -> registry.action_parse_request(request)
    template_include  -> registry.filter_template_include(template)

Any object satisfying the ``Host`` protocol can be bound; the sandbox host in
``mirage.sandbox`` is the in-memory implementation used by tests and the CLI.
"""

from collections.abc import Callable, Sequence
from functools import partial
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from mirage.errors import NotFound
from mirage.rules import Priority

if TYPE_CHECKING:
    from mirage.registry import VirtualPageRegistry

INIT = "init"
QUERY_VARS = "query_vars"
PARSE_REQUEST = "parse_request"
TEMPLATE_INCLUDE = "template_include"


@runtime_checkable
class RouteTable(Protocol):
    """Accepts rewrite rules for the host's route table."""

    def add_rewrite_rule(self, regex: str, query: str, priority: Priority) -> None: ...


@runtime_checkable
class TemplateLocator(Protocol):
    """Finds the first existing template among candidate names.

    Returns the template's path, or ``""`` when none exists.
    """

    def locate_template(self, template_names: Sequence[str]) -> str: ...


@runtime_checkable
class Host(RouteTable, TemplateLocator, Protocol):
    """The extension-point surface a host must provide."""

    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = 10) -> None: ...

    def add_filter(self, hook: str, callback: Callable[..., Any], priority: int = 10) -> None: ...


def bind(registry: "VirtualPageRegistry", host: Host) -> None:
    """Wire a registry into the host's request lifecycle.

    Binding the same registry twice attaches its bridges twice.
    """
    host.add_action(INIT, partial(registry.add_rewrite_rules, host))
    host.add_filter(QUERY_VARS, registry.filter_query_vars)
    host.add_filter(TEMPLATE_INCLUDE, registry.filter_template_include)
    host.add_action(PARSE_REQUEST, registry.action_parse_request)


def trigger_404(detail: str = "Not Found") -> None:
    """Abort the current request with a 404.

    The host catches ``NotFound``, marks the request as not found and
    answers with its 404 template. Call from ``parse_request`` or
    ``template_include``.
    """
    raise NotFound(detail)
