"""Virtual page registry.

Holds the name -> page mapping and the three callback chains that the host
adapter folds over at each extension point:

- query-var filters: every page's ``add_query_vars``
- template filters: every page's ``template_include``
- request-parse actions: ``parse_request`` of pages that define one

Chains run in registration order. Registering a name twice replaces the
earlier page: its callbacks are detached and the new page moves to the end
of the order.

The registry is written during startup and only read while the host
handles requests, so it carries no locks.
"""

import importlib
import inspect
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from mirage.config import RegistryConfig
from mirage.errors import ConfigurationError
from mirage.host import RouteTable
from mirage.page import SupportsParseRequest, VirtualPage
from mirage.request import ParsedRequest
from mirage.rules import RewriteRule, coerce_rule

logger = logging.getLogger("mirage.registry")


def resolve_implementation(target: str) -> Any:
    """Resolve an import string to the object it names.

    Accepts ``"package.module:Class"`` and ``"package.module.Class"``.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ValueError: If the string has no module part.
    """
    module_path, sep, attr_name = target.partition(":")
    if not sep:
        module_path, _, attr_name = target.rpartition(".")
    if not module_path or not attr_name:
        msg = f"{target!r} is not an import string (expected 'module:attribute')"
        raise ValueError(msg)

    module = importlib.import_module(module_path)
    return getattr(module, attr_name)


class VirtualPageRegistry:
    """Registry of virtual pages, bridged to the host by ``mirage.host.bind``.

    Usage::

        registry = VirtualPageRegistry()
        registry.register_virtual_pages({"login_page": LoginPage})
        bind(registry, host)
    """

    __slots__ = (
        "_config",
        "_pages",
        "_query_var_filters",
        "_request_actions",
        "_template_filters",
    )

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config or RegistryConfig()
        self._pages: dict[str, VirtualPage] = {}
        self._query_var_filters: list[Callable[[list[str]], list[str]]] = []
        self._template_filters: list[Callable[[str], str]] = []
        self._request_actions: list[Callable[[ParsedRequest], None]] = []

    @property
    def config(self) -> RegistryConfig:
        return self._config

    # -- Registration --

    def register_virtual_pages(self, virtual_pages: Mapping[str, type[VirtualPage] | str]) -> None:
        """Register several pages from a name -> implementation mapping.

        Pages are registered in the mapping's iteration order, which for a
        ``dict`` is insertion order.
        """
        if not isinstance(virtual_pages, Mapping) or not virtual_pages:
            self._skip("register_virtual_pages expects a non-empty mapping, got %r", virtual_pages)
            return

        for name, implementation in virtual_pages.items():
            self.register_virtual_page(name, implementation)

    def register_virtual_page(
        self,
        name: str,
        implementation: type[VirtualPage] | str,
    ) -> VirtualPage | None:
        """Register a single page under *name*.

        *implementation* is a ``VirtualPage`` subclass or an import string
        naming one. Invalid registrations are ignored and return ``None``
        (or raise ``ConfigurationError`` in strict mode). An existing page
        with the same name is replaced.
        """
        if not name or not implementation:
            self._skip("Ignoring virtual page %r: name and implementation are required", name)
            return None

        page_class = implementation
        if isinstance(implementation, str):
            try:
                page_class = resolve_implementation(implementation)
            except (ImportError, AttributeError, ValueError) as exc:
                self._skip("Ignoring virtual page %r: cannot resolve %r (%s)", name, implementation, exc)
                return None

        if (
            not isinstance(page_class, type)
            or not issubclass(page_class, VirtualPage)
            or inspect.isabstract(page_class)
        ):
            self._skip("Ignoring virtual page %r: %r is not a VirtualPage subclass", name, page_class)
            return None

        page = page_class()

        previous = self._pages.pop(name, None)
        if previous is not None:
            logger.debug("Replacing virtual page %r (%r -> %r)", name, previous, page)
            self._detach(previous)

        self._pages[name] = page
        self._attach(page)
        logger.debug("Registered virtual page %r as %r", name, page)
        return page

    def _attach(self, page: VirtualPage) -> None:
        self._query_var_filters.append(page.add_query_vars)
        self._template_filters.append(page.template_include)
        if isinstance(page, SupportsParseRequest):
            self._request_actions.append(page.parse_request)

    def _detach(self, page: VirtualPage) -> None:
        # Bound methods compare equal when they share the same instance and function
        self._query_var_filters.remove(page.add_query_vars)
        self._template_filters.remove(page.template_include)
        if isinstance(page, SupportsParseRequest):
            self._request_actions.remove(page.parse_request)

    def _skip(self, msg: str, *args: Any) -> None:
        if self._config.strict:
            raise ConfigurationError(msg % args)
        logger.debug(msg, *args)

    # -- Introspection --

    def get(self, name: str) -> VirtualPage | None:
        """Look up a page by name. Returns ``None`` if not registered."""
        return self._pages.get(name)

    @property
    def pages(self) -> dict[str, VirtualPage]:
        """A copy of the name -> page mapping, in registration order."""
        return dict(self._pages)

    def rewrite_rules(self) -> list[tuple[str, RewriteRule]]:
        """Return ``(page_name, rule)`` pairs in insertion order.

        Malformed descriptors are dropped and absent priorities are filled
        with the configured default.
        """
        rules: list[tuple[str, RewriteRule]] = []
        for name, page in self._pages.items():
            for descriptor in page.get_rewrite_rules() or ():
                rule = coerce_rule(descriptor)
                if rule is None:
                    continue
                rules.append((name, rule.resolved(self._config.default_priority)))
        return rules

    def __contains__(self, name: object) -> bool:
        return name in self._pages

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __repr__(self) -> str:
        return f"<VirtualPageRegistry pages={list(self._pages)!r}>"

    # -- Host lifecycle bridges --

    def add_rewrite_rules(self, table: RouteTable) -> None:
        """Insert every page's rewrite rules into the host route table."""
        for _name, rule in self.rewrite_rules():
            table.add_rewrite_rule(rule.regex, rule.query, rule.priority)

    def filter_query_vars(self, query_vars: list[str]) -> list[str]:
        """Merge the pages' query vars ahead of the host's existing ones."""
        collected: list[str] = []
        for add_query_vars in self._query_var_filters:
            collected = add_query_vars(collected)
        return [*collected, *query_vars]

    def filter_template_include(self, template: str) -> str:
        """Let each page inspect and replace the selected template in turn."""
        for template_include in self._template_filters:
            template = template_include(template)
        return template

    def action_parse_request(self, request: ParsedRequest) -> None:
        """Hand the parsed request to every page that defines ``parse_request``."""
        for parse_request in self._request_actions:
            parse_request(request)
