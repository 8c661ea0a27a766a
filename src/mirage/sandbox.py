"""In-memory sandbox host.

Implements the host side of the virtual page lifecycle without a CMS, so
registries can be exercised end to end from tests, examples and the
``mirage resolve`` command::

    host = SandboxHost(SandboxConfig(template_dirs=("templates",)))
    bind(registry, host)
    response = host.handle("/login")
    assert response.template.endswith("page-user-login.html")

Request handling follows the usual CMS order: rebuild the rewrite table,
filter the query var whitelist, match the path, fire ``parse_request``, pick
a default template and run it through ``template_include``.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl

from mirage.config import SandboxConfig
from mirage.context import request_scope
from mirage.errors import HTTPError, RenderNotInstalledError
from mirage.host import INIT, PARSE_REQUEST, QUERY_VARS, TEMPLATE_INCLUDE
from mirage.request import ParsedRequest
from mirage.rules import Priority

logger = logging.getLogger("mirage.sandbox")

_PLACEHOLDER = re.compile(r"\$matches\[(\d+)\]")


@dataclass(frozen=True, slots=True)
class SandboxResponse:
    """Outcome of one sandbox request."""

    status: int
    template: str
    request: ParsedRequest

    @property
    def query_vars(self) -> dict[str, str]:
        return self.request.query_vars


class SandboxHost:
    """A minimal hook-driven host with a rewrite table and template lookup.

    Satisfies the ``mirage.host.Host`` protocol.
    """

    __slots__ = ("_bottom_rules", "_config", "_hooks", "_seq", "_top_rules")

    def __init__(self, config: SandboxConfig | None = None) -> None:
        self._config = config or SandboxConfig()
        self._hooks: dict[str, list[tuple[int, int, Callable[..., Any]]]] = {}
        self._seq = count()
        self._top_rules: dict[str, str] = {}
        self._bottom_rules: dict[str, str] = {}

    @property
    def config(self) -> SandboxConfig:
        return self._config

    # -- Extension points --

    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = 10) -> None:
        """Attach *callback* to an action. Lower priorities run first."""
        self._hooks.setdefault(hook, []).append((priority, next(self._seq), callback))

    def add_filter(self, hook: str, callback: Callable[..., Any], priority: int = 10) -> None:
        """Attach *callback* to a filter. Lower priorities run first."""
        self._hooks.setdefault(hook, []).append((priority, next(self._seq), callback))

    def _callbacks(self, hook: str) -> list[Callable[..., Any]]:
        return [callback for _, _, callback in sorted(self._hooks.get(hook, ()), key=lambda e: e[:2])]

    def do_action(self, hook: str, *args: Any) -> None:
        for callback in self._callbacks(hook):
            callback(*args)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        for callback in self._callbacks(hook):
            value = callback(value, *args)
        return value

    # -- Route table --

    def add_rewrite_rule(self, regex: str, query: str, priority: Priority = Priority.BOTTOM) -> None:
        """Insert a rule. A regex added twice keeps its position and takes the new query."""
        if Priority(priority) is Priority.TOP:
            self._top_rules[regex] = query
        else:
            self._bottom_rules[regex] = query

    @property
    def top_rules(self) -> dict[str, str]:
        return dict(self._top_rules)

    @property
    def bottom_rules(self) -> dict[str, str]:
        return dict(self._bottom_rules)

    @property
    def rewrite_rules(self) -> dict[str, str]:
        """The full table in match order: top, core, then bottom rules."""
        rules = dict(self._top_rules)
        for regex, query in self._config.core_rules:
            rules.setdefault(regex, query)
        for regex, query in self._bottom_rules.items():
            rules.setdefault(regex, query)
        return rules

    def init(self) -> None:
        """Rebuild the rewrite table from scratch by firing the ``init`` action.

        Runs at the start of every request, so replaced or newly registered
        pages are routed from the next request on.
        """
        self._top_rules.clear()
        self._bottom_rules.clear()
        self.do_action(INIT)

    # -- Templates --

    def locate_template(self, template_names: Sequence[str]) -> str:
        """Return the path of the first template found in the template dirs."""
        for name in template_names:
            if not name:
                continue
            for directory in self._config.template_dirs:
                candidate = Path(directory) / name
                if candidate.is_file():
                    return str(candidate)
        return ""

    def render(self, response: SandboxResponse, **context: Any) -> str:
        """Render the response's template with kida.

        The template receives ``request``, the request's query vars and
        any extra *context*. Returns ``""`` when no template was selected.
        """
        if not response.template:
            return ""
        try:
            from kida import Environment, FileSystemLoader
        except ImportError:
            msg = (
                "SandboxHost.render requires 'kida' for template rendering. "
                "Install with: pip install mirage-pages[render]"
            )
            raise RenderNotInstalledError(msg) from None

        path = Path(response.template)
        env = Environment(loader=FileSystemLoader(str(path.parent)))
        template = env.get_template(path.name)
        return template.render(
            {"request": response.request, **response.query_vars, **context}
        )

    # -- Request handling --

    def query_vars(self) -> list[str]:
        """Return the whitelisted query vars after the ``query_vars`` filter."""
        return self.apply_filters(QUERY_VARS, list(self._config.public_query_vars))

    def parse(self, url: str) -> ParsedRequest:
        """Match *url* against the rewrite table and whitelist its query vars.

        Query string values take precedence over values from the rewrite
        target. Vars that are not whitelisted are dropped.
        """
        self.init()
        path, _, query_string = url.partition("?")
        request = ParsedRequest(path=path or "/")

        requested = path.strip("/")
        for regex, query in self.rewrite_rules.items():
            match = re.match(regex, requested)
            if match is not None:
                request.matched_rule = regex
                request.matched_query = _substitute(query, match)
                break
        else:
            request.set_404()

        perma_vars: dict[str, str] = {}
        if request.matched_query:
            perma_vars = dict(parse_qsl(request.matched_query.partition("?")[2], keep_blank_values=True))
        get_vars = dict(parse_qsl(query_string, keep_blank_values=True))

        for name in dict.fromkeys(self.query_vars()):
            if name in get_vars:
                request.query_vars[name] = get_vars[name]
            elif name in perma_vars:
                request.query_vars[name] = perma_vars[name]
        return request

    def handle(self, url: str) -> SandboxResponse:
        """Run the full request lifecycle for *url*."""
        request = self.parse(url)
        with request_scope(self, request):
            try:
                self.do_action(PARSE_REQUEST, request)
                template = self._default_template(request)
                template = self.apply_filters(TEMPLATE_INCLUDE, template)
            except HTTPError as exc:
                logger.debug("%d %s — %s", exc.status, request.path, exc.detail)
                if exc.status == 404:
                    request.set_404()
                return SandboxResponse(
                    status=exc.status,
                    template=self._error_template(exc.status),
                    request=request,
                )

        return SandboxResponse(
            status=404 if request.is_404 else 200,
            template=template,
            request=request,
        )

    def _default_template(self, request: ParsedRequest) -> str:
        if request.is_404:
            return self.locate_template([self._config.not_found_template])
        return self.locate_template([self._config.index_template])

    def _error_template(self, status: int) -> str:
        if status == 404:
            return self.locate_template([self._config.not_found_template])
        return self.locate_template([f"{status}.html"])


def _substitute(query: str, match: re.Match[str]) -> str:
    """Replace ``$matches[N]`` placeholders with the regex's groups."""

    def group(placeholder: re.Match[str]) -> str:
        index = int(placeholder.group(1))
        if index > match.re.groups:
            return ""
        return match.group(index) or ""

    return _PLACEHOLDER.sub(group, query)
