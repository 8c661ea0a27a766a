"""Request-scoped context via ContextVar.

Provides:
- ``request_var``: The current ``ParsedRequest``.
- ``host_var``: The host handling it, used for template lookup.

Both are set by the host for the duration of one request (see
``request_scope``) and reset afterwards. Accessing them outside a request
raises ``LookupError``.

Virtual pages read them through ``get_query_var`` and ``locate_template``
so that ``template_include`` keeps its single-argument signature.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from mirage.host import TemplateLocator
from mirage.request import ParsedRequest

request_var: ContextVar[ParsedRequest] = ContextVar("mirage_request")
"""The current parsed request. Set by the host before parse_request."""

host_var: ContextVar[TemplateLocator] = ContextVar("mirage_host")
"""The host handling the current request."""


@contextmanager
def request_scope(host: TemplateLocator, request: ParsedRequest) -> Iterator[ParsedRequest]:
    """Make *host* and *request* current for the enclosed block."""
    host_token = host_var.set(host)
    request_token = request_var.set(request)
    try:
        yield request
    finally:
        request_var.reset(request_token)
        host_var.reset(host_token)


def get_request() -> ParsedRequest:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()


def get_host() -> TemplateLocator:
    """Return the current host.

    Raises ``LookupError`` if called outside a request context.
    """
    return host_var.get()


def get_query_var(name: str, default: str = "") -> str:
    """Return a query var of the current request, or *default*."""
    return get_request().get(name, default)


def locate_template(*template_names: str) -> str:
    """Return the path of the first existing template, or ``""``."""
    return get_host().locate_template(template_names)
