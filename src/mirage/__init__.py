"""Mirage — virtual pages for hook-driven CMS hosts.

Adds URLs with no backing content by hooking the host's rewrite table,
query-var whitelist, request parsing and template selection.

Basic usage::

    from mirage import VirtualPage, VirtualPageRegistry, bind

    registry = VirtualPageRegistry()
    registry.register_virtual_pages({"login_page": LoginPage})
    bind(registry, host)

Try it without a CMS::

    from mirage.testing import bound_sandbox
    host = bound_sandbox(registry, template_dirs=("templates",))
    response = host.handle("/login")
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "MirageError",
    "NotFound",
    "ParsedRequest",
    "Priority",
    "RegistryConfig",
    "RewriteRule",
    "SandboxConfig",
    "SupportsParseRequest",
    "VirtualPage",
    "VirtualPageRegistry",
    "bind",
    "get_query_var",
    "get_request",
    "locate_template",
    "trigger_404",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mirage`` fast while providing a clean top-level API.
    """
    if name == "VirtualPageRegistry":
        from mirage.registry import VirtualPageRegistry

        return VirtualPageRegistry

    if name in ("VirtualPage", "SupportsParseRequest"):
        from mirage import page as _page

        return getattr(_page, name)

    if name in ("Priority", "RewriteRule"):
        from mirage import rules as _rules

        return getattr(_rules, name)

    if name in ("RegistryConfig", "SandboxConfig"):
        from mirage import config as _config

        return getattr(_config, name)

    if name == "ParsedRequest":
        from mirage.request import ParsedRequest

        return ParsedRequest

    if name in ("bind", "trigger_404"):
        from mirage import host as _host

        return getattr(_host, name)

    if name in ("get_query_var", "get_request", "locate_template"):
        from mirage import context as _ctx

        return getattr(_ctx, name)

    if name in ("ConfigurationError", "HTTPError", "MirageError", "NotFound"):
        from mirage import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
