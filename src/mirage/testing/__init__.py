"""Test utilities for virtual pages.

Provides a helper that binds a registry to a fresh sandbox host, plus
route-table, query-var and template assertions::

    from mirage.testing import assert_template, bound_sandbox

    host = bound_sandbox(registry, template_dirs=(tmp_path,))
    assert_template(host.handle("/login"), "page-user-login.html")
"""

from pathlib import Path

from mirage.config import SandboxConfig
from mirage.host import bind
from mirage.registry import VirtualPageRegistry
from mirage.sandbox import SandboxHost, SandboxResponse
from mirage.testing.assertions import (
    assert_not_found,
    assert_query_var,
    assert_rewrite_rule,
    assert_template,
)

__all__ = [
    "SandboxHost",
    "SandboxResponse",
    "assert_not_found",
    "assert_query_var",
    "assert_rewrite_rule",
    "assert_template",
    "bound_sandbox",
]


def bound_sandbox(
    registry: VirtualPageRegistry,
    *,
    template_dirs: tuple[str | Path, ...] = (),
) -> SandboxHost:
    """Return a sandbox host with *registry* bound to it."""
    host = SandboxHost(SandboxConfig(template_dirs=template_dirs))
    bind(registry, host)
    return host
