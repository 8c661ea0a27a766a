"""Registry and sandbox configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from mirage.rules import Priority


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Virtual page registry configuration.

    Override what you need::

        config = RegistryConfig(strict=True)
    """

    # Priority for rewrite rules that do not declare one. Virtual pages almost
    # always need to win over the host's catch-all rules.
    default_priority: Priority = Priority.TOP

    # Raise ConfigurationError instead of ignoring invalid registrations
    strict: bool = False


@dataclass(frozen=True, slots=True)
class SandboxConfig:
    """Configuration for the in-memory sandbox host.

    Mirrors the pieces of a CMS install that virtual pages interact with:
    template directories, the built-in rewrite rules, and the query vars the
    host whitelists before any plugin filters them.
    """

    # Templates
    template_dirs: tuple[str | Path, ...] = ()
    index_template: str = "index.html"
    not_found_template: str = "404.html"

    # Rewrite rules the host itself ships, consulted between top and bottom rules
    core_rules: tuple[tuple[str, str], ...] = (
        (r"^$", "index.php"),
        (r"^page/?([0-9]+)/?$", "index.php?paged=$matches[1]"),
        (r"^search/(.+)/?$", "index.php?s=$matches[1]"),
    )

    # Public query vars known before the query_vars filter runs
    public_query_vars: tuple[str, ...] = (
        "p",
        "page_id",
        "pagename",
        "name",
        "paged",
        "s",
    )
