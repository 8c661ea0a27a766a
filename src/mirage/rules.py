"""Rewrite rule records and descriptor coercion.

Virtual pages may declare rewrite rules either as ``RewriteRule`` instances
or as plain mappings with ``regex``, ``query`` and an optional ``priority``::

    {"regex": "^login/?$", "query": "index.php?login_page=login"}

Mappings are coerced into ``RewriteRule`` when the registry builds the
route table. Descriptors missing a pattern or a target are skipped.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger("mirage.rules")


class Priority(StrEnum):
    """Where a rewrite rule is inserted in the host's route table.

    ``TOP`` rules are consulted before the host's own rules, ``BOTTOM``
    rules after them.
    """

    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """A frozen rewrite rule descriptor.

    ``priority`` is ``None`` when the page did not choose one; the registry
    substitutes its default priority at insertion time.
    """

    regex: str
    query: str
    priority: Priority | None = None

    def resolved(self, default: Priority) -> "RewriteRule":
        """Return a copy with the priority filled in."""
        if self.priority is not None:
            return self
        return RewriteRule(self.regex, self.query, default)


def coerce_rule(descriptor: Any) -> RewriteRule | None:
    """Coerce a rewrite rule descriptor into a ``RewriteRule``.

    Returns ``None`` (after logging a warning) for descriptors that cannot
    be inserted: missing or empty ``regex``/``query``, or an unknown priority.
    """
    if isinstance(descriptor, RewriteRule):
        regex, query, priority = descriptor.regex, descriptor.query, descriptor.priority
    elif isinstance(descriptor, Mapping):
        regex = descriptor.get("regex")
        query = descriptor.get("query")
        priority = descriptor.get("priority")
    else:
        logger.warning("Skipping rewrite rule %r: not a RewriteRule or mapping", descriptor)
        return None

    if not regex or not query:
        logger.warning("Skipping rewrite rule %r: 'regex' and 'query' are required", descriptor)
        return None

    if priority is not None:
        try:
            priority = Priority(priority)
        except ValueError:
            logger.warning(
                "Skipping rewrite rule %r: priority must be 'top' or 'bottom'", descriptor
            )
            return None

    return RewriteRule(regex=str(regex), query=str(query), priority=priority)
