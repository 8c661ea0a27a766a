"""The host's parsed-request representation.

Built by the host after matching the path against its rewrite table and
filtering the resulting query vars through the whitelist. Passed unchanged
through the ``parse_request`` extension point, where virtual pages may
inspect or mutate ``query_vars``.
"""

from dataclasses import dataclass, field


@dataclass(slots=True)
class ParsedRequest:
    """A parsed request. Mutable until template selection.

    Attributes:
        path: Request path without the query string (e.g. ``"/login"``).
        query_vars: Whitelisted query vars for this request.
        matched_rule: The rewrite regex that matched, or ``None``.
        matched_query: The rewrite target after placeholder substitution.
        is_404: Whether the host considers the request unresolved.
    """

    path: str
    query_vars: dict[str, str] = field(default_factory=dict)
    matched_rule: str | None = None
    matched_query: str | None = None
    is_404: bool = False

    def get(self, name: str, default: str = "") -> str:
        """Return a query var, or *default* if it is not set."""
        return self.query_vars.get(name, default)

    def set_404(self) -> None:
        """Mark the request as not found."""
        self.is_404 = True
