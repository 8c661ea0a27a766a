"""Mirage exception hierarchy.

Shared across the registry, the host adapter and the sandbox host so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class MirageError(Exception):
    """Base for all mirage-specific errors."""


class ConfigurationError(MirageError):
    """Raised when a registration or configuration value is invalid.

    Only surfaces when the registry runs with ``RegistryConfig(strict=True)``;
    the default registry ignores invalid registrations.
    """


class RenderNotInstalledError(MirageError, ImportError):
    """Raised when sandbox rendering is used without kida installed."""


@dataclass(frozen=True, slots=True)
class HTTPError(MirageError):
    """An error that maps directly to an HTTP status code.

    Raised by virtual pages while the host is handling a request. The host
    catches these and answers with the matching status and template.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the virtual page does not exist for this request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
