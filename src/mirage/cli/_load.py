"""Registry lookup for the ``mirage`` subcommands.

Import strings are resolved by ``mirage.registry.resolve_implementation``;
this module adds the ``registry`` default attribute, factory support and
the command-line error handling.
"""

import sys

from mirage.registry import VirtualPageRegistry, resolve_implementation


def load_registry(import_string: str) -> VirtualPageRegistry:
    """Resolve an import string to a ``VirtualPageRegistry``.

    ``"myapp.pages"`` is shorthand for ``"myapp.pages:registry"``. When the
    target is a zero-argument factory rather than a registry, it is called.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ValueError: If the string names no module (e.g. ``":registry"``).
        TypeError: If the target is neither a registry nor a factory of one.
    """
    if ":" not in import_string:
        import_string = f"{import_string}:registry"

    target = resolve_implementation(import_string)
    if isinstance(target, VirtualPageRegistry):
        return target

    if not callable(target):
        msg = f"{import_string!r} resolved to {type(target).__name__}, not a VirtualPageRegistry"
        raise TypeError(msg)

    try:
        registry = target()
    except Exception as exc:
        msg = f"Registry factory {import_string!r} failed: {exc}"
        raise TypeError(msg) from exc

    if not isinstance(registry, VirtualPageRegistry):
        msg = f"Factory {import_string!r} returned {type(registry).__name__}, not a VirtualPageRegistry"
        raise TypeError(msg)
    return registry


def load_or_exit(import_string: str) -> VirtualPageRegistry:
    """``load_registry`` for commands: print the error and exit 1 on failure."""
    try:
        return load_registry(import_string)
    except (ImportError, AttributeError, ValueError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
