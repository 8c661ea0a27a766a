"""Mirage CLI — inspect registries and resolve paths in the sandbox host.

Entry point registered as ``mirage`` in ``pyproject.toml``::

    [project.scripts]
    mirage = "mirage.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``mirage`` command."""
    parser = argparse.ArgumentParser(
        prog="mirage",
        description="Mirage — virtual pages for hook-driven CMS hosts.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- mirage pages -----------------------------------------------------
    pages_parser = subparsers.add_parser("pages", help="List registered virtual pages")
    pages_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.pages:registry)",
    )

    # -- mirage rules -----------------------------------------------------
    rules_parser = subparsers.add_parser("rules", help="List rewrite rules in insertion order")
    rules_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.pages:registry)",
    )

    # -- mirage resolve ---------------------------------------------------
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a path through the sandbox host"
    )
    resolve_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.pages:registry)",
    )
    resolve_parser.add_argument("path", help="Request path (e.g. /login?next=/)")
    resolve_parser.add_argument(
        "--template-dir",
        action="append",
        default=[],
        dest="template_dirs",
        help="Template directory to search (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "pages":
        from mirage.cli._pages import run_pages

        run_pages(args)
    elif args.command == "rules":
        from mirage.cli._rules import run_rules

        run_rules(args)
    elif args.command == "resolve":
        from mirage.cli._request import run_resolve

        run_resolve(args)
