"""``mirage pages`` — list registered virtual pages."""

import argparse

from mirage.cli._load import load_or_exit
from mirage.cli._table import print_table


def run_pages(args: argparse.Namespace) -> None:
    """Print NAME, CLASS and QUERY VARS for every registered page."""
    registry = load_or_exit(args.registry)

    if not len(registry):
        print("No virtual pages registered.")
        return

    rows = [
        (name, type(page).__qualname__, ", ".join(page.get_query_vars()) or "-")
        for name, page in registry.pages.items()
    ]
    print_table(("NAME", "CLASS", "QUERY VARS"), rows)
