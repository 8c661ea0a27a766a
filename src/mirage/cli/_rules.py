"""``mirage rules`` — list rewrite rules as they would reach the route table."""

import argparse

from mirage.cli._load import load_or_exit
from mirage.cli._table import print_table


def run_rules(args: argparse.Namespace) -> None:
    """Print PRIORITY, REGEX, QUERY and PAGE in insertion order."""
    registry = load_or_exit(args.registry)

    rules = registry.rewrite_rules()
    if not rules:
        print("No rewrite rules registered.")
        return

    rows = [(str(rule.priority), rule.regex, rule.query, name) for name, rule in rules]
    print_table(("PRIORITY", "REGEX", "QUERY", "PAGE"), rows)
