"""``mirage resolve`` — run one path through the sandbox host.

Binds the registry to a fresh ``SandboxHost`` and prints the status,
matched rule, query vars and selected template.
"""

import argparse

from mirage.cli._load import load_or_exit
from mirage.config import SandboxConfig
from mirage.host import bind
from mirage.sandbox import SandboxHost


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.path`` against ``args.registry`` in a fresh sandbox host.

    Prints status, matched rule, rewrite target, query vars and template.
    """
    registry = load_or_exit(args.registry)

    host = SandboxHost(SandboxConfig(template_dirs=tuple(args.template_dirs)))
    bind(registry, host)
    response = host.handle(args.path)
    request = response.request

    print(f"status:    {response.status}")
    print(f"rule:      {request.matched_rule or '-'}")
    print(f"query:     {request.matched_query or '-'}")
    for name, value in request.query_vars.items():
        print(f"  {name} = {value!r}")
    print(f"template:  {response.template or '-'}")
