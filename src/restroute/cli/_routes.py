"""``restroute routes`` — list registered services.

Resolves an import string to a Dispatcher and prints all registered
routes with method, path, required role, and handler info.
"""

import argparse
import sys

from restroute.cli._resolve import resolve_dispatcher


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, ROLE and HANDLER for ``args.app``."""
    try:
        dispatcher = resolve_dispatcher(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = dispatcher.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        method = str(route.method) if route.method is not None else "*"
        role = route.required_role or "-"
        handler_name = getattr(route.handler, "__qualname__", None) or repr(route.handler)
        rows.append((method, route.path, role, handler_name))

    # Column widths, at least as wide as the headers
    max_method = max(6, *(len(r[0]) for r in rows))
    max_path = max(4, *(len(r[1]) for r in rows))
    max_role = max(4, *(len(r[2]) for r in rows))

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:<{max_role}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "ROLE", "HANDLER"))
    sep_len = max_method + max_path + max_role + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
