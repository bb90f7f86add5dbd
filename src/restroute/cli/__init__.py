"""restroute CLI — inspect the services a dispatcher exposes.

Entry point registered as ``restroute`` in ``pyproject.toml``::

    [project.scripts]
    restroute = "restroute.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``restroute`` command."""
    parser = argparse.ArgumentParser(
        prog="restroute",
        description="REST request routing and dispatch.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        help="Logging level (debug, info, warning, error)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- restroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered services")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapi:dispatcher)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from restroute.config import configure_logging

    configure_logging(args.log_level)

    if args.command == "routes":
        from restroute.cli._routes import run_routes

        run_routes(args)
