"""htex CLI: serve a content root or generate a static copy of it.

Entry point registered as ``htex`` in ``pyproject.toml``::

    [project.scripts]
    htex = "htex.cli:main"
"""

import argparse
import logging
import sys


def _build_parser(enable_gen: bool) -> tuple[argparse.ArgumentParser, dict[str, argparse.ArgumentParser]]:
    parser = argparse.ArgumentParser(
        prog="htex",
        description="htex: serve .htex hypertext templates, or generate a static site from them.",
    )
    parser.add_argument("--verbose", action="store_true", help="verbose output")
    subparsers = parser.add_subparsers(dest="command")
    commands: dict[str, argparse.ArgumentParser] = {}

    # -- htex server ------------------------------------------------------
    server_parser = subparsers.add_parser("server", help="Serve a content root over HTTP(S)")
    server_parser.add_argument(
        "--port",
        type=int,
        default=0,
        help="port to listen (80 or 443 by default)",
    )
    server_parser.add_argument("--fullchain", default=None, help="TLS certificate")
    server_parser.add_argument(
        "--privkey",
        default=None,
        help="private key for the TLS certificate",
    )
    server_parser.add_argument(
        "--root",
        default="public",
        help="root directory to serve content ('public' by default)",
    )
    commands["server"] = server_parser

    # -- htex gen ---------------------------------------------------------
    if enable_gen:
        gen_parser = subparsers.add_parser("gen", help="Generate a static site")
        gen_parser.add_argument("--root", default="public", help="source directory to scan")
        gen_parser.add_argument("--output", default="output", help="output of the generation")
        commands["gen"] = gen_parser

    # -- htex help --------------------------------------------------------
    help_parser = subparsers.add_parser("help", help="Show help for a command")
    help_parser.add_argument("topic", nargs="?", help="Command to describe")

    return parser, commands


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(message)s",
    )


def main(argv: list[str] | None = None, *, enable_gen: bool = True) -> None:
    """CLI entry point for the ``htex`` command.

    Args:
        argv: Arguments without the program name (default: ``sys.argv``).
        enable_gen: Offer the ``gen`` command.  Embedders that only serve
            can turn it off.
    """
    parser, commands = _build_parser(enable_gen)
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "help":
        if args.topic is None:
            parser.print_help()
        elif args.topic in commands:
            commands[args.topic].print_help()
        else:
            print("invalid argument", args.topic, file=sys.stderr)
            parser.print_usage(sys.stderr)
            sys.exit(1)
        return

    _configure_logging(args.verbose)

    if args.command == "server":
        from htex.cli._server import run_server

        run_server(args)
    elif args.command == "gen":
        from htex.cli._gen import run_gen

        run_gen(args)
