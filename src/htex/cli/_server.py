"""``htex server``: serve a content root."""

import argparse
import sys

from htex.config import HtexConfig
from htex.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Build the application from CLI flags and serve until interrupted.

    TLS is enabled only when both ``--fullchain`` and ``--privkey`` are set.
    """
    from htex.app import Htex

    config = HtexConfig(
        root=args.root,
        port=args.port,
        verbose=args.verbose,
        ssl_certfile=args.fullchain,
        ssl_keyfile=args.privkey,
    )
    try:
        Htex(config).run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
