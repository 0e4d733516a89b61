"""``htex gen``: write a static copy of a content root."""

import argparse
import sys

from htex.config import HtexConfig
from htex.errors import ConfigurationError


def run_gen(args: argparse.Namespace) -> None:
    """Generate ``--output`` from ``--root``; exit 1 if any file failed."""
    from htex.app import Htex

    config = HtexConfig(root=args.root, output=args.output, verbose=args.verbose)
    try:
        failures = Htex(config).generate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if failures:
        print(f"{failures} file(s) failed", file=sys.stderr)
        raise SystemExit(1)
