"""Command line interface for goforge."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import DEFAULT_PROJECT_NAME, ProjectConfig, ScaffoldOptions
from .errors import ScaffoldError
from .scaffold import ProjectScaffolder

LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="goforge", description="Scaffold a new Go project")
    parser.add_argument(
        "-d",
        "--directory",
        default=DEFAULT_PROJECT_NAME,
        metavar="NAME",
        help="Name of the project directory to create (default: %(default)s)",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory in which the project is created (default: current directory)",
    )
    parser.add_argument(
        "--no-release",
        dest="release",
        action="store_false",
        help="Skip the goreleaser config and the GitHub release workflow",
    )
    parser.add_argument(
        "--skip-preflight",
        dest="preflight",
        action="store_false",
        help="Do not check that the Go toolchain is installed",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = ProjectConfig.from_name(args.directory, base_dir=args.base_dir)
    except ValueError as exc:
        parser.error(str(exc))

    options = ScaffoldOptions.from_env(release=args.release, preflight=args.preflight)
    scaffolder = ProjectScaffolder(options=options)
    try:
        result = scaffolder.create(config)
    except ScaffoldError as exc:
        LOGGER.error("%s", exc)
        return 1

    print(f"Project created at {result.root}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
