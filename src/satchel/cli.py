"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from .exceptions import SatchelError
from .models import DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_FILE, PipelineConfig
from .pipeline import run_pipeline

logger = logging.getLogger("satchel")

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
    """Parse a flag value such as ``-public=false``."""
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satchel",
        description="satchel pulls and packs docker images between private registries",
    )
    parser.add_argument(
        "-in",
        "--in",
        dest="input_file",
        default=DEFAULT_INPUT_FILE,
        help="Input TOML manifest to use",
    )
    parser.add_argument(
        "-out",
        "--out",
        dest="output_file",
        default=DEFAULT_OUTPUT_FILE,
        help="Name of archive file to generate",
    )
    parser.add_argument(
        "-public",
        "--public",
        dest="include_public",
        nargs="?",
        const=True,
        default=False,
        type=parse_bool,
        metavar="BOOL",
        help="Include public images in the archive",
    )
    parser.add_argument(
        "-strict",
        "--strict",
        nargs="?",
        const=True,
        default=False,
        type=parse_bool,
        metavar="BOOL",
        help="Reject manifests with empty repositories or duplicate images",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    return PipelineConfig(
        input_file=Path(args.input_file),
        output_file=Path(args.output_file),
        include_public=args.include_public,
        strict=args.strict,
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        asyncio.run(run_pipeline(config_from_args(args)))
    except SatchelError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
