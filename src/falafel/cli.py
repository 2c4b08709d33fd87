"""Command-line interface for generating gRPC stubs from protoc requests.

Notes:
    - When invoked by protoc as `protoc-gen-falafel`, the request is read from stdin.
    - Generated files are written to the working directory unless `--response` is given.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from falafel import VERSION
from falafel.errors import GenerationError
from falafel.run import run

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate mobile and JSON stubs for gRPC services.")

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION,
    )

    parser.add_argument(
        "--request",
        type=str,
        default="",
        help="file holding a serialized CodeGeneratorRequest; read from stdin if omitted.",
    )

    parser.add_argument(
        "--parameter",
        type=str,
        default=None,
        help="parameter string to use instead of the one in the request, e.g. 'package_name=lndmobile,js_stubs=1'.",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=".",
        help="directory to write all generated files to; defaults to the working directory.",
    )

    parser.add_argument(
        "--response",
        dest="response",
        default=False,
        action="store_true",
        help="write a CodeGeneratorResponse with all generated files to stdout instead of writing files.",
    )

    parser.add_argument(
        "--no-format",
        dest="skip_format",
        default=False,
        action="store_true",
        help="skip gofmt formatting of generated files.",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the stub generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    logging.basicConfig(level=logging.INFO)

    parser = setup_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except GenerationError as e:
        logger.error("%s", e)
        return 1

    return 0
