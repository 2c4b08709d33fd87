"""Top-level module for stub generation."""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import BinaryIO

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from falafel.comments import build_doc_index
from falafel.config import GenerationConfig
from falafel.errors import SchemaError
from falafel.listeners import ListenerRegistry
from falafel.planner import ArtifactPlanner
from falafel.schema import load_schema_files
from falafel.writer import DirectoryOutput, Formatter, ResponseOutput, Writer

logger = logging.getLogger(__name__)


def format_outputs(raw_input: str) -> str:
    """Formats raw Go source using gofmt.

    Args:
        raw_input (str): The unformatted input.

    Returns:
        str: The formatted outputs, or the raw input if gofmt is unavailable or fails.
    """
    try:
        result = subprocess.run(
            ["gofmt"],
            input=raw_input,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    except subprocess.CalledProcessError as e:
        logger.warning(f"gofmt formatting failed: {e}")
        logger.warning(f"Stderr: {e.stderr}")
        return raw_input
    except FileNotFoundError:
        logger.warning("gofmt not found, skipping formatting of generated code")
        return raw_input


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    """Read a serialized code generator request.

    Args:
        stream (BinaryIO): The stream protoc writes the request to.

    Raises:
        SchemaError: If the payload is not a valid request.

    Returns:
        plugin_pb2.CodeGeneratorRequest: The parsed request.
    """
    request = plugin_pb2.CodeGeneratorRequest()
    payload = stream.read()
    if payload:
        try:
            request.ParseFromString(payload)
        except DecodeError as e:
            raise SchemaError(f"could not parse code generator request: {e}") from e

    return request


def generate(
    request: plugin_pb2.CodeGeneratorRequest,
    output: DirectoryOutput | ResponseOutput,
    parameter: str | None = None,
    formatter: Formatter | None = None,
) -> list[str]:
    """Generate all artifacts for a request.

    Args:
        request (plugin_pb2.CodeGeneratorRequest): The request read from protoc.
        output (DirectoryOutput | ResponseOutput): Where to put the artifacts.
        parameter (str | None, optional): Overrides the parameter string of the request. Defaults to None.
        formatter (Formatter | None, optional): Post-processing for every artifact. Defaults to None.

    Raises:
        GenerationError: On the first fatal condition. Artifacts written before are kept.

    Returns:
        list[str]: Names of the written artifacts.
    """
    config = GenerationConfig.from_parameter(request.parameter if parameter is None else parameter)
    schema_files = load_schema_files(request)
    doc_index = build_doc_index(schema_files)

    planner = ArtifactPlanner(config, doc_index, ListenerRegistry())
    writer = Writer(formatter=formatter)

    mode = "JSON" if config.js_stubs else "mobile"
    logger.info("Generating %s stubs for %d file(s).", mode, len(schema_files))

    return writer.write(planner.plan(schema_files), output)


def run(args: argparse.Namespace):
    """Run the generator with the arguments passed on the command line.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
    """
    request_path: str = getattr(args, "request", "")
    if request_path:
        with open(request_path, "rb") as request_file:
            request = read_request(request_file)
    else:
        request = read_request(sys.stdin.buffer)

    formatter = None if args.skip_format else format_outputs

    if args.response:
        response_output = ResponseOutput()
        generate(request, response_output, args.parameter, formatter)
        sys.stdout.buffer.write(response_output.response.SerializeToString())
        sys.stdout.buffer.flush()
    else:
        written = generate(request, DirectoryOutput(args.output_dir), args.parameter, formatter)
        logger.info("Generated %d artifact(s) in '%s'.", len(written), args.output_dir)
