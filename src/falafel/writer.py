"""Render planned instructions into Go source files.

Note: The generated mobile stubs expect the in-memory RPC scaffolding (`mem_rpc=1`) in the same package.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import asdict
from pathlib import Path

import jinja2
from google.protobuf.compiler import plugin_pb2

from falafel import helper
from falafel.errors import RenderError
from falafel.writer_dto import RenderInstruction

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".go.j2"

Formatter = Callable[[str], str]


class DirectoryOutput:
    """Writes every artifact as a file into a directory."""

    def __init__(self, directory: str | Path = "."):
        """Initialize the output.

        Args:
            directory (str | Path, optional): The directory to write to, created if missing. Defaults to ".".
        """
        self.directory = Path(directory)

    def write(self, name: str, content: str) -> None:
        """Write an artifact, replacing a previous file of the same name."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / name
        path.write_text(content, encoding="utf8")
        logger.info("Wrote '%s'.", path)


class ResponseOutput:
    """Collects every artifact into a protoc code generator response."""

    def __init__(self) -> None:
        """Initialize an empty response."""
        self.response = plugin_pb2.CodeGeneratorResponse()

    def write(self, name: str, content: str) -> None:
        """Add an artifact to the response, replacing a previous file of the same name."""
        for response_file in self.response.file:
            if response_file.name == name:
                response_file.content = content
                break
        else:
            response_file = self.response.file.add()
            response_file.name = name
            response_file.content = content

        logger.info("Added '%s' to the response.", name)


class Writer:
    """Renders instructions with the bundled templates and hands the finished artifacts to an output."""

    def __init__(self, formatter: Formatter | None = None, loader: jinja2.BaseLoader | None = None):
        """Initialize the writer.

        Args:
            formatter (Formatter | None, optional): Post-processing for finished artifacts, e.g. gofmt.
                Defaults to None.
            loader (jinja2.BaseLoader | None, optional): Template loader. Defaults to the templates bundled
                with this package.
        """
        self.formatter = formatter
        self.environment = jinja2.Environment(
            loader=loader or jinja2.PackageLoader("falafel", "templates"),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )
        self.environment.filters["lower_case"] = helper.lower_case
        self.environment.filters["upper_case"] = helper.upper_case

    def render(self, instruction: RenderInstruction) -> str:
        """Render a single instruction.

        Args:
            instruction (RenderInstruction): The instruction to render.

        Raises:
            RenderError: If the template is missing or fails to render.

        Returns:
            str: The rendered text.
        """
        try:
            template = self.environment.get_template(f"{instruction.template}{TEMPLATE_SUFFIX}")
            return template.render(**asdict(instruction.params))

        except jinja2.TemplateError as e:
            raise RenderError(f"failed to render {instruction.template} for '{instruction.artifact}': {e}") from e

    def write(self, instructions: Iterable[RenderInstruction], output: DirectoryOutput | ResponseOutput) -> list[str]:
        """Render all instructions and write the resulting artifacts.

        An artifact is written as soon as the next one starts, so artifacts finished before an error are kept.

        Args:
            instructions (Iterable[RenderInstruction]): The planned instructions, in order.
            output (DirectoryOutput | ResponseOutput): Where to put the artifacts.

        Returns:
            list[str]: Names of the written artifacts, in order.
        """
        written: list[str] = []
        current: str | None = None
        chunks: list[str] = []

        for instruction in instructions:
            if instruction.starts_artifact or instruction.artifact != current:
                if current is not None:
                    self._flush(output, current, chunks)
                    written.append(current)
                current = instruction.artifact
                chunks = []

            chunks.append(self.render(instruction))

        if current is not None:
            self._flush(output, current, chunks)
            written.append(current)

        return written

    def _flush(self, output: DirectoryOutput | ResponseOutput, name: str, chunks: list[str]) -> None:
        content = "".join(chunks)
        if self.formatter is not None:
            content = self.formatter(content)

        output.write(name, content)
