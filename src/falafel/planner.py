"""Planning of the artifacts to generate for a set of schema files.

The planner decides, per service and method, which template to use and with which parameters. It yields
`RenderInstruction`s lazily, so that everything planned before a fatal error has already been handed to the
writer when the error is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from falafel import VERSION_STRING
from falafel.comments import DocCommentIndex
from falafel.config import GenerationConfig
from falafel.errors import UnsupportedStreamingError
from falafel.helper import strip_package
from falafel.listeners import ListenerRegistry
from falafel.rpc_types import (
    LISTENERS_ARTIFACT,
    MEM_RPC_ARTIFACT,
    STREAMING_KIND_TO_TEMPLATE,
    StreamingKind,
    TemplateKind,
    classify_streaming,
    js_artifact_name,
    native_artifact_name,
)
from falafel.schema import SchemaFile, ServiceSchema
from falafel.writer_dto import (
    HeaderParams,
    JsRpcParams,
    JsServiceParams,
    ListenersParams,
    MemRpcParams,
    RenderInstruction,
    RpcParams,
    ServiceParams,
)

logger = logging.getLogger(__name__)


class ArtifactPlanner:
    """Turns schema files into render instructions, according to a generation config."""

    def __init__(
        self,
        config: GenerationConfig,
        doc_index: DocCommentIndex | None = None,
        registry: ListenerRegistry | None = None,
        tool_name: str = VERSION_STRING,
    ):
        """Initialize the planner.

        Args:
            config (GenerationConfig): The generation settings.
            doc_index (DocCommentIndex | None, optional): Doc comments by method name. Defaults to None.
            registry (ListenerRegistry | None, optional): Registry to collect used listeners in. Defaults to a
                new, empty registry.
            tool_name (str, optional): Tool name and version for the file headers. Defaults to VERSION_STRING.
        """
        self.config = config
        self.doc_index = doc_index if doc_index is not None else {}
        self.registry = registry if registry is not None else ListenerRegistry()
        self.tool_name = tool_name

    def plan(self, schema_files: Iterable[SchemaFile]) -> Iterator[RenderInstruction]:
        """Plan all artifacts for the given files, in order.

        Args:
            schema_files (Iterable[SchemaFile]): The files to generate stubs for.

        Raises:
            ListenerResolutionError: If a service has no listener (mobile stubs or mem-rpc only).
            UnsupportedStreamingError: If a mobile stub would be needed for a client-only streaming method.

        Yields:
            RenderInstruction: The instructions for the writer.
        """
        seen_keys: dict[str, str] = {}

        for schema_file in schema_files:
            for service in schema_file.services:
                previous = seen_keys.setdefault(service.key, service.name)
                if previous != service.name:
                    logger.warning(
                        "Services '%s' and '%s' share the artifact name '%s'; the latter overwrites the former.",
                        previous,
                        service.name,
                        service.key,
                    )

            if self.config.js_stubs:
                yield from self.plan_js_stubs(schema_file)
            else:
                yield from self.plan_mobile_stubs(schema_file)

            if self.config.mem_rpc:
                yield from self.plan_mem_rpc(schema_file)

    def resolve_listener(self, service: ServiceSchema) -> str:
        """Resolve the listener of a service and record it in the registry."""
        return self.registry.resolve(service.key, self.config.listeners, self.config.default_listener)

    def plan_mobile_stubs(self, schema_file: SchemaFile) -> Iterator[RenderInstruction]:
        """Plan one mobile stub file per service of a schema file.

        Args:
            schema_file (SchemaFile): The file to plan for.

        Yields:
            RenderInstruction: Header, service scaffolding, and one instruction per method.
        """
        for service in schema_file.services:
            listener = self.resolve_listener(service)
            artifact = native_artifact_name(service.key)

            yield RenderInstruction(
                TemplateKind.HEADER,
                HeaderParams(
                    tool_name=self.tool_name,
                    file_name=schema_file.name,
                    package=self.config.package_name,
                    target_package=self.config.target_package,
                    build_tags=self.config.build_tags,
                ),
                artifact,
            )

            yield RenderInstruction(
                TemplateKind.SERVICE,
                ServiceParams(service_name=service.name, target_name=self.config.target_name, listener=listener),
                artifact,
            )

            for method in service.methods:
                kind = classify_streaming(method.client_streaming, method.server_streaming)
                if kind == StreamingKind.UNSUPPORTED:
                    raise UnsupportedStreamingError(service.name, method.name)

                params = RpcParams(
                    service_name=service.name,
                    method_name=method.name,
                    request_type=method.request_type,
                    api_prefix=service.name if self.config.api_prefix else "",
                    comment=self.doc_index.get(method.name, ""),
                )
                yield RenderInstruction(STREAMING_KIND_TO_TEMPLATE[kind], params, artifact)

    def plan_js_stubs(self, schema_file: SchemaFile) -> Iterator[RenderInstruction]:
        """Plan one JSON stub file per service of a schema file.

        Client-streaming methods cannot be called through the JSON stubs and are left out.

        Args:
            schema_file (SchemaFile): The file to plan for.

        Yields:
            RenderInstruction: One instruction per service.
        """
        for service in schema_file.services:
            methods = []
            for method in service.methods:
                if method.client_streaming:
                    logger.debug("Skipping client-streaming method %s.%s.", service.name, method.name)
                    continue

                methods.append(
                    JsRpcParams(
                        service_name=service.name,
                        method_name=method.name,
                        request_type=strip_package(method.request_type, self.config.package_name),
                        response_streaming=method.server_streaming,
                    )
                )

            yield RenderInstruction(
                TemplateKind.JS_SERVICE,
                JsServiceParams(
                    tool_name=self.tool_name,
                    file_name=schema_file.name,
                    service_name=service.name,
                    package=self.config.package_name,
                    manual_import=self.config.manual_import,
                    build_tag=self.config.build_tags,
                    methods=tuple(methods),
                ),
                js_artifact_name(service.key),
            )

    def plan_mem_rpc(self, schema_file: SchemaFile) -> Iterator[RenderInstruction]:
        """Plan the shared in-memory RPC scaffolding.

        Mobile stub planning already registered the listeners of the file's services; for JSON stubs they are
        resolved here.

        Args:
            schema_file (SchemaFile): The file that was just planned.

        Yields:
            RenderInstruction: The transport scaffolding, then the listener scaffolding.
        """
        if self.config.js_stubs:
            for service in schema_file.services:
                self.resolve_listener(service)

        yield RenderInstruction(
            TemplateKind.MEM_RPC,
            MemRpcParams(tool_name=self.tool_name, package=self.config.package_name),
            MEM_RPC_ARTIFACT,
        )

        yield RenderInstruction(
            TemplateKind.LISTENERS,
            ListenersParams(
                tool_name=self.tool_name,
                package=self.config.package_name,
                listeners=tuple(self.registry),
            ),
            LISTENERS_ARTIFACT,
        )
