"""Data Transfer Objects handed from the planner to the writer.

Each template kind has one parameter record. Together with the template kind and the name of the target
artifact, a record forms a `RenderInstruction`, which fully determines what the writer produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from falafel.rpc_types import TemplateKind


@dataclass(frozen=True)
class HeaderParams:
    """Parameters of the header of a mobile stub file.

    Attributes:
        tool_name: Name and version of the generator
        file_name: The proto file the stubs were generated from
        package: Go package of the generated file
        target_package: Import path of the wrapped gRPC package
        build_tags: Build constraint of the generated file, if any
    """

    tool_name: str
    file_name: str
    package: str
    target_package: str
    build_tags: str = ""


@dataclass(frozen=True)
class ServiceParams:
    """Parameters of the per-service client scaffolding.

    Attributes:
        service_name: The service as declared in the proto file (e.g., "Lightning")
        target_name: Package name of the wrapped gRPC package (e.g., "lnrpc")
        listener: The in-memory listener the client dials
    """

    service_name: str
    target_name: str
    listener: str


@dataclass(frozen=True)
class RpcParams:
    """Parameters of a single mobile method stub.

    Attributes:
        service_name: The service the method belongs to
        method_name: The method name
        request_type: Qualified Go type of the request (e.g., "lnrpc.GetInfoRequest")
        api_prefix: Prefix of the generated function name, empty if disabled
        comment: Doc comment of the method, empty if undocumented
    """

    service_name: str
    method_name: str
    request_type: str
    api_prefix: str = ""
    comment: str = ""


@dataclass(frozen=True)
class JsRpcParams:
    """Parameters of a single JSON method stub."""

    service_name: str
    method_name: str
    request_type: str
    response_streaming: bool = False


@dataclass(frozen=True)
class JsServiceParams:
    """Parameters of a complete JSON stub file for one service."""

    tool_name: str
    file_name: str
    service_name: str
    package: str
    manual_import: str = ""
    build_tag: str = ""
    methods: tuple[JsRpcParams, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MemRpcParams:
    """Parameters of the in-memory RPC transport scaffolding."""

    tool_name: str
    package: str


@dataclass(frozen=True)
class ListenersParams:
    """Parameters of the listener registration scaffolding."""

    tool_name: str
    package: str
    listeners: tuple[str, ...] = ()


RenderParams = HeaderParams | ServiceParams | RpcParams | JsServiceParams | MemRpcParams | ListenersParams


@dataclass(frozen=True)
class RenderInstruction:
    """What to render, with which parameters, into which artifact.

    Attributes:
        template: One of the `TemplateKind` values
        params: The parameter record for the template
        artifact: File name of the target artifact
    """

    template: str
    params: RenderParams
    artifact: str

    @property
    def starts_artifact(self) -> bool:
        """Whether this instruction opens a new artifact instead of appending to the current one."""
        return self.template in TemplateKind.ARTIFACT_STARTS
