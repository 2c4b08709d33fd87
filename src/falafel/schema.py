"""Immutable view of the services described by a protoc code generator request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from falafel.errors import SchemaError
from falafel.helper import strip_leading_dot

logger = logging.getLogger(__name__)

# Field numbers used in SourceCodeInfo.Location paths.
FILE_SERVICE_FIELD = 6
SERVICE_METHOD_FIELD = 2


@dataclass(frozen=True)
class MethodSchema:
    """A single RPC method of a service."""

    name: str
    input_type: str
    client_streaming: bool = False
    server_streaming: bool = False

    @property
    def request_type(self) -> str:
        """The input type without the leading dot, e.g. `lnrpc.GetInfoRequest`."""
        return strip_leading_dot(self.input_type)


@dataclass(frozen=True)
class ServiceSchema:
    """A gRPC service and its methods, in declaration order."""

    name: str
    methods: tuple[MethodSchema, ...] = ()

    def __post_init__(self):
        """Sanity check for the service name."""
        if not self.name:
            raise SchemaError("Service name must not be empty.")

    @property
    def key(self) -> str:
        """The lower-cased name, used for listener lookup and file naming."""
        return self.name.lower()


@dataclass(frozen=True)
class CommentLocation:
    """Leading comments attached to a declaration of the schema."""

    path: tuple[int, ...]
    leading_comments: str

    @property
    def is_method(self) -> bool:
        """Whether the location points at an RPC method declaration."""
        return (
            len(self.path) == 4 and self.path[0] == FILE_SERVICE_FIELD and self.path[2] == SERVICE_METHOD_FIELD
        )


@dataclass(frozen=True)
class SchemaFile:
    """A proto file with the services it defines."""

    name: str
    package: str = ""
    services: tuple[ServiceSchema, ...] = ()
    comments: tuple[CommentLocation, ...] = field(default=(), repr=False)


def _load_method(method: descriptor_pb2.MethodDescriptorProto) -> MethodSchema:
    return MethodSchema(
        name=method.name,
        input_type=method.input_type,
        client_streaming=method.client_streaming,
        server_streaming=method.server_streaming,
    )


def load_file(proto_file: descriptor_pb2.FileDescriptorProto) -> SchemaFile:
    """Convert a file descriptor into a `SchemaFile`.

    Only comments that are attached to RPC methods are kept.

    Args:
        proto_file (descriptor_pb2.FileDescriptorProto): The descriptor of the proto file.

    Returns:
        SchemaFile: The schema of the file.
    """
    services = tuple(
        ServiceSchema(
            name=service.name,
            methods=tuple(_load_method(method) for method in service.method),
        )
        for service in proto_file.service
    )

    comments = []
    for location in proto_file.source_code_info.location:
        if not location.HasField("leading_comments"):
            continue

        comment = CommentLocation(path=tuple(location.path), leading_comments=location.leading_comments)
        if comment.is_method:
            comments.append(comment)

    return SchemaFile(
        name=proto_file.name,
        package=proto_file.package,
        services=services,
        comments=tuple(comments),
    )


def load_schema_files(request: plugin_pb2.CodeGeneratorRequest) -> list[SchemaFile]:
    """Load the files protoc asked to generate, in the requested order.

    Args:
        request (plugin_pb2.CodeGeneratorRequest): The request read from protoc.

    Raises:
        SchemaError: If a file to generate is missing from the request.

    Returns:
        list[SchemaFile]: The schema files to generate stubs for.
    """
    proto_files = {proto_file.name: proto_file for proto_file in request.proto_file}

    schema_files = []
    for file_name in request.file_to_generate:
        proto_file = proto_files.get(file_name)
        if proto_file is None:
            raise SchemaError(f"could not find file named {file_name}")

        schema_file = load_file(proto_file)
        logger.debug("Loaded '%s' with %d service(s).", file_name, len(schema_file.services))
        schema_files.append(schema_file)

    return schema_files
