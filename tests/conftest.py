"""Pytest configuration and fixtures for falafel tests."""

from __future__ import annotations

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from falafel.schema import CommentLocation, MethodSchema, SchemaFile, ServiceSchema

LIGHTNING_PARAMETER = "package_name=lndmobile,target_package=github.com/x/lnrpc,listeners=lightning=lightningLis"

GET_INFO_COMMENT = " lncli: `getinfo`\nGetInfo returns general information concerning the lightning node.\n"


def new_method(
    name: str,
    input_type: str,
    client_streaming: bool = False,
    server_streaming: bool = False,
) -> descriptor_pb2.MethodDescriptorProto:
    """Create a method descriptor."""
    return descriptor_pb2.MethodDescriptorProto(
        name=name,
        input_type=input_type,
        output_type=input_type.replace("Request", "Response"),
        client_streaming=client_streaming,
        server_streaming=server_streaming,
    )


def new_proto_file(
    name: str,
    package: str,
    services: dict[str, list[descriptor_pb2.MethodDescriptorProto]],
    comments: dict[tuple[int, ...], str] | None = None,
) -> descriptor_pb2.FileDescriptorProto:
    """Create a file descriptor with services and leading comments by source code path."""
    proto_file = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    for service_name, methods in services.items():
        service = proto_file.service.add(name=service_name)
        service.method.extend(methods)

    for path, text in (comments or {}).items():
        location = proto_file.source_code_info.location.add()
        location.path.extend(path)
        location.leading_comments = text

    return proto_file


def new_request(
    proto_files: list[descriptor_pb2.FileDescriptorProto],
    parameter: str = "",
    file_to_generate: list[str] | None = None,
) -> plugin_pb2.CodeGeneratorRequest:
    """Create a code generator request for the given files."""
    request = plugin_pb2.CodeGeneratorRequest(parameter=parameter)
    request.proto_file.extend(proto_files)
    if file_to_generate is None:
        file_to_generate = [proto_file.name for proto_file in proto_files]
    request.file_to_generate.extend(file_to_generate)
    return request


@pytest.fixture
def lightning_proto() -> descriptor_pb2.FileDescriptorProto:
    """A proto file with a unary and a server-streaming method."""
    return new_proto_file(
        "lightning.proto",
        "lnrpc",
        {
            "Lightning": [
                new_method("GetInfo", ".lnrpc.GetInfoRequest"),
                new_method("SubscribeX", ".lnrpc.SubscribeXRequest", server_streaming=True),
            ]
        },
        comments={
            (6, 0): " The lightning service.\n",
            (6, 0, 2, 0): GET_INFO_COMMENT,
        },
    )


@pytest.fixture
def lightning_schema() -> SchemaFile:
    """The schema of `lightning_proto`, built directly."""
    return SchemaFile(
        name="lightning.proto",
        package="lnrpc",
        services=(
            ServiceSchema(
                name="Lightning",
                methods=(
                    MethodSchema("GetInfo", ".lnrpc.GetInfoRequest"),
                    MethodSchema("SubscribeX", ".lnrpc.SubscribeXRequest", server_streaming=True),
                ),
            ),
        ),
        comments=(CommentLocation((6, 0, 2, 0), GET_INFO_COMMENT),),
    )


@pytest.fixture
def all_shapes_schema() -> SchemaFile:
    """A schema with one method of every streaming shape, including the unsupported one."""
    return SchemaFile(
        name="shapes.proto",
        package="lnrpc",
        services=(
            ServiceSchema(
                name="Shapes",
                methods=(
                    MethodSchema("Unary", ".lnrpc.UnaryRequest"),
                    MethodSchema("Read", ".lnrpc.ReadRequest", server_streaming=True),
                    MethodSchema("Both", ".lnrpc.BothRequest", client_streaming=True, server_streaming=True),
                    MethodSchema("Upload", ".lnrpc.UploadRequest", client_streaming=True),
                ),
            ),
        ),
    )
