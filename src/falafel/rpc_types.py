"""Type definitions that are common to gRPC service generation."""

from __future__ import annotations

from typing import Literal

MEM_RPC_ARTIFACT = "memrpc_generated.go"
LISTENERS_ARTIFACT = "listeners_generated.go"


class StreamingKind:
    """Shapes of RPC methods, derived from the two streaming flags of a method."""

    UNARY = "unary"
    SERVER_STREAM = "server_stream"
    BIDI_STREAM = "bidi_stream"
    UNSUPPORTED = "unsupported"


class TemplateKind:
    """Templates that the writer knows how to render."""

    HEADER = "header"
    SERVICE = "service"
    SYNC = "sync"
    READ_STREAM = "read_stream"
    BI_STREAM = "bi_stream"
    JS_SERVICE = "js_service"
    MEM_RPC = "mem_rpc"
    LISTENERS = "listeners"

    # Kinds that begin a new artifact. All other kinds append to the open one.
    ARTIFACT_STARTS = frozenset({HEADER, JS_SERVICE, MEM_RPC, LISTENERS})


StreamingKindType = Literal["unary", "server_stream", "bidi_stream", "unsupported"]

STREAMING_KIND_TO_TEMPLATE = {
    StreamingKind.UNARY: TemplateKind.SYNC,
    StreamingKind.SERVER_STREAM: TemplateKind.READ_STREAM,
    StreamingKind.BIDI_STREAM: TemplateKind.BI_STREAM,
}


def classify_streaming(client_streaming: bool, server_streaming: bool) -> StreamingKindType:
    """Map the streaming flags of a method to its RPC shape.

    Client-only streaming has no generated counterpart and is reported as `StreamingKind.UNSUPPORTED`;
    it is up to the caller to decide whether that is fatal.

    Args:
        client_streaming (bool): Whether the client sends a stream of requests.
        server_streaming (bool): Whether the server sends a stream of responses.

    Returns:
        StreamingKindType: The shape of the method.
    """
    if not client_streaming and not server_streaming:
        return StreamingKind.UNARY

    if not client_streaming and server_streaming:
        return StreamingKind.SERVER_STREAM

    if client_streaming and server_streaming:
        return StreamingKind.BIDI_STREAM

    return StreamingKind.UNSUPPORTED


def native_artifact_name(service_key: str) -> str:
    """The file that holds the mobile stubs of a service, e.g. `lightning_api_generated.go`."""
    return f"{service_key}_api_generated.go"


def js_artifact_name(service_key: str) -> str:
    """The file that holds the JSON stubs of a service, e.g. `lightning.pb.json.go`."""
    return f"{service_key}.pb.json.go"
