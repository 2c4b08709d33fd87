"""Generate mobile and JSON gRPC stubs for protobuf services."""

TOOL_NAME = "falafel"
VERSION = "0.9.1"
VERSION_STRING = f"{TOOL_NAME} {VERSION}"
