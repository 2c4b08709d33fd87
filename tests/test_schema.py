"""Tests for loading schema files from a code generator request."""

from __future__ import annotations

import pytest
from conftest import GET_INFO_COMMENT, new_method, new_proto_file, new_request

from falafel.errors import SchemaError
from falafel.schema import CommentLocation, MethodSchema, ServiceSchema, load_file, load_schema_files


class TestLoadFile:
    """Test converting a file descriptor."""

    def test_services_and_methods(self, lightning_proto):
        schema_file = load_file(lightning_proto)

        assert schema_file.name == "lightning.proto"
        assert schema_file.package == "lnrpc"
        assert [service.name for service in schema_file.services] == ["Lightning"]

        get_info, subscribe = schema_file.services[0].methods
        assert get_info == MethodSchema("GetInfo", ".lnrpc.GetInfoRequest")
        assert subscribe.server_streaming is True
        assert subscribe.client_streaming is False

    def test_only_method_comments_are_kept(self, lightning_proto):
        schema_file = load_file(lightning_proto)

        assert schema_file.comments == (CommentLocation((6, 0, 2, 0), GET_INFO_COMMENT),)

    def test_file_without_services(self):
        schema_file = load_file(new_proto_file("empty.proto", "lnrpc", {}))

        assert schema_file.services == ()
        assert schema_file.comments == ()


class TestLoadSchemaFiles:
    """Test selecting the files to generate."""

    def test_requested_order(self):
        a = new_proto_file("a.proto", "a", {"A": [new_method("Do", ".a.DoRequest")]})
        b = new_proto_file("b.proto", "b", {"B": [new_method("Do", ".b.DoRequest")]})

        schema_files = load_schema_files(new_request([a, b], file_to_generate=["b.proto", "a.proto"]))

        assert [schema_file.name for schema_file in schema_files] == ["b.proto", "a.proto"]

    def test_dependencies_are_not_generated(self, lightning_proto):
        dependency = new_proto_file("google/api/annotations.proto", "google.api", {})

        schema_files = load_schema_files(
            new_request([dependency, lightning_proto], file_to_generate=["lightning.proto"])
        )

        assert [schema_file.name for schema_file in schema_files] == ["lightning.proto"]

    def test_unknown_file(self, lightning_proto):
        with pytest.raises(SchemaError, match="missing.proto"):
            load_schema_files(new_request([lightning_proto], file_to_generate=["missing.proto"]))


class TestSchemaTypes:
    """Test derived properties of the schema records."""

    def test_service_key(self):
        assert ServiceSchema("WalletUnlocker").key == "walletunlocker"

    def test_empty_service_name(self):
        with pytest.raises(SchemaError):
            ServiceSchema("")

    def test_request_type(self):
        assert MethodSchema("GetInfo", ".lnrpc.GetInfoRequest").request_type == "lnrpc.GetInfoRequest"

    def test_method_location(self):
        assert CommentLocation((6, 1, 2, 3), "x").is_method
        assert not CommentLocation((6, 1), "x").is_method
        assert not CommentLocation((4, 0, 2, 0), "x").is_method
