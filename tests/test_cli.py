"""CLI tests for falafel.

Tests cover:
- Argument parsing
- Reading requests from a file and from stdin
- Writing files and protoc responses
- Error reporting
- gofmt fallbacks
"""

from __future__ import annotations

import argparse
import io
import subprocess
import sys

import pytest
from conftest import LIGHTNING_PARAMETER, new_method, new_proto_file, new_request
from google.protobuf.compiler import plugin_pb2

from falafel import run as run_module
from falafel.cli import main, setup_parser
from falafel.errors import SchemaError


@pytest.fixture
def request_file(tmp_path, lightning_proto):
    """A serialized request for the lightning proto."""
    path = tmp_path / "request.bin"
    path.write_bytes(new_request([lightning_proto], LIGHTNING_PARAMETER).SerializeToString())
    return path


class TestArgumentParsing:
    """Test argument parsing and validation."""

    def test_parser_setup(self):
        parser = setup_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.description is not None

    def test_default_arguments(self):
        args = setup_parser().parse_args([])

        assert args.request == ""
        assert args.parameter is None
        assert args.output_dir == "."
        assert args.response is False
        assert args.skip_format is False

    @pytest.mark.parametrize("flag", ["-v", "--version"])
    def test_version(self, flag, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([flag])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "0.9.1"


class TestMain:
    """Test complete runs."""

    def test_writes_files(self, tmp_path, request_file):
        output_dir = tmp_path / "out"

        assert main(["--request", str(request_file), "-o", str(output_dir), "--no-format"]) == 0

        assert sorted(path.name for path in output_dir.iterdir()) == ["lightning_api_generated.go"]

    def test_parameter_override(self, tmp_path, request_file):
        output_dir = tmp_path / "out"

        exit_code = main(
            [
                "--request",
                str(request_file),
                "--parameter",
                "package_name=lnrpc,js_stubs=1,listeners=lightning=lightningLis,mem_rpc=1",
                "-o",
                str(output_dir),
                "--no-format",
            ]
        )

        assert exit_code == 0
        assert sorted(path.name for path in output_dir.iterdir()) == [
            "lightning.pb.json.go",
            "listeners_generated.go",
            "memrpc_generated.go",
        ]

    def test_configuration_error(self, tmp_path, request_file, caplog):
        exit_code = main(["--request", str(request_file), "--parameter", "", "-o", str(tmp_path), "--no-format"])

        assert exit_code == 1
        assert "package_name" in caplog.text

    def test_unsupported_streaming(self, tmp_path):
        proto_file = new_proto_file(
            "upload.proto", "lnrpc", {"Uploader": [new_method("Upload", ".lnrpc.Chunk", client_streaming=True)]}
        )
        path = tmp_path / "request.bin"
        parameter = "package_name=p,target_package=t,defaultlistener=l"
        path.write_bytes(new_request([proto_file], parameter).SerializeToString())

        assert main(["--request", str(path), "-o", str(tmp_path / "out"), "--no-format"]) == 1

    def test_stdin_and_response(self, monkeypatch, capsysbinary, request_file):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(request_file.read_bytes())))

        assert main(["--response", "--no-format"]) == 0

        response = plugin_pb2.CodeGeneratorResponse()
        response.ParseFromString(capsysbinary.readouterr().out)
        assert [response_file.name for response_file in response.file] == ["lightning_api_generated.go"]
        assert "func GetInfo(" in response.file[0].content


class TestReadRequest:
    """Test decoding the request."""

    def test_empty_payload(self):
        request = run_module.read_request(io.BytesIO(b""))

        assert list(request.file_to_generate) == []

    def test_invalid_payload(self):
        with pytest.raises(SchemaError):
            run_module.read_request(io.BytesIO(b"\xff\xff\xff"))


class TestFormatOutputs:
    """gofmt is optional; its absence or failure keeps the raw output."""

    def test_gofmt_missing(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("gofmt")

        monkeypatch.setattr(run_module.subprocess, "run", missing)

        assert run_module.format_outputs("package p\n") == "package p\n"

    def test_gofmt_failure(self, monkeypatch):
        def failing(*args, **kwargs):
            raise subprocess.CalledProcessError(2, ["gofmt"], stderr="syntax error")

        monkeypatch.setattr(run_module.subprocess, "run", failing)

        assert run_module.format_outputs("package p\nfunc {") == "package p\nfunc {"

    def test_gofmt_output_is_used(self, monkeypatch):
        def formatted(*args, **kwargs):
            return subprocess.CompletedProcess(args[0], 0, stdout="package p\n")

        monkeypatch.setattr(run_module.subprocess, "run", formatted)

        assert run_module.format_outputs("package   p\n") == "package p\n"
