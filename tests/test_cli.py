import json

import pytest

from schemamodel.cli import generate_openapi_model, main, proto_options, usage

_SCHEMA = {
    "type": "object",
    "required": ["swagger"],
    "properties": {
        "swagger": {"type": "string"},
        "info": {"$ref": "#/definitions/info"},
    },
    "definitions": {
        "info": {
            "type": "object",
            "properties": {"title": {"type": "string"}, "count": {"type": "integer"}},
        }
    },
}


def _write_schema(root, directory="openapiv2", name="openapi-2.0.json", schema=_SCHEMA):
    folder = root / directory
    folder.mkdir(parents=True, exist_ok=True)
    (folder / name).write_text(json.dumps(schema), encoding="utf-8")


def _option(options, name):
    return next(option for option in options if option.name == name)


def test_proto_options_values():
    options = proto_options("openapiv2", "openapi_v2")
    assert [option.name for option in options] == [
        "java_multiple_files",
        "java_outer_classname",
        "java_package",
        "objc_class_prefix",
        "go_package",
    ]
    assert _option(options, "java_package").value == "org.openapi_v2"
    assert _option(options, "go_package").value == "./openapiv2;openapi_v2"
    assert _option(options, "objc_class_prefix").value == "OAS"
    assert _option(options, "java_outer_classname").value == "OpenAPIProto"


def test_usage_names_program_and_options():
    text = usage("tool-name")
    assert "Usage: tool-name [OPTIONS]" in text
    assert "--v2" in text
    assert "--v3" in text


def test_unknown_version_raises(tmp_path):
    with pytest.raises(ValueError):
        generate_openapi_model("v9", tmp_path)


def test_missing_schema_file_raises(tmp_path):
    with pytest.raises(OSError):
        generate_openapi_model("v2", tmp_path)


def test_schema_without_definitions_raises(tmp_path):
    _write_schema(tmp_path, schema={"type": "object", "properties": {"a": {"type": "string"}}})
    with pytest.raises(ValueError):
        generate_openapi_model("v2", tmp_path)


def test_generate_v2_writes_proto(tmp_path):
    _write_schema(tmp_path)
    output = generate_openapi_model("v2", tmp_path)
    assert output == tmp_path / "openapiv2" / "OpenAPIv2.proto"
    lines = [line.strip() for line in output.read_text(encoding="utf-8").split("\n")]
    assert "package openapi.v2;" in lines
    assert 'import "google/protobuf/any.proto";' in lines
    assert 'option go_package = "./openapiv2;openapi_v2";' in lines
    assert "message Document {" in lines
    assert "message Info {" in lines
    assert "message StringArray {" in lines
    assert "message Any {" in lines
    assert "int64 count = 2;" in lines


def test_generate_v3_uses_its_own_names(tmp_path):
    _write_schema(tmp_path, directory="openapiv3", name="openapi-3.1.json")
    output = generate_openapi_model("v3", tmp_path)
    assert output.name == "OpenAPIv3.proto"
    assert "package openapi.v3;" in output.read_text(encoding="utf-8").split("\n")


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_main_rejects_unknown_option(capsys):
    assert main(["--bogus"]) == 1
    assert "Unknown option: --bogus." in capsys.readouterr().out


def test_main_generates_in_current_directory(tmp_path, monkeypatch):
    _write_schema(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--v2"]) == 0
    assert (tmp_path / "openapiv2" / "OpenAPIv2.proto").exists()


def test_main_reports_missing_schema(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--discovery"]) == 1
    assert "discovery.json" in capsys.readouterr().out