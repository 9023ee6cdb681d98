"""Command that generates Protocol Buffer models from OpenAPI JSON Schemas."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from schemamodel.domain import Domain
from schemamodel.proto import ProtoOption, generate_proto
from schemamodel.reader import base_schema, schema_from_file
from schemamodel.resolve import resolve_all_ofs, resolve_refs

logger = logging.getLogger(__name__)

HEADER = ""


@dataclass(frozen=True)
class _ModelSource:
    input: str
    filename: str
    proto_package: str
    directory: str
    type_name_overrides: dict
    property_name_overrides: dict


_PROPERTY_OVERRIDES = {"PathItem": "Path", "ResponseValue": "ResponseCode"}

_MODEL_SOURCES = {
    "v2": _ModelSource(
        "openapi-2.0.json", "OpenAPIv2", "openapi.v2", "openapiv2",
        {"VendorExtension": "Any"}, _PROPERTY_OVERRIDES,
    ),
    "v3": _ModelSource(
        "openapi-3.1.json", "OpenAPIv3", "openapi.v3", "openapiv3",
        {"SpecificationExtension": "Any"}, _PROPERTY_OVERRIDES,
    ),
    "discovery": _ModelSource(
        "discovery.json", "discovery", "discovery.v1", "discovery", {}, {},
    ),
}

_VERSION_FLAGS = {"--v2": "v2", "--v3": "v3", "--discovery": "discovery"}


def proto_options(directory_name: str, package_name: str) -> list[ProtoOption]:
    """Return the option declarations written into generated .proto files."""
    return [
        ProtoOption(
            "java_multiple_files",
            "true",
            "// This option lets the proto compiler generate Java code inside the package\n"
            "// name (see below) instead of inside an outer class. It creates a simpler\n"
            "// developer experience by reducing one-level of name nesting and be\n"
            "// consistent with most programming languages that don't support outer classes.",
        ),
        ProtoOption(
            "java_outer_classname",
            "OpenAPIProto",
            "// The Java outer classname should be the filename in UpperCamelCase. This\n"
            "// class is only used to hold proto descriptor, so developers don't need to\n"
            "// work with it directly.",
        ),
        ProtoOption(
            "java_package",
            "org." + package_name,
            "// The Java package name must be proto package name with proper prefix.",
        ),
        ProtoOption(
            "objc_class_prefix",
            "OAS",
            "// A reasonable prefix for the Objective-C symbols generated from the package.\n"
            "// It should at a minimum be 3 characters long, all uppercase, and convention\n"
            "// is to use an abbreviation of the package name. Something short, but\n"
            "// hopefully unique enough to not conflict with things that may come along in\n"
            "// the future. 'GPB' is reserved for the protocol buffer implementation itself.",
        ),
        ProtoOption(
            "go_package",
            f"./{directory_name};{package_name}",
            "// The Go package name.",
        ),
    ]


def generate_openapi_model(version: str, project_root: Union[str, Path] = ".") -> Path:
    """Read the schema for a model version and write its .proto description.

    Returns the path of the written file. Raises ``ValueError`` for an unknown
    version or a schema without definitions, and ``OSError`` if the schema
    cannot be read or the output cannot be written.
    """
    source = _MODEL_SOURCES.get(version)
    if source is None:
        raise ValueError(f"Unknown OpenAPI version {version}")
    root = Path(project_root)
    package_name = source.proto_package.replace(".", "_")

    registry: dict = {}
    meta_schema = base_schema(registry)
    resolve_refs(meta_schema, registry)
    resolve_all_ofs(meta_schema)

    schema = schema_from_file(root / source.directory / source.input, registry)
    if schema is None:
        raise ValueError(f"{source.input} does not hold a schema")
    resolve_refs(schema, registry)
    resolve_all_ofs(schema)

    domain = Domain(schema=schema, version=version)
    domain.type_name_overrides = dict(source.type_name_overrides)
    domain.property_name_overrides = dict(source.property_name_overrides)
    domain.build()
    logger.info("Type Model:\n%s", domain.describe())

    directory = root / source.directory
    directory.mkdir(parents=True, exist_ok=True)

    logger.info("Generating protocol buffer description")
    text = generate_proto(
        domain,
        source.proto_package,
        HEADER,
        proto_options(source.directory, package_name),
        ["google/protobuf/any.proto"],
    )
    output = directory / f"{source.filename}.proto"
    output.write_text(text, encoding="utf-8")
    return output


def usage(program: str = "generate") -> str:
    """Return the usage text of the command."""
    return f"""
Usage: {program} [OPTIONS]
Options:
  --v2
    Generate Protocol Buffer representation for OpenAPI v2.
    Files are read from and written to appropriate locations in the
    project directory.
  --v3
    Generate Protocol Buffer representation for OpenAPI v3.
    Files are read from and written to appropriate locations in the
    project directory.
  --discovery
    Generate Protocol Buffer representation for the Discovery format.
"""


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "generate"
    args = list(sys.argv[1:] if argv is None else argv)

    version = ""
    for arg in args:
        if arg in _VERSION_FLAGS:
            version = _VERSION_FLAGS[arg]
        elif arg == "--extension":
            print(f"Extension generation is not supported.\n{usage(program)}")
            return 1
        else:
            print(f"Unknown option: {arg}.\n{usage(program)}")
            return 1

    if not version:
        print(usage(program))
        return 0
    try:
        generate_openapi_model(version, ".")
    except (OSError, ValueError) as error:
        print(error)
        return 1
    return 0