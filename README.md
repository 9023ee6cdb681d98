# schemamodel

`schemamodel` reads JSON Schema documents (draft-04 style, as used to describe
OpenAPI and Discovery formats), resolves their `$ref` and `allOf` elements,
builds a simplified model of the types they describe and writes that model out
as a Protocol Buffer (`.proto`) description.

It also contains a small, predictable JSON writer for YAML node trees.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The `schemamodel-generate` command writes the Protocol Buffer description for
one of the supported schema families:

```
schemamodel-generate --v2         # OpenAPI 2.0
schemamodel-generate --v3         # OpenAPI 3.x
schemamodel-generate --discovery  # Discovery documents
```

Each option reads the schema from its directory under the current directory
(`openapiv2/openapi-2.0.json`, `openapiv3/openapi-3.1.json` or
`discovery/discovery.json`), builds the type model, and writes the `.proto`
file (`OpenAPIv2.proto`, `OpenAPIv3.proto` or `discovery.proto`) back into the
same directory. The type model and progress messages are sent to the
`schemamodel.cli` logger at INFO level.

Run the command with no options to see the usage text. An unknown option, or a
schema that cannot be read, prints a message and exits with status 1.

## Library use

### Reading and resolving schemas

```python
from schemamodel.reader import schema_from_file
from schemamodel.resolve import resolve_refs, resolve_all_ofs

registry = {}
schema = schema_from_file("openapiv2/openapi-2.0.json", registry)
resolve_refs(schema, registry)
resolve_all_ofs(schema)

print(schema.describe())
print(schema.definition_with_name("info").type_is("object"))
```

`schema_from_text` and `schema_from_node` read from text and from parsed nodes;
`base_schema` returns the draft-04 meta-schema. Every schema that carries an
`id` is recorded in the registry dictionary, which `resolve_refs` uses to find
documents named by a pointer; local pointers (`#/definitions/NAME`,
`#/properties/NAME`) are resolved against the schema itself.

`resolve_refs` substitutes referenced schemas in place, except where the
referenced schema is an object, carries `oneOf` or `additionalProperties`, or
the reference sits inside a `oneOf`; such references are kept so that the
referenced schema can be modelled as a type of its own. Pointers that cannot be
resolved are logged and left in place; `resolve_json_pointer` raises
`UnresolvedPointerError` for them. `resolve_any_ofs` turns every `anyOf` into a
`oneOf`.

### Writing schemas back out

```python
from schemamodel.writer import json_string

print(json_string(schema))
```

`schema_to_node` gives the node tree instead, and `render` turns a mapping or
sequence node into text. The `default` member is not written out.

### Building a type model and a .proto file

```python
from schemamodel.domain import Domain
from schemamodel.proto import generate_proto
from schemamodel.cli import proto_options

domain = Domain(schema, "v2")
domain.build()
print(domain.describe())

text = generate_proto(
    domain,
    "openapi.v2",
    "",
    proto_options("openapiv2", "openapi_v2"),
    ["google/protobuf/any.proto"],
)
```

`Domain.build` raises `ValueError` when the schema has no `definitions`
section. Messages appear in sorted order of type name, and map-like properties
are represented by generated `Named...` pair messages that keep the original
key order.

### Writing YAML nodes as JSON

```python
from schemamodel.nodes import parse_yaml
from schemamodel.jsonwriter import marshal

node = parse_yaml("version: 1.0.0\n")
print(marshal(node))
```

`marshal` accepts document, mapping, sequence and scalar nodes and raises
`ValueError` for any other kind of node.

## What it does not do

- Only the `.proto` description is generated. The package does not generate
  parsing, reference-resolving or export code for the messages.
- It does not generate handlers for vendor extensions; `--extension` is
  rejected by the command.
- It validates no documents against a schema; schemas are read and modelled,
  not enforced.