"""Reading JSON Schemas from parsed documents, text and files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from schemamodel.nodes import Kind, Node, parse_yaml
from schemamodel.schema import (
    NamedSchema,
    NamedSchemaOrStringArray,
    Schema,
    SchemaEnumValue,
    SchemaNumber,
    SchemaOrBoolean,
    SchemaOrSchemaArray,
    SchemaOrStringArray,
    StringOrStringArray,
)

logger = logging.getLogger(__name__)

Registry = Optional[dict]

_TRUE_WORDS = frozenset({"1", "t", "true", "y", "yes", "on"})

_BASE_SCHEMA_JSON = """{
    "id": "http://json-schema.org/draft-04/schema#",
    "$schema": "http://json-schema.org/draft-04/schema#",
    "description": "Core schema meta-schema",
    "definitions": {
        "schemaArray": {
            "type": "array",
            "minItems": 1,
            "items": { "$ref": "#" }
        },
        "positiveInteger": {
            "type": "integer",
            "minimum": 0
        },
        "positiveIntegerDefault0": {
            "allOf": [ { "$ref": "#/definitions/positiveInteger" }, { "default": 0 } ]
        },
        "simpleTypes": {
            "enum": [ "array", "boolean", "integer", "null", "number", "object", "string" ]
        },
        "stringArray": {
            "type": "array",
            "items": { "type": "string" },
            "minItems": 1,
            "uniqueItems": true
        }
    },
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "format": "uri"
        },
        "$schema": {
            "type": "string",
            "format": "uri"
        },
        "title": {
            "type": "string"
        },
        "description": {
            "type": "string"
        },
        "default": {},
        "multipleOf": {
            "type": "number",
            "minimum": 0,
            "exclusiveMinimum": true
        },
        "maximum": {
            "type": "number"
        },
        "exclusiveMaximum": {
            "type": "boolean",
            "default": false
        },
        "minimum": {
            "type": "number"
        },
        "exclusiveMinimum": {
            "type": "boolean",
            "default": false
        },
        "maxLength": { "$ref": "#/definitions/positiveInteger" },
        "minLength": { "$ref": "#/definitions/positiveIntegerDefault0" },
        "pattern": {
            "type": "string",
            "format": "regex"
        },
        "additionalItems": {
            "anyOf": [
                { "type": "boolean" },
                { "$ref": "#" }
            ],
            "default": {}
        },
        "items": {
            "anyOf": [
                { "$ref": "#" },
                { "$ref": "#/definitions/schemaArray" }
            ],
            "default": {}
        },
        "maxItems": { "$ref": "#/definitions/positiveInteger" },
        "minItems": { "$ref": "#/definitions/positiveIntegerDefault0" },
        "uniqueItems": {
            "type": "boolean",
            "default": false
        },
        "maxProperties": { "$ref": "#/definitions/positiveInteger" },
        "minProperties": { "$ref": "#/definitions/positiveIntegerDefault0" },
        "required": { "$ref": "#/definitions/stringArray" },
        "additionalProperties": {
            "anyOf": [
                { "type": "boolean" },
                { "$ref": "#" }
            ],
            "default": {}
        },
        "definitions": {
            "type": "object",
            "additionalProperties": { "$ref": "#" },
            "default": {}
        },
        "properties": {
            "type": "object",
            "additionalProperties": { "$ref": "#" },
            "default": {}
        },
        "patternProperties": {
            "type": "object",
            "additionalProperties": { "$ref": "#" },
            "default": {}
        },
        "dependencies": {
            "type": "object",
            "additionalProperties": {
                "anyOf": [
                    { "$ref": "#" },
                    { "$ref": "#/definitions/stringArray" }
                ]
            }
        },
        "enum": {
            "type": "array",
            "minItems": 1,
            "uniqueItems": true
        },
        "type": {
            "anyOf": [
                { "$ref": "#/definitions/simpleTypes" },
                {
                    "type": "array",
                    "items": { "$ref": "#/definitions/simpleTypes" },
                    "minItems": 1,
                    "uniqueItems": true
                }
            ]
        },
        "allOf": { "$ref": "#/definitions/schemaArray" },
        "anyOf": { "$ref": "#/definitions/schemaArray" },
        "oneOf": { "$ref": "#/definitions/schemaArray" },
        "not": { "$ref": "#" }
    },
    "dependencies": {
        "exclusiveMaximum": [ "maximum" ],
        "exclusiveMinimum": [ "minimum" ]
    },
    "default": {}
}
"""


def _unexpected(where: str, node: Node) -> None:
    logger.warning("%s: unexpected node %r", where, node)


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in _TRUE_WORDS


def _parse_int(text: str) -> int:
    try:
        return int(text, 10)
    except ValueError:
        return 0


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _scalar_strings(items: list[Node], where: str) -> list[str]:
    strings = []
    for item in items:
        if item.kind is Kind.SCALAR:
            strings.append(item.value)
        else:
            _unexpected(where, item)
    return strings


def _pairs(node: Node):
    return zip(node.content[0::2], node.content[1::2])


def _string_value(node: Node, _registry: Registry) -> Optional[str]:
    if node.kind is Kind.SCALAR:
        return node.value
    _unexpected("stringValue", node)
    return None


def _number_value(node: Node, _registry: Registry) -> Optional[SchemaNumber]:
    if node.kind is Kind.SCALAR:
        if node.tag == "!!float":
            return SchemaNumber(float=_parse_float(node.value))
        if node.tag == "!!int":
            return SchemaNumber(integer=_parse_int(node.value))
    _unexpected("numberValue", node)
    return None


def _int_value(node: Node, _registry: Registry) -> Optional[int]:
    if node.kind is Kind.SCALAR:
        if node.tag == "!!float":
            return int(_parse_float(node.value))
        if node.tag == "!!int":
            return _parse_int(node.value)
    _unexpected("intValue", node)
    return None


def _bool_value(node: Node, _registry: Registry) -> Optional[bool]:
    if node.kind is Kind.SCALAR and node.tag == "!!bool":
        return _parse_bool(node.value)
    _unexpected("boolValue", node)
    return None


def _map_of_schemas(node: Node, registry: Registry) -> Optional[list[NamedSchema]]:
    if node.kind is not Kind.MAPPING:
        _unexpected("mapOfSchemasValue", node)
        return None
    return [NamedSchema(key.value, schema_from_node(value, registry)) for key, value in _pairs(node)]


def _mapping_schemas(items: list[Node], registry: Registry, where: str) -> list[Schema]:
    schemas = []
    for item in items:
        if item.kind is Kind.MAPPING:
            schemas.append(schema_from_node(item, registry))
        else:
            _unexpected(where, item)
    return schemas


def _array_of_schemas(node: Node, registry: Registry) -> Optional[list[Schema]]:
    if node.kind is Kind.SEQUENCE:
        return _mapping_schemas(node.content, registry, "arrayOfSchemasValue")
    if node.kind is Kind.MAPPING:
        return [schema_from_node(node, registry)]
    _unexpected("arrayOfSchemasValue", node)
    return None


def _schema_or_schema_array(node: Node, registry: Registry) -> Optional[SchemaOrSchemaArray]:
    if node.kind is Kind.SEQUENCE:
        return SchemaOrSchemaArray(
            schema_array=_mapping_schemas(node.content, registry, "schemaOrSchemaArrayValue")
        )
    if node.kind is Kind.MAPPING:
        return SchemaOrSchemaArray(schema=schema_from_node(node, registry))
    _unexpected("schemaOrSchemaArrayValue", node)
    return None


def _array_of_strings(node: Node, _registry: Registry) -> Optional[list[str]]:
    if node.kind is Kind.SCALAR:
        return [node.value]
    if node.kind is Kind.SEQUENCE:
        return _scalar_strings(node.content, "arrayOfStringsValue")
    _unexpected("arrayOfStringsValue", node)
    return None


def _string_or_string_array(node: Node, _registry: Registry) -> Optional[StringOrStringArray]:
    if node.kind is Kind.SCALAR:
        return StringOrStringArray(string=node.value)
    if node.kind is Kind.SEQUENCE:
        return StringOrStringArray(string_array=_scalar_strings(node.content, "stringOrStringArrayValue"))
    _unexpected("stringOrStringArrayValue", node)
    return None


def _enum_values(node: Node, _registry: Registry) -> list[SchemaEnumValue]:
    values: list[SchemaEnumValue] = []
    if node.kind is not Kind.SEQUENCE:
        _unexpected("arrayOfEnumValuesValue", node)
        return values
    for item in node.content:
        if item.kind is not Kind.SCALAR:
            _unexpected("arrayOfEnumValuesValue", item)
        elif item.tag == "!!str":
            values.append(SchemaEnumValue(string=item.value))
        elif item.tag == "!!bool":
            values.append(SchemaEnumValue(bool=_parse_bool(item.value)))
        else:
            logger.warning("arrayOfEnumValuesValue: unexpected type %s", item.tag)
    return values


def _dependencies(node: Node, _registry: Registry) -> list[NamedSchemaOrStringArray]:
    pairs: list[NamedSchemaOrStringArray] = []
    if node.kind is not Kind.MAPPING:
        _unexpected("mapOfSchemasOrStringArraysValue", node)
        return pairs
    for key, value in _pairs(node):
        if value.kind is Kind.SEQUENCE:
            strings = _scalar_strings(value.content, "mapOfSchemasOrStringArraysValue")
            pairs.append(NamedSchemaOrStringArray(key.value, SchemaOrStringArray(string_array=strings)))
        else:
            _unexpected("mapOfSchemasOrStringArraysValue", value)
    return pairs


def _schema_or_boolean(node: Node, registry: Registry) -> SchemaOrBoolean:
    if node.kind is Kind.SCALAR:
        return SchemaOrBoolean(boolean=_parse_bool(node.value))
    if node.kind is Kind.MAPPING:
        return SchemaOrBoolean(schema=schema_from_node(node, registry))
    _unexpected("schemaOrBooleanValue", node)
    return SchemaOrBoolean()


_Reader = Callable[[Node, Registry], object]

# The "default" keyword is kept as the raw node and handled in schema_from_node.
_FIELD_READERS: dict[str, tuple[str, _Reader]] = {
    "$schema": ("schema", _string_value),
    "id": ("id", _string_value),
    "multipleOf": ("multiple_of", _number_value),
    "maximum": ("maximum", _number_value),
    "exclusiveMaximum": ("exclusive_maximum", _bool_value),
    "minimum": ("minimum", _number_value),
    "exclusiveMinimum": ("exclusive_minimum", _bool_value),
    "maxLength": ("max_length", _int_value),
    "minLength": ("min_length", _int_value),
    "pattern": ("pattern", _string_value),
    "additionalItems": ("additional_items", _schema_or_boolean),
    "items": ("items", _schema_or_schema_array),
    "maxItems": ("max_items", _int_value),
    "minItems": ("min_items", _int_value),
    "uniqueItems": ("unique_items", _bool_value),
    "maxProperties": ("max_properties", _int_value),
    "minProperties": ("min_properties", _int_value),
    "required": ("required", _array_of_strings),
    "additionalProperties": ("additional_properties", _schema_or_boolean),
    "properties": ("properties", _map_of_schemas),
    "patternProperties": ("pattern_properties", _map_of_schemas),
    "dependencies": ("dependencies", _dependencies),
    "enum": ("enumeration", _enum_values),
    "type": ("type", _string_or_string_array),
    "allOf": ("all_of", _array_of_schemas),
    "anyOf": ("any_of", _array_of_schemas),
    "oneOf": ("one_of", _array_of_schemas),
    "not": ("not_", lambda node, registry: schema_from_node(node, registry)),
    "definitions": ("definitions", _map_of_schemas),
    "title": ("title", _string_value),
    "description": ("description", _string_value),
    "format": ("format", _string_value),
    "$ref": ("ref", _string_value),
}


def schema_from_node(node: Node, registry: Registry = None) -> Optional[Schema]:
    """Build a schema from a parsed document node.

    Returns None if the node is not a mapping (or a document holding one).
    Every schema with an id is recorded in ``registry`` when one is given.
    """
    if node.kind is Kind.DOCUMENT:
        return schema_from_node(node.content[0], registry) if node.content else None
    if node.kind is not Kind.MAPPING:
        _unexpected("schemaValue", node)
        return None
    schema = Schema()
    for key, value in _pairs(node):
        if key.value == "default":
            schema.default = value
            continue
        reader = _FIELD_READERS.get(key.value)
        if reader is None:
            logger.warning("UNSUPPORTED (%s)", key.value)
            continue
        attribute, build = reader
        setattr(schema, attribute, build(value, registry))
    if schema.id is not None and registry is not None:
        registry[schema.id] = schema
    return schema


def schema_from_text(text: Union[str, bytes], registry: Registry = None) -> Optional[Schema]:
    """Build a schema from JSON or YAML text.

    Raises ``yaml.YAMLError`` if the text cannot be parsed.
    """
    return schema_from_node(parse_yaml(text), registry)


def schema_from_file(path: Union[str, Path], registry: Registry = None) -> Optional[Schema]:
    """Build a schema from a JSON or YAML file."""
    return schema_from_text(Path(path).read_text(encoding="utf-8"), registry)


def base_schema(registry: Registry = None) -> Schema:
    """Return the JSON Schema draft-04 meta-schema."""
    schema = schema_from_text(_BASE_SCHEMA_JSON, registry)
    assert schema is not None
    return schema