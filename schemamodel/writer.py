"""Conversion of schemas to document nodes and rendering of nodes as JSON text."""

from __future__ import annotations

from typing import Optional

from schemamodel.nodes import (
    Kind,
    Node,
    node_for_boolean,
    node_for_float,
    node_for_int,
    node_for_mapping,
    node_for_sequence,
    node_for_string,
)
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

_INDENTATION = "  "

_ID_KEY_SCHEMAS = ("http://json-schema.org/draft-04/schema", "#", "")


# --- rendering ----------------------------------------------------------------


def _render_scalar(node: Node) -> str:
    if node.tag == "!!bool":
        return node.value
    return '"' + node.value + '"'


def _render_mapping(node: Node, indent: str) -> str:
    inner = indent + _INDENTATION
    pairs = list(zip(node.content[0::2], node.content[1::2]))
    parts = ["{\n"]
    for position, (key, value) in enumerate(pairs):
        parts.append(f'{inner}"{key.value}": ')
        if value.kind is Kind.SCALAR:
            parts.append(_render_scalar(value))
        elif value.kind is Kind.MAPPING:
            parts.append(_render_mapping(value, inner))
        elif value.kind is Kind.SEQUENCE:
            parts.append(_render_sequence(value, inner))
        else:
            parts.append(f"???MapItem(Key:{value!r}, Value:Node)")
        if position < len(pairs) - 1:
            parts.append(",")
        parts.append("\n")
    parts.append(indent + "}")
    return "".join(parts)


def _render_sequence(node: Node, indent: str) -> str:
    inner = indent + _INDENTATION
    last = len(node.content) - 1
    parts = ["[\n"]
    for position, item in enumerate(node.content):
        if item.kind is Kind.SCALAR:
            parts.append(inner + _render_scalar(item))
        elif item.kind is Kind.MAPPING:
            parts.append(inner + _render_mapping(item, inner))
        else:
            parts.append(inner + f"???ArrayItem({item!r})")
        if position < last:
            parts.append(",")
        parts.append("\n")
    parts.append(indent + "]")
    return "".join(parts)


def render(node: Node) -> str:
    """Render a mapping or sequence node (or a document holding one) as JSON text.

    Every scalar except a boolean is written as a quoted string. Returns an
    empty string for nodes that cannot be rendered.
    """
    if node.kind is Kind.DOCUMENT:
        if len(node.content) == 1:
            return render(node.content[0])
    elif node.kind is Kind.MAPPING:
        return _render_mapping(node, "") + "\n"
    elif node.kind is Kind.SEQUENCE:
        return _render_sequence(node, "") + "\n"
    return ""


# --- schema to node -------------------------------------------------------------


def _number_node(number: SchemaNumber) -> Optional[Node]:
    if number.integer is not None:
        return node_for_int(number.integer)
    if number.float is not None:
        return node_for_float(number.float)
    return None


def _schema_or_boolean_node(value: SchemaOrBoolean) -> Optional[Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.boolean is not None:
        return node_for_boolean(value.boolean)
    return None


def _string_array_node(strings: list[str]) -> Node:
    return node_for_sequence([node_for_string(text) for text in strings])


def _schema_array_node(schemas: list[Schema]) -> Node:
    return node_for_sequence([schema_to_node(member) for member in schemas])


def _string_or_string_array_node(value: StringOrStringArray) -> Optional[Node]:
    if value.string is not None:
        return node_for_string(value.string)
    if value.string_array is not None:
        return _string_array_node(value.string_array)
    return None


def _schema_or_string_array_node(value: SchemaOrStringArray) -> Optional[Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.string_array is not None:
        return _string_array_node(value.string_array)
    return None


def _schema_or_schema_array_node(value: SchemaOrSchemaArray) -> Optional[Node]:
    if value.schema is not None:
        return schema_to_node(value.schema)
    if value.schema_array is not None:
        return _schema_array_node(value.schema_array)
    return None


def _enum_value_node(value: SchemaEnumValue) -> Optional[Node]:
    if value.string is not None:
        return node_for_string(value.string)
    if value.bool is not None:
        return node_for_boolean(value.bool)
    return None


def _named_schemas_node(pairs: list[NamedSchema]) -> Node:
    content: list[Node] = []
    for pair in pairs:
        _append_pair(content, pair.name, schema_to_node(pair.value))
    return node_for_mapping(content)


def _named_dependencies_node(pairs: list[NamedSchemaOrStringArray]) -> Node:
    content: list[Node] = []
    for pair in pairs:
        _append_pair(content, pair.name, _schema_or_string_array_node(pair.value))
    return node_for_mapping(content)


def _enum_array_node(values: list[SchemaEnumValue]) -> Node:
    items = [_enum_value_node(value) for value in values]
    return node_for_sequence([item for item in items if item is not None])


def _append_pair(content: list[Node], name: str, value: Optional[Node]) -> None:
    if value is None:
        return
    content.append(node_for_string(name))
    content.append(value)


def schema_to_node(schema: Schema) -> Node:
    """Return a mapping node describing the schema.

    Keys are written in a fixed order; the ``default`` member is not written.
    """
    content: list[Node] = []
    add = lambda name, value: _append_pair(content, name, value)  # noqa: E731

    if schema.title is not None:
        add("title", node_for_string(schema.title))
    if schema.id is not None:
        trimmed = (schema.schema or "").removesuffix("#")
        key = "id" if trimmed in _ID_KEY_SCHEMAS else "$id"
        add(key, node_for_string(schema.id))
    if schema.schema is not None:
        add("$schema", node_for_string(schema.schema))
    if schema.read_only:
        add("readOnly", node_for_boolean(True))
    if schema.write_only:
        add("writeOnly", node_for_boolean(True))
    if schema.type is not None:
        add("type", _string_or_string_array_node(schema.type))
    if schema.items is not None:
        add("items", _schema_or_schema_array_node(schema.items))
    if schema.description is not None:
        add("description", node_for_string(schema.description))
    if schema.required is not None:
        add("required", _string_array_node(schema.required))
    if schema.additional_properties is not None:
        add("additionalProperties", _schema_or_boolean_node(schema.additional_properties))
    if schema.pattern_properties is not None:
        add("patternProperties", _named_schemas_node(schema.pattern_properties))
    if schema.properties is not None:
        add("properties", _named_schemas_node(schema.properties))
    if schema.dependencies is not None:
        add("dependencies", _named_dependencies_node(schema.dependencies))
    if schema.ref is not None:
        add("$ref", node_for_string(schema.ref))
    if schema.multiple_of is not None:
        add("multipleOf", _number_node(schema.multiple_of))
    if schema.maximum is not None:
        add("maximum", _number_node(schema.maximum))
    if schema.exclusive_maximum is not None:
        add("exclusiveMaximum", node_for_boolean(schema.exclusive_maximum))
    if schema.minimum is not None:
        add("minimum", _number_node(schema.minimum))
    if schema.exclusive_minimum is not None:
        add("exclusiveMinimum", node_for_boolean(schema.exclusive_minimum))
    if schema.max_length is not None:
        add("maxLength", node_for_int(schema.max_length))
    if schema.min_length is not None:
        add("minLength", node_for_int(schema.min_length))
    if schema.pattern is not None:
        add("pattern", node_for_string(schema.pattern))
    if schema.additional_items is not None:
        add("additionalItems", _schema_or_boolean_node(schema.additional_items))
    if schema.max_items is not None:
        add("maxItems", node_for_int(schema.max_items))
    if schema.min_items is not None:
        add("minItems", node_for_int(schema.min_items))
    if schema.unique_items is not None:
        add("uniqueItems", node_for_boolean(schema.unique_items))
    if schema.max_properties is not None:
        add("maxProperties", node_for_int(schema.max_properties))
    if schema.min_properties is not None:
        add("minProperties", node_for_int(schema.min_properties))
    if schema.enumeration is not None:
        add("enum", _enum_array_node(schema.enumeration))
    if schema.all_of is not None:
        add("allOf", _schema_array_node(schema.all_of))
    if schema.any_of is not None:
        add("anyOf", _schema_array_node(schema.any_of))
    if schema.one_of is not None:
        add("oneOf", _schema_array_node(schema.one_of))
    if schema.not_ is not None:
        add("not", schema_to_node(schema.not_))
    if schema.definitions is not None:
        add("definitions", _named_schemas_node(schema.definitions))
    if schema.format is not None:
        add("format", node_for_string(schema.format))
    return node_for_mapping(content)


def json_string(schema: Schema) -> str:
    """Return a JSON representation of the schema."""
    return render(schema_to_node(schema))