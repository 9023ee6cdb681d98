"""An in-memory model of JSON Schemas, with display and tree operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Optional

from schemamodel.nodes import Kind, Node

OFFICIAL_SCHEMA_PROPERTIES_PREFIX = "http://json-schema.org/draft-04/schema#/properties/"

_ID_KEY_SCHEMAS = ("http://json-schema.org/draft-04/schema#", "#", "")


def _go_float(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _node_text(node: Node) -> str:
    if node.kind is Kind.DOCUMENT:
        return _node_text(node.content[0]) if node.content else ""
    if node.kind is Kind.SCALAR:
        return node.value
    if node.kind is Kind.SEQUENCE:
        return "[" + ", ".join(_node_text(item) for item in node.content) + "]"
    if node.kind is Kind.MAPPING:
        pairs = zip(node.content[0::2], node.content[1::2])
        return "{" + ", ".join(f"{_node_text(k)}: {_node_text(v)}" for k, v in pairs) + "}"
    return ""


@dataclass
class SchemaNumber:
    """A number that is either an integer or a float."""

    integer: Optional[int] = None
    float: Optional[float] = None

    def __str__(self) -> str:
        if self.integer is not None:
            return str(self.integer)
        if self.float is not None:
            return _go_float(self.float)
        return ""


@dataclass
class SchemaOrBoolean:
    """A value that is either a schema or a boolean."""

    schema: Optional[Schema] = None
    boolean: Optional[bool] = None


@dataclass
class StringOrStringArray:
    """A value that is either a string or a list of strings."""

    string: Optional[str] = None
    string_array: Optional[list[str]] = None

    def description(self) -> str:
        """Return the string, or the strings joined by commas."""
        if self.string is not None:
            return self.string
        if self.string_array is not None:
            return ", ".join(self.string_array)
        return ""


@dataclass
class SchemaOrStringArray:
    """A value that is either a schema or a list of strings."""

    schema: Optional[Schema] = None
    string_array: Optional[list[str]] = None


@dataclass
class SchemaOrSchemaArray:
    """A value that is either a schema or a list of schemas."""

    schema: Optional[Schema] = None
    schema_array: Optional[list[Schema]] = None


@dataclass
class SchemaEnumValue:
    """A value of an enumeration: a string or a boolean."""

    string: Optional[str] = None
    bool: Optional[bool] = None


@dataclass
class NamedSchema:
    """A name-value pair used to keep map keys in order."""

    name: str
    value: Schema


@dataclass
class NamedSchemaOrStringArray:
    """A name-value pair used to keep map keys in order."""

    name: str
    value: SchemaOrStringArray


SchemaOperation = Callable[["Schema", str], None]

# Fields left out of emptiness checks and property copies.
_UNCOPIED_FIELDS = frozenset({"read_only", "write_only"})


def _named_value(pairs: Optional[list[NamedSchema]], name: str) -> Optional[Schema]:
    if pairs is None:
        return None
    return next((pair.value for pair in pairs if pair.name == name), None)


@dataclass(eq=False)
class Schema:
    """A JSON Schema. Every field is None when it is not specified."""

    schema: Optional[str] = None
    id: Optional[str] = None
    ref: Optional[str] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None

    multiple_of: Optional[SchemaNumber] = None
    maximum: Optional[SchemaNumber] = None
    exclusive_maximum: Optional[bool] = None
    minimum: Optional[SchemaNumber] = None
    exclusive_minimum: Optional[bool] = None

    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None

    additional_items: Optional[SchemaOrBoolean] = None
    items: Optional[SchemaOrSchemaArray] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None

    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    required: Optional[list[str]] = None
    additional_properties: Optional[SchemaOrBoolean] = None
    properties: Optional[list[NamedSchema]] = None
    pattern_properties: Optional[list[NamedSchema]] = None
    dependencies: Optional[list[NamedSchemaOrStringArray]] = None

    enumeration: Optional[list[SchemaEnumValue]] = None
    type: Optional[StringOrStringArray] = None
    all_of: Optional[list[Schema]] = None
    any_of: Optional[list[Schema]] = None
    one_of: Optional[list[Schema]] = None
    not_: Optional[Schema] = None
    definitions: Optional[list[NamedSchema]] = None

    title: Optional[str] = None
    description: Optional[str] = None
    default: Optional[Node] = None

    format: Optional[str] = None

    # --- named access -------------------------------------------------

    def property_with_name(self, name: str) -> Optional[Schema]:
        """Return the property schema with the given name, if any."""
        return _named_value(self.properties, name)

    def pattern_property_with_name(self, name: str) -> Optional[Schema]:
        """Return the pattern-property schema with the given pattern, if any."""
        return _named_value(self.pattern_properties, name)

    def definition_with_name(self, name: str) -> Optional[Schema]:
        """Return the definition with the given name, if any."""
        return _named_value(self.definitions, name)

    def add_property(self, name: str, prop: Schema) -> None:
        """Append a named property."""
        if self.properties is None:
            self.properties = []
        self.properties.append(NamedSchema(name, prop))

    # --- display --------------------------------------------------------

    def __str__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        """Return a readable, indented text description of the schema."""
        return "".join(self._describe_lines(""))

    def _describe_lines(self, indent: str):
        inner = indent + "  "
        nested = inner + "  "
        if self.schema is not None:
            yield f"{indent}$schema: {self.schema}\n"
        if self.read_only:
            yield f"{indent}readOnly: true\n"
        if self.write_only:
            yield f"{indent}writeOnly: true\n"
        if self.id is not None:
            trimmed = (self.schema or "").removesuffix("#")
            key = "id" if trimmed in _ID_KEY_SCHEMAS else "$id"
            yield f"{indent}{key}: {self.id}\n"
        if self.multiple_of is not None:
            yield f"{indent}multipleOf: {self.multiple_of}\n"
        if self.maximum is not None:
            yield f"{indent}maximum: {self.maximum}\n"
        if self.exclusive_maximum is not None:
            yield f"{indent}exclusiveMaximum: {str(self.exclusive_maximum).lower()}\n"
        if self.minimum is not None:
            yield f"{indent}minimum: {self.minimum}\n"
        if self.exclusive_minimum is not None:
            yield f"{indent}exclusiveMinimum: {str(self.exclusive_minimum).lower()}\n"
        if self.max_length is not None:
            yield f"{indent}maxLength: {self.max_length}\n"
        if self.min_length is not None:
            yield f"{indent}minLength: {self.min_length}\n"
        if self.pattern is not None:
            yield f"{indent}pattern: {self.pattern}\n"
        if self.additional_items is not None:
            yield from self._describe_schema_or_boolean(
                "additionalItems", self.additional_items, indent
            )
        if self.items is not None:
            yield f"{indent}items:\n"
            if self.items.schema_array is not None:
                for position, item in enumerate(self.items.schema_array):
                    yield f"{inner}{position}:\n"
                    yield from item._describe_lines(nested)
            elif self.items.schema is not None:
                yield from self.items.schema._describe_lines(nested)
        if self.max_items is not None:
            yield f"{indent}maxItems: {self.max_items}\n"
        if self.min_items is not None:
            yield f"{indent}minItems: {self.min_items}\n"
        if self.unique_items is not None:
            yield f"{indent}uniqueItems: {str(self.unique_items).lower()}\n"
        if self.max_properties is not None:
            yield f"{indent}maxProperties: {self.max_properties}\n"
        if self.min_properties is not None:
            yield f"{indent}minProperties: {self.min_properties}\n"
        if self.required is not None:
            yield f"{indent}required: [{' '.join(self.required)}]\n"
        if self.additional_properties is not None:
            yield from self._describe_schema_or_boolean(
                "additionalProperties", self.additional_properties, indent
            )
        for label, pairs in (
            ("properties", self.properties),
            ("patternProperties", self.pattern_properties),
        ):
            if pairs is not None:
                yield f"{indent}{label}:\n"
                for pair in pairs:
                    yield f"{inner}{pair.name}:\n"
                    yield from pair.value._describe_lines(nested)
        if self.dependencies is not None:
            yield f"{indent}dependencies:\n"
            for pair in self.dependencies:
                if pair.value.schema is not None:
                    yield f"{inner}{pair.name}:\n"
                    yield from pair.value.schema._describe_lines(nested)
                elif pair.value.string_array is not None:
                    yield f"{inner}{pair.name}:\n"
                    for text in pair.value.string_array:
                        yield f"{nested}{text}\n"
        if self.enumeration is not None:
            yield f"{indent}enumeration:\n"
            for value in self.enumeration:
                if value.string is not None:
                    yield f"{inner}{value.string}\n"
                else:
                    yield f"{inner}{str(bool(value.bool)).lower()}\n"
        if self.type is not None:
            yield f"{indent}type: {self.type.description()}\n"
        for label, group in (
            ("allOf", self.all_of),
            ("anyOf", self.any_of),
            ("oneOf", self.one_of),
        ):
            if group is not None:
                yield f"{indent}{label}:\n"
                for member in group:
                    yield from member._describe_lines(inner)
                    yield f"{indent}-\n"
        if self.not_ is not None:
            yield f"{indent}not:\n"
            yield from self.not_._describe_lines(inner)
        if self.definitions is not None:
            yield f"{indent}definitions:\n"
            for pair in self.definitions:
                yield f"{inner}{pair.name}:\n"
                yield from pair.value._describe_lines(nested)
        if self.title is not None:
            yield f"{indent}title: {self.title}\n"
        if self.description is not None:
            yield f"{indent}description: {self.description}\n"
        if self.default is not None:
            yield f"{indent}default:\n"
            yield f"{inner}{_node_text(self.default)}\n"
        if self.format is not None:
            yield f"{indent}format: {self.format}\n"
        if self.ref is not None:
            yield f"{indent}$ref: {self.ref}\n"

    @staticmethod
    def _describe_schema_or_boolean(label: str, value: SchemaOrBoolean, indent: str):
        if value.schema is not None:
            yield f"{indent}{label}:\n"
            yield from value.schema._describe_lines(indent + "  ")
        elif value.boolean is not None:
            yield f"{indent}{label}: {str(value.boolean).lower()}\n"

    # --- operations -------------------------------------------------------

    def is_empty(self) -> bool:
        """Return True if no member of the schema is specified."""
        return all(
            getattr(self, f.name) is None
            for f in fields(self)
            if f.name not in _UNCOPIED_FIELDS
        )

    def is_equal(self, other: Schema) -> bool:
        """Return True if the two schemas have the same description."""
        return self.describe() == other.describe()

    def copy_properties(self, source: Schema) -> None:
        """Copy every specified member of ``source`` onto this schema."""
        for f in fields(self):
            if f.name in _UNCOPIED_FIELDS:
                continue
            value = getattr(source, f.name)
            if value is not None:
                setattr(self, f.name, value)

    def type_is(self, type_name: str) -> bool:
        """Return True if the schema's type is or includes ``type_name``."""
        if self.type is None:
            return False
        if self.type.string is not None:
            return self.type.string == type_name
        if self.type.string_array is not None:
            return type_name in self.type.string_array
        return False

    def walk(self, operation: SchemaOperation) -> None:
        """Apply ``operation(schema, context)`` to every contained schema, then to this one.

        The context names the member a schema was reached through, such as
        ``"Properties"`` or ``"OneOf"``; it is empty for this schema.
        """
        self._apply(operation, "")

    def _apply(self, operation: SchemaOperation, context: str) -> None:
        for child, child_context in self._children():
            child._apply(operation, child_context)
        operation(self, context)

    def _children(self):
        if self.additional_items is not None and self.additional_items.schema is not None:
            yield self.additional_items.schema, "AdditionalItems"
        if self.items is not None:
            if self.items.schema_array is not None:
                for item in self.items.schema_array:
                    yield item, "Items.SchemaArray"
            elif self.items.schema is not None:
                yield self.items.schema, "Items.Schema"
        if (
            self.additional_properties is not None
            and self.additional_properties.schema is not None
        ):
            yield self.additional_properties.schema, "AdditionalProperties"
        for pair in self.properties or ():
            yield pair.value, "Properties"
        for pair in self.pattern_properties or ():
            yield pair.value, "PatternProperties"
        for pair in self.dependencies or ():
            if pair.value.schema is not None:
                yield pair.value.schema, "Dependencies"
        for member in self.all_of or ():
            yield member, "AllOf"
        for member in self.any_of or ():
            yield member, "AnyOf"
        for member in self.one_of or ():
            yield member, "OneOf"
        if self.not_ is not None:
            yield self.not_, "Not"
        for pair in self.definitions or ():
            yield pair.value, "Definitions"

    def copy_official_schema_property(self, name: str) -> None:
        """Add a property that refers to the named property of the official JSON Schema."""
        self.add_property(name, Schema(ref=OFFICIAL_SCHEMA_PROPERTIES_PREFIX + name))

    def copy_official_schema_properties(self, names: list[str]) -> None:
        """Add references to several named properties of the official JSON Schema."""
        for name in names:
            self.copy_official_schema_property(name)