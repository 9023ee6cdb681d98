"""Models of the message types that are built from a schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schemamodel.naming import snake_case_to_camel_case


def _is_separator(char: str) -> bool:
    if char.isascii():
        return not (char.isalnum() or char == "_")
    if char.isalpha() or char.isdigit():
        return False
    return char.isspace()


def _title(text: str) -> str:
    out = []
    previous = " "
    for char in text:
        out.append(char.upper() if _is_separator(previous) else char)
        previous = char
    return "".join(out)


@dataclass
class TypeRequest:
    """A type met while building the model that has no named schema."""

    name: str
    property_name: str
    schema: Any
    one_of_wrapper: bool = False


@dataclass
class TypeProperty:
    """A property (field) of a type."""

    name: str = ""
    type: str = ""
    string_enum_values: list[str] | None = None
    map_type: str = ""
    repeated: bool = False
    pattern: str = ""
    implicit: bool = False
    description: str = ""

    def describe(self) -> str:
        """Return a one-or-two-line text summary of the property."""
        result = ""
        if self.description:
            result += f"\t// {self.description}\n"
        if self.repeated:
            result += f"\t{self.name} {self.type} repeated {self.pattern}\n"
        else:
            result += f"\t{self.name} {self.type} {self.pattern} \n"
        return result

    def field_name(self) -> str:
        """Return the message field name to use for the property."""
        if self.name == "$ref":
            return "XRef"
        return _title(snake_case_to_camel_case(self.name))


@dataclass
class TypeModel:
    """A type built from a schema."""

    name: str = ""
    properties: list[TypeProperty] = field(default_factory=list)
    required: list[str] = field(default_factory=list)
    one_of_wrapper: bool = False
    open: bool = False
    open_patterns: list[str] | None = None
    is_string_array: bool = False
    is_item_array: bool = False
    is_blob: bool = False
    is_pair: bool = False
    pair_value_type: str = ""
    description: str = ""

    def add_property(self, prop: TypeProperty) -> None:
        """Append a property to the type."""
        self.properties.append(prop)

    def describe(self) -> str:
        """Return a text summary of the type and its properties."""
        result = ""
        if self.description:
            result += f"// {self.description}\n"
        wrapper_info = " oneof wrapper" if self.one_of_wrapper else ""
        result += f"{self.name}{wrapper_info}\n"
        result += "".join(prop.describe() for prop in self.properties)
        return result

    def is_required(self, property_name: str) -> bool:
        """Return True if the named property is required."""
        return property_name in self.required