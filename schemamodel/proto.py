"""Generation of Protocol Buffer descriptions from a domain of type models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from schemamodel.domain import Domain
from schemamodel.naming import camel_case_to_snake_case
from schemamodel.types import TypeModel

_INDENTATION = "  "

_TYPE_ADJUSTMENTS = {"int": "int64", "float": "double", "blob": "string"}
_NAME_ADJUSTMENTS = {"$ref": "_ref", "$schema": "_schema"}


@dataclass
class ProtoOption:
    """An option declaration to be added to a generated .proto file."""

    name: str
    value: str
    comment: str = ""


class _CodeWriter:
    """Collects lines of generated text at a current indentation level."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._level = 0

    def line(self, text: Optional[str] = None) -> None:
        if text is not None:
            self._parts.append(_INDENTATION * self._level + text)
        self._parts.append("\n")

    def indent(self) -> None:
        self._level += 1

    def outdent(self) -> None:
        self._level = max(0, self._level - 1)

    def text(self) -> str:
        return "".join(self._parts)


def _option_declaration(code: _CodeWriter, option: ProtoOption) -> None:
    for comment_line in option.comment.split("\n"):
        code.line(comment_line)
    if option.value in ("true", "false"):
        value = option.value
    else:
        value = f'"{option.value}"'
    code.line(f"option {option.name} = {value};\n")


def _field_name(property_name: str) -> str:
    return camel_case_to_snake_case(_NAME_ADJUSTMENTS.get(property_name, property_name))


def _message(code: _CodeWriter, type_model: TypeModel) -> None:
    if type_model.description:
        code.line(f"// {type_model.description}")
    code.line(f"message {type_model.name} {{")
    code.indent()
    if type_model.one_of_wrapper:
        code.line("oneof oneof {")
        code.indent()
    for field_number, prop in enumerate(type_model.properties, start=1):
        if prop.description:
            code.line(f"// {prop.description}")
        property_type = _TYPE_ADJUSTMENTS.get(prop.type, prop.type)
        declaration = f"{property_type} {_field_name(prop.name)} = {field_number};"
        if prop.repeated:
            declaration = "repeated " + declaration
        code.line(declaration)
    if type_model.one_of_wrapper:
        code.outdent()
        code.line("}")
    code.outdent()
    code.line("}")
    code.line()


def generate_proto(
    domain: Domain,
    package_name: str,
    license_text: str,
    options: Optional[Iterable[ProtoOption]] = None,
    imports: Optional[Iterable[str]] = None,
) -> str:
    """Return the text of a .proto file describing every type in the domain."""
    code = _CodeWriter()
    code.line(license_text)
    code.line("// THIS FILE IS AUTOMATICALLY GENERATED.")
    code.line()
    code.line('syntax = "proto3";')
    code.line()
    code.line(f"package {package_name};")
    for import_name in imports or ():
        code.line()
        code.line(f'import "{import_name}";')
    code.line()
    for option in options or ():
        _option_declaration(code, option)
    for type_name in domain.sorted_type_names():
        _message(code, domain.type_models[type_name])
    return code.text()