"""A model of the collection of message types that a schema defines."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from schemamodel.schema import Schema, StringOrStringArray
from schemamodel.types import TypeModel, TypeProperty, TypeRequest

logger = logging.getLogger(__name__)

_WORD_START = re.compile(r"(^|[^0-9A-Za-z_])([a-z])")


def _title(text: str) -> str:
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), text)


def _type_name_of(types: Optional[StringOrStringArray]) -> str:
    if types is None:
        return "Any"
    if types.string_array is not None and len(types.string_array) == 1:
        return types.string_array[0]
    if types.string_array is not None and len(types.string_array) > 1:
        return "&[" + " ".join(types.string_array) + "]"
    if types.string is not None:
        return types.string
    return "UNKNOWN"


def _enum_strings(schema: Schema) -> list[str]:
    return [value.string for value in schema.enumeration or () if value.string is not None]


def _contained_in_array(inner: Schema, array: Schema) -> bool:
    return (
        array.type_is("array")
        and array.items is not None
        and array.items.schema is not None
        and inner.is_equal(array.items.schema)
    )


@dataclass
class Domain:
    """A collection of type models built from a top-level schema."""

    schema: Optional[Schema] = None
    version: str = ""
    prefix: str = ""
    type_models: dict[str, TypeModel] = field(default_factory=dict)
    type_name_overrides: dict[str, str] = field(default_factory=dict)
    property_name_overrides: dict[str, str] = field(default_factory=dict)
    object_type_requests: dict[str, TypeRequest] = field(default_factory=dict)
    map_type_requests: dict[str, str] = field(default_factory=dict)

    # --- naming ------------------------------------------------------------

    def type_name_for_stub(self, stub: str) -> str:
        """Return a capitalized, prefixed name for a generated type."""
        return self.prefix + stub[:1].upper() + stub[1:]

    def _type_name_for_reference(self, reference: str) -> str:
        parts = reference.split("/")
        if parts[0] == "#":
            return self.type_name_for_stub(parts[-1])
        return "Schema"

    @staticmethod
    def _property_name_for_reference(reference: str) -> Optional[str]:
        parts = reference.split("/")
        if parts[0] == "#":
            return parts[-1]
        return None

    def _request_type(self, type_name: str, property_name: str, schema: Schema) -> None:
        self.object_type_requests[type_name] = TypeRequest(type_name, property_name, schema)

    def _add_map_property(
        self, type_model: TypeModel, type_name: str, map_type: str, implicit: bool = True
    ) -> None:
        prop = TypeProperty(
            name="additionalProperties",
            type=type_name,
            map_type=map_type,
            repeated=True,
            implicit=implicit,
        )
        self.map_type_requests[map_type] = map_type
        type_model.add_property(prop)

    # --- property building -------------------------------------------------

    def _array_item_type(self, property_name: str, schema: Schema) -> str:
        items = schema.items
        if items is None:
            return "Any"
        if items.schema_array is not None:
            if not items.schema_array:
                return "Any"
            first = items.schema_array[0]
            if first.ref is not None:
                return self._type_name_for_reference(first.ref)
            return _type_name_of(first.type)
        if items.schema is not None:
            item = items.schema
            if item.ref is not None:
                return self._type_name_for_reference(item.ref)
            if item.one_of is not None:
                item_type_name = self.type_name_for_stub(property_name + "Item")
                self._request_type(item_type_name, property_name, item)
                return item_type_name
            return _type_name_of(item.type)
        return "Any"

    def _typed_property(self, name: str, schema: Schema) -> Optional[TypeProperty]:
        if schema.type_is("string"):
            prop = TypeProperty(name=name, type="string")
            if schema.enumeration is not None:
                prop.string_enum_values = _enum_strings(schema)
        elif schema.type_is("boolean"):
            prop = TypeProperty(name=name, type="bool")
        elif schema.type_is("number"):
            prop = TypeProperty(name=name, type="float")
        elif schema.type_is("integer"):
            prop = TypeProperty(name=name, type="int")
        elif schema.type_is("object"):
            anonymous = self.type_name_for_stub(name)
            self._request_type(anonymous, name, schema)
            prop = TypeProperty(name=name, type=anonymous)
        elif schema.type_is("array"):
            prop = TypeProperty(name=name, type=self._array_item_type(name, schema), repeated=True)
            if prop.type == "string" and schema.items is not None:
                item = schema.items.schema
                if item is not None and item.enumeration is not None:
                    prop.string_enum_values = _enum_strings(item)
        else:
            logger.warning(
                "ignoring %s, which has an unsupported property type '%s'",
                name,
                schema.type.description() if schema.type else "",
            )
            return None
        if schema.description is not None:
            prop.description = schema.description
        return prop

    def _build_type_properties(self, type_model: TypeModel, schema: Schema) -> None:
        for pair in schema.properties or ():
            name, prop_schema = pair.name, pair.value
            if prop_schema.ref is not None:
                type_model.add_property(
                    TypeProperty(name=name, type=self._type_name_for_reference(prop_schema.ref))
                )
            elif prop_schema.type is not None:
                prop = self._typed_property(name, prop_schema)
                if prop is not None:
                    type_model.add_property(prop)
            elif prop_schema.is_empty():
                type_model.add_property(TypeProperty(name=name, type="Any"))
            elif prop_schema.one_of is not None or prop_schema.any_of is not None:
                anonymous = self.type_name_for_stub(name + "Item")
                self._request_type(anonymous, name, prop_schema)
                type_model.add_property(TypeProperty(name=name, type=anonymous))
            else:
                logger.warning(
                    "ignoring %s.%s, which has an unrecognized schema:\n%s",
                    type_model.name,
                    name,
                    prop_schema.describe(),
                )

    @staticmethod
    def _build_type_requirements(type_model: TypeModel, schema: Schema) -> None:
        if schema.required is not None:
            type_model.required = schema.required

    def _build_pattern_property_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.pattern_properties is None:
            return
        type_model.open_patterns = []
        for pair in schema.pattern_properties:
            pattern, prop_schema = pair.name, pair.value
            type_model.open_patterns.append(pattern)
            if prop_schema.ref is None:
                logger.warning("unhandled pattern property %s", pattern)
                continue
            reference_name = self._type_name_for_reference(prop_schema.ref)
            type_name = self.type_name_overrides.get(reference_name, reference_name)
            property_name = self.property_name_overrides.get(reference_name, reference_name)
            prop = TypeProperty(
                name=property_name,
                type=f"Named{type_name}",
                pattern=pattern,
                implicit=True,
                map_type=type_name,
                repeated=True,
            )
            self.map_type_requests[type_name] = type_name
            type_model.add_property(prop)

    def _build_additional_property_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        additional = schema.additional_properties
        if additional is None:
            return
        if additional.boolean is not None:
            if additional.boolean:
                type_model.open = True
                self._add_map_property(type_model, "NamedAny", "Any")
            return
        inner = additional.schema
        if inner is None:
            return
        type_model.open = True
        if inner.ref is not None:
            map_type = self._type_name_for_reference(inner.ref)
            self._add_map_property(type_model, f"Named{map_type}", map_type)
        elif inner.type is not None:
            type_name = inner.type.string
            if type_name == "string":
                self._add_map_property(type_model, "NamedString", "string")
            elif type_name == "array" and inner.items is not None:
                item = inner.items.schema
                if item is not None and item.type is not None and item.type.string == "string":
                    self._add_map_property(type_model, "NamedStringArray", "StringArray")
        elif inner.one_of is not None:
            item_type_name = self.type_name_for_stub(type_model.name + "Item")
            self._add_map_property(type_model, f"Named{item_type_name}", item_type_name)
            self._request_type(item_type_name, "additionalProperties", inner)

    def _build_one_of_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.one_of is None:
            return
        type_model.open = True
        type_model.one_of_wrapper = True
        scalars = {"boolean": "bool", "integer": "int", "number": "float", "string": "string"}
        for member in schema.one_of:
            if member.ref is not None:
                property_name = self._property_name_for_reference(member.ref)
                if property_name is not None:
                    type_model.add_property(
                        TypeProperty(name=property_name, type=self._type_name_for_reference(member.ref))
                    )
            elif member.type is not None and member.type.string in scalars:
                type_model.add_property(
                    TypeProperty(name=member.type.string, type=scalars[member.type.string])
                )
            else:
                logger.warning("Unsupported oneOf:\n%s", member.describe())

    def _add_anonymous_accessor(self, type_model: TypeModel, schema: Schema) -> None:
        if schema.ref is not None:
            property_name = self._property_name_for_reference(schema.ref)
            if property_name is not None:
                type_model.add_property(
                    TypeProperty(
                        name=property_name,
                        type=self._type_name_for_reference(schema.ref),
                        repeated=True,
                    )
                )
                type_model.is_item_array = True
        else:
            type_model.add_property(TypeProperty(name="value", type="string", repeated=True))
            type_model.is_string_array = True

    def _build_any_of_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        any_ofs = schema.any_of
        if any_ofs is None:
            return
        if len(any_ofs) != 2:
            logger.warning("Unhandled anyOfs:\n%s", schema.describe())
            return
        first, second = any_ofs
        if _contained_in_array(first, second):
            self._add_anonymous_accessor(type_model, first)
        elif _contained_in_array(second, first):
            self._add_anonymous_accessor(type_model, second)
        else:
            for member in any_ofs:
                if member.ref is not None:
                    property_name = self._property_name_for_reference(member.ref)
                    if property_name is not None:
                        type_model.add_property(
                            TypeProperty(
                                name=property_name,
                                type=self._type_name_for_reference(member.ref),
                            )
                        )
                else:
                    type_model.add_property(TypeProperty(name="boolean", type="bool"))

    def _build_default_accessors(self, type_model: TypeModel) -> None:
        type_model.open = True
        self._add_map_property(type_model, "NamedAny", "Any", implicit=False)

    def _build_all_accessors(self, type_model: TypeModel, schema: Schema) -> None:
        self._build_type_properties(type_model, schema)
        self._build_type_requirements(type_model, schema)
        self._build_pattern_property_accessors(type_model, schema)
        self._build_additional_property_accessors(type_model, schema)
        self._build_one_of_accessors(type_model, schema)
        self._build_any_of_accessors(type_model, schema)

    # --- type building -----------------------------------------------------

    def build_type_for_definition(
        self, type_name: str, property_name: str, schema: Schema
    ) -> Optional[TypeModel]:
        """Return a type model for an object definition, or None for other types."""
        if schema.type is None or schema.type.string == "object":
            return self._build_type_for_object(type_name, property_name, schema)
        return None

    def _build_type_for_object(
        self, type_name: str, _property_name: str, schema: Schema
    ) -> TypeModel:
        type_model = TypeModel(name=type_name)
        if schema.is_empty():
            self._build_default_accessors(type_model)
        else:
            if schema.description is not None:
                type_model.description = schema.description
            self._build_all_accessors(type_model, schema)
        return type_model

    def build(self) -> None:
        """Build the type models of the domain.

        Raises ``ValueError`` if the schema has no definitions section.
        """
        if self.schema is None or self.schema.definitions is None:
            raise ValueError("missing definitions section")

        document_name = self.prefix + "Document"
        document = TypeModel(name=document_name)
        self._build_all_accessors(document, self.schema)
        if document.properties:
            self.type_models[document_name] = document

        for pair in self.schema.definitions:
            type_name = self.type_name_for_stub(pair.name)
            type_model = self.build_type_for_definition(type_name, pair.name, pair.value)
            if type_model is not None:
                if pair.name in ("reference", "jsonReference"):
                    type_model.open = True
                self.type_models[type_name] = type_model

        # Building implied types may request further types, so repeat until none are left.
        while self.object_type_requests:
            requests = self.object_type_requests
            self.object_type_requests = {}
            for type_name, request in requests.items():
                self.type_models[request.name] = self._build_type_for_object(
                    type_name, request.property_name, request.schema
                )

        for map_type_name in sorted(self.map_type_requests):
            type_name = "Named" + _title(map_type_name)
            pair_model = TypeModel(
                name=type_name,
                description=(
                    "Automatically-generated message used to represent maps of "
                    f"{map_type_name} as ordered (name,value) pairs."
                ),
                is_pair=True,
                pair_value_type=map_type_name,
            )
            pair_model.add_property(TypeProperty(name="name", type="string", description="Map key"))
            pair_model.add_property(
                TypeProperty(name="value", type=map_type_name, description="Mapped value")
            )
            self.type_models[type_name] = pair_model

        string_array = TypeModel(name="StringArray")
        string_array.add_property(TypeProperty(name="value", type="string", repeated=True))
        self.type_models[string_array.name] = string_array

        any_type = TypeModel(name="Any", open=True, is_blob=True)
        any_type.add_property(TypeProperty(name="value", type="google.protobuf.Any"))
        any_type.add_property(TypeProperty(name="yaml", type="string"))
        self.type_models[any_type.name] = any_type

    # --- display -----------------------------------------------------------

    def sorted_type_names(self) -> list[str]:
        """Return the names of all type models in sorted order."""
        return sorted(self.type_models)

    def describe(self) -> str:
        """Return a text description of every type model, in name order."""
        return "".join(self.type_models[name].describe() for name in self.sorted_type_names())