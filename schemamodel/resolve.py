"""Resolution of references, allOf and anyOf members inside schemas."""

from __future__ import annotations

import logging
from typing import Optional

from schemamodel.schema import Schema

logger = logging.getLogger(__name__)


class UnresolvedPointerError(LookupError):
    """Raised when a JSON pointer cannot be resolved."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"unresolved pointer: {ref}")
        self.ref = ref


def _named_lookup(pairs, name: str) -> Optional[Schema]:
    result = None
    for pair in pairs or ():
        if pair.name == name:
            result = pair.value
    return result


def resolve_json_pointer(
    root: Schema, ref: str, registry: Optional[dict[str, Schema]] = None
) -> Schema:
    """Return the schema a JSON pointer refers to.

    Only whole documents and pointers of the form ``#/definitions/NAME`` or
    ``#/properties/NAME`` are supported. Documents are looked up in
    ``registry`` by their id; a local pointer falls back to ``root`` itself.
    Raises ``UnresolvedPointerError`` for anything that cannot be resolved.
    """
    registry = registry if registry is not None else {}
    parts = ref.split("#")
    if len(parts) != 2:
        raise UnresolvedPointerError(ref)
    document_name = parts[0] + "#"
    if document_name == "#" and root.id is not None:
        document_name = root.id
    document = registry.get(document_name)
    if document is None and parts[0] == "":
        document = root
    if document is None:
        raise UnresolvedPointerError(ref)

    path_parts = parts[1].split("/")
    result: Optional[Schema] = None
    if len(path_parts) == 1:
        result = document
    elif len(path_parts) == 3:
        section, name = path_parts[1], path_parts[2]
        if section == "definitions":
            result = _named_lookup(document.definitions, name)
        elif section == "properties":
            result = _named_lookup(document.properties, name)
    if result is None:
        raise UnresolvedPointerError(ref)
    return result


def resolve_refs(schema: Schema, registry: Optional[dict[str, Schema]] = None) -> None:
    """Replace ``$ref`` members in a schema tree by the schemas they refer to.

    A reference is kept when it refers to an object type, sits inside a
    ``oneOf``, or refers to a schema holding ``oneOf`` or
    ``additionalProperties``; such schemas are modelled separately.
    Unresolvable references are logged and left in place.
    """
    root = schema

    while True:
        count = 0

        def substitute(node: Schema, context: str) -> None:
            nonlocal count
            if node.ref is None:
                return
            try:
                resolved = resolve_json_pointer(root, node.ref, registry)
            except UnresolvedPointerError as error:
                logger.warning("%s", error)
                return
            if resolved.type_is("object"):
                return
            if context == "OneOf":
                return
            if resolved.one_of is not None:
                return
            if resolved.additional_properties is not None:
                return
            node.ref = None
            node.copy_properties(resolved)
            count += 1

        schema.walk(substitute)
        if count == 0:
            break


def resolve_all_ofs(schema: Schema) -> None:
    """Merge the members of every ``allOf`` into the schema that holds it."""

    def merge(node: Schema, _context: str) -> None:
        if node.all_of is not None:
            for member in node.all_of:
                node.copy_properties(member)
            node.all_of = None

    schema.walk(merge)


def resolve_any_ofs(schema: Schema) -> None:
    """Turn every ``anyOf`` in a schema tree into a ``oneOf``."""

    def convert(node: Schema, _context: str) -> None:
        if node.any_of is not None:
            node.one_of = node.any_of
            node.any_of = None

    schema.walk(convert)