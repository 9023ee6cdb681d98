import pytest

from schemamodel.resolve import (
    UnresolvedPointerError,
    resolve_all_ofs,
    resolve_any_ofs,
    resolve_json_pointer,
    resolve_refs,
)
from schemamodel.schema import (
    NamedSchema,
    Schema,
    SchemaOrBoolean,
    StringOrStringArray,
)

DOC_ID = "http://example.com/schema#"


def _typed(name):
    return Schema(type=StringOrStringArray(string=name))


def _root(definitions, properties=None):
    root = Schema(
        id=DOC_ID,
        definitions=[NamedSchema(name, value) for name, value in definitions.items()],
    )
    if properties is not None:
        root.properties = [NamedSchema(name, value) for name, value in properties.items()]
    return root, {DOC_ID: root}


def test_pointer_to_definition():
    target = _typed("string")
    root, registry = _root({"a": target})
    assert resolve_json_pointer(root, "#/definitions/a", registry) is target


def test_pointer_to_property():
    target = _typed("integer")
    root, registry = _root({}, {"count": target})
    assert resolve_json_pointer(root, "#/properties/count", registry) is target


def test_pointer_to_whole_document():
    root, registry = _root({})
    assert resolve_json_pointer(root, "#", registry) is root


def test_pointer_by_document_id():
    target = _typed("string")
    root, registry = _root({"a": target})
    other = Schema()
    assert resolve_json_pointer(other, DOC_ID + "/definitions/a", registry) is target


def test_local_pointer_without_id_uses_root():
    target = _typed("string")
    root = Schema(definitions=[NamedSchema("a", target)])
    assert resolve_json_pointer(root, "#/definitions/a") is target


def test_pointer_errors():
    root, registry = _root({"a": _typed("string")})
    with pytest.raises(UnresolvedPointerError):
        resolve_json_pointer(root, "#/definitions/missing", registry)
    with pytest.raises(UnresolvedPointerError):
        resolve_json_pointer(root, "#/other/a", registry)
    with pytest.raises(UnresolvedPointerError):
        resolve_json_pointer(root, "no-hash", registry)
    with pytest.raises(UnresolvedPointerError):
        resolve_json_pointer(root, "http://example.com/other#", registry)


def test_error_message_names_pointer():
    root, registry = _root({})
    with pytest.raises(UnresolvedPointerError, match="unresolved pointer: #/definitions/x"):
        resolve_json_pointer(root, "#/definitions/x", registry)


def test_resolve_refs_substitutes_simple_types():
    prop = Schema(ref="#/definitions/a")
    root, registry = _root({"a": _typed("string")}, {"name": prop})
    resolve_refs(root, registry)
    assert prop.ref is None
    assert prop.type_is("string")


def test_resolve_refs_keeps_object_references():
    prop = Schema(ref="#/definitions/thing")
    root, registry = _root({"thing": _typed("object")}, {"thing": prop})
    resolve_refs(root, registry)
    assert prop.ref == "#/definitions/thing"
    assert prop.type is None


def test_resolve_refs_keeps_references_inside_one_of():
    member = Schema(ref="#/definitions/a")
    holder = Schema(one_of=[member])
    root, registry = _root({"a": _typed("string")}, {"choice": holder})
    resolve_refs(root, registry)
    assert member.ref == "#/definitions/a"


def test_resolve_refs_keeps_references_to_one_of_and_maps():
    choice = Schema(one_of=[_typed("string"), _typed("integer")])
    mapping = Schema(additional_properties=SchemaOrBoolean(boolean=True))
    first = Schema(ref="#/definitions/choice")
    second = Schema(ref="#/definitions/mapping")
    root, registry = _root({"choice": choice, "mapping": mapping}, {"x": first, "y": second})
    resolve_refs(root, registry)
    assert first.ref == "#/definitions/choice"
    assert second.ref == "#/definitions/mapping"


def test_resolve_refs_leaves_unresolvable_references():
    prop = Schema(ref="#/definitions/missing")
    root, registry = _root({}, {"x": prop})
    resolve_refs(root, registry)
    assert prop.ref == "#/definitions/missing"


def test_resolve_refs_follows_chains():
    prop = Schema(ref="#/definitions/b")
    root, registry = _root(
        {"a": _typed("number"), "b": Schema(ref="#/definitions/a")},
        {"value": prop},
    )
    resolve_refs(root, registry)
    assert prop.ref is None
    assert prop.type_is("number")


def test_resolve_all_ofs_merges_members():
    merged = Schema(all_of=[_typed("string"), Schema(min_length=1)])
    root = Schema(properties=[NamedSchema("name", merged)])
    resolve_all_ofs(root)
    assert merged.all_of is None
    assert merged.type_is("string")
    assert merged.min_length == 1


def test_resolve_all_ofs_later_members_win():
    merged = Schema(all_of=[Schema(title="first"), Schema(title="second")])
    resolve_all_ofs(merged)
    assert merged.title == "second"


def test_resolve_any_ofs_moves_to_one_of():
    members = [_typed("string"), _typed("boolean")]
    inner = Schema(any_of=members)
    root = Schema(properties=[NamedSchema("x", inner)])
    resolve_any_ofs(root)
    assert inner.any_of is None
    assert inner.one_of is members