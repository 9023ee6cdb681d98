import json

from schemamodel.nodes import (
    Kind,
    Node,
    node_for_boolean,
    node_for_int,
    node_for_mapping,
    node_for_sequence,
    node_for_string,
)
from schemamodel.reader import schema_from_text
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
from schemamodel.writer import json_string, render, schema_to_node


def _keys(node):
    return [key.value for key in node.content[0::2]]


def _value(node, key):
    pairs = dict(zip(_keys(node), node.content[1::2]))
    return pairs[key]


def _sample_schema():
    return Schema(
        title="Pet",
        type=StringOrStringArray(string="object"),
        description="A pet",
        required=["name"],
        additional_properties=SchemaOrBoolean(boolean=False),
        properties=[
            NamedSchema("name", Schema(type=StringOrStringArray(string="string"))),
            NamedSchema(
                "tags",
                Schema(
                    type=StringOrStringArray(string="array"),
                    items=SchemaOrSchemaArray(
                        schema=Schema(type=StringOrStringArray(string="string"))
                    ),
                ),
            ),
            NamedSchema(
                "kind",
                Schema(
                    enumeration=[
                        SchemaEnumValue(string="cat"),
                        SchemaEnumValue(string="dog"),
                    ]
                ),
            ),
        ],
    )


def test_render_quotes_everything_but_booleans():
    node = node_for_mapping(
        [node_for_string("a"), node_for_int(1), node_for_string("b"), node_for_boolean(True)]
    )
    assert render(node) == '{\n  "a": "1",\n  "b": true\n}\n'


def test_render_document_unwraps_single_child():
    mapping = node_for_mapping([node_for_string("k"), node_for_string("v")])
    document = Node(Kind.DOCUMENT, content=[mapping])
    assert render(document) == render(mapping)


def test_render_unrenderable_nodes_give_empty_text():
    assert render(node_for_string("x")) == ""
    mapping = node_for_mapping([])
    assert render(Node(Kind.DOCUMENT, content=[mapping, mapping])) == ""


def test_render_empty_mapping():
    assert render(node_for_mapping([])) == "{\n}\n"


def test_render_nested_sequence_in_sequence_is_marked():
    node = node_for_sequence([node_for_sequence([node_for_string("a")])])
    assert "???ArrayItem(" in render(node)


def test_json_string_simple_type():
    schema = Schema(type=StringOrStringArray(string="string"))
    assert json_string(schema) == '{\n  "type": "string"\n}\n'


def test_key_order_follows_fixed_sequence():
    schema = Schema(
        ref="#/definitions/x",
        description="d",
        type=StringOrStringArray(string="object"),
        title="t",
        format="uri",
    )
    assert _keys(schema_to_node(schema)) == ["title", "type", "description", "$ref", "format"]


def test_id_key_depends_on_schema_version():
    draft4 = Schema(id="a", schema="http://json-schema.org/draft-04/schema#")
    assert _keys(schema_to_node(draft4)) == ["id", "$schema"]
    other = Schema(id="a", schema="http://json-schema.org/draft-06/schema#")
    assert _keys(schema_to_node(other)) == ["$id", "$schema"]
    bare = Schema(id="a")
    assert _keys(schema_to_node(bare)) == ["id"]


def test_default_is_not_written():
    schema = Schema(default=node_for_string("x"))
    node = schema_to_node(schema)
    assert node.kind is Kind.MAPPING
    assert node.content == []


def test_numbers_become_typed_scalars():
    schema = Schema(maximum=SchemaNumber(float=1.5), max_length=3, minimum=SchemaNumber(integer=2))
    node = schema_to_node(schema)
    maximum = _value(node, "maximum")
    assert (maximum.tag, maximum.value) == ("!!float", "1.500000")
    max_length = _value(node, "maxLength")
    assert (max_length.tag, max_length.value) == ("!!int", "3")
    minimum = _value(node, "minimum")
    assert (minimum.tag, minimum.value) == ("!!int", "2")


def test_enum_values_keep_their_types():
    schema = Schema(enumeration=[SchemaEnumValue(string="a"), SchemaEnumValue(bool=True)])
    enum = _value(schema_to_node(schema), "enum")
    assert [(item.tag, item.value) for item in enum.content] == [("!!str", "a"), ("!!bool", "true")]


def test_items_schema_array_becomes_sequence_of_mappings():
    schema = Schema(
        items=SchemaOrSchemaArray(
            schema_array=[Schema(title="a"), Schema(title="b")]
        )
    )
    items = _value(schema_to_node(schema), "items")
    assert items.kind is Kind.SEQUENCE
    assert [item.kind for item in items.content] == [Kind.MAPPING, Kind.MAPPING]
    assert [_value(item, "title").value for item in items.content] == ["a", "b"]


def test_dependencies_string_arrays():
    schema = Schema(
        dependencies=[
            NamedSchemaOrStringArray("exclusiveMaximum", SchemaOrStringArray(string_array=["maximum"]))
        ]
    )
    deps = _value(schema_to_node(schema), "dependencies")
    assert _keys(deps) == ["exclusiveMaximum"]
    assert [item.value for item in deps.content[1].content] == ["maximum"]


def test_output_is_valid_json():
    data = json.loads(json_string(_sample_schema()))
    assert data["type"] == "object"
    assert data["required"] == ["name"]
    assert data["additionalProperties"] is False
    assert data["properties"]["tags"]["items"] == {"type": "string"}
    assert data["properties"]["kind"]["enum"] == ["cat", "dog"]


def test_round_trip_through_reader():
    original = _sample_schema()
    text = json_string(original)
    reread = schema_from_text(text)
    assert reread is not None
    assert json_string(reread) == text
    assert reread.is_equal(original)
    assert reread.property_with_name("name").type_is("string")