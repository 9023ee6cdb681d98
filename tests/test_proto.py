from schemamodel.domain import Domain
from schemamodel.proto import ProtoOption, generate_proto
from schemamodel.types import TypeModel, TypeProperty


def _domain(*models):
    return Domain(type_models={model.name: model for model in models})


def _stripped_lines(text):
    return [line.strip() for line in text.split("\n")]


def test_header_package_and_syntax():
    text = generate_proto(_domain(), "openapi.v2", "// header", [], [])
    lines = text.split("\n")
    assert lines[0] == "// header"
    assert lines[1] == "// THIS FILE IS AUTOMATICALLY GENERATED."
    assert 'syntax = "proto3";' in lines
    assert "package openapi.v2;" in lines


def test_imports_are_declared():
    text = generate_proto(_domain(), "p", "", [], ["google/protobuf/any.proto"])
    assert 'import "google/protobuf/any.proto";' in text.split("\n")


def test_boolean_option_is_not_quoted_and_others_are():
    options = [
        ProtoOption("java_multiple_files", "true", "// first\n// second"),
        ProtoOption("java_package", "org.sample", "// package"),
    ]
    lines = generate_proto(_domain(), "p", "", options, []).split("\n")
    assert "option java_multiple_files = true;" in lines
    assert 'option java_package = "org.sample";' in lines
    assert lines.index("// first") + 1 == lines.index("// second")
    assert lines.index("// second") + 1 == lines.index("option java_multiple_files = true;")


def test_field_types_and_names_are_adjusted():
    model = TypeModel(name="Sample")
    model.add_property(TypeProperty(name="maxLength", type="int"))
    model.add_property(TypeProperty(name="ratio", type="float"))
    model.add_property(TypeProperty(name="data", type="blob"))
    model.add_property(TypeProperty(name="$ref", type="string"))
    model.add_property(TypeProperty(name="$schema", type="string"))
    model.add_property(TypeProperty(name="tags", type="string", repeated=True))
    lines = _stripped_lines(generate_proto(_domain(model), "p", "", [], []))
    assert "message Sample {" in lines
    assert "int64 max_length = 1;" in lines
    assert "double ratio = 2;" in lines
    assert "string data = 3;" in lines
    assert "string _ref = 4;" in lines
    assert "string _schema = 5;" in lines
    assert "repeated string tags = 6;" in lines


def test_fields_are_indented_inside_message():
    model = TypeModel(name="Sample")
    model.add_property(TypeProperty(name="name", type="string"))
    lines = generate_proto(_domain(model), "p", "", [], []).split("\n")
    field_line = next(line for line in lines if line.strip() == "string name = 1;")
    assert field_line.startswith(" ")
    assert "message Sample {" in lines
    assert "}" in lines


def test_descriptions_become_comments():
    model = TypeModel(name="Sample", description="A sample type.")
    model.add_property(TypeProperty(name="name", type="string", description="The name."))
    lines = _stripped_lines(generate_proto(_domain(model), "p", "", [], []))
    assert lines.index("// A sample type.") + 1 == lines.index("message Sample {")
    assert lines.index("// The name.") + 1 == lines.index("string name = 1;")


def test_oneof_wrapper_nests_fields():
    model = TypeModel(name="Choice", one_of_wrapper=True)
    model.add_property(TypeProperty(name="boolean", type="bool"))
    model.add_property(TypeProperty(name="schema", type="Schema"))
    lines = _stripped_lines(generate_proto(_domain(model), "p", "", [], []))
    start = lines.index("oneof oneof {")
    assert lines.index("message Choice {") < start
    assert lines[start + 1] == "bool boolean = 1;"
    assert lines[start + 2] == "Schema schema = 2;"
    assert lines[start + 3] == "}"
    assert lines[start + 4] == "}"


def test_messages_are_written_in_name_order():
    text = generate_proto(
        _domain(TypeModel(name="Zeta"), TypeModel(name="Alpha"), TypeModel(name="Mid")),
        "p",
        "",
        [],
        [],
    )
    positions = [text.index(f"message {name} {{") for name in ("Alpha", "Mid", "Zeta")]
    assert positions == sorted(positions)