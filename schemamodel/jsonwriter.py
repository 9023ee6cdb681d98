"""Write document nodes as indented JSON text."""

from __future__ import annotations

import io

from schemamodel.nodes import Kind, Node

_INDENTATION = "  "


def _escape(text: str) -> str:
    return text.replace("\n", "\\n").replace('"', '\\"')


def _write_value(out: io.StringIO, node: Node, indent: str) -> None:
    if node.kind is Kind.MAPPING:
        _write_map(out, node, indent)
    elif node.kind is Kind.SEQUENCE:
        _write_sequence(out, node, indent)
    elif node.kind is Kind.SCALAR:
        _write_scalar(out, node)


def _write_map(out: io.StringIO, node: Node, indent: str) -> None:
    if node.kind is Kind.DOCUMENT:
        _write_map(out, node.content[0], indent)
        return
    if node.kind is not Kind.MAPPING:
        out.write(f"invalid node for map: {node!r}")
        return
    out.write("{\n")
    inner = indent + _INDENTATION
    pairs = list(zip(node.content[0::2], node.content[1::2]))
    for position, (key, value) in enumerate(pairs):
        out.write(f'{inner}"{key.value}": ')
        _write_value(out, value, inner)
        if position < len(pairs) - 1:
            out.write(",")
        out.write("\n")
    out.write(indent)
    out.write("}")


def _write_scalar(out: io.StringIO, node: Node) -> None:
    if node.kind is not Kind.SCALAR:
        out.write(f"invalid node for scalar: {node!r}")
        return
    if node.tag == "!!str":
        out.write('"' + _escape(node.value) + '"')
    elif node.tag in ("!!int", "!!float", "!!bool"):
        out.write(node.value)


def _write_sequence(out: io.StringIO, node: Node, indent: str) -> None:
    if node.kind is not Kind.SEQUENCE:
        out.write(f"invalid node for sequence: {node!r}")
        return
    out.write("[\n")
    inner = indent + _INDENTATION
    last = len(node.content) - 1
    for position, value in enumerate(node.content):
        out.write(inner)
        _write_value(out, value, inner)
        if position < last:
            out.write(",")
        out.write("\n")
    out.write(indent)
    out.write("]")


def marshal(node: Node) -> str:
    """Return the JSON text for a node, followed by a newline.

    Raises ``ValueError`` for node kinds that cannot be written.
    """
    out = io.StringIO()
    if node.kind is Kind.DOCUMENT:
        _write_map(out, node.content[0], "")
    elif node.kind is Kind.MAPPING:
        _write_map(out, node, "")
    elif node.kind is Kind.SEQUENCE:
        _write_sequence(out, node, "")
    elif node.kind is Kind.SCALAR:
        _write_scalar(out, node)
    else:
        raise ValueError("invalid type passed to Marshal")
    out.write("\n")
    return out.getvalue()