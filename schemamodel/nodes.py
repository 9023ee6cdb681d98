"""A small document-node model for YAML and JSON trees, with helpers to build it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import yaml

_YAML_TAG_PREFIX = "tag:yaml.org,2002:"


class Kind(enum.Enum):
    """The kind of a document node."""

    DOCUMENT = "document"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"
    ALIAS = "alias"


@dataclass
class Node:
    """A node of a parsed document.

    Mappings keep their keys and values interleaved in ``content``.
    Scalars carry a short tag such as ``!!str`` and their text in ``value``.
    """

    kind: Kind
    tag: str = ""
    value: str = ""
    content: list[Node] = field(default_factory=list)


def node_for_mapping(content: list[Node]) -> Node:
    """Return a mapping node holding interleaved keys and values."""
    return Node(Kind.MAPPING, content=list(content))


def node_for_sequence(content: list[Node]) -> Node:
    """Return a sequence node holding the given items."""
    return Node(Kind.SEQUENCE, content=list(content))


def node_for_string(value: str) -> Node:
    """Return a string scalar node."""
    return Node(Kind.SCALAR, tag="!!str", value=value)


def node_for_boolean(value: bool) -> Node:
    """Return a boolean scalar node."""
    return Node(Kind.SCALAR, tag="!!bool", value="true" if value else "false")


def node_for_int(value: int) -> Node:
    """Return an integer scalar node."""
    return Node(Kind.SCALAR, tag="!!int", value=str(int(value)))


def node_for_float(value: float) -> Node:
    """Return a float scalar node, written with six decimal places."""
    return Node(Kind.SCALAR, tag="!!float", value=f"{value:f}")


def _short_tag(tag: str | None) -> str:
    if not tag:
        return ""
    if tag.startswith(_YAML_TAG_PREFIX):
        return "!!" + tag[len(_YAML_TAG_PREFIX):]
    return tag


def _convert(raw: yaml.Node, seen: dict[int, Node]) -> Node:
    known = seen.get(id(raw))
    if known is not None:
        return known
    tag = _short_tag(raw.tag)
    if isinstance(raw, yaml.ScalarNode):
        node = Node(Kind.SCALAR, tag=tag, value=raw.value)
        seen[id(raw)] = node
        return node
    if isinstance(raw, yaml.SequenceNode):
        node = Node(Kind.SEQUENCE, tag=tag)
        seen[id(raw)] = node
        node.content = [_convert(item, seen) for item in raw.value]
        return node
    if isinstance(raw, yaml.MappingNode):
        node = Node(Kind.MAPPING, tag=tag)
        seen[id(raw)] = node
        for key, value in raw.value:
            node.content.append(_convert(key, seen))
            node.content.append(_convert(value, seen))
        return node
    raise ValueError(f"unexpected YAML node: {raw!r}")


def parse_yaml(text: str | bytes) -> Node:
    """Parse YAML (or JSON) text into a document node.

    Raises ``yaml.YAMLError`` if the text cannot be parsed.
    """
    raw = yaml.compose(text, Loader=yaml.SafeLoader)
    document = Node(Kind.DOCUMENT)
    if raw is not None:
        document.content.append(_convert(raw, {}))
    return document