"""Tree serialization — JSON round-trip for tagtree nodes.

Converts a Node tree to/from JSON-compatible dicts. Parent links are not
stored; they are rebuilt from nesting on load.

All output is deterministic (sorted keys).

Example:
    from tagtree import parse_markup
    from tagtree.serialization import to_json, from_json

    root = parse_markup('<p class="x">Hi</p>')
    restored = from_json(to_json(root))
    assert to_dict(restored) == to_dict(root)

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from typing import Any

from tagtree.errors import SerializationError, TreeError
from tagtree.nodes import Node


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its subtree to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    """
    return {
        "_type": "Node",
        "tag_name": node.tag_name,
        "attributes": dict(node.attributes),
        "attribute_pairs": [list(pair) for pair in node.attribute_pairs],
        "content": node.content,
        "void": node.void,
        "children": [to_dict(child) for child in node.children],
    }


def from_dict(data: dict[str, Any]) -> Node:
    """Rebuild a node tree from :func:`to_dict` output.

    Raises:
        SerializationError: On a missing ``_type``/``tag_name`` or an unknown type.
    """
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a dict, got {type(data).__name__}")
    node_type = data.get("_type")
    if node_type != "Node":
        raise SerializationError(f"Unknown node type: {node_type!r}")
    try:
        tag_name = data["tag_name"]
    except KeyError:
        raise SerializationError("Missing field: tag_name") from None

    pairs = tuple((str(k), str(v)) for k, v in data.get("attribute_pairs", ()))
    attributes = dict(data["attributes"]) if "attributes" in data else dict(pairs)
    node = Node(
        tag_name,
        attributes=attributes,
        attribute_pairs=pairs,
        content=data.get("content"),
        void=bool(data.get("void", False)),
    )
    for child in data.get("children", ()):
        try:
            node.append(from_dict(child))
        except TreeError as e:
            raise SerializationError(str(e)) from e
    return node


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string."""
    return json.dumps(to_dict(node), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(json_str: str) -> Node:
    """Deserialize a tree from a JSON string.

    Raises:
        SerializationError: If the string is not valid JSON or not a tree.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    return from_dict(data)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
