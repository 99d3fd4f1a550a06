"""Utilities for inspecting the outer attributes of Rust items.

tree-sitter does not attach attributes to the item they decorate: an
``attribute_item`` is a sibling that precedes the item in the enclosing source
file, module body or block. The outer attributes of an item are therefore the
run of ``attribute_item`` siblings directly before it, with comments in between
ignored.
"""

from tree_sitter import Node

from rust_imports.models import ItemMarkers
from rust_imports.paths import node_text

COMMENT_TYPES = frozenset({"line_comment", "block_comment"})


def outer_attributes(item: Node) -> list[Node]:
    """Return the ``attribute`` nodes of the outer attributes of an item, in source order."""
    attributes: list[Node] = []
    sibling = item.prev_named_sibling
    while sibling is not None and (sibling.type == "attribute_item" or sibling.type in COMMENT_TYPES):
        if sibling.type == "attribute_item":
            attributes.extend(child for child in sibling.named_children if child.type == "attribute")
        sibling = sibling.prev_named_sibling
    attributes.reverse()
    return attributes


def decorated_item(attribute_item: Node) -> Node | None:
    """Return the item an ``attribute_item`` decorates, or None at the end of a body."""
    sibling = attribute_item.next_named_sibling
    while sibling is not None and (sibling.type == "attribute_item" or sibling.type in COMMENT_TYPES):
        sibling = sibling.next_named_sibling
    return sibling


def attribute_name(attribute: Node) -> str | None:
    """Return the name of a single-segment attribute such as ``test``, or None.

    Multi-segment attributes like ``#[tokio::test]`` have no single name.
    """
    path = attribute.named_children[0] if attribute.named_children else None
    if path is None or path.type != "identifier":
        return None
    return node_text(path)


def is_cfg_test(attribute: Node) -> bool:
    """Check whether an attribute is exactly ``cfg(test)``.

    ``cfg(not(test))``, ``cfg(any(test, feature = "x"))`` and ``cfg(test,)`` do not count.
    """
    if attribute_name(attribute) != "cfg":
        return False

    arguments = attribute.child_by_field_name("arguments")
    if arguments is None:
        return False

    tokens = arguments.children
    return (
        len(tokens) == 3
        and tokens[0].type == "("
        and tokens[2].type == ")"
        and tokens[1].type == "identifier"
        and node_text(tokens[1]) == "test"
    )


def classify_item_attributes(attributes: list[Node]) -> ItemMarkers:
    """Summarize the markers carried by an item's outer attributes."""
    names = {attribute_name(attribute) for attribute in attributes}
    return ItemMarkers(
        is_test="test" in names,
        is_proc_macro="proc_macro" in names,
        is_cfg_test=any(is_cfg_test(attribute) for attribute in attributes),
    )
