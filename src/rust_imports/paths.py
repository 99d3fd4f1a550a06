"""Utilities for reading Rust paths out of tree-sitter nodes.

tree-sitter nests multi-segment paths to the left: ``a::b::c`` is a
``scoped_identifier`` whose ``path`` field is the ``scoped_identifier`` for
``a::b``. These helpers flatten that shape back into the list of segments.
"""

from tree_sitter import Node

# Path nodes with a ``path`` field (optional for a leading ``::``) and a ``name`` field
SCOPED_PATH_TYPES = frozenset({"scoped_identifier", "scoped_type_identifier"})

# Nodes that form a single path segment
SEGMENT_TYPES = frozenset(
    {
        "identifier",
        "type_identifier",
        "primitive_type",
        "crate",
        "self",
        "super",
        "metavariable",
    }
)


def node_text(node: Node) -> str:
    """Return the source text covered by a node."""
    text = node.text
    assert text is not None, f"{node.type} node has no text"
    return text.decode("utf-8")


def path_segments(node: Node) -> list[Node]:
    """Flatten a path node into its segments, leftmost first.

    Generic arguments are skipped, so ``Vec::<u8>::new`` yields ``Vec`` and
    ``new``. A qualified-self prefix such as ``<T as Trait>::`` is opaque and
    contributes no segments.

    Example:
        For ``std::collections::HashMap`` returns the nodes for
        ``std``, ``collections`` and ``HashMap``
    """
    if node.type in SCOPED_PATH_TYPES:
        segments: list[Node] = []
        prefix = node.child_by_field_name("path")
        if prefix is not None:
            segments.extend(path_segments(prefix))
        name = node.child_by_field_name("name")
        if name is not None:
            segments.append(name)
        return segments

    if node.type == "generic_type":
        base = node.child_by_field_name("type")
        return path_segments(base) if base is not None else []

    if node.type in SEGMENT_TYPES:
        return [node]

    return []


def first_segment_name(node: Node) -> str | None:
    """Return the text of the leftmost segment of a path, or None for an opaque path."""
    segments = path_segments(node)
    if not segments:
        return None
    return node_text(segments[0])


def last_segment_name(node: Node) -> str | None:
    """Return the text of the rightmost segment of a path, or None for an opaque path."""
    segments = path_segments(node)
    if not segments:
        return None
    return node_text(segments[-1])
