"""Helpers for parsing Rust snippets in tests."""

from tree_sitter import Node

from rust_imports.ast_visitors.import_discovery import discover_imports
from rust_imports.ast_visitors.parse_ast import parse_tree_from_source
from rust_imports.models import DiscoveredImports


def discover_from_source(source: str) -> DiscoveredImports:
    """Parse Rust source and run import discovery on it."""
    parsed = parse_tree_from_source(source, "test.rs")
    return discover_imports(parsed.tree)


def find_nodes(source: str, node_type: str) -> list[Node]:
    """Parse Rust source and return every node of the given type, in source order."""
    parsed = parse_tree_from_source(source, "test.rs")
    found: list[Node] = []
    pending = [parsed.tree.root_node]
    while pending:
        node = pending.pop()
        if node.type == node_type:
            found.append(node)
        pending.extend(reversed(node.children))
    return found


def find_node(source: str, node_type: str) -> Node:
    """Parse Rust source and return the first node of the given type."""
    nodes = find_nodes(source, node_type)
    assert nodes, f"No {node_type} node in {source!r}"
    return nodes[0]
