"""Test helper utilities."""

from .parsing import discover_from_source, find_node, find_nodes
from .temp_files import temp_rust_file

__all__ = [
    "discover_from_source",
    "find_node",
    "find_nodes",
    "temp_rust_file",
]
