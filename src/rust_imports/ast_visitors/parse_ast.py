"""Rust parsing utilities built on tree-sitter.

This module turns Rust source text into a tree-sitter syntax tree. tree-sitter
recovers from syntax errors by inserting ERROR and MISSING nodes, but a tree
with errors would lead to a partially classified file, so any such tree is
rejected with a RustParseError instead of being returned.

The file-level entry point reads the whole file before parsing and reports
read failures as SourceReadError so that callers can tell I/O problems apart
from malformed source.
"""

from dataclasses import dataclass
from functools import cache
from pathlib import Path

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from rust_imports.errors import RustParseError, SourceReadError


@dataclass(frozen=True)
class ParsedSource:
    """A successfully parsed Rust file."""

    tree: Tree
    source: str
    filename: str


@cache
def rust_language() -> Language:
    """Return the tree-sitter Rust grammar."""
    return Language(tree_sitter_rust.language())


def create_parser() -> Parser:
    """Create a tree-sitter parser bound to the Rust grammar."""
    return Parser(rust_language())


def find_first_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node in document order, if any."""
    if node.is_error or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = find_first_error(child)
        if found is not None:
            return found
    # has_error is set but no child carries it; report the node itself
    return node


def parse_tree_from_source(source: str, filename: str) -> ParsedSource:
    """Parse Rust source code into a syntax tree.

    Args:
        source: Rust source code as a string
        filename: Filename to use in error messages

    Returns:
        The parsed tree together with its source

    Raises:
        RustParseError: If the source contains a syntax error
    """
    tree = create_parser().parse(source.encode("utf-8"))

    error_node = find_first_error(tree.root_node)
    if error_node is not None:
        row, column = error_node.start_point
        detail = "missing " + error_node.type if error_node.is_missing else "syntax error"
        raise RustParseError(filename, row + 1, column + 1, detail)

    return ParsedSource(tree=tree, source=source, filename=filename)


def parse_tree_from_file(file_path: Path) -> ParsedSource:
    """Read a Rust file and parse it.

    Args:
        file_path: Path to the Rust source file

    Raises:
        SourceReadError: If the file is missing, unreadable or not valid UTF-8
        RustParseError: If the source contains a syntax error
    """
    try:
        source_code = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(file_path, e) from e

    return parse_tree_from_source(source_code, str(file_path))
