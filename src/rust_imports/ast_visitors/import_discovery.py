"""Syntax tree visitor for discovering the crates a Rust file depends on.

The visitor walks the tree once, depth-first and in source order. It keeps a
ScopeStack so that local modules and renamed imports shadow crate names of the
same spelling, and so that references under ``#[test]`` functions and
``#[cfg(test)]`` modules are classified as test-only.

Only the first segment of a path can name a crate. Single-segment paths are
never classified: they are locals, prelude names or names already brought in
by a ``use``.
"""

from tree_sitter import Node, Tree

from rust_imports.attributes import classify_item_attributes, decorated_item, outer_attributes
from rust_imports.ast_visitors.node_visitor import NodeVisitor
from rust_imports.import_classifier import PATH_KEYWORDS, ImportClassifier
from rust_imports.models import DiscoveredImports, Hints
from rust_imports.paths import (
    SCOPED_PATH_TYPES,
    SEGMENT_TYPES,
    first_segment_name,
    last_segment_name,
    node_text,
    path_segments,
)
from rust_imports.scope_tracker import ScopeStack

# Items whose body is an associated item list rather than a module body
ASSOCIATED_ITEM_PARENTS = frozenset({"impl_item", "trait_item"})


def is_free_function(node: Node) -> bool:
    """Check whether a function item is a free function rather than an impl or trait method."""
    body = node.parent
    if body is None or body.type != "declaration_list":
        return True
    owner = body.parent
    return owner is None or owner.type not in ASSOCIATED_ITEM_PARENTS


def owns_attributes(item: Node) -> bool:
    """Check whether an item visits its outer attributes inside its own scope."""
    return item.type == "mod_item" or (item.type == "function_item" and is_free_function(item))


class ImportDiscoveryVisitor(NodeVisitor):
    """Discovers crate references in a Rust syntax tree with their scope context."""

    def __init__(self) -> None:
        """Initialize the visitor with a root scope and no references."""
        super().__init__()
        self.scope_stack = ScopeStack()
        self.classifier = ImportClassifier(self.scope_stack)
        self.has_main = False
        self.has_test = False
        self.has_proc_macro = False

    @property
    def hints(self) -> Hints:
        return Hints(has_main=self.has_main, has_test=self.has_test, has_proc_macro=self.has_proc_macro)

    def _record(self, name: str | None, node: Node) -> None:
        if name is not None:
            self.classifier.record_reference(name, node.start_point[0] + 1)

    def visit_use_declaration(self, node: Node) -> None:
        """Handle ``use`` declarations.

        Examples:
            use serde;                  -> serde
            use serde::Deserialize;     -> serde, declares Deserialize
            use std::io::{self, Read};  -> std, declares io and Read
            use rayon as par;           -> rayon, declares par
            use std::{io::Result as R}; -> std, Result, declares R
        """
        tree = node.child_by_field_name("argument")
        if tree is None:
            return

        # The first segment of the whole tree is the crate (or a local module)
        match tree.type:
            case "identifier" | "scoped_identifier":
                self._record(first_segment_name(tree), tree)
            case "scoped_use_list":
                path = tree.child_by_field_name("path")
                if path is not None:
                    self._record(first_segment_name(path), path)
            case "use_wildcard":
                path = tree.named_children[0] if tree.named_children else None
                if path is not None:
                    self._record(first_segment_name(path), path)
            case "use_as_clause":
                path = tree.child_by_field_name("path")
                if path is not None:
                    self._record(first_segment_name(path), path)
            case _:
                pass

        self._declare_use_tree(tree)

    def _declare_use_tree(self, tree: Node) -> None:
        """Declare the local names a use tree brings into scope."""
        match tree.type:
            case "identifier":
                self.scope_stack.declare_local(node_text(tree))
            case "scoped_identifier":
                name = last_segment_name(tree)
                if name is not None and name not in PATH_KEYWORDS:
                    self.scope_stack.declare_local(name)
            case "use_as_clause":
                path = tree.child_by_field_name("path")
                alias = tree.child_by_field_name("alias")
                # The renamed segment itself is recorded, as for `use x as y`
                if path is not None:
                    self._record(last_segment_name(path), path)
                if alias is not None:
                    self.scope_stack.declare_local(node_text(alias))
            case "scoped_use_list":
                path = tree.child_by_field_name("path")
                items = tree.child_by_field_name("list")
                if items is None:
                    return
                # `a::b::{self, c}` brings `b` itself into scope
                if path is not None and any(item.type == "self" for item in items.named_children):
                    name = last_segment_name(path)
                    if name is not None:
                        self.scope_stack.declare_local(name)
                self._declare_use_tree(items)
            case "use_list":
                for item in tree.named_children:
                    self._declare_use_tree(item)
            case _:
                # self, super, crate and wildcards bring no new name
                pass

    def visit_extern_crate_declaration(self, node: Node) -> None:
        """Handle ``extern crate x;`` and ``extern crate x as y;``."""
        name = node.child_by_field_name("name")
        if name is not None:
            self._record(node_text(name), name)

    def visit_scoped_identifier(self, node: Node) -> None:
        """Handle multi-segment paths in expressions and patterns, like ``regex::Regex::new``."""
        self._visit_path(node)

    def visit_scoped_type_identifier(self, node: Node) -> None:
        """Handle multi-segment paths in types, like ``chrono::DateTime``."""
        self._visit_path(node)

    def _visit_path(self, node: Node) -> None:
        segments = path_segments(node)
        if len(segments) > 1:
            self._record(node_text(segments[0]), segments[0])
        self._visit_path_arguments(node)

    def _visit_path_arguments(self, node: Node) -> None:
        """Visit generic arguments and qualified-self prefixes hanging off a path."""
        if node.type in SCOPED_PATH_TYPES:
            prefix = node.child_by_field_name("path")
            if prefix is not None:
                self._visit_path_arguments(prefix)
        elif node.type == "generic_type":
            base = node.child_by_field_name("type")
            if base is not None:
                self._visit_path_arguments(base)
            arguments = node.child_by_field_name("type_arguments")
            if arguments is not None:
                self.visit(arguments)
        elif node.type not in SEGMENT_TYPES:
            self.visit(node)

    def visit_attribute(self, node: Node) -> None:
        """Visit the path of an attribute; its arguments are unparsed tokens."""
        if node.named_children:
            self.visit(node.named_children[0])

    def visit_attribute_item(self, node: Node) -> None:
        """Visit attributes of items that do not visit their own attributes."""
        item = decorated_item(node)
        if item is not None and owns_attributes(item):
            return
        self.generic_visit(node)

    def visit_block(self, node: Node) -> None:
        """Track block scope."""
        with self.scope_stack.scope():
            self.generic_visit(node)

    def visit_mod_item(self, node: Node) -> None:
        """Track module scope; ``#[cfg(test)]`` modules are test-only."""
        attributes = outer_attributes(node)
        markers = classify_item_attributes(attributes)

        # The module name is visible in the enclosing scope
        name = node.child_by_field_name("name")
        if name is not None:
            self.scope_stack.declare_local(node_text(name))

        with self.scope_stack.scope(is_test_marker=markers.is_cfg_test):
            for attribute in attributes:
                self.visit(attribute)
            self.generic_visit(node)

    def visit_function_item(self, node: Node) -> None:
        """Track function scope and the main, test and proc-macro hints."""
        if not is_free_function(node):
            # Methods have no scope of their own; their body block opens one
            self.generic_visit(node)
            return

        attributes = outer_attributes(node)
        is_test_marker = False

        name = node.child_by_field_name("name")
        if self.scope_stack.is_root() and name is not None and node_text(name) == "main":
            self.has_main = True
        else:
            markers = classify_item_attributes(attributes)
            if markers.is_test:
                self.has_test = True
                is_test_marker = True
            if markers.is_proc_macro:
                self.has_proc_macro = True

        with self.scope_stack.scope(is_test_marker=is_test_marker):
            for attribute in attributes:
                self.visit(attribute)
            self.generic_visit(node)


def discover_imports(tree: Tree) -> DiscoveredImports:
    """Collect crate references and hints from a parsed Rust file.

    Args:
        tree: Parsed syntax tree of a Rust source file

    Returns:
        Raw normal and test-only references, before differencing and filtering
    """
    visitor = ImportDiscoveryVisitor()
    visitor.visit(tree.root_node)
    assert visitor.scope_stack.is_root(), "Scope stack not unwound after traversal"

    return DiscoveredImports(
        imports=frozenset(visitor.classifier.imports),
        test_imports=frozenset(visitor.classifier.test_imports),
        records=tuple(visitor.classifier.records),
        hints=visitor.hints,
    )
