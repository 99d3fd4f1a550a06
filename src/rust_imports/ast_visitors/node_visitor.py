"""A NodeVisitor for tree-sitter trees, shaped like ``ast.NodeVisitor``."""

from tree_sitter import Node


class NodeVisitor:
    """Walks a tree-sitter syntax tree depth-first, in source order.

    ``visit`` calls ``visit_<node type>`` when the subclass defines one and
    ``generic_visit`` otherwise. Anonymous nodes (punctuation and keywords) are
    never visited.
    """

    def visit(self, node: Node) -> None:
        """Visit a node."""
        visitor = getattr(self, f"visit_{node.type}", self.generic_visit)
        visitor(node)

    def generic_visit(self, node: Node) -> None:
        """Visit every named child of the node."""
        for child in node.named_children:
            self.visit(child)
