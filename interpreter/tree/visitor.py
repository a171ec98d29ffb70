from typing import Any

from interpreter.tree.tree import Node


class NodeVisitor:
    """
    Walks the AST. `visit(node, ...)` calls `visit_<ClassName>(node, ...)`, and nodes
    without such a method fall back on `visit_children`.
    """

    def visit(self, node: Node, *args, **kwargs) -> Any:
        method = "visit_" + node.__class__.__name__
        visitor = getattr(self, method, self.visit_children)
        return visitor(node, *args, **kwargs)

    def visit_children(self, node: Node, *args, **kwargs) -> None:
        """Visit every child node in field order. Operator tokens are leaves, not nodes."""
        for _, value in node.iter_fields():
            children = value if isinstance(value, list) else [value]
            for child in children:
                if isinstance(child, Node):
                    self.visit(child, *args, **kwargs)
