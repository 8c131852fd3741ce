import sys

from syntax_node import SyntaxNode


def walk_ast(node, nodes, *, debug=False):
    """
    Walks a syntax tree and collects every node into a flat list for the
    rule engine.

    Nodes are appended depth-first in source order (a node before its
    children, children left to right). Literal children are skipped.
    An explicit stack keeps deeply nested trees off the call stack.
    """

    if not isinstance(node, SyntaxNode):
        return None

    stack = [node]
    while stack:
        current = stack.pop()
        nodes.append(current)

        if debug:
            print("VISITING:", current.type, file=sys.stderr)

        stack.extend(reversed(current.child_nodes()))

    return node
