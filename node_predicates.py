"""
Stateless predicates over syntax nodes.

Every function is total: anything that does not have the expected
shape answers False (or None) instead of raising.
"""
from syntax_node import SEND, SyntaxNode


MESSAGE_EXPECTATION_NAMES = frozenset({"receive", "receive_message_chain"})

CONFIGURED_RESPONSE_NAMES = frozenset(
    {
        "and_return",
        "and_raise",
        "and_throw",
        "and_yield",
        "and_call_original",
        "and_wrap_original",
    }
)


def is_send(node):
    return isinstance(node, SyntaxNode) and node.type == SEND


def send_parts(node):
    """
    Split a send node into (receiver, method_name, arguments).

    Returns None when the node is not a well-formed send.
    """
    if not is_send(node) or len(node.children) < 2:
        return None

    receiver, method_name = node.children[0], node.children[1]
    if receiver is not None and not isinstance(receiver, SyntaxNode):
        return None
    if not isinstance(method_name, str):
        return None

    return receiver, method_name, tuple(node.children[2:])


def is_unqualified_call(node, names):
    """Check for a receiver-less call such as `receive(:bar)`."""
    parts = send_parts(node)
    if parts is None:
        return False
    receiver, method_name, _arguments = parts
    return receiver is None and method_name in names


def last_argument(node):
    parts = send_parts(node)
    if parts is None or not parts[2]:
        return None
    return parts[2][-1]


def is_node_type(value, node_type):
    return isinstance(value, SyntaxNode) and value.type == node_type


def is_message_expectation(node):
    """
    True for `receive(...)`, `receive_message_chain(...)` and
    `receive(...).with(...)`.
    """
    if is_unqualified_call(node, MESSAGE_EXPECTATION_NAMES):
        return True

    parts = send_parts(node)
    if parts is None:
        return False
    receiver, method_name, _arguments = parts
    return method_name == "with" and is_unqualified_call(receiver, {"receive"})


def is_configured_response_name(name):
    return isinstance(name, str) and name in CONFIGURED_RESPONSE_NAMES
