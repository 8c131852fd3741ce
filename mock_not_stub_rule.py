from base_rule import BaseRule
from node_predicates import (
    is_configured_response_name,
    is_message_expectation,
    is_node_type,
    is_unqualified_call,
    last_argument,
    send_parts,
)
from syntax_node import ARGS, BLOCK, BLOCK_PASS, HASH, SEND, Offense, Range


MSG = "Don't stub your mock."


def expectation_target(node):
    """Return EXPR for `expect(...).to EXPR`, otherwise None."""
    parts = send_parts(node)
    if parts is None:
        return None

    receiver, method_name, arguments = parts
    if method_name != "to" or len(arguments) != 1:
        return None
    if not is_unqualified_call(receiver, {"expect"}):
        return None

    return arguments[0]


def expectation_with_configured_response(node):
    # expect(foo).to receive(:bar).and_return(x)
    target = expectation_target(node)
    parts = send_parts(target)
    if parts is None:
        return None

    receiver, method_name, arguments = parts
    if not is_configured_response_name(method_name) or len(arguments) != 1:
        return None
    if not is_message_expectation(receiver):
        return None

    return target


def expectation_with_return_block(node):
    # expect(foo).to receive(:bar) { x }
    target = expectation_target(node)
    if not is_node_type(target, BLOCK) or len(target.children) != 3:
        return None

    call, args, _body = target.children
    if not is_message_expectation(call) or not is_node_type(args, ARGS):
        return None

    return target


def expectation_with_blockpass(node):
    # expect(foo).to receive(:bar, &blk)
    target = expectation_target(node)
    parts = send_parts(target)
    if parts is None:
        return None

    receiver, method_name, _arguments = parts
    receives = is_unqualified_call(target, {"receive", "receive_message_chain"})
    with_on_receive = method_name == "with" and is_unqualified_call(receiver, {"receive"})
    if not receives and not with_on_receive:
        return None

    argument = last_argument(target)
    return argument if is_node_type(argument, BLOCK_PASS) else None


def expectation_with_hash(node):
    # expect(foo).to receive_messages(bar: 1)
    target = expectation_target(node)
    parts = send_parts(target)
    if parts is None:
        return None

    _receiver, _method_name, arguments = parts
    if is_unqualified_call(target, {"receive_messages"}) and len(arguments) != 1:
        return None
    if not is_unqualified_call(target, {"receive_messages", "receive_message_chain"}):
        return None

    argument = last_argument(target)
    return argument if is_node_type(argument, HASH) else None


def offending_argument_range(location):
    if location is None or location.dot is None:
        return None
    return Range(location.dot.begin_pos, location.expression.end_pos)


def offending_block_range(location):
    if location is None or location.begin is None or location.end is None:
        return None
    return Range(location.begin.begin_pos, location.end.end_pos)


def offending_node_range(location):
    if location is None:
        return None
    return location.expression


class MockNotStubRule(BaseRule):
    """
    Flags message expectations that also configure a response.

        expect(foo).to receive(:bar).and_return(1)   # flagged
        allow(foo).to receive(:bar).and_return(1)    # fine
        expect(foo).to receive(:bar)                 # fine
    """

    name = "RSpec/MockNotStub"
    node_types = frozenset({SEND})

    _CHECKS = (
        (expectation_with_configured_response, offending_argument_range),
        (expectation_with_return_block, offending_block_range),
        (expectation_with_hash, offending_node_range),
        (expectation_with_blockpass, offending_node_range),
    )

    def apply(self, node):
        offenses = []

        for matcher, range_for in self._CHECKS:
            match = matcher(node)
            if match is None:
                continue

            offense_range = range_for(match.location)
            if offense_range is None:
                continue

            offenses.append(Offense(self.name, MSG, offense_range))

        return offenses
