"""
Immutable syntax tree values shared by the loader, walker and rules.

Node type tags follow the Ruby parser's naming (send, block, hash,
block_pass, args, ...).
"""
from dataclasses import dataclass
from typing import Optional, Tuple


SEND = "send"
BLOCK = "block"
HASH = "hash"
BLOCK_PASS = "block_pass"
ARGS = "args"


@dataclass(frozen=True)
class Range:
    """A half-open span of character offsets into the source text."""

    begin_pos: int
    end_pos: int

    def source(self, text):
        if text is None:
            return None
        return text[self.begin_pos:self.end_pos]

    def line_column(self, text):
        """1-based line and column of begin_pos, or (None, None) without source."""
        if text is None:
            return None, None
        before = text[:self.begin_pos]
        line = before.count("\n") + 1
        column = self.begin_pos - (before.rfind("\n") + 1) + 1
        return line, column


@dataclass(frozen=True)
class Location:
    expression: Range
    dot: Optional[Range] = None
    begin: Optional[Range] = None
    end: Optional[Range] = None


@dataclass(frozen=True)
class SyntaxNode:
    type: str
    children: Tuple = ()
    location: Optional[Location] = None

    def child_nodes(self):
        return [c for c in self.children if isinstance(c, SyntaxNode)]


@dataclass(frozen=True)
class Offense:
    rule_name: str
    message: str
    range: Range
