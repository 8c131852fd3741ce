import json
import os

from syntax_node import Location, Range, SyntaxNode


SPAN_KEYS = ("expression", "dot", "begin", "end")


class LoadTreeError(RuntimeError):
    pass


class LoadedTree:
    def __init__(self, root, source=None):
        self.root = root
        self.source = source


def _span(raw, key, required=False):
    if raw is None:
        if required:
            raise LoadTreeError(f"Missing '{key}' span in node location.")
        return None
    if (
        not isinstance(raw, (list, tuple))
        or len(raw) != 2
        or not all(isinstance(pos, int) and not isinstance(pos, bool) for pos in raw)
    ):
        raise LoadTreeError(f"Span '{key}' must be a [begin_pos, end_pos] pair, got {raw!r}.")
    return Range(raw[0], raw[1])


def _location(raw):
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise LoadTreeError(f"Node location must be an object, got {type(raw).__name__}.")
    spans = {key: _span(raw.get(key), key, required=(key == "expression")) for key in SPAN_KEYS}
    return Location(**spans)


def build_node(raw):
    """Convert a decoded JSON object into a SyntaxNode (recursively)."""
    if not isinstance(raw, dict):
        raise LoadTreeError(f"Expected a node object, got {type(raw).__name__}.")

    node_type = raw.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise LoadTreeError("Node is missing its 'type'.")

    raw_children = raw.get("children", [])
    if not isinstance(raw_children, list):
        raise LoadTreeError(f"Children of '{node_type}' node must be a list.")

    children = tuple(
        build_node(child) if isinstance(child, dict) else child
        for child in raw_children
    )
    return SyntaxNode(node_type, children, _location(raw.get("location")))


def loads_tree(text):
    try:
        return _loads_tree(text)
    except RecursionError as exc:
        raise LoadTreeError("Tree is nested too deeply") from exc


def _loads_tree(text):
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadTreeError(f"Invalid JSON: {exc}") from exc

    if isinstance(payload, dict) and "ast" in payload:
        source = payload.get("source")
        if source is not None and not isinstance(source, str):
            raise LoadTreeError("'source' must be a string.")
        return LoadedTree(build_node(payload["ast"]), source)

    return LoadedTree(build_node(payload))


def load_tree_file(filename):
    if not os.path.exists(filename):
        raise LoadTreeError(f"Input file does not exist: {filename}")
    if not os.path.isfile(filename):
        raise LoadTreeError(f"Input path is not a file: {filename}")

    try:
        with open(filename, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadTreeError(f"Could not read '{os.path.basename(filename)}': {exc}") from exc

    return loads_tree(text)
