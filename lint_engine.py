import json
import os
import sys
import time

from ast_loader import LoadTreeError, load_tree_file
from ast_walker import walk_ast
from engine_factory import build_engine


def _round_ms(value):
    return round(max(0.0, float(value)), 3)


def _timing_ms(load_ms, traversal_ms, interpretation_ms):
    total = load_ms + traversal_ms + interpretation_ms
    return {
        "load": _round_ms(load_ms),
        "traversal": _round_ms(traversal_ms),
        "interpretation": _round_ms(interpretation_ms),
        "total": _round_ms(total),
    }


def _offense_item(offense, source):
    line, column = offense.range.line_column(source)
    return {
        "rule": offense.rule_name,
        "message": offense.message,
        "begin_pos": offense.range.begin_pos,
        "end_pos": offense.range.end_pos,
        "line": line,
        "column": column,
        "source": offense.range.source(source),
    }


def _summary(items):
    by_rule = {}
    for item in items:
        by_rule[item["rule"]] = by_rule.get(item["rule"], 0) + 1
    return {"total": len(items), "by_rule": by_rule}


def _text_line(display_name, item):
    if isinstance(item.get("line"), int):
        where = f"{item['line']}:{item['column']}"
    else:
        where = f"@{item['begin_pos']}"
    return f"{display_name}:{where}: [WARN] {item['rule']}: {item['message']}"


def lint_file(filename, *, debug=False):
    """Load, walk and check one file; returns a result entry."""
    display_name = os.path.basename(filename)
    target_file = os.path.realpath(filename)

    load_start = time.perf_counter()
    try:
        tree = load_tree_file(filename)
    except LoadTreeError as exc:
        load_ms = (time.perf_counter() - load_start) * 1000.0
        return {
            "file": display_name,
            "path": target_file,
            "ok": False,
            "error": f"Failed to load {display_name}: {exc}",
            "offenses": [],
            "summary": {"total": 0, "by_rule": {}},
            "timing_ms": _timing_ms(load_ms, 0.0, 0.0),
        }
    load_ms = (time.perf_counter() - load_start) * 1000.0

    traversal_start = time.perf_counter()
    nodes = []
    walk_ast(tree.root, nodes, debug=debug)
    traversal_ms = (time.perf_counter() - traversal_start) * 1000.0

    interpretation_start = time.perf_counter()
    offenses = build_engine().run(nodes)
    interpretation_ms = (time.perf_counter() - interpretation_start) * 1000.0

    items = [_offense_item(offense, tree.source) for offense in offenses]
    return {
        "file": display_name,
        "path": target_file,
        "ok": True,
        "error": None,
        "offenses": items,
        "summary": _summary(items),
        "timing_ms": _timing_ms(load_ms, traversal_ms, interpretation_ms),
    }


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)

    json_mode = True
    if "--text" in args:
        json_mode = False
        args = [a for a in args if a != "--text"]

    debug = False
    if "--debug" in args:
        debug = True
        args = [a for a in args if a != "--debug"]

    files = args
    if not files:
        if json_mode:
            print(json.dumps({"ok": False, "error": "No files provided."}))
        else:
            print("No files provided.")
        return

    overall_start = time.perf_counter()
    results = []

    for idx, filename in enumerate(files):
        result = lint_file(filename, debug=debug)
        results.append(result)

        if json_mode:
            continue

        if len(files) > 1:
            print(f"=== {result['file']} ===")
        if not result["ok"]:
            print(result["error"])
        for item in result["offenses"]:
            print(_text_line(result["file"], item))
        timing = result["timing_ms"]
        print(
            f"[timing] load: {timing['load']} ms, traversal: {timing['traversal']} ms, "
            f"interpretation: {timing['interpretation']} ms, total: {timing['total']} ms."
        )
        if idx < len(files) - 1:
            print()

    if json_mode:
        total_ms = _round_ms((time.perf_counter() - overall_start) * 1000.0)
        print(json.dumps({"ok": True, "results": results, "timing_ms": {"total": total_ms}}))


if __name__ == "__main__":
    main()
