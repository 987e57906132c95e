"""Idempotent edits to the project's entry point and ignore file.

``patch_entry_point`` uses :mod:`ast` to find where the import block and the
entry function are, then edits the text line by line so everything else in
the file (comments, formatting, line endings) is kept as is. Running either
function again with the same arguments changes nothing.
"""

from __future__ import annotations

import ast
import io
from pathlib import Path
from typing import Optional, Union

from .log import debug, info, ok, warn


def _is_docstring(node: ast.stmt) -> bool:
    return (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Constant)
        and isinstance(node.value.value, str)
    )


def _has_import(tree: ast.Module, module_path: str, name: str) -> bool:
    for node in tree.body:
        if isinstance(node, ast.ImportFrom) and node.level == 0 and node.module == module_path:
            if any(alias.name == name and alias.asname in (None, name) for alias in node.names):
                return True
    return False


def _start(node: ast.stmt) -> int:
    """0-based index of the first line of *node*, decorators included."""
    decorators = getattr(node, "decorator_list", None) or []
    return min([node.lineno] + [d.lineno for d in decorators]) - 1


def _import_index(tree: ast.Module) -> int:
    """0-based line index where a new top-level import should go."""
    future_end: Optional[int] = None
    for node in tree.body:
        if isinstance(node, ast.ImportFrom) and node.module == "__future__":
            future_end = node.end_lineno
            continue
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            return _start(node)
    if future_end is not None:
        return future_end
    # no imports: first statement after the module docstring
    body = tree.body[1:] if _is_docstring(tree.body[0]) else tree.body
    return _start(body[0]) if body else tree.body[0].end_lineno


def _call_index(fn) -> int:
    """0-based line index of the first statement of *fn* after its docstring."""
    first = fn.body[0]
    if not _is_docstring(first):
        return _start(first)
    return _start(fn.body[1]) if len(fn.body) > 1 else first.end_lineno


def _find_function(tree: ast.Module, function: str):
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name == function:
            return node
    return None


def _has_call(fn, name: str) -> bool:
    """True if *fn* already calls ``<name>.init()``, comments and spacing aside."""
    for node in ast.walk(fn):
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Attribute)
            and node.func.attr == "init"
            and isinstance(node.func.value, ast.Name)
            and node.func.value.id == name
        ):
            return True
    return False


def _newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def patch_entry_point(
    entry_file: Union[str, Path],
    module_path: str,
    *,
    function: str = "main",
    name: str = "env",
) -> bool:
    """Import *module_path* and call ``<name>.init()`` at the top of *function*.

    Returns True if *entry_file* was rewritten. Missing files, files that do
    not parse and files without the entry function are reported and left
    untouched.
    """
    p = Path(entry_file)
    if not p.is_file():
        warn(f"{p} not found. Skipping {name}.init() insertion.")
        return False

    # newline="" keeps CRLF files intact
    with p.open(encoding="utf-8-sig", newline="") as fh:
        text = fh.read()
    try:
        tree = ast.parse(text, filename=str(p))
    except SyntaxError as ex:
        warn(f"{p} could not be parsed ({ex.msg}, line {ex.lineno}). Skipping {name}.init() insertion.")
        return False

    fn = _find_function(tree, function)
    if fn is None:
        warn(f"Function {function}() not found in {p}. Skipping {name}.init() insertion.")
        return False

    nl = _newline(text)
    lines = io.StringIO(text, newline="").readlines()
    import_line = f"from {module_path} import {name}"
    call = f"{name}.init()"

    # (index, line) pairs, applied bottom-up so earlier indexes stay valid
    edits = []
    if not _has_import(tree, module_path, name):
        edits.append((_import_index(tree), import_line + nl))

    if not _has_call(fn, name):
        first = fn.body[0]
        indent = lines[first.lineno - 1][: first.col_offset]
        if indent.strip():
            warn(f"{function}() in {p} has its body on the def line. Skipping {name}.init() insertion.")
            return False
        edits.append((_call_index(fn), indent + call + nl))

    if not edits:
        info(f"{p} already imports {module_path} and calls {call}.")
        return False

    # the last line needs a terminator before anything is appended after it
    if any(at >= len(lines) for at, _ in edits) and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += nl

    for at, new in sorted(edits, key=lambda e: e[0], reverse=True):
        debug(f"{p}:{at + 1}: insert {new.strip()!r}")
        lines.insert(at, new)

    p.write_text("".join(lines), encoding="utf-8", newline="")
    ok(f"Updated {p} with {call} and import for {module_path}")
    return True


def ensure_ignored(ignore_file: Union[str, Path], pattern: str) -> bool:
    """Append *pattern* to *ignore_file* unless it is already listed.

    Creates the file when it does not exist. Returns True if it changed.
    """
    p = Path(ignore_file)
    if not p.exists():
        info(f"{p} not found. Creating a new one.")
        p.write_text(pattern + "\n", encoding="utf-8")
        ok(f"Added {pattern} to {p}.")
        return True

    text = p.read_text(encoding="utf-8")
    if pattern in (line.strip() for line in text.splitlines()):
        info(f"{pattern} is already in {p}.")
        return False

    with p.open("a", encoding="utf-8") as fh:
        if text and not text.endswith("\n"):
            fh.write("\n")
        fh.write(pattern + "\n")
    ok(f"Added {pattern} to {p}.")
    return True
