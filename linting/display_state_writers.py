#!/usr/bin/env python
"""Reject writes to DisplayState fields outside the board package."""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"
STATE_FILE = SRC_DIR / "state" / "display.py"
STATE_CLASS = "DisplayState"
ALLOWED_DIRS = (SRC_DIR / "board",)

MUTATING_METHODS = {"append", "extend", "insert", "remove", "pop", "clear", "update", "setdefault", "sort"}


def _state_fields(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name == STATE_CLASS:
            return {
                stmt.target.id
                for stmt in node.body
                if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name)
            }
    return set()


def _assigned_attrs(node: ast.AST) -> list[ast.Attribute]:
    if isinstance(node, ast.Assign):
        targets = node.targets
    elif isinstance(node, (ast.AugAssign, ast.AnnAssign)):
        targets = [node.target]
    elif isinstance(node, ast.Delete):
        targets = node.targets
    else:
        return []

    attrs: list[ast.Attribute] = []
    for target in targets:
        for sub in ast.walk(target):
            if isinstance(sub, ast.Attribute) and isinstance(sub.ctx, (ast.Store, ast.Del)):
                attrs.append(sub)
            elif isinstance(sub, ast.Subscript) and isinstance(sub.value, ast.Attribute):
                attrs.append(sub.value)
    return attrs


def _mutated_attr(node: ast.AST) -> ast.Attribute | None:
    if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
        return None
    if node.func.attr not in MUTATING_METHODS:
        return None
    owner = node.func.value
    return owner if isinstance(owner, ast.Attribute) else None


def _collect_violations(filepath: Path, fields: set[str], *, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []

    rel = filepath.relative_to(root)
    violations: list[str] = []
    for node in ast.walk(tree):
        for attr in _assigned_attrs(node):
            if attr.attr in fields:
                violations.append(f"  {rel}:{attr.lineno} assigns `{attr.attr}`")
        mutated = _mutated_attr(node)
        if mutated is not None and mutated.attr in fields:
            violations.append(f"  {rel}:{mutated.lineno} mutates `{mutated.attr}`")
    return violations


def _is_allowed(path: Path) -> bool:
    if path == STATE_FILE:
        return True
    return any(allowed in path.parents for allowed in ALLOWED_DIRS)


def main() -> int:
    if not STATE_FILE.is_file():
        print(f"[display-state-writers] Missing state module: {STATE_FILE}", file=sys.stderr)
        return 1

    fields = _state_fields(STATE_FILE)
    if not fields:
        print(f"[display-state-writers] No {STATE_CLASS} fields found in {STATE_FILE}", file=sys.stderr)
        return 1

    violations: list[str] = []
    for py_file in sorted(SRC_DIR.rglob("*.py")):
        if "__pycache__" in py_file.parts or _is_allowed(py_file):
            continue
        violations.extend(_collect_violations(py_file, fields))

    if not violations:
        return 0

    print("DisplayState is written outside src/board:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
