"""Static checks for literal templates in Python source.

Finds ``sprintf``/``sprintf_to``/``format_with_*`` calls whose template is a
string literal (or ``Template("...")``/``literal("...")`` imported from
wprintf) and reports templates that do not parse and calls whose positional
argument count does not match what the template consumes. Runtime templates
are skipped.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from wprintf.error_msg import TemplateSyntaxError
from wprintf.parser import Template

logger = logging.getLogger("wprintf.lint")

E_TEMPLATE_SYNTAX = "E_TEMPLATE_SYNTAX"
E_ARG_COUNT = "E_ARG_COUNT"

_TEMPLATE_CONSTRUCTORS = {"Template", "literal"}


@dataclass(frozen=True)
class StaticDiagnostic:
    """Machine-friendly static diagnostic."""

    code: str
    message: str
    location: str | None = None
    symbol: str | None = None


@dataclass(frozen=True)
class _ImportScope:
    """Names a module binds to wprintf's template constructors and modules."""

    constructors: frozenset[str]
    modules: frozenset[str]

    @classmethod
    def collect(cls, tree: ast.AST) -> "_ImportScope":
        constructors: set[str] = set()
        modules: set[str] = set()
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and _is_wprintf(node.module) and node.level == 0:
                for alias in node.names:
                    if alias.name in _TEMPLATE_CONSTRUCTORS:
                        constructors.add(alias.asname or alias.name)
            elif isinstance(node, ast.Import):
                for alias in node.names:
                    if _is_wprintf(alias.name):
                        modules.add(alias.asname or alias.name.split(".")[0])
        return cls(frozenset(constructors), frozenset(modules))

    def is_constructor(self, node: ast.Call) -> bool:
        func = node.func
        if isinstance(func, ast.Name):
            return func.id in self.constructors
        if isinstance(func, ast.Attribute) and func.attr in _TEMPLATE_CONSTRUCTORS:
            root = func.value
            while isinstance(root, ast.Attribute):
                root = root.value
            return isinstance(root, ast.Name) and root.id in self.modules
        return False


def _is_wprintf(module: Optional[str]) -> bool:
    return module is not None and (module == "wprintf" or module.startswith("wprintf."))


def _call_name(node: ast.Call) -> Optional[str]:
    func = node.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _literal_text(node: ast.expr, scope: _ImportScope) -> Optional[str]:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    if isinstance(node, ast.Call) and scope.is_constructor(node) and len(node.args) == 1:
        return _literal_text(node.args[0], scope)
    return None


def _split_call(
    name: str, node: ast.Call, scope: _ImportScope
) -> tuple[Optional[ast.expr], Optional[list[ast.expr]]]:
    """Return the template expression and the value expressions of a call."""
    args = node.args
    if scope.is_constructor(node):
        return (args[0], None) if len(args) == 1 else (None, None)
    if name == "sprintf" and args:
        return args[0], list(args[1:])
    if name == "sprintf_to" and len(args) >= 2:
        return args[1], list(args[2:])
    if name in ("format_with_c_locale", "format_with_locale"):
        values_index = 2 if name == "format_with_c_locale" else 3
        if len(args) <= values_index:
            return None, None
        values = args[values_index]
        if isinstance(values, (ast.List, ast.Tuple)):
            return args[1], list(values.elts)
        return args[1], None
    return None, None


def _check_call(node: ast.Call, filename: str, scope: _ImportScope) -> Iterable[StaticDiagnostic]:
    name = _call_name(node)
    if name is None:
        return
    template_node, values = _split_call(name, node, scope)
    if template_node is None:
        return
    text = _literal_text(template_node, scope)
    if text is None:
        return
    location = f"{filename}:{node.lineno}:{node.col_offset + 1}"
    try:
        template = Template(text)
    except TemplateSyntaxError as exc:
        # A nested Template("...") is reported when the walk reaches it.
        if not isinstance(template_node, ast.Constant):
            return
        yield StaticDiagnostic(E_TEMPLATE_SYNTAX, f"{exc.msg} in {text!r}", location, name)
        return
    if values is None or any(isinstance(value, ast.Starred) for value in values):
        return
    if len(values) != template.arity:
        yield StaticDiagnostic(
            E_ARG_COUNT,
            f"{text!r} consumes {template.arity} args but {len(values)} are supplied",
            location,
            name,
        )


def check_source(source: str, filename: str = "<string>") -> list[StaticDiagnostic]:
    """Check every literal template call in a module's source."""
    tree = ast.parse(source, filename=filename)
    scope = _ImportScope.collect(tree)
    diagnostics: list[StaticDiagnostic] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Call):
            diagnostics.extend(_check_call(node, filename, scope))
    logger.debug("Checked %s: %d diagnostics", filename, len(diagnostics))
    return diagnostics


def check_file(path: str | Path) -> list[StaticDiagnostic]:
    path = Path(path)
    return check_source(path.read_text(encoding="utf-8"), filename=str(path))
