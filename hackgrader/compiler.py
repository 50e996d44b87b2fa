"""Simulated compilation: per-language structural checks run before execution.

The checks are advisory. They catch submissions that are missing the wrapper
or signature a language requires and report a compiler-like message, but a
source that passes can still fail at run time. Each language maps to an
ordered list of rules and the first failing rule wins; adding a language is a
new table entry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from hackgrader.evaluator_base import Evaluator
from hackgrader.models import CompilationResult, Signature


@dataclass(frozen=True)
class SyntaxRule:
    pattern: str | None  # regex template over the signature; None = parse as JavaScript
    message: str


SYNTAX_RULES: dict[str, tuple[SyntaxRule, ...]] = {
    "python": (
        SyntaxRule(
            r"def\s+{name}\s*\(\s*{params}\s*\)\s*:",
            "Syntax Error: Missing function definition 'def {name}({param_list}):'",
        ),
    ),
    "java": (
        SyntaxRule(
            r"class\s+{class_name}",
            "Compilation Error: Missing 'class {class_name}' wrapper.",
        ),
        SyntaxRule(
            r"public\s+static\s+{return_type}\s+{name}\s*\(\s*{typed_params}\s*\)",
            "Compilation Error: Missing method signature "
            "'public static {return_type} {name}({typed_param_list})'.",
        ),
    ),
    "cpp": (
        SyntaxRule(
            r"{return_type}\s+{name}\s*\(\s*{typed_params}\s*\)",
            "Compilation Error: Missing function signature '{return_type} {name}({typed_param_list})'.",
        ),
    ),
    "javascript": (
        SyntaxRule(None, "Syntax Error: {error}"),
    ),
}
SYNTAX_RULES["c"] = SYNTAX_RULES["cpp"]


def _pattern_fields(signature: Signature) -> dict[str, str]:
    param_type = re.escape(signature.param_type)
    return {
        "name": re.escape(signature.name),
        "class_name": re.escape(signature.class_name),
        "return_type": re.escape(signature.return_type),
        "params": r"\s*,\s*".join(re.escape(p) for p in signature.parameters),
        "typed_params": r"\s*,\s*".join(
            rf"{param_type}\s+{re.escape(p)}" for p in signature.parameters
        ),
    }


def _message_fields(signature: Signature) -> dict[str, str]:
    return {
        "name": signature.name,
        "class_name": signature.class_name,
        "return_type": signature.return_type,
        "param_list": ", ".join(signature.parameters),
        "typed_param_list": ", ".join(f"{signature.param_type} {p}" for p in signature.parameters),
    }


def simulate_compilation(
    code: str,
    language: str,
    signature: Signature,
    evaluator: Evaluator,
) -> CompilationResult:
    """Check *code* against the rules for *language*.

    Languages without an entry in :data:`SYNTAX_RULES` are always accepted.
    """
    rules = SYNTAX_RULES.get(language, ())
    pattern_fields = _pattern_fields(signature)
    message_fields = _message_fields(signature)
    for rule in rules:
        if rule.pattern is None:
            error = evaluator.check_syntax(code)
            if error is not None:
                return CompilationResult(success=False, error=rule.message.format(error=error))
            continue
        if not re.search(rule.pattern.format(**pattern_fields), code):
            return CompilationResult(success=False, error=rule.message.format(**message_fields))
    return CompilationResult(success=True)
