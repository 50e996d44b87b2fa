"""Simulated execution of one submission against one test case.

JavaScript submissions run as written. Every other language is "transpiled"
by taking the outermost brace-delimited body and rewriting typed local
declarations to ``let``; the result is then run as JavaScript. This mirrors
what the judging UI has always shown candidates, limitations included: Java
method declarations and Python indentation do not survive the rewrite and
surface as runtime errors.
"""

from __future__ import annotations

import re

from hackgrader.evaluator_base import Evaluator
from hackgrader.input_parser import MalformedInputError, parse_input
from hackgrader.models import NATIVE_LANGUAGE, Signature, TestCase, TestCaseResult

_BODY = re.compile(r"\{([\s\S]*)\}")
_TYPED_DECLARATION = re.compile(r"\b(int|double|float|String|long)\s+")


class BodyNotFoundError(ValueError):
    pass


def extract_body(code: str) -> str:
    """Return the text between the first ``{`` and the last ``}``."""
    match = _BODY.search(code)
    if not match or not match.group(1):
        raise BodyNotFoundError("Could not find a valid function body (e.g., {...}).")
    return match.group(1)


def transpile_declarations(body: str) -> str:
    """Rewrite ``int x`` / ``String s`` style declarations to ``let x``."""
    return _TYPED_DECLARATION.sub("let ", body)


def build_body(code: str, language: str, signature: Signature, params: list[str]) -> str:
    """Build the JavaScript function body to evaluate for *language*."""
    if language == NATIVE_LANGUAGE:
        return f"{code}\nreturn {signature.name}({','.join(params)});"
    return transpile_declarations(extract_body(code))


def outputs_match(expected: str, actual: str) -> bool:
    """Strict comparison: ``"5.0"`` does not match ``"5"``."""
    return str(actual) == str(expected)


def simulate_execution(
    code: str,
    language: str,
    test_case: TestCase,
    signature: Signature,
    evaluator: Evaluator,
) -> TestCaseResult:
    """Run *code* against *test_case*; never raises for submission faults."""

    def failed(actual: str) -> TestCaseResult:
        return TestCaseResult(
            input=test_case.input,
            expected_output=test_case.expected_output,
            actual_output=actual,
            passed=False,
        )

    try:
        bindings = parse_input(test_case.input)
    except MalformedInputError as e:
        return failed(f"Malformed Input: {e}")

    try:
        body = build_body(code, language, signature, list(bindings))
    except BodyNotFoundError as e:
        return failed(f"Runtime Error: {e}")

    evaluation = evaluator.evaluate(body, bindings)
    if not evaluation.ok:
        return failed(f"Runtime Error: {evaluation.error}")

    return TestCaseResult(
        input=test_case.input,
        expected_output=test_case.expected_output,
        actual_output=evaluation.output,
        passed=outputs_match(test_case.expected_output, evaluation.output),
    )
