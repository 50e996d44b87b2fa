"""Conversion between portal JSON documents and hackgrader models.

Questions use the portal's field names (``question``, ``testCases`` with
``input``/``output``, ``boilerplate``, ``options``, ``correctOption``).
"""

from __future__ import annotations

import json

from hackgrader.models import (
    CodingAnswer,
    CodingQuestion,
    McqQuestion,
    RunReport,
    Signature,
    TestCase,
)
from hackgrader.scoring import Answer, Question


def question_from_dict(data: dict) -> Question:
    if not isinstance(data, dict):
        raise ValueError("Question must be a JSON object")
    qtype = data.get("type", "coding")
    if qtype == "mcq":
        return McqQuestion(
            question=data.get("question", ""),
            options=list(data.get("options", [])),
            correct_option=int(data.get("correctOption", 0)),
        )
    if qtype != "coding":
        raise ValueError(f"Unknown question type {qtype!r}")

    raw_cases = data.get("testCases", data.get("test_cases", []))
    if not isinstance(raw_cases, list):
        raise ValueError("Test cases must be a list")
    test_cases = []
    for tc in raw_cases:
        if not isinstance(tc, dict):
            raise ValueError("Test cases must be objects with input and output")
        test_cases.append(
            TestCase(
                input=str(tc.get("input", "")),
                expected_output=str(tc.get("output", tc.get("expected_output", ""))),
            )
        )
    sig = data.get("signature") or {}
    if not isinstance(sig, dict):
        raise ValueError("Signature must be an object")
    boilerplate = data.get("boilerplate") or {}
    if not isinstance(boilerplate, dict):
        raise ValueError("Boilerplate must be an object keyed by language")
    defaults = Signature()
    parameters = sig.get("parameters", defaults.parameters)
    if not isinstance(parameters, list) or not all(isinstance(p, str) for p in parameters):
        raise ValueError("Signature parameters must be a list of names")
    for key in ("name", "param_type", "return_type", "class_name"):
        if not isinstance(sig.get(key, ""), str):
            raise ValueError(f"Signature {key} must be a string")
    signature = Signature(
        name=sig.get("name", defaults.name),
        parameters=list(parameters),
        param_type=sig.get("param_type", defaults.param_type),
        return_type=sig.get("return_type", defaults.return_type),
        class_name=sig.get("class_name", defaults.class_name),
    )
    return CodingQuestion(
        question=data.get("question", ""),
        test_cases=test_cases,
        boilerplate=dict(boilerplate),
        signature=signature,
    )


def load_questions(path: str) -> list[Question]:
    """Load a question list (or a single question object) from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("round1_questions", [data])
    return [question_from_dict(q) for q in data]


def answer_from_json(data) -> Answer:
    if data is None:
        return None
    if isinstance(data, bool):
        raise ValueError("Answer must be an option index, a coding answer object or null")
    if isinstance(data, int):
        return data
    if isinstance(data, dict):
        return CodingAnswer(
            language=data.get("language", ""),
            code=data.get("code", ""),
            passed=bool(data.get("passed", False)),
        )
    raise ValueError("Answer must be an option index, a coding answer object or null")


def report_to_dict(report: RunReport) -> dict:
    return {
        "language": report.language,
        "compiled": report.compilation.success,
        "compile_error": report.compilation.error,
        "results": [
            {
                "status": "Passed" if r.passed else "Failed",
                "message": f"Test Case {i + 1}",
                "input": r.input,
                "expected": r.expected_output,
                "output": r.actual_output,
                "passed": r.passed,
            }
            for i, r in enumerate(report.results)
        ],
        "passed": report.passed_count,
        "total": len(report.results),
        "all_passed": report.all_passed,
    }
