"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest

from hackgrader.cli import main

QUESTION = {
    "type": "coding",
    "question": "Return the sum of a and b.",
    "testCases": [
        {"input": "a=2, b=3", "output": "5"},
        {"input": "a=-1, b=1", "output": "0"},
    ],
}


@pytest.fixture(autouse=True)
def quiet(monkeypatch):
    monkeypatch.setenv("HACKGRADER_VERBOSE", "0")


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return str(path)


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_run_passing(tmp_path, capsys):
    question = _write(tmp_path, "q.json", QUESTION)
    source = _write(tmp_path, "sum.js", "function sum(a, b) { return a + b; }")
    assert _exit_code(["run", question, source, "--no-delay"]) == 0
    out = capsys.readouterr().out
    assert "Compiling..." in out
    assert "> Test Case 2:" in out
    assert "2/2 test case(s) passed." in out


def test_run_compile_failure(tmp_path, capsys):
    question = _write(tmp_path, "q.json", QUESTION)
    source = _write(tmp_path, "Sum.java", "public static int sum(int a, int b) { return a + b; }")
    assert _exit_code(["run", question, source, "-l", "java", "--no-delay"]) == 1
    assert "Missing 'class Solution' wrapper." in capsys.readouterr().out


def test_run_partial_failure(tmp_path, capsys):
    question = _write(tmp_path, "q.json", QUESTION)
    source = _write(tmp_path, "sum.c", "int sum(int a, int b) {\n  return a * b;\n}")
    assert _exit_code(["run", question, source, "-l", "c", "--no-delay"]) == 1
    assert "0/2 test case(s) passed." in capsys.readouterr().out


def test_run_missing_file(tmp_path, capsys):
    question = _write(tmp_path, "q.json", QUESTION)
    assert _exit_code(["run", question, str(tmp_path / "nope.js"), "--no-delay"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_validate(tmp_path, capsys):
    good = _write(tmp_path, "good.json", [QUESTION])
    assert _exit_code(["validate", good]) == 0
    bad = _write(tmp_path, "bad.json", [{"type": "coding", "question": "", "testCases": []}])
    assert _exit_code(["validate", bad]) == 1
    out = capsys.readouterr().out
    assert "Question 1: Question text cannot be empty." in out


def test_score(tmp_path, capsys):
    questions = _write(tmp_path, "q.json", [
        {"type": "mcq", "question": "Pick", "options": ["x", "y"], "correctOption": 1},
        QUESTION,
    ])
    answers = _write(tmp_path, "a.json", [1, {"language": "javascript", "code": "", "passed": False}])
    assert _exit_code(["score", questions, answers]) == 0
    out = capsys.readouterr().out
    assert "Score: 1 / 2 (50%)" in out
    assert "Qualified" in out


def test_score_threshold(tmp_path, capsys):
    questions = _write(tmp_path, "q.json", [QUESTION])
    answers = _write(tmp_path, "a.json", [None])
    assert _exit_code(["score", questions, answers, "--threshold", "0"]) == 0
    assert "Qualified" in capsys.readouterr().out


def test_no_command(capsys):
    assert _exit_code([]) == 1


def test_bad_env_config(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("HACKGRADER_EVALUATOR", "docker")
    assert _exit_code(["validate", _write(tmp_path, "q.json", [QUESTION])]) == 1
    assert "Unknown evaluator" in capsys.readouterr().err
