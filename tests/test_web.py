"""Tests for the Flask API (Flask test client, real evaluator)."""

from __future__ import annotations

import json

import pytest

from hackgrader.web.app import app

QUESTION = {
    "type": "coding",
    "question": "Return the sum of a and b.",
    "testCases": [
        {"input": "a=2, b=3", "output": "5"},
        {"input": "a=-1, b=1", "output": "0"},
        {"input": "a=100, b=200", "output": "300"},
    ],
}


@pytest.fixture
def client(fast_config):
    app.config["TESTING"] = True
    app.config["GRADER_CONFIG"] = fast_config
    with app.test_client() as client:
        yield client
    app.config.pop("GRADER_CONFIG", None)


def _events(response) -> list[dict]:
    body = response.get_data(as_text=True)
    return [json.loads(line[len("data: "):]) for line in body.splitlines() if line.startswith("data: ")]


def test_languages(client):
    resp = client.get("/api/languages")
    assert resp.get_json()["languages"] == ["javascript", "python", "java", "cpp", "c"]


class TestRun:
    def test_all_pass(self, client):
        resp = client.post("/api/run", json={
            "question": QUESTION,
            "language": "javascript",
            "source": "function sum(a, b) { return a + b; }",
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["compiled"] is True
        assert data["all_passed"] is True
        assert [r["output"] for r in data["results"]] == ["5", "0", "300"]

    def test_partial(self, client):
        resp = client.post("/api/run", json={
            "question": QUESTION,
            "language": "javascript",
            "source": "function sum(a, b) { return a === 100 ? 0 : a + b; }",
        })
        data = resp.get_json()
        assert data["passed"] == 2
        assert data["all_passed"] is False

    def test_compile_failure(self, client):
        resp = client.post("/api/run", json={
            "question": QUESTION,
            "language": "cpp",
            "source": "int add(int a, int b) { return a + b; }",
        })
        data = resp.get_json()
        assert data["compiled"] is False
        assert data["results"] == []
        assert "Missing function signature" in data["compile_error"]

    def test_missing_source(self, client):
        resp = client.post("/api/run", json={"question": QUESTION, "language": "c", "source": "  "})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "No code provided"

    @pytest.mark.parametrize("body", [
        {"question": QUESTION, "language": "javascript", "source": 5},
        {"question": QUESTION, "language": ["c"], "source": "int sum(int a, int b) { return a + b; }"},
        {"question": dict(QUESTION, signature="sum"), "language": "javascript", "source": "x"},
    ])
    def test_wrongly_typed_request(self, client, body):
        resp = client.post("/api/run", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_mcq_cannot_run(self, client):
        resp = client.post("/api/run", json={
            "question": {"type": "mcq", "question": "?", "options": ["a", "b"]},
            "source": "x",
        })
        assert resp.status_code == 400

    def test_not_json(self, client):
        assert client.post("/api/run", data="hello").status_code == 400


class TestRunStream:
    def test_events_end_with_done(self, client):
        resp = client.post("/api/run/stream", json={
            "question": QUESTION,
            "language": "javascript",
            "source": "function sum(a, b) { return a + b; }",
        })
        assert resp.mimetype == "text/event-stream"
        events = _events(resp)
        assert events[-1]["type"] == "done"
        assert events[-1]["result"]["all_passed"] is True
        states = [e["state"] for e in events if e["type"] == "state"]
        assert states == ["compiling", "running", "running", "running", "done"]
        assert len([e for e in events if e["type"] == "test_result"]) == 3

    def test_compile_failure_stream(self, client):
        resp = client.post("/api/run/stream", json={
            "question": QUESTION,
            "language": "python",
            "source": "print(1)",
        })
        events = _events(resp)
        assert events[-1]["type"] == "done"
        assert events[-1]["result"]["compiled"] is False
        assert [e["state"] for e in events if e["type"] == "state"] == ["compiling", "compile_failed"]


class TestQuestionsAndScore:
    def test_validate(self, client):
        resp = client.post("/api/questions/validate", json=[QUESTION, {"type": "coding", "question": "x"}])
        data = resp.get_json()
        assert data["valid"] is False
        assert data["questions"][0]["valid"] is True
        assert data["questions"][1]["problems"] == ["A coding question needs at least one test case."]

    def test_validate_bad_body(self, client):
        assert client.post("/api/questions/validate", data="x").status_code == 400

    def test_score(self, client):
        resp = client.post("/api/score", json={
            "questions": [QUESTION, {"type": "mcq", "question": "?", "options": ["a", "b"], "correctOption": 0}],
            "answers": [{"language": "javascript", "code": "", "passed": True}, 0],
        })
        assert resp.get_json() == {"score": 2, "total": 2, "percentage": 100.0, "qualified": True}

    def test_score_without_questions(self, client):
        resp = client.post("/api/score", json={"questions": [], "answers": []})
        assert resp.status_code == 400
        assert "No questions found" in resp.get_json()["error"]
