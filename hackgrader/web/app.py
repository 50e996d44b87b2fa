"""Flask JSON API for hackgrader."""

from __future__ import annotations

import json
import queue
import threading

from flask import Flask, Response, current_app, jsonify, request, stream_with_context

from hackgrader.config import Config
from hackgrader.loader import answer_from_json, question_from_dict, report_to_dict
from hackgrader.models import LANGUAGES, CodingQuestion
from hackgrader.runner import TestRunner
from hackgrader.scoring import score_answers, validate_question

app = Flask(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _grader_config() -> Config:
    """Config for this app: an explicit ``GRADER_CONFIG`` or the environment."""
    config = current_app.config.get("GRADER_CONFIG")
    if config is None:
        config = Config.from_env()
    return config


def _parse_run_request() -> tuple[CodingQuestion, str, str]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object with question, language and source")
    question = question_from_dict(data.get("question") or {})
    if not isinstance(question, CodingQuestion):
        raise ValueError("Only coding questions can be run")
    language = data.get("language", "javascript")
    source = data.get("source", "")
    if not isinstance(language, str) or not isinstance(source, str):
        raise ValueError("language and source must be strings")
    if not source.strip():
        raise ValueError("No code provided")
    return question, language, source


# ---------------------------------------------------------------------------
# StreamingRunner
# ---------------------------------------------------------------------------

class StreamingRunner(TestRunner):
    """TestRunner that pushes its progress events onto a queue for SSE."""

    def __init__(self, config, event_queue, evaluator=None):
        super().__init__(config, evaluator)
        self._queue = event_queue

    def _emit(self, event_type: str, **kwargs):
        self._queue.put({"type": event_type, **kwargs})


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/languages")
def languages():
    return jsonify({"languages": list(LANGUAGES)})


@app.route("/api/run", methods=["POST"])
def run_code():
    try:
        question, language, source = _parse_run_request()
        config = _grader_config()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    report = TestRunner(config).run(question, language, source)
    return jsonify(report_to_dict(report))


@app.route("/api/run/stream", methods=["POST"])
def run_code_stream():
    try:
        question, language, source = _parse_run_request()
        config = _grader_config()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    event_queue: queue.Queue = queue.Queue()

    def run_grader():
        try:
            runner = StreamingRunner(config, event_queue)
            report = runner.run(question, language, source)
            event_queue.put({"type": "done", "result": report_to_dict(report)})
        except Exception as e:
            event_queue.put({"type": "error", "message": f"{type(e).__name__}: {e}"})

    thread = threading.Thread(target=run_grader, daemon=True)
    thread.start()

    timeout = config.compile_delay + (config.case_delay + config.evaluation_timeout) * (
        len(question.test_cases) + 1
    )

    def generate():
        while True:
            try:
                msg = event_queue.get(timeout=timeout)
            except queue.Empty:
                yield f"data: {json.dumps({'type': 'error', 'message': 'Grader timed out'})}\n\n"
                break
            yield f"data: {json.dumps(msg)}\n\n"
            if msg["type"] in ("done", "error"):
                break

    return Response(
        stream_with_context(generate()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@app.route("/api/questions/validate", methods=["POST"])
def validate_questions():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        data = data.get("questions", [data])
    if not isinstance(data, list):
        return jsonify({"error": "Expected a question or a list of questions"}), 400

    report = []
    for i, raw in enumerate(data):
        try:
            problems = validate_question(question_from_dict(raw))
        except (TypeError, ValueError) as e:
            problems = [str(e)]
        report.append({"index": i, "valid": not problems, "problems": problems})
    return jsonify({"valid": all(r["valid"] for r in report), "questions": report})


@app.route("/api/score", methods=["POST"])
def score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object with questions and answers"}), 400
    try:
        config = _grader_config()
        questions = [question_from_dict(q) for q in data.get("questions", [])]
        answers = [answer_from_json(a) for a in data.get("answers", [])]
        result = score_answers(questions, answers, config.qualify_threshold)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({
        "score": result.score,
        "total": result.total,
        "percentage": result.percentage,
        "qualified": result.qualified,
    })


def main() -> None:
    app.run(debug=False)
