"""V8-backed evaluator for JavaScript function bodies.

Every call runs in a fresh ``MiniRacer`` context, so snippets cannot leak
globals from one test case into the next. Exceptions thrown by the snippet
are caught inside the script and reported back as JSON; only engine-level
failures (time-outs, out of memory) surface as Python exceptions.
"""

from __future__ import annotations

import json

from py_mini_racer import JSEvalException, JSTimeoutException, MiniRacer

from hackgrader.models import EvaluationResult

# Shared prologue: turn a thrown value into the text shown after "Runtime Error:".
_DESCRIBE = (
    "function __describe(e) {\n"
    "  if (e !== null && typeof e === 'object' && 'message' in e) return String(e.message);\n"
    "  return String(e);\n"
    "}\n"
)


def build_syntax_script(source: str) -> str:
    """Script that compiles *source* as a function body without running it."""
    return (
        "(function () {\n"
        f"{_DESCRIBE}"
        "  try {\n"
        f"    new Function({json.dumps(source)});\n"
        "    return JSON.stringify({ok: true});\n"
        "  } catch (e) {\n"
        "    return JSON.stringify({ok: false, error: __describe(e)});\n"
        "  }\n"
        "})()"
    )


def build_call_script(body: str, bindings: dict[str, int]) -> str:
    """Script that builds ``Function(*names, body)`` and calls it with the values.

    The return value is converted with ``String()`` on the JavaScript side so
    the caller sees exactly what a browser would print.
    """
    names = json.dumps(list(bindings))
    values = json.dumps(list(bindings.values()))
    return (
        "(function () {\n"
        f"{_DESCRIBE}"
        "  try {\n"
        f"    var fn = Function.apply(null, {names}.concat([{json.dumps(body)}]));\n"
        f"    return JSON.stringify({{ok: true, output: String(fn.apply(null, {values}))}});\n"
        "  } catch (e) {\n"
        "    return JSON.stringify({ok: false, error: __describe(e)});\n"
        "  }\n"
        "})()"
    )


class MiniRacerEvaluator:
    """Evaluates snippets in an embedded V8 isolate via mini-racer."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    def check_syntax(self, source: str) -> str | None:
        result = self._run(build_syntax_script(source))
        return result.error

    def evaluate(self, body: str, bindings: dict[str, int]) -> EvaluationResult:
        return self._run(build_call_script(body, bindings))

    def _run(self, script: str) -> EvaluationResult:
        ctx = MiniRacer()
        try:
            raw = ctx.eval(script, timeout_sec=self.timeout)
        except JSTimeoutException:
            return EvaluationResult(error="Execution timed out", timed_out=True)
        except JSEvalException as e:
            return EvaluationResult(error=str(e).strip() or type(e).__name__)
        payload = json.loads(raw)
        if payload["ok"]:
            return EvaluationResult(output=payload.get("output", ""))
        return EvaluationResult(error=payload["error"])
