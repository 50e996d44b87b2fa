"""Compile -> run-each-test-case loop for a single submission."""

from __future__ import annotations

import sys
import time

from hackgrader.compiler import simulate_compilation
from hackgrader.config import Config
from hackgrader.evaluator_base import Evaluator
from hackgrader.evaluator_factory import create_evaluator
from hackgrader.executor import simulate_execution
from hackgrader.models import (
    CodingQuestion,
    RunReport,
    RunState,
    TestCaseResult,
)


def format_test_case(index: int, result: TestCaseResult) -> str:
    """Console block for one test case, as shown in the editor's console tab."""
    return (
        "--------------------\n"
        f"> Test Case {index + 1}:\n"
        f"  Input:           {result.input}\n"
        f"  Expected Output: {result.expected_output}\n"
        f"  Your Output:     {result.actual_output}\n"
        f"  Result:          {'✅ Passed' if result.passed else '❌ Failed'}"
    )


class TestRunner:
    """Grades one submission at a time and exposes its progress.

    ``state`` moves idle -> compiling -> (compile_failed | running -> done).
    While running, ``current_index`` is the test case being executed. Each
    call to :meth:`run` starts again from compiling with no carried-over
    results. The report returned by :meth:`run` is built from that call's own
    results; ``results`` is only a progress view of the latest run.
    """

    __test__ = False  # not a pytest class

    def __init__(self, config: Config, evaluator: Evaluator | None = None) -> None:
        self.config = config
        self._evaluator: Evaluator = evaluator or create_evaluator(config)
        self.state = RunState.IDLE
        self.current_index: int | None = None
        self.results: list[TestCaseResult] = []
        self.console: list[str] = []

    def run(self, question: CodingQuestion, language: str, code: str) -> RunReport:
        results: list[TestCaseResult] = []
        self.results = []
        self.console = []
        self.current_index = None

        self._set_state(RunState.COMPILING)
        self._console("Compiling...")
        self._pause(self.config.compile_delay)

        compilation = simulate_compilation(code, language, question.signature, self._evaluator)
        if not compilation.success:
            self._console(f"❌ Compilation Failed: \n{compilation.error}")
            self._set_state(RunState.COMPILE_FAILED, error=compilation.error)
            return RunReport(language=language, compilation=compilation)

        self._console("✅ Compilation successful.\n\nRunning test cases...")
        total = len(question.test_cases)
        for i, test_case in enumerate(question.test_cases):
            self.current_index = i
            self._set_state(RunState.RUNNING, index=i, total=total)
            self._pause(self.config.case_delay)

            result = simulate_execution(
                code, language, test_case, question.signature, self._evaluator
            )
            results.append(result)
            self.results = list(results)
            self._console(format_test_case(i, result))
            self._emit(
                "test_result",
                index=i,
                passed=result.passed,
                input=result.input,
                expected=result.expected_output,
                actual=result.actual_output,
            )

        self.current_index = None
        report = RunReport(language=language, compilation=compilation, results=results)
        self._set_state(RunState.DONE, passed=report.passed_count, total=total)
        return report

    def _set_state(self, state: RunState, **details) -> None:
        self.state = state
        self._emit("state", state=state.value, **details)

    def _console(self, text: str) -> None:
        self.console.append(text)
        self._emit("console", text=text)
        self._log(text)

    def _pause(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def _emit(self, event_type: str, **kwargs) -> None:
        """Hook for structured progress events; the web layer streams these."""

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=sys.stderr)
