"""Editor-side state for one candidate working on one coding question."""

from __future__ import annotations

import threading

from hackgrader.config import Config
from hackgrader.evaluator_base import Evaluator
from hackgrader.evaluator_factory import create_evaluator
from hackgrader.models import (
    NATIVE_LANGUAGE,
    CodingAnswer,
    CodingQuestion,
    RunReport,
    Verdict,
)
from hackgrader.runner import TestRunner


class SubmissionRejectedError(Exception):
    """Raised when accepting a submission whose last run did not pass every test case."""


class SubmissionFrozenError(Exception):
    """Raised when editing or running a submission that was accepted or timed out."""


class SubmissionAttempt:
    """Editor state plus the accept gate for one coding question.

    Every :meth:`run` grades with its own :class:`TestRunner`, so a run that
    is still in flight never shares results or progress with a newer one.
    ``runner`` is the runner of the most recent run, for progress display.
    """

    def __init__(
        self,
        question: CodingQuestion,
        config: Config,
        language: str = NATIVE_LANGUAGE,
        saved_answer: CodingAnswer | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self.question = question
        self.saved_answer = saved_answer
        self.frozen = False
        self.report: RunReport | None = None
        self.verdict = Verdict.NOT_RUN
        self.runner: TestRunner | None = None
        self.config = config
        self._evaluator: Evaluator = evaluator or create_evaluator(config)
        self._lock = threading.Lock()
        self._generation = 0
        self.language = language
        self.code = self._starting_code(language)

    @property
    def can_accept(self) -> bool:
        return not self.frozen and self.report is not None and self.report.all_passed

    def switch_language(self, language: str) -> None:
        """Change language, loading the saved answer or the boilerplate for it."""
        with self._lock:
            self._check_not_frozen()
            self.language = language
            self._reset(self._starting_code(language))

    def edit(self, code: str) -> None:
        with self._lock:
            self._check_not_frozen()
            self._reset(code)

    def run(self) -> RunReport | None:
        """Grade the current code.

        Returns ``None`` when the code was edited, another run started or the
        attempt was frozen while this run was in flight; the stale report is
        discarded.
        """
        with self._lock:
            self._check_not_frozen()
            self._generation += 1
            generation = self._generation
            language, code = self.language, self.code
            self.report = None
            self.verdict = Verdict.RUNNING
            runner = self.runner = self._new_runner()

        report = runner.run(self.question, language, code)

        with self._lock:
            if generation != self._generation or self.frozen:
                return None
            self.report = report
            if report.compile_failed:
                self.verdict = Verdict.COMPILE_ERROR
            elif report.all_passed:
                self.verdict = Verdict.PASSED_ALL
            else:
                self.verdict = Verdict.SOME_FAILED
            return report

    def accept(self) -> CodingAnswer:
        """Freeze the attempt and return the answer to persist.

        Only a run in which every test case passed can be accepted.
        """
        with self._lock:
            self._check_not_frozen()
            if self.report is None:
                raise SubmissionRejectedError("Run the code before submitting")
            if not self.report.all_passed:
                failed = len(self.report.results) - self.report.passed_count
                if self.report.compile_failed:
                    reason = "compilation failed"
                else:
                    reason = f"{failed}/{len(self.report.results)} test case(s) failed"
                raise SubmissionRejectedError(f"Submission not accepted: {reason}")
            answer = CodingAnswer(language=self.language, code=self.code, passed=True)
            self.saved_answer = answer
            self.frozen = True
            return answer

    def freeze(self) -> None:
        """Stop further edits, e.g. when the round's time runs out."""
        with self._lock:
            self.frozen = True

    def _new_runner(self) -> TestRunner:
        return TestRunner(self.config, self._evaluator)

    def _starting_code(self, language: str) -> str:
        if self.saved_answer is not None and self.saved_answer.language == language:
            return self.saved_answer.code
        return self.question.boilerplate.get(language) or f"// Boilerplate for {language} not available."

    def _reset(self, code: str) -> None:
        self._generation += 1
        self.code = code
        self.report = None
        self.verdict = Verdict.NOT_RUN

    def _check_not_frozen(self) -> None:
        if self.frozen:
            raise SubmissionFrozenError("Submission is frozen")
