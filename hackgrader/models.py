"""Data models for hackgrader."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

NATIVE_LANGUAGE = "javascript"
LANGUAGES = ("javascript", "python", "java", "cpp", "c")


class RunState(enum.Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    COMPILE_FAILED = "compile_failed"
    RUNNING = "running"
    DONE = "done"


class Verdict(enum.Enum):
    NOT_RUN = "NOT_RUN"
    RUNNING = "RUNNING"
    COMPILE_ERROR = "COMPILE_ERROR"
    PASSED_ALL = "PASSED_ALL"
    SOME_FAILED = "SOME_FAILED"


@dataclass
class TestCase:
    input: str
    expected_output: str


@dataclass
class Signature:
    """Entry point a coding question expects, e.g. ``int sum(int a, int b)``."""

    name: str = "sum"
    parameters: list[str] = field(default_factory=lambda: ["a", "b"])
    param_type: str = "int"
    return_type: str = "int"
    class_name: str = "Solution"  # Java wrapper class


@dataclass
class CodingQuestion:
    question: str
    test_cases: list[TestCase]
    boilerplate: dict[str, str] = field(default_factory=dict)
    signature: Signature = field(default_factory=Signature)


@dataclass
class McqQuestion:
    question: str
    options: list[str]
    correct_option: int = 0


@dataclass
class CodingAnswer:
    language: str
    code: str
    passed: bool


@dataclass
class CompilationResult:
    success: bool
    error: str | None = None


@dataclass
class EvaluationResult:
    output: str = ""
    error: str | None = None
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class TestCaseResult:
    input: str
    expected_output: str
    actual_output: str
    passed: bool


@dataclass
class RunReport:
    language: str
    compilation: CompilationResult
    results: list[TestCaseResult] = field(default_factory=list)

    @property
    def compile_failed(self) -> bool:
        return not self.compilation.success

    @property
    def all_passed(self) -> bool:
        # An empty result list is vacuously all-passed; a failed compile never is.
        return self.compilation.success and all(r.passed for r in self.results)

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)


@dataclass
class ScreeningScore:
    score: int
    total: int
    percentage: float
    qualified: bool
