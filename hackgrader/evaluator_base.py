"""Abstract evaluator interface for running submitted snippets."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from hackgrader.models import EvaluationResult


@runtime_checkable
class Evaluator(Protocol):
    def check_syntax(self, source: str) -> str | None: ...

    def evaluate(self, body: str, bindings: dict[str, int]) -> EvaluationResult: ...
