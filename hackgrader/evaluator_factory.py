"""Factory for creating evaluators based on configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hackgrader.evaluator import MiniRacerEvaluator
from hackgrader.evaluator_base import Evaluator

if TYPE_CHECKING:
    from hackgrader.config import Config


def create_evaluator(config: Config) -> Evaluator:
    """Create an evaluator based on config.evaluator_type."""
    if config.evaluator_type != "mini_racer":
        raise ValueError(f"Unknown evaluator {config.evaluator_type!r}")
    return MiniRacerEvaluator(timeout=config.evaluation_timeout)
