"""Configuration for hackgrader, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

_EVALUATOR_TYPES = ("mini_racer",)


@dataclass
class Config:
    compile_delay: float = 0.5  # seconds, simulated compile latency
    case_delay: float = 0.2  # seconds, simulated latency per test case
    evaluation_timeout: float = 5.0  # seconds per evaluation
    evaluator_type: str = "mini_racer"
    qualify_threshold: float = 50.0  # percent needed to qualify from the screening test
    verbose: bool = True

    @classmethod
    def from_env(cls, **overrides) -> Config:
        kwargs: dict = {}
        env_map: dict[str, tuple[str, type]] = {
            "HACKGRADER_COMPILE_DELAY": ("compile_delay", float),
            "HACKGRADER_CASE_DELAY": ("case_delay", float),
            "HACKGRADER_EVALUATION_TIMEOUT": ("evaluation_timeout", float),
            "HACKGRADER_EVALUATOR": ("evaluator_type", str),
            "HACKGRADER_QUALIFY_THRESHOLD": ("qualify_threshold", float),
        }
        for env_var, (field_name, conv) in env_map.items():
            val = os.environ.get(env_var)
            if val is not None:
                try:
                    kwargs[field_name] = conv(val)
                except ValueError:
                    raise ValueError(f"{env_var} must be a {conv.__name__}, got {val!r}") from None
        # HACKGRADER_VERBOSE: "0" or "false" silences progress logging
        verbose_val = os.environ.get("HACKGRADER_VERBOSE")
        if verbose_val is not None:
            kwargs["verbose"] = verbose_val.lower() not in ("0", "false", "no")
        kwargs.update(overrides)
        config = cls(**kwargs)
        config.validate()
        return config

    def validate(self) -> None:
        if self.evaluator_type not in _EVALUATOR_TYPES:
            raise ValueError(
                f"Unknown evaluator {self.evaluator_type!r} (expected one of {', '.join(_EVALUATOR_TYPES)})"
            )
        if self.compile_delay < 0 or self.case_delay < 0:
            raise ValueError("Delays must not be negative")
        if self.evaluation_timeout <= 0:
            raise ValueError("HACKGRADER_EVALUATION_TIMEOUT must be positive")
        if not 0 <= self.qualify_threshold <= 100:
            raise ValueError("HACKGRADER_QUALIFY_THRESHOLD must be between 0 and 100")
