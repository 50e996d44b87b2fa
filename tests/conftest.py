from __future__ import annotations

import pytest

from hackgrader.config import Config
from hackgrader.models import CodingQuestion, TestCase

JS_BOILERPLATE = "function sum(a, b) {\n  // Write your code here\n}"


@pytest.fixture
def fast_config() -> Config:
    return Config(compile_delay=0.0, case_delay=0.0, evaluation_timeout=2.0, verbose=False)


@pytest.fixture
def sum_question() -> CodingQuestion:
    return CodingQuestion(
        question="Return the sum of a and b.",
        test_cases=[
            TestCase(input="a=2, b=3", expected_output="5"),
            TestCase(input="a=-1, b=1", expected_output="0"),
            TestCase(input="a=100, b=200", expected_output="300"),
        ],
        boilerplate={
            "javascript": JS_BOILERPLATE,
            "python": "def sum(a, b):\n  pass",
        },
    )
