"""Question authoring checks and screening-test scoring."""

from __future__ import annotations

from typing import Union

from hackgrader.input_parser import MalformedInputError, parse_input
from hackgrader.models import CodingAnswer, CodingQuestion, McqQuestion, ScreeningScore

Question = Union[CodingQuestion, McqQuestion]
Answer = Union[int, CodingAnswer, None]


def validate_question(question: Question) -> list[str]:
    """Return the problems that keep *question* from being stored (empty if none)."""
    problems: list[str] = []
    if not question.question.strip():
        problems.append("Question text cannot be empty.")

    if isinstance(question, McqQuestion):
        if len(question.options) < 2:
            problems.append("An MCQ needs at least two options.")
        if any(not option.strip() for option in question.options):
            problems.append("Please fill out all option fields for the MCQ.")
        if not 0 <= question.correct_option < len(question.options):
            problems.append(f"Correct option {question.correct_option} is out of range.")
        return problems

    if not question.test_cases:
        problems.append("A coding question needs at least one test case.")
    for i, tc in enumerate(question.test_cases, start=1):
        if not tc.input.strip() or not tc.expected_output.strip():
            problems.append(f"Test case {i}: input and expected output are required.")
            continue
        try:
            parse_input(tc.input)
        except MalformedInputError as e:
            problems.append(f"Test case {i}: {e}")
    return problems


def score_answers(
    questions: list[Question],
    answers: list[Answer],
    qualify_threshold: float = 50.0,
) -> ScreeningScore:
    """Score a team's screening answers.

    One point per MCQ answer equal to the correct option and per coding
    answer marked as passed. Answers beyond the question list are ignored.

    Coding answers are not re-graded here: ``passed`` is trusted as stored,
    and only :meth:`SubmissionAttempt.accept` should produce a passing
    answer. Callers scoring client-supplied answers must have persisted them
    through that accept gate.
    """
    if not questions:
        raise ValueError("Cannot score: No questions found.")

    score = 0
    for question, answer in zip(questions, answers):
        if answer is None:
            continue
        if isinstance(question, McqQuestion):
            if isinstance(answer, int) and not isinstance(answer, bool) and answer == question.correct_option:
                score += 1
        elif isinstance(answer, CodingAnswer) and answer.passed:
            score += 1

    total = len(questions)
    percentage = score / total * 100
    return ScreeningScore(
        score=score,
        total=total,
        percentage=percentage,
        qualified=percentage >= qualify_threshold,
    )
