"""CLI interface for hackgrader."""

from __future__ import annotations

import argparse
import json
import sys

from hackgrader.config import Config
from hackgrader.loader import answer_from_json, load_questions
from hackgrader.models import LANGUAGES, CodingQuestion
from hackgrader.runner import TestRunner
from hackgrader.scoring import score_answers, validate_question


class ConsoleRunner(TestRunner):
    """Runner that prints the console transcript to stdout as it is produced."""

    def _emit(self, event_type: str, **kwargs) -> None:
        if event_type == "console":
            print(kwargs["text"], flush=True)

    def _log(self, message: str) -> None:
        pass  # transcript already goes to stdout


def _cmd_run(args, config: Config) -> int:
    questions = load_questions(args.question)
    coding = [q for q in questions if isinstance(q, CodingQuestion)]
    if not coding:
        print(f"Error: no coding question in {args.question}", file=sys.stderr)
        return 1
    if not 0 <= args.index < len(coding):
        print(f"Error: question index {args.index} out of range (0-{len(coding) - 1})", file=sys.stderr)
        return 1

    with open(args.source) as f:
        code = f.read()

    runner = ConsoleRunner(config)
    report = runner.run(coding[args.index], args.language, code)
    if report.compile_failed:
        return 1
    print(f"\n{report.passed_count}/{len(report.results)} test case(s) passed.")
    return 0 if report.all_passed else 1


def _cmd_validate(args, config: Config) -> int:
    questions = load_questions(args.questions)
    invalid = 0
    for i, question in enumerate(questions, start=1):
        problems = validate_question(question)
        if problems:
            invalid += 1
            for problem in problems:
                print(f"Question {i}: {problem}")
    if invalid:
        print(f"{invalid}/{len(questions)} question(s) invalid.", file=sys.stderr)
        return 1
    print(f"{len(questions)} question(s) OK.")
    return 0


def _cmd_score(args, config: Config) -> int:
    questions = load_questions(args.questions)
    with open(args.answers) as f:
        answers = [answer_from_json(a) for a in json.load(f)]
    result = score_answers(questions, answers, config.qualify_threshold)
    print(f"Score: {result.score} / {result.total} ({result.percentage:.0f}%)")
    print("Qualified" if result.qualified else "Did not qualify")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hackgrader",
        description="hackgrader: screening-test grader for hackathon coding questions",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Grade a source file against a coding question")
    run_parser.add_argument("question", help="Path to question JSON file")
    run_parser.add_argument("source", help="Path to the submitted source file")
    run_parser.add_argument("-l", "--language", choices=LANGUAGES, default="javascript")
    run_parser.add_argument(
        "--index", type=int, default=0, help="Which coding question of the file to use"
    )
    run_parser.add_argument(
        "--no-delay", action="store_true", default=False, help="Skip simulated compile/run latency"
    )

    validate_parser = subparsers.add_parser("validate", help="Check questions before publishing them")
    validate_parser.add_argument("questions", help="Path to questions JSON file")

    score_parser = subparsers.add_parser("score", help="Score a team's screening answers")
    score_parser.add_argument("questions", help="Path to questions JSON file")
    score_parser.add_argument("answers", help="Path to answers JSON file")
    score_parser.add_argument("--threshold", type=float, default=None, help="Qualifying percentage")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # Build config from env + CLI overrides
    overrides = {}
    if getattr(args, "no_delay", False):
        overrides["compile_delay"] = 0.0
        overrides["case_delay"] = 0.0
    if getattr(args, "threshold", None) is not None:
        overrides["qualify_threshold"] = args.threshold

    try:
        config = Config.from_env(**overrides)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    commands = {"run": _cmd_run, "validate": _cmd_validate, "score": _cmd_score}
    try:
        status = commands[args.command](args, config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)
