"""Entrypoint: summarize study material or generate a quiz from it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from study_tutor.config import load_settings
from study_tutor.errors import InvalidInput, StudyTutorError
from study_tutor.llm.client import GenerationClient
from study_tutor.service import generate_quiz, quiz_to_dicts, summarize
from study_tutor.utils import json_dumps


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI study tutor: summaries and quizzes")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings.yaml")

    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize_cmd = subparsers.add_parser("summarize", help="Summarize a text file ('-' for stdin)")
    summarize_cmd.add_argument("source")
    summarize_cmd.add_argument("--length", default="medium", choices=["short", "medium", "long"])

    quiz_cmd = subparsers.add_parser("quiz", help="Generate a multiple-choice quiz ('-' for stdin)")
    quiz_cmd.add_argument("source")
    quiz_cmd.add_argument("--count", type=int, default=5)
    quiz_cmd.add_argument("--difficulty", default="medium", choices=["easy", "medium", "hard"])
    return parser


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidInput(f"Cannot read source {source}: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_settings(args.settings)
    log_cfg = config.get("logging", {})
    logging.basicConfig(level=log_cfg.get("level", "INFO"), format=log_cfg.get("format"))

    client = GenerationClient.from_settings(config)

    try:
        content = _read_source(args.source)
        if args.command == "summarize":
            result = {"summary": summarize(config, client, content, length=args.length)}
        else:
            records = generate_quiz(config, client, content, count=args.count, difficulty=args.difficulty)
            result = {"questions": quiz_to_dicts(records)}
    except StudyTutorError as exc:
        print(json_dumps(exc.as_dict()))
        return 1

    print(json_dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
