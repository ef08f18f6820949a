#!/usr/bin/env python3
"""Check a PR title locally with the same rules the action applies.

Example:
  python scripts/validate_pr_title.py "AB#1234: Add login" --regex '^AB#\\d{4,6}:\\s' --max-length 72
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

sys.path.append("src")
from standards_bot.config import RuleSet, StandardsConfig  # noqa: E402
from standards_bot.errors import InvalidPatternError  # noqa: E402
from standards_bot.render import format_error, format_result_line  # noqa: E402
from standards_bot.rules import Subject, evaluate_run  # noqa: E402


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("title", nargs="?", default=None)
    parser.add_argument("--regex", default=None)
    parser.add_argument("--prefix", default=None)
    parser.add_argument("--min-length", type=int, default=None)
    parser.add_argument("--max-length", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.title is None:
        print("::warning::No PR title provided; skipping standards check.")
        return 0

    try:
        config = StandardsConfig(
            pr_title=RuleSet(
                regex=args.regex or None,
                prefix=args.prefix or None,
                min_length=args.min_length,
                max_length=args.max_length,
            )
        )
        outcome = evaluate_run(Subject.pull_request_title(args.title), [], config)
    except InvalidPatternError as exc:
        print(format_error(str(exc)))
        return 1
    except ValidationError:
        print(format_error("--min-length and --max-length must be non-negative integers"))
        return 1

    for result in outcome.results:
        print(format_result_line(result))
    return 1 if outcome.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
