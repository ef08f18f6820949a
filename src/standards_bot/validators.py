"""String predicates used by the standards rules.

Lengths are counted in Unicode code points, which is what ``len`` reports for
``str``.
"""

from __future__ import annotations

import re
from typing import Union

from standards_bot.errors import InvalidPatternError

PatternLike = Union[str, re.Pattern[str]]

PREFIX_SEPARATOR = ","


def compile_pattern(pattern: PatternLike, option: str | None = None) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc), option=option) from exc


def split_prefixes(prefix: str) -> list[str]:
    # Alternatives are not trimmed; empty ones would match everything.
    return [alternative for alternative in prefix.split(PREFIX_SEPARATOR) if alternative]


def validate_regex(text: str, pattern: PatternLike) -> bool:
    return compile_pattern(pattern).search(text) is not None


def validate_prefix(text: str, prefix: str) -> bool:
    return any(text.startswith(alternative) for alternative in split_prefixes(prefix))


def validate_max_length(text: str, max_length: int) -> bool:
    return len(text) <= max_length


def validate_min_length(text: str, min_length: int) -> bool:
    return len(text) >= min_length
