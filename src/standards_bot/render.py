"""Turn a RunOutcome into runner output.

Console lines use GitHub workflow commands:
  skipped -> ``::debug::``  (hidden unless step debug logging is on)
  failed  -> ``::error::``
  passed  -> plain line
"""
from __future__ import annotations

import json
from typing import TextIO

from standards_bot.results import CheckResult, RunOutcome

_STATE_ICON = {"passed": "✅", "failed": "❌", "skipped": "⏭️"}


def _escape_command_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def format_error(message: str) -> str:
    return f"::error::{_escape_command_data(message)}"


def format_result_line(result: CheckResult) -> str:
    if result.severity == "debug":
        return f"::debug::{_escape_command_data(result.message)}"
    if result.severity == "error":
        return format_error(result.message)
    return result.message


def render_console(outcome: RunOutcome) -> list[str]:
    lines = [format_result_line(result) for result in outcome.results]
    lines.append(json.dumps(outcome.to_status_list()))
    return lines


def write_console(outcome: RunOutcome, stream: TextIO) -> None:
    for line in render_console(outcome):
        stream.write(line + "\n")


def _cell(value: str) -> str:
    return value.replace("|", "\\|") or "-"


def render_step_summary(outcome: RunOutcome) -> str:
    passed = outcome.count("passed")
    failed = outcome.count("failed")
    skipped = outcome.count("skipped")
    verdict = "❌ Standards check failed" if outcome.failed else "✅ Standards check passed"

    parts = [
        f"## {verdict}\n\n",
        f"{passed} passed · {failed} failed · {skipped} skipped\n\n",
        "| Result | Subject | Rule |\n",
        "| --- | --- | --- |\n",
    ]
    for result in outcome.results:
        parts.append(f"| {_STATE_ICON[result.state]} | {_cell(result.subject)} | {_cell(result.rule)} |\n")

    failures = outcome.failures
    if failures:
        parts.append("\n### Failed checks\n")
        for result in failures:
            parts.append(f"- {result.message}\n")
    return "".join(parts)


def render_outputs(outcome: RunOutcome) -> dict[str, str]:
    return {
        "result": "failed" if outcome.failed else "passed",
        "failed-checks": str(len(outcome.failures)),
    }


def append_step_summary(path: str, outcome: RunOutcome) -> None:
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(render_step_summary(outcome))


def append_outputs(path: str, outcome: RunOutcome) -> None:
    with open(path, "a", encoding="utf-8") as handle:
        for key, value in render_outputs(outcome).items():
            handle.write(f"{key}={value}\n")
