from __future__ import annotations

import io
import json
from pathlib import Path

from standards_bot.render import (
    append_outputs,
    append_step_summary,
    format_result_line,
    render_console,
    render_outputs,
    render_step_summary,
    write_console,
)
from standards_bot.results import SKIPPED, RunOutcome, set_status


def _outcome() -> RunOutcome:
    outcome = RunOutcome()
    outcome.extend(
        [
            set_status(True, "Pull Request Title RegExp: Passed", rule="RegExp", subject="Pull Request Title"),
            set_status(False, "Pull Request Title Prefix: Failed", rule="Prefix", subject="Pull Request Title"),
            set_status(SKIPPED, "Pull Request Title Min Length: Skipped", rule="Min Length", subject="Pull Request Title"),
        ]
    )
    return outcome


def test_result_lines_use_workflow_commands() -> None:
    lines = [format_result_line(r) for r in _outcome().results]
    assert lines == [
        "Pull Request Title RegExp: Passed",
        "::error::Pull Request Title Prefix: Failed",
        "::debug::Pull Request Title Min Length: Skipped",
    ]


def test_command_data_is_escaped() -> None:
    line = format_result_line(set_status(False, "100% bad\nline"))
    assert line == "::error::100%25 bad%0Aline"


def test_console_ends_with_json_status_dump() -> None:
    lines = render_console(_outcome())
    assert json.loads(lines[-1]) == [
        {"state": True, "message": "Pull Request Title RegExp: Passed"},
        {"state": False, "message": "Pull Request Title Prefix: Failed"},
        {"state": "debug", "message": "Pull Request Title Min Length: Skipped"},
    ]


def test_write_console_writes_one_line_each() -> None:
    stream = io.StringIO()
    write_console(_outcome(), stream)
    assert len(stream.getvalue().splitlines()) == 4


def test_step_summary_lists_every_result() -> None:
    summary = render_step_summary(_outcome())
    assert "Standards check failed" in summary
    assert "1 passed · 1 failed · 1 skipped" in summary
    assert "| ❌ | Pull Request Title | Prefix |" in summary
    assert "| ⏭️ | Pull Request Title | Min Length |" in summary
    assert summary.endswith("### Failed checks\n- Pull Request Title Prefix: Failed\n")


def test_step_summary_passing_run() -> None:
    outcome = RunOutcome()
    outcome.add(set_status(True, "ok"))
    summary = render_step_summary(outcome)
    assert "Standards check passed" in summary
    assert "| ✅ | - | - |" in summary
    assert "Failed checks" not in summary


def test_outputs() -> None:
    assert render_outputs(_outcome()) == {"result": "failed", "failed-checks": "1"}
    assert render_outputs(RunOutcome()) == {"result": "passed", "failed-checks": "0"}


def test_append_files(tmp_path: Path) -> None:
    summary = tmp_path / "summary.md"
    outputs = tmp_path / "output"
    outputs.write_text("existing=1\n")

    append_step_summary(str(summary), _outcome())
    append_outputs(str(outputs), _outcome())

    assert summary.read_text(encoding="utf-8").startswith("## ")
    assert outputs.read_text() == "existing=1\nresult=failed\nfailed-checks=1\n"
