from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

CheckState = Literal["passed", "failed", "skipped"]
Severity = Literal["info", "error", "debug"]

# Marker for a rule that was not configured and so was not evaluated.
SKIPPED: Literal["debug"] = "debug"

Outcome = Union[bool, Literal["debug"]]

_SEVERITY: dict[str, Severity] = {
    "passed": "info",
    "failed": "error",
    "skipped": "debug",
}


class CheckResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    state: CheckState
    message: str
    rule: str = ""
    subject: str = ""

    @property
    def severity(self) -> Severity:
        return _SEVERITY[self.state]

    @property
    def failed(self) -> bool:
        return self.state == "failed"

    def to_status(self) -> dict[str, Any]:
        """Status object in the ``{"state": true|false|"debug", "message": ...}`` shape."""
        state: Outcome = SKIPPED if self.state == "skipped" else self.state == "passed"
        return {"state": state, "message": self.message}


def set_status(state: Outcome, message: str, *, rule: str = "", subject: str = "") -> CheckResult:
    if state == SKIPPED:
        resolved: CheckState = "skipped"
    elif state is True:
        resolved = "passed"
    elif state is False:
        resolved = "failed"
    else:
        raise ValueError(f"Unknown check state: {state!r}")
    return CheckResult(state=resolved, message=message, rule=rule, subject=subject)


@dataclass
class RunOutcome:
    results: list[CheckResult] = field(default_factory=list)

    def add(self, result: CheckResult) -> None:
        self.results.append(result)

    def extend(self, results: list[CheckResult]) -> None:
        self.results.extend(results)

    @property
    def failed(self) -> bool:
        return any(result.failed for result in self.results)

    @property
    def failures(self) -> list[CheckResult]:
        return [result for result in self.results if result.failed]

    def count(self, state: CheckState) -> int:
        return sum(1 for result in self.results if result.state == state)

    def to_status_list(self) -> list[dict[str, Any]]:
        return [result.to_status() for result in self.results]
