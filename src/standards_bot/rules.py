"""Which rule runs against which subject, and in what order.

Every configured rule is evaluated for every subject; a failing rule never
stops the rules after it. Title results come first, then four results per
commit in commit order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from shared.constants import SHORT_SHA_LENGTH
from standards_bot.config import COMMIT_INPUT_PREFIX, TITLE_INPUT_PREFIX, RuleSet, StandardsConfig
from standards_bot.results import SKIPPED, CheckResult, RunOutcome, set_status
from standards_bot.validators import (
    compile_pattern,
    validate_max_length,
    validate_min_length,
    validate_prefix,
    validate_regex,
)


class Subject(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str
    label: str
    sha: Optional[str] = None

    @classmethod
    def pull_request_title(cls, title: str) -> "Subject":
        return cls(text=title, label="Pull Request Title")

    @classmethod
    def commit_message(cls, message: str, sha: str) -> "Subject":
        short_sha = sha[:SHORT_SHA_LENGTH]
        return cls(text=message, label=f"Commit ({short_sha}) Message", sha=short_sha)

    @classmethod
    def from_commit_payload(cls, commit: dict[str, Any]) -> "Subject":
        """Build a subject from one item of the pull request commits API."""
        return cls.commit_message(
            message=str((commit.get("commit") or {}).get("message") or ""),
            sha=str(commit.get("sha") or ""),
        )


@dataclass(frozen=True)
class Rule:
    name: str
    option: str
    check: Callable[[str, Any], bool]


# Fixed evaluation order keeps the report stable between runs.
RULES: tuple[Rule, ...] = (
    Rule("RegExp", "regex", validate_regex),
    Rule("Prefix", "prefix", validate_prefix),
    Rule("Min Length", "min_length", validate_min_length),
    Rule("Max Length", "max_length", validate_max_length),
)


@dataclass(frozen=True)
class RulePlan:
    """A RuleSet with its pattern compiled, ready to run against subjects."""

    regex: Optional[re.Pattern[str]] = None
    prefix: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    @classmethod
    def from_rule_set(cls, rule_set: RuleSet, input_prefix: str = "") -> "RulePlan":
        pattern = None
        if rule_set.regex is not None:
            option = f"{input_prefix}-regex" if input_prefix else None
            pattern = compile_pattern(rule_set.regex, option=option)
        return cls(
            regex=pattern,
            prefix=rule_set.prefix,
            min_length=rule_set.min_length,
            max_length=rule_set.max_length,
        )


@dataclass(frozen=True)
class RunPlan:
    """Compiled title and commit rules for one run."""

    title: RulePlan = RulePlan()
    commit_message: RulePlan = RulePlan()

    @classmethod
    def from_config(cls, config: StandardsConfig) -> "RunPlan":
        """Compile both rule sets; raises ``InvalidPatternError`` on a malformed pattern."""
        return cls(
            title=RulePlan.from_rule_set(config.pr_title, TITLE_INPUT_PREFIX),
            commit_message=RulePlan.from_rule_set(config.commit_message, COMMIT_INPUT_PREFIX),
        )


def apply_rule(subject: Subject, rule: Rule, value: Any) -> CheckResult:
    msg = f"{subject.label} {rule.name}:"
    if value is None:
        return set_status(SKIPPED, f"{msg} Skipped", rule=rule.name, subject=subject.label)
    ok = rule.check(subject.text, value)
    return set_status(ok, f"{msg} {'Passed' if ok else 'Failed'}", rule=rule.name, subject=subject.label)


def evaluate_subject(subject: Subject, plan: RulePlan) -> list[CheckResult]:
    return [apply_rule(subject, rule, getattr(plan, rule.option)) for rule in RULES]


def evaluate_run(
    title: Subject,
    commits: Iterable[Subject],
    rules: StandardsConfig | RunPlan,
) -> RunOutcome:
    """Check the title and every commit.

    A ``StandardsConfig`` is compiled first, so a malformed pattern raises
    ``InvalidPatternError`` even when there are no commits to apply it to.
    """
    plan = RunPlan.from_config(rules) if isinstance(rules, StandardsConfig) else rules

    outcome = RunOutcome()
    outcome.extend(evaluate_subject(title, plan.title))
    for commit in commits:
        outcome.extend(evaluate_subject(commit, plan.commit_message))
    return outcome
