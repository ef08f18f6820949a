"""Action inputs and runner environment, read once at startup.

GitHub Actions exposes an input ``foo-bar`` as ``INPUT_FOO-BAR``. An input that
is missing or blank after trimming is treated as not configured.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from shared.constants import DEFAULT_API_BASE
from standards_bot.errors import ConfigurationError

TITLE_INPUT_PREFIX = "pr-title"
COMMIT_INPUT_PREFIX = "commit-message"


class RuleSet(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    regex: Optional[str] = None
    prefix: Optional[str] = None
    min_length: Optional[NonNegativeInt] = None
    max_length: Optional[NonNegativeInt] = None


class StandardsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    pr_title: RuleSet = RuleSet()
    commit_message: RuleSet = RuleSet()


class ActionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    github_token: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    event_name: Optional[str] = None
    event_path: Optional[str] = None
    step_summary_path: Optional[str] = None
    output_path: Optional[str] = None
    rules: StandardsConfig = StandardsConfig()


def _input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = (environ.get(_input_env_name(name)) or "").strip()
    return value or None


def _parse_length(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = get_input(environ, name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Input {name} must be a non-negative integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"Input {name} must be a non-negative integer, got {raw!r}")
    return value


def load_rule_set(environ: Mapping[str, str], input_prefix: str) -> RuleSet:
    return RuleSet(
        regex=get_input(environ, f"{input_prefix}-regex"),
        prefix=get_input(environ, f"{input_prefix}-prefix"),
        min_length=_parse_length(environ, f"{input_prefix}-min-length"),
        max_length=_parse_length(environ, f"{input_prefix}-max-length"),
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ActionSettings:
    env = os.environ if environ is None else environ
    return ActionSettings(
        github_token=get_input(env, "github-token") or env.get("GITHUB_TOKEN") or None,
        api_base=(env.get("GITHUB_API_URL") or DEFAULT_API_BASE).strip(),
        event_name=env.get("GITHUB_EVENT_NAME") or None,
        event_path=env.get("GITHUB_EVENT_PATH") or None,
        step_summary_path=env.get("GITHUB_STEP_SUMMARY") or None,
        output_path=env.get("GITHUB_OUTPUT") or None,
        rules=StandardsConfig(
            pr_title=load_rule_set(env, TITLE_INPUT_PREFIX),
            commit_message=load_rule_set(env, COMMIT_INPUT_PREFIX),
        ),
    )
