from __future__ import annotations

import pytest

from shared.constants import DEFAULT_API_BASE
from standards_bot.config import get_input, load_settings
from standards_bot.errors import ConfigurationError


def test_get_input_uses_actions_env_naming() -> None:
    env = {"INPUT_PR-TITLE-REGEX": "  ^feat  ", "INPUT_MY_INPUT": "x"}
    assert get_input(env, "pr-title-regex") == "^feat"
    assert get_input(env, "my input") == "x"


def test_blank_inputs_are_not_configured() -> None:
    env = {"INPUT_PR-TITLE-PREFIX": "   ", "INPUT_COMMIT-MESSAGE-REGEX": ""}
    settings = load_settings(env)
    assert settings.rules.pr_title.prefix is None
    assert settings.rules.commit_message.regex is None


def test_load_settings_reads_all_rule_inputs() -> None:
    env = {
        "INPUT_GITHUB-TOKEN": "tok",
        "INPUT_PR-TITLE-REGEX": r"^AB#\d+",
        "INPUT_PR-TITLE-PREFIX": "AB#,CD#",
        "INPUT_PR-TITLE-MIN-LENGTH": "10",
        "INPUT_PR-TITLE-MAX-LENGTH": "72",
        "INPUT_COMMIT-MESSAGE-REGEX": "^(feat|fix)",
        "INPUT_COMMIT-MESSAGE-PREFIX": "feat,fix",
        "INPUT_COMMIT-MESSAGE-MIN-LENGTH": "0",
        "INPUT_COMMIT-MESSAGE-MAX-LENGTH": "100",
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_EVENT_PATH": "/tmp/event.json",
    }
    settings = load_settings(env)

    assert settings.github_token == "tok"
    assert settings.event_name == "pull_request"
    assert settings.api_base == DEFAULT_API_BASE
    title = settings.rules.pr_title
    assert (title.regex, title.prefix, title.min_length, title.max_length) == (r"^AB#\d+", "AB#,CD#", 10, 72)
    commit = settings.rules.commit_message
    assert (commit.regex, commit.prefix, commit.min_length, commit.max_length) == ("^(feat|fix)", "feat,fix", 0, 100)


def test_prefix_is_not_trimmed_inside_the_value() -> None:
    settings = load_settings({"INPUT_PR-TITLE-PREFIX": "feat, fix"})
    assert settings.rules.pr_title.prefix == "feat, fix"


@pytest.mark.parametrize("raw", ["abc", "1.5", "-3"])
def test_invalid_length_is_a_configuration_error(raw: str) -> None:
    with pytest.raises(ConfigurationError, match="pr-title-max-length"):
        load_settings({"INPUT_PR-TITLE-MAX-LENGTH": raw})


def test_token_falls_back_to_github_token_env() -> None:
    assert load_settings({"GITHUB_TOKEN": "fallback"}).github_token == "fallback"
    assert load_settings({}).github_token is None


def test_api_base_from_runner_env() -> None:
    settings = load_settings({"GITHUB_API_URL": "https://ghe.example.com/api/v3"})
    assert settings.api_base == "https://ghe.example.com/api/v3"


def test_settings_are_frozen() -> None:
    settings = load_settings({})
    with pytest.raises(Exception):
        settings.github_token = "x"  # type: ignore[misc]
