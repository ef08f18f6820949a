"""PR standards bot entrypoint.

Runs as a GitHub Actions step on ``pull_request`` events:
- reads the action inputs and the event payload,
- fetches the pull request and its commits,
- checks the title and every commit message against the configured rules,
- prints one line per check plus a JSON status dump, and exits non-zero if
  any configured rule failed.

For local runs, ``--owner``, ``--repo`` and ``--pr-number`` replace the event
payload.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Mapping, Optional, Sequence, TextIO

import requests
from pydantic import BaseModel, ConfigDict

from shared.constants import VALID_EVENTS
from shared.github_client import GitHubClient
from shared.logging import get_logger
from standards_bot.config import ActionSettings, load_settings
from standards_bot.errors import ConfigurationError, StandardsError
from standards_bot.render import append_outputs, append_step_summary, format_error, write_console
from standards_bot.results import RunOutcome
from standards_bot.rules import RunPlan, Subject, evaluate_run

logger = get_logger("standards_bot")


class PullRequestRef(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str
    repo: str
    pull_number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def _load_event_payload(path: Optional[str]) -> dict[str, Any]:
    if not path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set")
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to read event payload {path}: {exc}") from exc


def pull_request_ref_from_event(payload: dict[str, Any]) -> PullRequestRef:
    pull_request = payload.get("pull_request") or {}
    base = pull_request.get("base") or {}
    owner = (base.get("user") or {}).get("login")
    repo = (base.get("repo") or {}).get("name")
    number = pull_request.get("number")
    if not owner or not repo or not isinstance(number, int):
        raise ConfigurationError("Event payload does not describe a pull request")
    return PullRequestRef(owner=owner, repo=repo, pull_number=number)


def resolve_pull_request(settings: ActionSettings, args: argparse.Namespace) -> PullRequestRef:
    overrides = (args.owner, args.repo, args.pr_number)
    if any(value is not None for value in overrides):
        if not all(value is not None for value in overrides):
            raise ConfigurationError("--owner, --repo and --pr-number must be given together")
        return PullRequestRef(owner=args.owner, repo=args.repo, pull_number=args.pr_number)

    if settings.event_name not in VALID_EVENTS:
        raise ConfigurationError(f"Invalid Event: {settings.event_name}")
    return pull_request_ref_from_event(_load_event_payload(settings.event_path))


def fetch_subjects(client: GitHubClient, ref: PullRequestRef) -> tuple[Subject, list[Subject]]:
    log = logger.bind(repo=ref.full_name, pr_number=ref.pull_number)

    pr = client.get_pull_request(ref.owner, ref.repo, ref.pull_number)
    log.debug("pull_request_fetched")

    commits = client.list_pull_commits(ref.owner, ref.repo, ref.pull_number)
    log.debug("commits_fetched", extra={"extra": {"commit_count": len(commits)}})

    title = Subject.pull_request_title(str(pr.get("title") or ""))
    return title, [Subject.from_commit_payload(commit) for commit in commits]


def run(plan: RunPlan, client: GitHubClient, ref: PullRequestRef) -> RunOutcome:
    log = logger.bind(repo=ref.full_name, pr_number=ref.pull_number)
    log.info("standards_run_started")

    title, commits = fetch_subjects(client, ref)
    outcome = evaluate_run(title, commits, plan)

    log.info(
        "standards_run_finished",
        extra={
            "extra": {
                "passed": outcome.count("passed"),
                "failed": outcome.count("failed"),
                "skipped": outcome.count("skipped"),
            }
        },
    )
    return outcome


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check pull request title and commit messages against standards")
    parser.add_argument("--owner", help="Repository owner (overrides the event payload)")
    parser.add_argument("--repo", help="Repository name (overrides the event payload)")
    parser.add_argument("--pr-number", type=int, help="Pull request number (overrides the event payload)")
    return parser.parse_args(argv)


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    stdout: Optional[TextIO] = None,
    client: Optional[GitHubClient] = None,
) -> int:
    args = _parse_args(argv)
    env = os.environ if environ is None else environ
    out = stdout or sys.stdout

    try:
        settings = load_settings(env)
        plan = RunPlan.from_config(settings.rules)
        ref = resolve_pull_request(settings, args)
        if not settings.github_token:
            raise ConfigurationError("Exiting: No GitHub Token provided")

        token = settings.github_token
        gh = client or GitHubClient(
            token_provider=lambda: token,
            api_base=settings.api_base,
        )
        outcome = run(plan, gh, ref)
    except StandardsError as exc:
        logger.error("standards_run_aborted", extra={"extra": {"error": str(exc)}})
        out.write(format_error(str(exc)) + "\n")
        return 1
    except requests.RequestException as exc:
        logger.exception("github_fetch_failed")
        out.write(format_error(f"Failed to fetch pull request data: {exc}") + "\n")
        return 1

    write_console(outcome, out)
    if settings.step_summary_path:
        append_step_summary(settings.step_summary_path, outcome)
    if settings.output_path:
        append_outputs(settings.output_path, outcome)

    return 1 if outcome.failed else 0


def cli() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
