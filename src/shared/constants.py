"""Shared constants used by the standards bot entrypoints."""

from __future__ import annotations

DEFAULT_API_BASE = "https://api.github.com"

# Events that carry a pull_request payload we can check
VALID_EVENTS = ("pull_request", "pull_request_target")

# Commit handles are shortened like `git log --oneline`
SHORT_SHA_LENGTH = 7

COMMITS_PER_PAGE = 100

REQUEST_TIMEOUT_SECONDS = 20
