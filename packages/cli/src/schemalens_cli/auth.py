"""GitHub token resolution for the review step.

In a workflow the token arrives as the ``access_token`` input; GITHUB_TOKEN
and a local ``gh`` login cover runs outside Actions.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_GH_TIMEOUT_SECONDS = 5


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return the first token found, or None; build_review_config reports a missing one."""
    sources = (
        ("access_token input", lambda: explicit),
        ("GITHUB_TOKEN", lambda: os.environ.get("GITHUB_TOKEN")),
        ("gh CLI session", _gh_cli_token),
    )
    for name, lookup in sources:
        token = lookup()
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token
    return None
