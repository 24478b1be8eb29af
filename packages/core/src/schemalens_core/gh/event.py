"""The GitHub Actions event that triggered the run."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from schemalens_core.exceptions import EventShapeError


@dataclass(frozen=True)
class PullRequestRef:
    number: int
    base_sha: str
    head_sha: str


@dataclass(frozen=True)
class EventContext:
    event_name: str
    repository: str
    payload: dict = field(default_factory=dict)
    server_url: str = "https://github.com"

    @classmethod
    def from_env(cls, environ=None) -> EventContext:
        """Read the event from the variables GitHub Actions sets for every job."""
        env = os.environ if environ is None else environ
        payload: dict = {}
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            with open(event_path, encoding="utf-8") as f:
                loaded = json.load(f)
            if isinstance(loaded, dict):
                payload = loaded
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            payload=payload,
            server_url=env.get("GITHUB_SERVER_URL", "https://github.com"),
        )

    def pull_request(self) -> PullRequestRef:
        """Return the pull request identifiers, raising EventShapeError if absent."""
        if self.event_name != "pull_request":
            raise EventShapeError("This action can only be run on pull_request events.")
        pr = self.payload.get("pull_request") if isinstance(self.payload, dict) else None
        if not pr or not isinstance(pr, dict):
            raise EventShapeError("Pull request payload is missing.")
        try:
            return PullRequestRef(
                number=int(pr["number"]),
                base_sha=pr["base"]["sha"],
                head_sha=pr["head"]["sha"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EventShapeError(f"Pull request payload is malformed: missing {e}.")
