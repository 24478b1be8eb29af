"""GitHub access for the review pipeline.

The pipeline depends only on the HostingClient protocol; GitHubClient is the
PyGithub-backed implementation used in CI.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from github import Github

logger = logging.getLogger(__name__)

DIRECTORY_PLACEHOLDER = "This is a directory, content not displayed."
MISSING_CONTENT_PLACEHOLDER = "Could not retrieve content for this file."


@dataclass(frozen=True)
class PostedComment:
    id: int
    url: str


class HostingClient(Protocol):
    def list_changed_files(self, pr_number: int) -> list[str]: ...

    def get_file_content(self, path: str, ref: str) -> str | None:
        """Return the file's text at ref, None if it has no content.

        Raises IsADirectoryError when path is a directory.
        """
        ...

    def post_comment(self, pr_number: int, body: str) -> PostedComment: ...


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_diff(pr):
    return pr.get_files()


def decode_content(content_file) -> str | None:
    raw = getattr(content_file, "content", None)
    if not raw:
        return None
    if getattr(content_file, "encoding", None) == "base64":
        return base64.b64decode(raw).decode("utf-8", errors="replace")
    return raw


class GitHubClient:
    """HostingClient over a PyGithub Repository."""

    def __init__(self, repo):
        self.repo = repo

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GitHubClient:
        return cls(get_repo(repo_name, token=token))

    def list_changed_files(self, pr_number: int) -> list[str]:
        return [f.filename for f in get_diff(get_pull(self.repo, pr_number))]

    def get_file_content(self, path: str, ref: str) -> str | None:
        contents = self.repo.get_contents(path, ref=ref)
        if isinstance(contents, list):
            raise IsADirectoryError(path)
        return decode_content(contents)

    def post_comment(self, pr_number: int, body: str) -> PostedComment:
        comment = get_pull(self.repo, pr_number).create_issue_comment(body)
        return PostedComment(id=comment.id, url=comment.html_url)


def fetch_file_content(client: HostingClient, path: str, ref: str) -> str:
    """Return the text of path at ref, or a placeholder describing why not.

    Never raises, so one unreadable file cannot abort the review of the rest.
    """
    try:
        content = client.get_file_content(path, ref)
    except IsADirectoryError:
        return DIRECTORY_PLACEHOLDER
    except Exception as e:
        logger.warning("Failed to fetch content for %s at ref %s: %s", path, ref, e)
        return f"Could not retrieve content (Error: {e})"
    if content is None:
        return MISSING_CONTENT_PLACEHOLDER
    return content
