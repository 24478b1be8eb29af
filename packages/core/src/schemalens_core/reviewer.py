"""Core pull request review orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from schemalens_core.config import ReviewConfig
from schemalens_core.exceptions import ConfigurationError
from schemalens_core.gh.event import EventContext
from schemalens_core.gh.pull_request import GitHubClient, HostingClient, PostedComment, fetch_file_content
from schemalens_core.models import AggregateResult, ReviewOutcome
from schemalens_core.providers.anthropic import AnthropicReviewer
from schemalens_core.providers.base import BaseReviewer
from schemalens_core.providers.openai import OpenAIReviewer
from schemalens_core.report import NO_FILES_CHANGED_BODY, ReportLinks, render_comment_body

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class SelectionResult:
    paths: list[str] = field(default_factory=list)
    proceed: bool = False
    # Set when the "no files changed" notice was posted instead of a review.
    comment: PostedComment | None = None


@dataclass
class RunResult:
    """What run_review hands back to the CLI.

    aggregate is None when the run stopped before any file was reviewed.
    failure_message is set when the threshold gate failed; the comment has
    already been posted by then.
    """

    aggregate: AggregateResult | None = None
    comment_url: str | None = None
    posted: bool = False
    failure_message: str | None = None


def get_reviewer(config: ReviewConfig) -> BaseReviewer:
    if config.provider == "openai":
        return OpenAIReviewer(api_key=config.api_key, model=config.model)
    if config.provider == "anthropic":
        return AnthropicReviewer(api_key=config.api_key, model=config.model)
    raise ConfigurationError(f"Unknown model provider: {config.provider!r}. Choose 'openai' or 'anthropic'.")


def build_review_prompt(file_path: str, old_content: str, new_content: str) -> str:
    return (
        f"Review the following changes to the file `{file_path}`:\n\n"
        f"Old version (from base branch):\n```\n{old_content}\n```\n\n"
        f"New version (from this PR):\n```\n{new_content}\n```\n\n"
        "Please analyze these changes for potential issues, especially breaking changes "
        "if this is a schema or configuration file. Provide your assessment."
    )


def review_file(client: HostingClient, reviewer, file_path: str, base_sha: str, head_sha: str) -> ReviewOutcome:
    """Fetch both revisions of one file and ask the model to assess the change.

    Any reviewer exception is recorded on the outcome instead of propagating.
    """
    old_content = fetch_file_content(client, file_path, base_sha)
    new_content = fetch_file_content(client, file_path, head_sha)
    prompt = build_review_prompt(file_path, old_content, new_content)

    try:
        assessment = reviewer.review(prompt)
    except Exception as e:
        logger.error("AI review failed for %s: %s", file_path, e)
        console.print(f"  [red]AI review failed: {e}[/red]")
        return ReviewOutcome(file_path, old_content, new_content, failure_reason=str(e))

    console.print(f"  Score: {assessment.score}")
    return ReviewOutcome(file_path, old_content, new_content, assessment=assessment)


def run_schema_review(
    client: HostingClient,
    reviewer,
    paths: list[str],
    base_sha: str,
    head_sha: str,
) -> AggregateResult:
    """Review every path in order, one at a time, and track the lowest score."""
    result = AggregateResult()
    total = len(paths)
    for i, file_path in enumerate(paths, 1):
        console.print(f"\n[[{i}/{total}]] Reviewing: {file_path}")
        result.add(review_file(client, reviewer, file_path, base_sha, head_sha))
    return result


def select_changed_files(
    client: HostingClient,
    event: EventContext,
    catalog_directory: str | None = None,
) -> SelectionResult:
    """List the pull request's changed files, optionally under catalog_directory.

    Raises EventShapeError for anything but a pull_request event. When nothing
    qualifies, posts a short comment only if no directory filter was set.
    """
    pr = event.pull_request()
    paths = client.list_changed_files(pr.number)

    if catalog_directory:
        console.print(f"Filtering changed files for directory: {catalog_directory}")
        paths = [p for p in paths if str(p).startswith(catalog_directory)]

    if paths:
        return SelectionResult(paths=paths, proceed=True)

    if catalog_directory:
        console.print(
            f"[yellow]No changed files found within the specified directory: {catalog_directory}. "
            "Action will not comment.[/yellow]"
        )
    else:
        console.print("[yellow]No files changed in this pull request.[/yellow]")
        return SelectionResult(comment=client.post_comment(pr.number, NO_FILES_CHANGED_BODY))
    return SelectionResult()


def check_threshold(aggregate: AggregateResult, threshold: int) -> str | None:
    """Return a failure message if the worst file scored below threshold."""
    if aggregate.lowest_score < threshold:
        return (
            f"Action failed: File '{aggregate.lowest_score_file}' received an AI review score of "
            f"{aggregate.lowest_score}, which is below the threshold of {threshold}."
        )
    return None


def log_catalog_directory(catalog_directory: str | None) -> None:
    if not catalog_directory:
        console.print("No catalog directory specified.")
        return
    console.print(f"Catalog directory: {catalog_directory}")
    path = Path(catalog_directory)
    if path.is_dir():
        entries = sorted(p.name for p in path.iterdir())
        console.print(f"Files in catalog directory: {', '.join(entries)}")
    else:
        logger.warning("Catalog directory %s is not present in the local checkout.", catalog_directory)


def run_review(
    config: ReviewConfig,
    event: EventContext,
    client: HostingClient | None = None,
    reviewer=None,
) -> RunResult:
    """Run the full pipeline: select files, review them, post one comment, gate.

    client and reviewer default to the GitHub and model implementations
    configured by config; tests pass in-memory fakes.
    """
    log_catalog_directory(config.catalog_directory)

    # Validate the event before any network activity.
    pr = event.pull_request()
    if client is None:
        client = GitHubClient.from_token(event.repository, token=config.access_token)

    selection = select_changed_files(client, event, config.catalog_directory)
    if not selection.proceed:
        if selection.comment is None:
            return RunResult()
        return RunResult(comment_url=selection.comment.url, posted=True)

    if reviewer is None:
        reviewer = get_reviewer(config)

    aggregate = run_schema_review(client, reviewer, selection.paths, pr.base_sha, pr.head_sha)

    links = ReportLinks(repository=event.repository, pr_number=pr.number, server_url=event.server_url)
    body = render_comment_body(aggregate.outcomes, links, task=config.task, catalog_directory=config.catalog_directory)
    comment = client.post_comment(pr.number, body)
    console.print(f"\n[green]Review comment posted: {comment.url}[/green]")

    return RunResult(
        aggregate=aggregate,
        comment_url=comment.url,
        posted=True,
        failure_message=check_threshold(aggregate, config.failure_threshold),
    )
