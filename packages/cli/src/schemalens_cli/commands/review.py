"""review command - run the schema review for the triggering pull request."""

from __future__ import annotations

import click
from rich.console import Console

from schemalens_cli.actions import set_failed, set_output
from schemalens_core.config import VALID_TASKS, build_review_config, load_config
from schemalens_core.exceptions import SchemaLensError
from schemalens_core.gh.event import EventContext
from schemalens_core.reviewer import run_review

console = Console()


@click.command("review")
@click.option(
    "--access-token",
    envvar="INPUT_ACCESS_TOKEN",
    default=None,
    help="GitHub token used to read the pull request and post the comment.",
)
@click.option(
    "--failure-threshold",
    envvar="INPUT_FAILURE_THRESHOLD",
    default=None,
    help="Fail the run if any file scores below this value (0-100).",
)
@click.option(
    "--task",
    envvar="INPUT_TASK",
    default=None,
    help=f"Review task. One of: {', '.join(VALID_TASKS)}.",
)
@click.option(
    "--catalog-directory",
    envvar="INPUT_CATALOG_DIRECTORY",
    default=None,
    help="Only review changed files under this path prefix.",
)
@click.option("--provider", envvar="INPUT_PROVIDER", default=None, help="AI model provider (openai or anthropic).")
@click.option("--model", envvar="INPUT_MODEL", default=None, help="Model name. Defaults to the provider's model.")
@click.option(
    "--api-key",
    envvar="INPUT_OPENAI_API_KEY",
    default=None,
    help="Model provider credential. Falls back to the provider's environment variable.",
)
@click.option(
    "--config",
    "config_path",
    default=".schemalens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="SCHEMALENS_CONFIG",
)
def review_cmd(
    access_token: str | None,
    failure_threshold: str | None,
    task: str | None,
    catalog_directory: str | None,
    provider: str | None,
    model: str | None,
    api_key: str | None,
    config_path: str,
):
    """Review schema changes in a pull request and post a summary comment.

    Meant to run as a GitHub Actions step on pull_request events. Every option
    can also be supplied as an action input (INPUT_<NAME> environment variable).

    \b
    Environment variables:
      GITHUB_TOKEN         Used when no access token is given (or use gh CLI)
      OPENAI_API_KEY       Used with --provider openai when --api-key is unset
      ANTHROPIC_API_KEY    Used with --provider anthropic when --api-key is unset
    """
    from schemalens_cli.auth import resolve_github_token

    try:
        config = load_config(
            config_path,
            cli_overrides={
                "failure_threshold": failure_threshold,
                "task": task,
                "catalog_directory": catalog_directory,
                "provider": provider,
                "model": model,
                "api_key": api_key,
            },
        )
        config["access_token"] = resolve_github_token(access_token or config.get("access_token"))
        review_config = build_review_config(config)

        result = run_review(review_config, EventContext.from_env())
    except SchemaLensError as e:
        set_failed(str(e))
    except Exception as e:
        console.print_exception()
        set_failed(str(e) or e.__class__.__name__)

    if result.comment_url:
        set_output("comment-url", result.comment_url)
    if result.failure_message:
        set_failed(result.failure_message)
