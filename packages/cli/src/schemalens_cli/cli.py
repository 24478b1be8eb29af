"""CLI entry point for schemalens.

Commands:
  review   - review the schema files changed in the triggering pull request
"""

from __future__ import annotations

import importlib.metadata

import click

from schemalens_cli.commands.review import review_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("schemalens"),
    prog_name="schemalens",
)
def main():
    """AI-powered breaking-change review for event schemas in pull requests."""


main.add_command(review_cmd)
