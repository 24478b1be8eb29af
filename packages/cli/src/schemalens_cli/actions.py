"""GitHub Actions workflow commands used to report results."""

from __future__ import annotations

import os

import click


def set_output(name: str, value: str) -> None:
    """Append name=value to the step's GITHUB_OUTPUT file, if running in Actions."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


def set_failed(message: str) -> None:
    """Emit an error annotation and terminate with exit status 1."""
    # %, CR and LF must be escaped inside workflow command data.
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    click.echo(f"::error::{escaped}")
    raise SystemExit(1)
