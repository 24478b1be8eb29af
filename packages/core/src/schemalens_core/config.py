from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from schemalens_core.exceptions import ConfigurationError

VALID_TASKS = ("schema_review", "config_review")

DEFAULT_CONFIG: dict = {
    "task": "schema_review",
    "failure_threshold": 50,
    "catalog_directory": None,  # None = review every changed file
    "provider": "openai",
    "model": None,  # None = provider default
}

# Environment variable holding each provider's credential when no explicit
# api_key is supplied.
PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass(frozen=True)
class ReviewConfig:
    """Validated settings for a single run, built once and passed explicitly."""

    access_token: str
    failure_threshold: int
    task: str
    provider: str
    api_key: str
    model: str | None = None
    catalog_directory: str | None = None


def load_config(config_path: str = ".schemalens.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .schemalens.yml in the current directory
      3. CLI argument / action input overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config.setdefault("access_token", None)
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get(PROVIDER_KEY_ENV["openai"])
    config["anthropic_api_key"] = os.environ.get(PROVIDER_KEY_ENV["anthropic"])

    return config


_THRESHOLD_ERROR = "Invalid input for `failure_threshold`. Must be a number between 0 and 100."


def _parse_threshold(value) -> int:
    """Accept integers, whole-number floats (``50.0`` from YAML) and their string forms."""
    if isinstance(value, bool) or value is None:
        raise ConfigurationError(_THRESHOLD_ERROR)
    if isinstance(value, int):
        threshold = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            raise ConfigurationError(_THRESHOLD_ERROR)
        if not number.is_integer():
            raise ConfigurationError(_THRESHOLD_ERROR)
        threshold = int(number)
    if threshold < 0 or threshold > 100:
        raise ConfigurationError(_THRESHOLD_ERROR)
    return threshold


def build_review_config(config: dict) -> ReviewConfig:
    """Validate a merged config dict and freeze it into a ReviewConfig.

    Raises ConfigurationError on the first problem found. Nothing here touches
    the network, so a bad configuration aborts the run before any side effect.
    """
    task = config.get("task")
    if task not in VALID_TASKS:
        raise ConfigurationError(f"Invalid input for `task`. Must be one of: {', '.join(VALID_TASKS)}.")

    threshold = _parse_threshold(config.get("failure_threshold"))

    token = config.get("access_token") or config.get("github_token")
    if not token:
        raise ConfigurationError("No access token provided. Set the `access_token` input or GITHUB_TOKEN.")

    provider = config.get("provider") or DEFAULT_CONFIG["provider"]
    if provider not in PROVIDER_KEY_ENV:
        raise ConfigurationError(
            f"Unknown model provider: {provider!r}. Choose one of: {', '.join(PROVIDER_KEY_ENV)}."
        )

    api_key = config.get("api_key") or config.get(f"{provider}_api_key")
    if not api_key:
        raise ConfigurationError(f"{PROVIDER_KEY_ENV[provider]} environment variable is not set.")

    return ReviewConfig(
        access_token=token,
        failure_threshold=threshold,
        task=task,
        provider=provider,
        api_key=api_key,
        model=config.get("model") or None,
        catalog_directory=config.get("catalog_directory") or None,
    )
