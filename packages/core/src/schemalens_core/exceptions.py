"""Errors raised by schemalens.

Per-file failures (content fetch, model review) are absorbed into the report;
only setup-level errors abort a run.
"""


class SchemaLensError(Exception):
    """Base class for all schemalens errors."""


class ConfigurationError(SchemaLensError):
    """Invalid or missing configuration. Raised before any network activity."""


class EventShapeError(SchemaLensError):
    """The triggering event is not a pull request or lacks pull request data."""


class ReviewerError(SchemaLensError):
    """The model call failed or returned data that is not a valid assessment."""
