"""Markdown rendering of the review comment.

Everything here is a pure function of its inputs so the same outcomes always
produce the same comment body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

from schemalens_core.models import ReviewOutcome

DANGER_BELOW = 25
WARNING_BELOW = 75

_BADGES = {
    "danger": '<span style="color:red;">🚨 Danger</span>',
    "warning": '<span style="color:orange;">⚠️ Warning</span>',
    "safe": '<span style="color:green;">✅ Safe</span>',
}

_TITLES = {
    "schema_review": "Schema Review",
    "config_review": "Config Review",
}

# Markers: *, -, +, o, digits., roman numerals. (followed by whitespace)
_LIST_MARKER_RE = re.compile(r"^\s*([*\-+]|o|[0-9]+\.|[ivxlcdm]+\.)\s+", re.IGNORECASE)

NO_FILES_CHANGED_BODY = "## EventCatalog: Detected File Changes\n\nNo files were changed in this pull request."


@dataclass(frozen=True)
class ReportLinks:
    repository: str
    pr_number: int
    server_url: str = "https://github.com"

    def file_diff(self, path: str) -> str:
        return f"{self.server_url}/{self.repository}/pull/{self.pr_number}/files#{quote(path, safe='')}"


def severity(score) -> str:
    if score < DANGER_BELOW:
        return "danger"
    if score < WARNING_BELOW:
        return "warning"
    return "safe"


def severity_badge(score) -> str:
    return _BADGES[severity(score)]


def normalize_list(content: str) -> list[str] | None:
    """Turn free-form text into Markdown list lines.

    Lines that already start with a list marker keep their indentation; other
    non-blank lines become top-level ``- `` bullets and blank lines are kept.
    Returns None when no line has any content.
    """
    lines = []
    has_content = False
    for line in content.split("\n"):
        stripped = line.rstrip()
        if not stripped:
            lines.append(line)
            continue
        has_content = True
        if _LIST_MARKER_RE.match(stripped):
            lines.append(stripped)
        else:
            lines.append(f"- {stripped.lstrip()}")
    return lines if has_content else None


def format_section_as_bulleted_list(title: str, content: str | None) -> str:
    """Render a ``### title`` section whose body is always a valid Markdown list."""
    section = f"### {title}\n"
    if not content:
        section += f"No {title.lower()} provided.\n"
    else:
        lines = normalize_list(content)
        if lines is None:
            section += f"No {title.lower()} provided (content was empty or whitespace only).\n"
        else:
            section += "".join(f"{line}\n" for line in lines)
    return section + "\n"


def _file_link(outcome: ReviewOutcome, links: ReportLinks) -> str:
    return f"<sub>File: [{outcome.file_path}]({links.file_diff(outcome.file_path)})</sub>\n\n"


def render_outcome(outcome: ReviewOutcome, links: ReportLinks) -> str:
    assessment = outcome.assessment
    if assessment is None:
        body = _file_link(outcome, links) + "##### AI-Powered Review\n"
        if outcome.failure_reason:
            return body + f"*AI review could not be generated for this file. Error: {outcome.failure_reason}*\n\n"
        return body + "*AI review data not available for this file.*\n\n"

    return (
        f"### **Score:** {severity_badge(assessment.score)} {assessment.score}/100\n\n"
        + _file_link(outcome, links)
        + f"**Executive Summary:**\n{assessment.executive_summary}\n\n"
        + format_section_as_bulleted_list("Detailed Analysis", assessment.detailed_analysis)
        + format_section_as_bulleted_list("Recommendations", assessment.recommendations)
    )


def render_comment_body(
    outcomes: list[ReviewOutcome],
    links: ReportLinks,
    task: str = "schema_review",
    catalog_directory: str | None = None,
) -> str:
    """Build the pull request comment for a completed run."""
    title = _TITLES.get(task, _TITLES["schema_review"])
    where = f"in '{catalog_directory}' " if catalog_directory else ""
    body = f"# EventCatalog: {title}\n\n"
    body += f"The following files {where}were modified in this pull request:\n\n"
    return body + "".join(render_outcome(outcome, links) for outcome in outcomes)
