"""Review data models.

All entities are created fresh for each run and discarded once the comment
has been posted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from schemalens_core.exceptions import ReviewerError

MAX_SCORE = 100

_TEXT_FIELDS = {
    "executiveSummary": "executive_summary",
    "detailedAnalysis": "detailed_analysis",
    "recommendations": "recommendations",
}


@dataclass(frozen=True)
class Assessment:
    """Structured model output for one file's change."""

    executive_summary: str
    detailed_analysis: str
    recommendations: str
    score: int | float

    @classmethod
    def from_dict(cls, data) -> Assessment:
        """Validate the model's JSON object and build an Assessment.

        Raises ReviewerError for any shape mismatch so invalid output is
        recorded as a reviewer failure instead of being rendered.
        """
        if not isinstance(data, dict):
            raise ReviewerError(f"Expected a JSON object, got {type(data).__name__}.")

        values = {}
        for key, attr in _TEXT_FIELDS.items():
            value = data.get(key)
            if not isinstance(value, str):
                raise ReviewerError(f"Field {key!r} is missing or not a string.")
            values[attr] = value

        score = data.get("score")
        # bool is an int subclass; true/false is never a valid score.
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ReviewerError(f"Field 'score' must be a number, got {score!r}.")
        if not 0 <= score <= MAX_SCORE:
            raise ReviewerError(f"Field 'score' must be between 0 and {MAX_SCORE}, got {score}.")
        if isinstance(score, float) and score.is_integer():
            score = int(score)

        return cls(score=score, **values)


@dataclass(frozen=True)
class ReviewOutcome:
    """The result of attempting to review one changed file."""

    file_path: str
    old_content: str
    new_content: str
    assessment: Assessment | None = None
    failure_reason: str | None = None


@dataclass
class AggregateResult:
    """Every outcome of a run plus the worst score seen.

    lowest_score starts at MAX_SCORE and only assessed files can lower it, so
    a run in which every file errored reports MAX_SCORE.
    """

    outcomes: list[ReviewOutcome] = field(default_factory=list)
    lowest_score: int | float = MAX_SCORE
    lowest_score_file: str = ""

    def add(self, outcome: ReviewOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.assessment is not None and outcome.assessment.score < self.lowest_score:
            self.lowest_score = outcome.assessment.score
            self.lowest_score_file = outcome.file_path
