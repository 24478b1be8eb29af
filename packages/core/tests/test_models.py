"""Tests for assessment validation and score aggregation."""

import pytest

from schemalens_core.exceptions import ReviewerError
from schemalens_core.models import AggregateResult, Assessment, ReviewOutcome


def _payload(**overrides):
    data = {
        "executiveSummary": "Adds an optional field.",
        "detailedAnalysis": "Backward compatible.",
        "recommendations": "Bump the version.",
        "score": 90,
    }
    data.update(overrides)
    return data


def _outcome(path, score=None, error=None):
    assessment = Assessment("s", "a", "r", score) if score is not None else None
    return ReviewOutcome(path, "old", "new", assessment=assessment, failure_reason=error)


class TestAssessmentFromDict:
    def test_valid_payload(self):
        a = Assessment.from_dict(_payload())
        assert a.executive_summary == "Adds an optional field."
        assert a.detailed_analysis == "Backward compatible."
        assert a.recommendations == "Bump the version."
        assert a.score == 90

    def test_integral_float_score_normalised(self):
        a = Assessment.from_dict(_payload(score=80.0))
        assert a.score == 80
        assert isinstance(a.score, int)

    def test_fractional_score_kept(self):
        assert Assessment.from_dict(_payload(score=72.5)).score == 72.5

    @pytest.mark.parametrize("score", [0, 100])
    def test_bounds_accepted(self, score):
        assert Assessment.from_dict(_payload(score=score)).score == score

    @pytest.mark.parametrize("score", [-1, 101, 250.5])
    def test_out_of_range_score_rejected(self, score):
        with pytest.raises(ReviewerError, match="between 0 and 100"):
            Assessment.from_dict(_payload(score=score))

    @pytest.mark.parametrize("score", ["80", None, True, [80]])
    def test_non_numeric_score_rejected(self, score):
        with pytest.raises(ReviewerError, match="must be a number"):
            Assessment.from_dict(_payload(score=score))

    def test_missing_field_rejected(self):
        data = _payload()
        del data["recommendations"]
        with pytest.raises(ReviewerError, match="recommendations"):
            Assessment.from_dict(data)

    def test_non_string_field_rejected(self):
        with pytest.raises(ReviewerError, match="executiveSummary"):
            Assessment.from_dict(_payload(executiveSummary=["a", "b"]))

    def test_non_object_rejected(self):
        with pytest.raises(ReviewerError, match="JSON object"):
            Assessment.from_dict([_payload()])


class TestAggregateResult:
    def test_starts_at_max_score(self):
        result = AggregateResult()
        assert result.lowest_score == 100
        assert result.lowest_score_file == ""
        assert result.outcomes == []

    def test_tracks_minimum_and_file(self):
        result = AggregateResult()
        for outcome in [_outcome("a.json", 80), _outcome("b.json", 40), _outcome("c.json", 60)]:
            result.add(outcome)
        assert result.lowest_score == 40
        assert result.lowest_score_file == "b.json"

    def test_tie_keeps_first_file(self):
        result = AggregateResult()
        result.add(_outcome("a.json", 40))
        result.add(_outcome("b.json", 40))
        assert result.lowest_score_file == "a.json"

    def test_errors_do_not_lower_score(self):
        result = AggregateResult()
        result.add(_outcome("a.json", error="boom"))
        result.add(_outcome("b.json", 80))
        assert result.lowest_score == 80
        assert result.lowest_score_file == "b.json"
        assert len(result.outcomes) == 2

    def test_all_errors_leaves_max_score(self):
        result = AggregateResult()
        result.add(_outcome("a.json", error="boom"))
        result.add(_outcome("b.json", error="bang"))
        assert result.lowest_score == 100
        assert result.lowest_score_file == ""

    def test_perfect_score_does_not_set_file(self):
        # Only a strictly lower score replaces the running minimum.
        result = AggregateResult()
        result.add(_outcome("a.json", 100))
        assert result.lowest_score_file == ""
