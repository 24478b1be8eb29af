"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review() → _build_system_prompt()
             → _call_api()   ← only this differs per provider
             → _parse() → Assessment.from_dict()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

A failed call is never retried: it surfaces as ReviewerError and the
orchestrator records it against the file being reviewed.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod

from schemalens_core.exceptions import ReviewerError
from schemalens_core.models import Assessment

logger = logging.getLogger(__name__)

_MAX_TOKENS = 4096

EDA_RULES = """
- All schema changes must be backward compatible.
- Events should be designed to be idempotent.
- Avoid using generic event types; be specific about the domain and action.
- All events must have a version number.
- Consider the impact on downstream consumers before making any changes.
"""


class BaseReviewer(ABC):
    MODEL: str = ""
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(self, model: str | None = None):
        self.model = model or self.MODEL

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def review(self, prompt_text: str) -> Assessment:
        """Send one review prompt and return the validated assessment.

        Raises ReviewerError when the API call fails or the response does not
        match the assessment shape.
        """
        try:
            raw = self._call_api(self._build_system_prompt(), prompt_text)
        except Exception as e:
            logger.error("%s API call failed: %s", self.__class__.__name__, e)
            raise ReviewerError("Failed to get a valid structured response from the AI model.") from e
        return Assessment.from_dict(self._parse(raw))

    # ------------------------------------------------------------------ #
    # Abstract - implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response."""

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_system_prompt(self) -> str:
        return f"""You are an expert reviewer specializing in event-driven architectures (EDA).
Your task is to analyze schema diffs and other architectural information based on the provided EDA rules:
{EDA_RULES}
Your audience is enterprise development and architecture teams. Maintain a professional and clear tone.

Provide a detailed assessment covering the following aspects:
- Overall impact of the changes.
- Specific breaking changes, if any.
- Adherence to EDA best practices and the provided rules.
- Potential risks and considerations for downstream systems.

### Output Format:
Respond with **only** a valid JSON object with the following keys:
- "executiveSummary": A concise (2-3 sentences) overview of the most critical findings and the overall risk/impact, suitable for quick ingestion by stakeholders.
- "detailedAnalysis": A thorough analysis covering backward-compatibility, domain impact, adherence to versioning rules and other architectural notes. Reference the EDA rules where applicable. Format any lists with Markdown hyphens or asterisks and indent sub-lists.
- "recommendations": Clear, actionable steps to mitigate risks, improve the design or ensure compatibility. If there are no issues, affirm the good practices. Format any lists with Markdown hyphens or asterisks and indent sub-lists.
- "score": An integer from 0 to 100, where 0 is a very problematic change with high risk of breaking compatibility and 100 is a perfectly safe and well-designed change.

Do not return any text outside the JSON object."""  # noqa: E501

    def _parse(self, raw: str | None) -> dict:
        """Decode the model's raw text response into a JSON object.

        Only the outer ```json ... ``` fence is stripped; backticks inside
        string values are left alone.
        """
        if not raw:
            raise ReviewerError("The AI model returned an empty response.")
        cleaned = re.sub(r"^```(?:json)?\s*", "", raw.strip())
        cleaned = re.sub(r"\s*```$", "", cleaned.strip())
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError:
            logger.warning(
                "%s: failed to parse response as JSON: %s",
                self.__class__.__name__,
                raw[:200],
            )
            raise ReviewerError("The AI model response was not valid JSON.")
