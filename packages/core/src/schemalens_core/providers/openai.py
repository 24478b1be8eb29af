from __future__ import annotations

from openai import OpenAI

from schemalens_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    MODEL = "o4-mini"

    def __init__(self, api_key: str, model: str | None = None):
        super().__init__(model)
        self.client = OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        # Reasoning models such as o4-mini reject a custom temperature and the
        # legacy max_tokens parameter.
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            max_completion_tokens=self.MAX_TOKENS,
        )
        return response.choices[0].message.content
