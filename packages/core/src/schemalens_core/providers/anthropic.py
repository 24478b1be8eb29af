from __future__ import annotations

from schemalens_core.providers.base import BaseReviewer

# Pre-filled start of the assistant turn. Claude continues from it, so the
# reply is the body of a single JSON object with no leading prose.
_JSON_PREFILL = "{"


class AnthropicReviewer(BaseReviewer):
    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The anthropic provider needs the optional SDK: pip install 'schemalens[anthropic]'"
            )
        super().__init__(model)
        self.client = Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        from anthropic.types import TextBlock

        response = self.client.messages.create(
            model=self.model,
            system=system_prompt,
            messages=[
                {"role": "user", "content": user_prompt},
                {"role": "assistant", "content": _JSON_PREFILL},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        if response.stop_reason == "max_tokens":
            raise RuntimeError(f"Assessment truncated at {self.MAX_TOKENS} tokens.")
        body = "".join(block.text for block in response.content if isinstance(block, TextBlock))
        return _JSON_PREFILL + body
