# /app/services/llm_helpers/anthropic_client.py

import anthropic

from .base import LLMClient, LLMConfig, LLMResponse


class AnthropicClient(LLMClient):
    provider = "anthropic"

    def __init__(self, api_key: str, model: str):
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        msg = await self._client.messages.create(
            model=self._model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            system=config.system_prompt,
            messages=[{"role": "user", "content": prompt}],
        )
        # No JSON mode here; the prompts themselves demand a bare JSON object.
        content = ""
        if msg.content and getattr(msg.content[0], "type", None) == "text":
            content = msg.content[0].text
        # Anthropic reports input and output separately.
        tokens = (msg.usage.input_tokens or 0) + (msg.usage.output_tokens or 0)
        return LLMResponse(content=content, tokens=tokens, model=msg.model or self._model, provider=self.provider)
