# /app/services/llm_helpers/openai_client.py

from openai import AsyncOpenAI

from .base import LLMClient, LLMConfig, LLMResponse


class OpenAIClient(LLMClient):
    provider = "openai"

    def __init__(self, api_key: str, model: str):
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = model

    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": config.system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            response_format={"type": "json_object"},
        )
        content = resp.choices[0].message.content if resp.choices else ""
        tokens = resp.usage.total_tokens if resp.usage else 0
        return LLMResponse(content=content or "", tokens=tokens, model=resp.model or self._model, provider=self.provider)
