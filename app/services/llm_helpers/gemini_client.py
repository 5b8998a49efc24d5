# /app/services/llm_helpers/gemini_client.py

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from .base import LLMClient, LLMConfig, LLMResponse


class GeminiClient(LLMClient):
    provider = "gemini"

    def __init__(self, api_key: str, model: str):
        genai.configure(api_key=api_key)
        self._model_name = model

    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        model = genai.GenerativeModel(self._model_name)
        generation_config = GenerationConfig(
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            response_mime_type="application/json",
        )
        # The system prompt travels inline, ahead of the user prompt.
        full_prompt = f"{config.system_prompt}\n\n{prompt}"
        response = await model.generate_content_async(full_prompt, generation_config=generation_config)
        if not response.parts:
            raise ValueError("Gemini returned an empty response.")

        tokens = 0
        if getattr(response, "usage_metadata", None):
            tokens = getattr(response.usage_metadata, "total_token_count", 0) or 0
        return LLMResponse(content=response.text, tokens=tokens, model=self._model_name, provider=self.provider)
