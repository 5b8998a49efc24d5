# /app/services/llm_helpers/base.py

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMConfig:
    temperature: float = 0.7
    max_tokens: int = 2000
    system_prompt: str = "You are a helpful assistant."


@dataclass(frozen=True)
class LLMResponse:
    content: str
    tokens: int
    model: str
    provider: str  # 'openai' | 'anthropic' | 'gemini'


class LLMClient(ABC):
    """One vendor backend. Implementations ask the vendor for JSON output where supported."""

    provider: str = ""

    @abstractmethod
    async def generate(self, prompt: str, config: LLMConfig) -> LLMResponse:
        ...
