# /app/services/llm_service.py

"""
The provider adapter: one `generate(prompt, config)` operation backed by up
to three vendor clients, with cross-provider failover.

A single LLMService instance is built at application start-up and handed to
the pipeline through FastAPI dependencies. Vendor clients are constructed on
first use and reused for the life of the process.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.config import Settings, get_settings
from ..core.exceptions import InvalidLLMOutputError, LLMConfigurationError
from .llm_helpers.base import LLMClient, LLMConfig, LLMResponse

logger = logging.getLogger(__name__)

# Fixed precedence for failover candidates.
PROVIDER_ORDER = ("openai", "anthropic", "gemini")


def _build_openai(api_key: str, model: str) -> LLMClient:
    from .llm_helpers.openai_client import OpenAIClient
    return OpenAIClient(api_key=api_key, model=model)


def _build_anthropic(api_key: str, model: str) -> LLMClient:
    from .llm_helpers.anthropic_client import AnthropicClient
    return AnthropicClient(api_key=api_key, model=model)


def _build_gemini(api_key: str, model: str) -> LLMClient:
    from .llm_helpers.gemini_client import GeminiClient
    return GeminiClient(api_key=api_key, model=model)


CLIENT_FACTORIES: Dict[str, Callable[[str, str], LLMClient]] = {
    "openai": _build_openai,
    "anthropic": _build_anthropic,
    "gemini": _build_gemini,
}
if set(CLIENT_FACTORIES) != set(PROVIDER_ORDER):
    raise RuntimeError("Every provider needs a client factory.")


class LLMService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        clients: Optional[Dict[str, LLMClient]] = None,
        preferred: Optional[str] = None,
    ):
        """
        `clients` bypasses credential lookup entirely and is meant for tests
        and for callers that build their own vendor clients.
        """
        self._settings = settings or get_settings()
        self.preferred = (preferred or self._settings.llm_provider).lower()
        self._clients: Dict[str, LLMClient] = dict(clients) if clients is not None else {}
        self._initialized = clients is not None

    def _initialize(self) -> None:
        if self._initialized:
            return

        credentials = self._settings.provider_credentials
        models = self._settings.provider_models
        for provider in PROVIDER_ORDER:
            api_key = credentials.get(provider)
            if not api_key:
                continue
            self._clients[provider] = CLIENT_FACTORIES[provider](api_key, models[provider])
            logger.info("LLM client initialized: %s (%s)", provider, models[provider])

        if not self._clients:
            raise LLMConfigurationError(
                "No LLM provider configured. Set OPENAI_API_KEY, ANTHROPIC_API_KEY or GOOGLE_API_KEY."
            )
        self._initialized = True

    @property
    def available_providers(self) -> List[str]:
        self._initialize()
        return [p for p in PROVIDER_ORDER if p in self._clients]

    def _candidates(self) -> List[str]:
        others = [p for p in PROVIDER_ORDER if p != self.preferred and p in self._clients]
        if self.preferred in self._clients:
            return [self.preferred, *others]
        if others:
            logger.warning("Preferred LLM provider '%s' is not configured; using '%s'.", self.preferred, others[0])
        return others

    async def generate(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        """
        Tries the preferred provider, then every other configured provider once
        in fixed order. Returns the first success; re-raises the last error if
        all of them fail.
        """
        self._initialize()
        config = config or LLMConfig()

        last_error: Optional[Exception] = None
        for provider in self._candidates():
            if last_error is not None:
                logger.warning("Failing over to LLM provider '%s'", provider)
            try:
                return await self._clients[provider].generate(prompt, config)
            except Exception as e:
                logger.error("LLM call failed on provider '%s': %s", provider, e)
                last_error = e

        if last_error is None:
            raise LLMConfigurationError("No LLM provider available.")
        raise last_error

    @staticmethod
    def parse_json(response: LLMResponse) -> Any:
        try:
            return json.loads(response.content)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error("Failed to parse LLM response as JSON (%s). Raw content: %s", e, response.content)
            raise InvalidLLMOutputError(raw_content=response.content or "") from e
