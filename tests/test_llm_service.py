# /tests/test_llm_service.py

import json

import pytest

from app.core.config import Settings
from app.core.exceptions import InvalidLLMOutputError, LLMConfigurationError
from app.services.llm_helpers.base import LLMConfig, LLMResponse
from app.services.llm_service import CLIENT_FACTORIES, PROVIDER_ORDER, LLMService

from .fakes import FakeLLMClient


@pytest.mark.asyncio
async def test_generate_uses_preferred_provider_first():
    # Arrange
    openai_client = FakeLLMClient(provider="openai")
    anthropic_client = FakeLLMClient(provider="anthropic")
    service = LLMService(clients={"openai": openai_client, "anthropic": anthropic_client}, preferred="anthropic")

    # Act
    response = await service.generate("hello", LLMConfig(system_prompt="You are a threads content expert."))

    # Assert
    assert response.provider == "anthropic"
    assert len(anthropic_client.calls) == 1
    assert openai_client.calls == []


@pytest.mark.asyncio
async def test_generate_fails_over_when_preferred_provider_is_absent():
    """Preferred 'openai' has no credential, so the next configured provider answers."""
    anthropic_client = FakeLLMClient(provider="anthropic")
    service = LLMService(clients={"anthropic": anthropic_client, "gemini": FakeLLMClient("gemini")}, preferred="openai")

    response = await service.generate("hello", LLMConfig(system_prompt="You are a email content expert."))

    assert response.provider == "anthropic"


@pytest.mark.asyncio
async def test_generate_fails_over_on_runtime_error():
    broken = FakeLLMClient(provider="openai", fail_all=True)
    healthy = FakeLLMClient(provider="gemini")
    service = LLMService(clients={"openai": broken, "gemini": healthy}, preferred="openai")

    response = await service.generate("hello", LLMConfig(system_prompt="You are a twitter content expert."))

    assert response.provider == "gemini"
    assert len(broken.calls) == 1
    assert len(healthy.calls) == 1


@pytest.mark.asyncio
async def test_generate_raises_last_error_when_every_provider_fails():
    first = FakeLLMClient(provider="openai", fail_all=True)
    second = FakeLLMClient(provider="anthropic", fail_all=True)
    service = LLMService(clients={"openai": first, "anthropic": second}, preferred="openai")

    with pytest.raises(RuntimeError, match="anthropic is down"):
        await service.generate("hello")

    # Each provider is tried exactly once.
    assert len(first.calls) == 1
    assert len(second.calls) == 1


@pytest.mark.asyncio
async def test_generate_without_credentials_raises_configuration_error():
    service = LLMService(settings=Settings())

    with pytest.raises(LLMConfigurationError):
        await service.generate("hello")


def test_available_providers_follow_fixed_order():
    service = LLMService(
        clients={"gemini": FakeLLMClient("gemini"), "openai": FakeLLMClient("openai")},
        preferred="gemini",
    )
    assert service.available_providers == ["openai", "gemini"]


def test_every_provider_has_a_client_factory():
    assert set(CLIENT_FACTORIES) == set(PROVIDER_ORDER)


def test_initialize_builds_only_configured_clients(mocker):
    """Vendor SDKs are never touched; the factories are patched out."""
    built = {}

    def fake_factory(name):
        def _factory(api_key, model):
            built[name] = (api_key, model)
            return FakeLLMClient(provider=name)
        return _factory

    mocker.patch.dict(
        "app.services.llm_service.CLIENT_FACTORIES",
        {"openai": fake_factory("openai"), "anthropic": fake_factory("anthropic"), "gemini": fake_factory("gemini")},
    )
    service = LLMService(settings=Settings(anthropic_api_key="sk-ant", anthropic_model="claude-test"))

    assert service.available_providers == ["anthropic"]
    assert built == {"anthropic": ("sk-ant", "claude-test")}


def test_parse_json_returns_structured_value():
    payload = {"coreMessage": "x", "keyPoints": ["a"]}
    response = LLMResponse(content=json.dumps(payload), tokens=1, model="m", provider="openai")

    assert LLMService.parse_json(response) == payload
    # Parsing is a pure function of the content.
    assert LLMService.parse_json(response) == LLMService.parse_json(response)


def test_parse_json_rejects_non_json_output():
    response = LLMResponse(content="Sure! Here is your JSON: {oops", tokens=1, model="m", provider="openai")

    with pytest.raises(InvalidLLMOutputError) as exc_info:
        LLMService.parse_json(response)

    assert exc_info.value.raw_content == "Sure! Here is your JSON: {oops"
