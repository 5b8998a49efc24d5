# /tests/test_llm_clients.py

from types import SimpleNamespace

import pytest

from app.services.llm_helpers.anthropic_client import AnthropicClient
from app.services.llm_helpers.base import LLMConfig
from app.services.llm_helpers.gemini_client import GeminiClient
from app.services.llm_helpers.openai_client import OpenAIClient

CONFIG = LLMConfig(temperature=0.3, max_tokens=1000, system_prompt="Always return valid JSON.")


@pytest.mark.asyncio
async def test_openai_client_requests_json_mode(mocker):
    # Arrange
    client = OpenAIClient(api_key="sk-test", model="gpt-test")
    completion = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content='{"ok": true}'))],
        usage=SimpleNamespace(total_tokens=321),
        model="gpt-test-0125",
    )
    create = mocker.patch.object(client._client.chat.completions, "create", new=mocker.AsyncMock(return_value=completion))

    # Act
    response = await client.generate("prompt", CONFIG)

    # Assert
    assert response.content == '{"ok": true}'
    assert response.tokens == 321
    assert response.model == "gpt-test-0125"
    assert response.provider == "openai"
    kwargs = create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0] == {"role": "system", "content": "Always return valid JSON."}
    assert kwargs["temperature"] == 0.3
    assert kwargs["max_tokens"] == 1000


@pytest.mark.asyncio
async def test_anthropic_client_sums_input_and_output_tokens(mocker):
    client = AnthropicClient(api_key="sk-ant-test", model="claude-test")
    message = SimpleNamespace(
        content=[SimpleNamespace(type="text", text='{"ok": true}')],
        usage=SimpleNamespace(input_tokens=200, output_tokens=50),
        model="claude-test",
    )
    create = mocker.patch.object(client._client.messages, "create", new=mocker.AsyncMock(return_value=message))

    response = await client.generate("prompt", CONFIG)

    assert response.tokens == 250
    assert response.content == '{"ok": true}'
    assert create.call_args.kwargs["system"] == "Always return valid JSON."


@pytest.mark.asyncio
async def test_gemini_client_reads_usage_metadata(mocker):
    mocker.patch("app.services.llm_helpers.gemini_client.genai.configure")
    model = mocker.Mock()
    model.generate_content_async = mocker.AsyncMock(return_value=SimpleNamespace(
        parts=["part"],
        text='{"ok": true}',
        usage_metadata=SimpleNamespace(total_token_count=77),
    ))
    mocker.patch("app.services.llm_helpers.gemini_client.genai.GenerativeModel", return_value=model)
    client = GeminiClient(api_key="g-test", model="gemini-test")

    response = await client.generate("prompt", CONFIG)

    assert response.tokens == 77
    assert response.provider == "gemini"
    prompt_sent = model.generate_content_async.call_args.args[0]
    assert prompt_sent.startswith("Always return valid JSON.\n\nprompt")


@pytest.mark.asyncio
async def test_gemini_client_rejects_empty_response(mocker):
    mocker.patch("app.services.llm_helpers.gemini_client.genai.configure")
    model = mocker.Mock()
    model.generate_content_async = mocker.AsyncMock(return_value=SimpleNamespace(parts=[], text=""))
    mocker.patch("app.services.llm_helpers.gemini_client.genai.GenerativeModel", return_value=model)
    client = GeminiClient(api_key="g-test", model="gemini-test")

    with pytest.raises(ValueError, match="empty response"):
        await client.generate("prompt", CONFIG)
