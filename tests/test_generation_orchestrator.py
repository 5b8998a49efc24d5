# /tests/test_generation_orchestrator.py

import json

import pytest

from app.models.generation_model import ContentAnalysis, Platform, Tone
from app.models.platform_output_model import LinkedInOutput, ThreadsOutput, TikTokOutput
from app.services.generation_orchestrator import GenerationOrchestrator
from app.services.llm_service import LLMService
from app.services.platform_generator import PLATFORM_CONTENT_MODELS, generate_platform_content, platform_config

from .fakes import ANALYSIS_PAYLOAD, PLATFORM_PAYLOADS, SAMPLE_CONTENT, FakeLLMClient


def _orchestrator(client: FakeLLMClient) -> GenerationOrchestrator:
    return GenerationOrchestrator(LLMService(clients={"openai": client}, preferred="openai"))


@pytest.mark.asyncio
async def test_outputs_follow_request_order_not_completion_order():
    # Arrange: the first requested platform finishes last.
    client = FakeLLMClient(delays={"tiktok": 0.05, "linkedin": 0.0, "threads": 0.01})
    platforms = [Platform.TIKTOK, Platform.LINKEDIN, Platform.THREADS]

    # Act
    result = await _orchestrator(client).generate(SAMPLE_CONTENT, platforms, Tone.EDUCATIONAL)

    # Assert
    assert [o.platform for o in result.outputs] == platforms
    assert isinstance(result.outputs[0].content, TikTokOutput)
    assert isinstance(result.outputs[1].content, LinkedInOutput)
    assert isinstance(result.outputs[2].content, ThreadsOutput)


@pytest.mark.asyncio
async def test_total_tokens_sum_analysis_and_successful_platforms():
    client = FakeLLMClient(analysis_tokens=500, platform_tokens={"linkedin": 800, "threads": 900})

    result = await _orchestrator(client).generate(
        SAMPLE_CONTENT, [Platform.LINKEDIN, Platform.THREADS], Tone.CONVERSATIONAL
    )

    assert result.totalTokens == 2200
    assert result.llmProvider == "openai"
    assert result.llmModel == "openai-model"
    assert result.generationTimeMs >= 0


@pytest.mark.asyncio
async def test_one_platform_failure_does_not_fail_the_others():
    client = FakeLLMClient(
        analysis_tokens=500,
        platform_tokens={"linkedin": 800, "threads": 900},
        fail_platforms=["threads"],
    )

    result = await _orchestrator(client).generate(
        SAMPLE_CONTENT, [Platform.LINKEDIN, Platform.THREADS], Tone.OPINIONATED
    )

    linkedin, threads = result.outputs
    assert linkedin.succeeded and linkedin.error is None
    assert not threads.succeeded
    assert threads.content is None
    assert "threads generation failed" in threads.error
    assert result.failed_platforms == [Platform.THREADS]
    # Failed platforms contribute no tokens.
    assert result.totalTokens == 1300


@pytest.mark.asyncio
async def test_invalid_platform_output_is_reported_per_platform():
    client = FakeLLMClient(raw_overrides={"twitter": json.dumps({"tweetCount": 3})})

    result = await _orchestrator(client).generate(
        SAMPLE_CONTENT, [Platform.TWITTER, Platform.EMAIL], Tone.AUTHORITY
    )

    assert result.outputs[0].error == "LLM returned invalid twitter content"
    assert result.outputs[1].succeeded


@pytest.mark.asyncio
async def test_analysis_failure_aborts_before_any_platform_call():
    client = FakeLLMClient(fail_analysis=True)

    with pytest.raises(RuntimeError):
        await _orchestrator(client).generate(SAMPLE_CONTENT, [Platform.LINKEDIN], Tone.EDUCATIONAL)

    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_platform_prompt_carries_analysis_and_platform_config(fake_client, llm_service):
    analysis = ContentAnalysis.model_validate(ANALYSIS_PAYLOAD)

    content, tokens = await generate_platform_content(llm_service, Platform.EMAIL, Tone.EDUCATIONAL, analysis)

    assert content.subjectLine == PLATFORM_PAYLOADS["email"]["subjectLine"]
    assert tokens == 100
    call = fake_client.calls[0]
    assert call["config"] == platform_config(Platform.EMAIL)
    assert call["config"].temperature == 0.8
    assert call["config"].max_tokens == 2500
    assert analysis.coreMessage in call["prompt"]
    assert f"1. {analysis.keyPoints[0]}" in call["prompt"]


def test_every_platform_has_an_output_model():
    assert set(PLATFORM_CONTENT_MODELS) == set(Platform)
