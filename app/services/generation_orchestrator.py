# /app/services/generation_orchestrator.py

"""
Sequences the two pipeline stages into one GenerationResult.

Stage 1 failures propagate to the caller. Once stage 2 starts, the call
always returns: each platform is awaited independently and a failure is
recorded on that platform's output instead of raising.
"""

import asyncio
import logging
import time
from typing import List, Sequence

from ..models.generation_model import GenerationResult, Platform, PlatformOutput, Tone
from .content_analyzer import analyze_content
from .llm_service import LLMService
from .platform_generator import generate_platform_content

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    def __init__(self, llm: LLMService):
        self.llm = llm

    async def generate(self, content: str, platforms: Sequence[Platform], tone: Tone) -> GenerationResult:
        start = time.monotonic()
        platforms = [Platform(p) for p in platforms]
        tone = Tone(tone)

        logger.info("Generation started: %d platforms, tone '%s'", len(platforms), tone.value)

        # --- Stage 1 ---
        analysis, analysis_response = await analyze_content(self.llm, content)

        # --- Stage 2 ---
        tasks = [generate_platform_content(self.llm, platform, tone, analysis) for platform in platforms]
        # gather keeps request order regardless of completion order
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outputs: List[PlatformOutput] = []
        total_tokens = analysis_response.tokens
        for platform, result in zip(platforms, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Generation failed for %s: %s", platform.value, result)
                outputs.append(PlatformOutput(platform=platform, error=str(result) or type(result).__name__))
                continue
            platform_content, tokens = result
            total_tokens += tokens
            outputs.append(PlatformOutput(platform=platform, content=platform_content))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        failed = sum(1 for o in outputs if not o.succeeded)
        logger.info(
            "Generation finished: %d/%d platforms succeeded, %d tokens, %d ms",
            len(outputs) - failed, len(outputs), total_tokens, elapsed_ms,
        )

        return GenerationResult(
            analysis=analysis,
            outputs=outputs,
            totalTokens=total_tokens,
            generationTimeMs=elapsed_ms,
            llmProvider=analysis_response.provider,
            llmModel=analysis_response.model,
        )
