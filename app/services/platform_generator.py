# /app/services/platform_generator.py

"""
Stage 2 of the generation pipeline: one platform's structured content from
the shared ContentAnalysis.

Each platform has its own output model. `PLATFORM_CONTENT_MODELS` is the
single dispatch table from platform to model, checked for exhaustiveness at
import time so a new Platform member cannot ship without one.
"""

import logging
from typing import Dict, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..core.exceptions import InvalidLLMOutputError
from ..models.generation_model import ContentAnalysis, Platform, Tone
from ..models.platform_output_model import (
    EmailOutput,
    InstagramOutput,
    LinkedInOutput,
    PlatformContent,
    ThreadsOutput,
    TikTokOutput,
    TwitterOutput,
)
from .llm_helpers.base import LLMConfig
from .llm_service import LLMService
from .prompt_library import PLATFORM_SYSTEM_PROMPT, fill_prompt_template, get_prompt_for_platform

logger = logging.getLogger(__name__)

PLATFORM_CONTENT_MODELS: Dict[Platform, Type[BaseModel]] = {
    Platform.TIKTOK: TikTokOutput,
    Platform.TWITTER: TwitterOutput,
    Platform.LINKEDIN: LinkedInOutput,
    Platform.INSTAGRAM: InstagramOutput,
    Platform.THREADS: ThreadsOutput,
    Platform.EMAIL: EmailOutput,
}
if set(PLATFORM_CONTENT_MODELS) != set(Platform):
    raise RuntimeError("Every platform needs an output model.")

PLATFORM_TEMPERATURE = 0.8
PLATFORM_MAX_TOKENS = 2500


def platform_config(platform: Platform) -> LLMConfig:
    return LLMConfig(
        temperature=PLATFORM_TEMPERATURE,
        max_tokens=PLATFORM_MAX_TOKENS,
        system_prompt=PLATFORM_SYSTEM_PROMPT.replace("{platform}", platform.value),
    )


async def generate_platform_content(
    llm: LLMService, platform: Platform, tone: Tone, analysis: ContentAnalysis
) -> Tuple[PlatformContent, int]:
    """
    Returns the parsed content and the tokens the call consumed.
    Raises on LLM errors or invalid output; the orchestrator converts those
    into a per-platform error.
    """
    template = get_prompt_for_platform(platform, tone)
    prompt = fill_prompt_template(template, core_message=analysis.coreMessage, key_points=analysis.keyPoints)

    response = await llm.generate(prompt, platform_config(platform))
    data = llm.parse_json(response)

    try:
        content = PLATFORM_CONTENT_MODELS[platform].model_validate(data)
    except ValidationError as e:
        logger.error("Output for %s did not match its schema: %s", platform.value, e)
        raise InvalidLLMOutputError(f"LLM returned invalid {platform.value} content", raw_content=response.content) from e

    return content, response.tokens
