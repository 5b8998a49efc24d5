# /app/services/content_analyzer.py

"""Stage 1 of the generation pipeline: free-form text in, ContentAnalysis out."""

import logging
from typing import Tuple

from pydantic import ValidationError

from ..core.exceptions import InvalidLLMOutputError
from ..models.generation_model import ContentAnalysis
from .llm_helpers.base import LLMConfig, LLMResponse
from .llm_service import LLMService
from .prompt_library import ANALYSIS_SYSTEM_PROMPT, CONTENT_ANALYZER_PROMPT, fill_prompt_template

logger = logging.getLogger(__name__)

# Low temperature for literal extraction; the output is short JSON.
ANALYSIS_CONFIG = LLMConfig(temperature=0.3, max_tokens=1000, system_prompt=ANALYSIS_SYSTEM_PROMPT)


async def analyze_content(llm: LLMService, content: str) -> Tuple[ContentAnalysis, LLMResponse]:
    """
    Any failure here is fatal to the whole request: an LLM error propagates
    as-is, and unparseable or off-schema output raises InvalidLLMOutputError.
    """
    prompt = fill_prompt_template(CONTENT_ANALYZER_PROMPT, content=content)
    response = await llm.generate(prompt, ANALYSIS_CONFIG)
    data = llm.parse_json(response)

    try:
        analysis = ContentAnalysis.model_validate(data)
    except ValidationError as e:
        logger.error("Content analysis did not match the expected shape: %s", e)
        raise InvalidLLMOutputError("LLM returned an invalid content analysis", raw_content=response.content) from e

    logger.info("Content analyzed: topic='%s', %d key points (%d tokens)", analysis.topic, len(analysis.keyPoints), response.tokens)
    return analysis, response
