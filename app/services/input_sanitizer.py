# /app/services/input_sanitizer.py

"""
Prompt-surface hygiene for user content.

`sanitize_input` removes a fixed, enumerable set of role markers and chat
control tokens. It is a best-effort mitigation against naive prompt
injection, not a security boundary: anything not on the list passes through.
"""

import re
from typing import List, Optional

from ..models.generation_model import MAX_CONTENT_LENGTH, MAX_PLATFORMS, MIN_CONTENT_LENGTH, Platform, Tone

INJECTION_PATTERNS: List[re.Pattern] = [
    re.compile(r"system:", re.IGNORECASE),
    re.compile(r"assistant:", re.IGNORECASE),
    re.compile(r"\[system\]", re.IGNORECASE),
    re.compile(r"\[assistant\]", re.IGNORECASE),
    re.compile(r"<\|im_start\|>", re.IGNORECASE),
    re.compile(r"<\|im_end\|>", re.IGNORECASE),
]

_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_input(content: str) -> str:
    sanitized = content
    for pattern in INJECTION_PATTERNS:
        sanitized = pattern.sub("", sanitized)
    return _WHITESPACE_RUN.sub(" ", sanitized).strip()


def validate_input(content: str, platforms: List[str], tone: str) -> Optional[str]:
    """
    Checks the sanitized request against its structural bounds.
    Returns the first violation as a user-facing message, or None if valid.
    """
    if not content or len(content) < MIN_CONTENT_LENGTH:
        return f"Content must be at least {MIN_CONTENT_LENGTH} characters long"
    if len(content) > MAX_CONTENT_LENGTH:
        return f"Content must be less than {MAX_CONTENT_LENGTH:,} characters"
    if not platforms:
        return "At least one platform must be selected"
    if len(platforms) > MAX_PLATFORMS:
        return f"Maximum {MAX_PLATFORMS} platforms can be selected"

    valid_platforms = {p.value for p in Platform}
    if any(str(getattr(p, "value", p)) not in valid_platforms for p in platforms):
        return "Invalid platform selected"
    if len(set(platforms)) != len(platforms):
        return "Each platform may only be selected once"
    if str(getattr(tone, "value", tone)) not in {t.value for t in Tone}:
        return "Invalid tone selected"
    return None
