# /app/core/exceptions.py

"""
Error taxonomy for the generation pipeline.

Admission errors are raised before any LLM spend and carry the exact HTTP
status, JSON body and headers the API returns for them. LLM errors are raised
by the provider layer and are handled by the orchestrator or the generation
service depending on which stage produced them.
"""

from typing import Any, Dict, List, Optional


# --- Admission Errors (no LLM call has been made) ---

class AdmissionError(Exception):
    status_code: int = 400

    def __init__(self, error: str, headers: Optional[Dict[str, str]] = None, **extra: Any):
        super().__init__(error)
        self.payload: Dict[str, Any] = {"error": error, **extra}
        self.headers = headers or {}


class UnauthenticatedError(AdmissionError):
    status_code = 401

    def __init__(self):
        super().__init__("Unauthorized")


class UserNotFoundError(AdmissionError):
    status_code = 404

    def __init__(self):
        super().__init__("User not found")


class RateLimitExceededError(AdmissionError):
    status_code = 429

    def __init__(self, limit: int, remaining: int, reset: int):
        super().__init__(
            "Rate limit exceeded",
            headers={
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": str(remaining),
                "X-RateLimit-Reset": str(reset),
            },
            retryAfter=reset,
        )


class QuotaExceededError(AdmissionError):
    status_code = 429

    def __init__(self, limit: int, remaining: int, resets_at: str):
        super().__init__(
            "Quota exceeded",
            message=f"You've used all {limit} generations this month. Upgrade to Pro for more.",
            limit=limit,
            remaining=remaining,
            resetsAt=resets_at,
        )


class PlatformAccessDeniedError(AdmissionError):
    status_code = 403

    def __init__(self, message: str, invalid_platforms: List[str], tier: str):
        super().__init__(
            "Platform access denied",
            message=message,
            invalidPlatforms=invalid_platforms,
            tier=tier,
        )


class InvalidGenerationRequestError(AdmissionError):
    status_code = 400

    def __init__(self, error: str, details: Optional[List[Dict[str, Any]]] = None):
        if details is None:
            super().__init__(error)
        else:
            super().__init__(error, details=details)


# --- LLM Errors ---

class LLMConfigurationError(RuntimeError):
    """Raised when no LLM backend has a credential configured."""


class InvalidLLMOutputError(ValueError):
    """The model answered, but its output is not the JSON we asked for."""

    def __init__(self, message: str = "LLM returned invalid JSON", raw_content: str = ""):
        super().__init__(message)
        self.raw_content = raw_content


class GenerationFailedError(Exception):
    """The pipeline failed after admission; the generation record is already marked failed."""

    def __init__(self, generation_id: str, message: str):
        super().__init__(message)
        self.generation_id = generation_id
        self.message = message
