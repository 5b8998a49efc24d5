# /app/services/output_formatter.py

"""Plain-text renderings of each platform's structured output, for copy/paste."""

from typing import Callable, Dict

from ..models.generation_model import Platform, PlatformOutput
from ..models.platform_output_model import (
    EmailOutput,
    InstagramOutput,
    LinkedInOutput,
    ThreadsOutput,
    TikTokOutput,
    TwitterOutput,
)
from .prompt_library import PLATFORM_NAMES


def _with_hashtags(body: str, hashtags) -> str:
    return f"{body}\n\n{' '.join(hashtags)}".rstrip()


def _format_tiktok(content: TikTokOutput) -> str:
    points = "\n\n".join(f"• {p.point}\n  Visual: {p.visual}" for p in content.talkingPoints)
    return _with_hashtags(f"{content.hook}\n\n{points}\n\n{content.cta}", content.hashtags)


def _format_twitter(content: TwitterOutput) -> str:
    return "\n\n".join(content.thread)


def _format_linkedin(content: LinkedInOutput) -> str:
    return _with_hashtags(content.post, content.hashtags)


def _format_instagram(content: InstagramOutput) -> str:
    return _with_hashtags(content.caption, content.hashtags)


def _format_threads(content: ThreadsOutput) -> str:
    return "\n\n".join(content.posts)


def _format_email(content: EmailOutput) -> str:
    return f"Subject: {content.subjectLine}\n\nPreview: {content.previewText}\n\n{content.emailBody}"


COPY_FORMATTERS: Dict[Platform, Callable] = {
    Platform.TIKTOK: _format_tiktok,
    Platform.TWITTER: _format_twitter,
    Platform.LINKEDIN: _format_linkedin,
    Platform.INSTAGRAM: _format_instagram,
    Platform.THREADS: _format_threads,
    Platform.EMAIL: _format_email,
}
if set(COPY_FORMATTERS) != set(Platform):
    raise RuntimeError("Every platform needs a copy formatter.")


def format_for_copy(output: PlatformOutput) -> str:
    """A failed platform renders as its display name and error message."""
    if output.error or output.content is None:
        return f"{PLATFORM_NAMES[output.platform]}: {output.error or 'No content generated'}"
    return COPY_FORMATTERS[output.platform](output.content)
