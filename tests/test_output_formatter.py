# /tests/test_output_formatter.py

from app.models.generation_model import Platform, PlatformOutput
from app.models.platform_output_model import EmailOutput, LinkedInOutput, TikTokOutput, TwitterOutput
from app.services.output_formatter import COPY_FORMATTERS, format_for_copy

from .fakes import PLATFORM_PAYLOADS


def _output(platform: Platform, model):
    return PlatformOutput(platform=platform, content=model.model_validate(PLATFORM_PAYLOADS[platform.value]))


def test_tiktok_copy_lists_points_with_visuals():
    text = format_for_copy(_output(Platform.TIKTOK, TikTokOutput))

    assert text.startswith("Stop planning your week like this\n\n")
    assert "• Start tiny\n  Visual: Timer on screen" in text
    assert text.endswith("Follow for part 2\n\n#habits #productivity")


def test_twitter_copy_separates_tweets():
    text = format_for_copy(_output(Platform.TWITTER, TwitterOutput))
    assert text == "1/ Most people approach habits wrong.\n\n2/ Start smaller than you think."


def test_linkedin_copy_appends_hashtags():
    text = format_for_copy(_output(Platform.LINKEDIN, LinkedInOutput))
    assert text.endswith("Now I plan in 10 minutes.\n\n#Leadership #Habits")


def test_email_copy_leads_with_subject_and_preview():
    text = format_for_copy(_output(Platform.EMAIL, EmailOutput))
    assert text.startswith("Subject: The 10-minute habit rule\n\nPreview: Why tiny beats big\n\n")


def test_failed_platform_renders_its_error():
    output = PlatformOutput(platform=Platform.INSTAGRAM, error="rate limited upstream")
    assert format_for_copy(output) == "Instagram: rate limited upstream"


def test_every_platform_has_a_formatter():
    assert set(COPY_FORMATTERS) == set(Platform)
