# /app/models/platform_output_model.py

"""
Structured payloads produced by each platform generator.

There is no shared schema across platforms: every platform has its own
model, and `PlatformContent` is the closed union of all of them. Field names
are camelCase because they mirror the JSON the prompts ask the model for.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class TalkingPoint(BaseModel):
    point: str
    visual: str = ""
    duration: str = ""


class TikTokOutput(BaseModel):
    hook: str
    promise: Optional[str] = None
    setup: Optional[str] = None
    thesis: Optional[str] = None
    problem: Optional[str] = None
    talkingPoints: List[TalkingPoint] = Field(..., min_length=1)
    payoff: Optional[str] = None
    wrapUp: Optional[str] = None
    conclusion: Optional[str] = None
    proof: Optional[str] = None
    cta: str = ""
    hashtags: List[str] = Field(default_factory=list)
    captionSuggestion: str = ""


class TwitterOutput(BaseModel):
    thread: List[str] = Field(..., min_length=1)
    tweetCount: int = 0
    hashtags: List[str] = Field(default_factory=list)
    engagementTip: str = ""


class LinkedInOutput(BaseModel):
    hook: str = ""
    post: str
    keyTakeaways: List[str] = Field(default_factory=list)
    framework: Optional[str] = None
    cta: str = ""
    hashtags: List[str] = Field(default_factory=list)
    characterCount: int = 0


class InstagramOutput(BaseModel):
    hook: str = ""
    caption: str
    slideIdeas: List[str] = Field(default_factory=list)
    cta: str = ""
    hashtags: List[str] = Field(default_factory=list)
    characterCount: int = 0


class ThreadsOutput(BaseModel):
    posts: List[str] = Field(..., min_length=1)
    postCount: int = 0
    hashtags: List[str] = Field(default_factory=list)
    engagementTip: str = ""


class EmailSection(BaseModel):
    heading: str
    content: str


class EmailFramework(BaseModel):
    name: str
    steps: List[str] = Field(default_factory=list)


class EmailCallToAction(BaseModel):
    text: str
    link: str = ""
    context: str = ""


class EmailOutput(BaseModel):
    subjectLine: str
    previewText: str = ""
    emailBody: str
    sections: List[EmailSection] = Field(default_factory=list)
    framework: Optional[EmailFramework] = None
    cta: Optional[EmailCallToAction] = None
    signOff: str = ""
    wordCount: int = 0


PlatformContent = Union[TikTokOutput, TwitterOutput, LinkedInOutput, InstagramOutput, ThreadsOutput, EmailOutput]
