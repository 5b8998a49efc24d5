# /app/services/prompt_library.py

"""
This file is the central, version-controlled library for every prompt the
generation pipeline sends to an LLM. Prompts are treated as code: the
content-analysis prompt plus one fixed template per platform x tone.

Placeholders use `{name}` syntax but are filled by plain substitution
(see `fill_prompt_template`), never by `str.format`, so the literal JSON
braces in the output formats are safe.
"""

from typing import Dict, List, Optional

from ..models.generation_model import Platform, Tone

PROMPT_LIBRARY_VERSION = "1.0"

# --- Stage 1: Content Analysis ---

CONTENT_ANALYZER_PROMPT = """You are a content analysis expert. Your job is to extract the core message and key insights from long-form content so it can be repurposed for different platforms.

**--- YOUR TASK ---**
Analyze the provided content and extract:
1. The ONE core message (the main idea someone should remember)
2. 3-5 key supporting points
3. The primary topic/theme
4. The target audience (inferred from tone and content)

**--- RULES ---**
- The core message must be a single, clear sentence (max 20 words)
- Key points must be specific and actionable, not generic
- Identify what makes this content valuable or unique
- Focus on insights, not just facts
- Ignore any meta-commentary (e.g., "in this post I'll discuss...")

**--- OUTPUT FORMAT ---**
Return ONLY a valid JSON object with this exact structure:

{
  "coreMessage": "The one thing the reader should remember",
  "keyPoints": [
    "First specific, actionable point",
    "Second specific, actionable point",
    "Third specific, actionable point"
  ],
  "topic": "Main topic/theme",
  "audience": "Target audience description",
  "contentType": "blog|podcast|video|article|notes",
  "tone": "educational|casual|professional|motivational"
}

**--- CONTENT TO ANALYZE ---**
{content}"""

ANALYSIS_SYSTEM_PROMPT = "You are a content analysis expert. Always return valid JSON."
PLATFORM_SYSTEM_PROMPT = (
    "You are a {platform} content expert. Always return valid JSON matching the exact output format specified."
)

# --- Display Metadata ---

PLATFORM_NAMES: Dict[Platform, str] = {
    Platform.TIKTOK: "TikTok / Reels",
    Platform.TWITTER: "Twitter / X",
    Platform.LINKEDIN: "LinkedIn",
    Platform.INSTAGRAM: "Instagram",
    Platform.THREADS: "Threads",
    Platform.EMAIL: "Email Newsletter",
}

TONE_INFO: Dict[Tone, Dict[str, str]] = {
    Tone.EDUCATIONAL: {
        "name": "Educational",
        "description": "Teach something valuable in a clear, engaging way",
    },
    Tone.CONVERSATIONAL: {
        "name": "Conversational",
        "description": "Like talking to a friend - authentic and relatable",
    },
    Tone.OPINIONATED: {
        "name": "Opinionated",
        "description": "Take a clear stance and challenge conventional wisdom",
    },
    Tone.AUTHORITY: {
        "name": "Authority/Expert",
        "description": "Position yourself as the trusted expert",
    },
}


# --- Stage 2: Platform Templates ---

_TEMPLATE_SKELETON = """You are a {role} content strategist specializing in {specialty}.

**--- CORE MESSAGE ---**
{coreMessage}

**--- KEY POINTS ---**
{keyPoints}

**--- CREATOR TONE ---**
{tone_line}

**--- YOUR TASK ---**
{task}

**--- PLATFORM RULES ---**
{rules}

**--- STRUCTURE ---**
{structure}{example_section}

**--- OUTPUT FORMAT ---**
Return ONLY valid JSON. Do not wrap it in markdown backticks.

{output_format}

{closing}"""

_TIKTOK_POINTS = """  "talkingPoints": [
    {"point": "First main point", "visual": "Suggested visual or action", "duration": "~15 seconds"},
    {"point": "Second main point", "visual": "Suggested visual", "duration": "~15 seconds"},
    {"point": "Third main point", "visual": "Suggested visual", "duration": "~15 seconds"}
  ],"""

_EMAIL_SECTIONS = """  "sections": [
    {"heading": "Section heading", "content": "Section content"}
  ],"""

# Each entry: specialty, tone line, task, tone-specific rules, structure, output format.
_PLATFORM_TONE_PARTS: Dict[Platform, Dict[Tone, Dict[str, str]]] = {
    Platform.TIKTOK: {
        Tone.EDUCATIONAL: {
            "specialty": "educational content",
            "tone_line": 'Educational - Teach something valuable in a clear, engaging way. Use the "teacher who makes complex things simple" approach.',
            "task": "Create talking points for a 60-second TikTok/Reel that teaches this concept.",
            "rules": "- Hook in first 3 seconds (question, bold statement, or pattern interrupt)\n- Use \"you\" language (direct address)\n- One idea per video\n- Use numbers and specifics (\"3 ways\" not \"some ways\")",
            "structure": "1. HOOK (first 3 seconds) - Make them stop scrolling\n2. PROMISE (next 5 seconds) - What they'll learn\n3. CONTENT (middle 40 seconds) - 3 clear talking points with examples\n4. PAYOFF (last 10 seconds) - Recap + CTA",
            "output_format": '{\n  "hook": "Attention-grabbing opening line",\n  "promise": "What viewer will learn/gain",\n' + _TIKTOK_POINTS + '\n  "payoff": "Final takeaway or recap",\n  "cta": "Clear call to action",\n  "hashtags": ["#relevant", "#hashtags", "#max5"],\n  "captionSuggestion": "Short caption that complements video (max 150 chars)"\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "conversational, relatable content",
            "tone_line": "Conversational - Like talking to a friend over coffee. Authentic, relatable, no pretense.",
            "task": "Create talking points for a 60-second TikTok/Reel in a natural, friend-to-friend style.",
            "rules": "- Hook with relatability (\"Ever notice how...\")\n- Use casual language and contractions\n- Include personal anecdotes or observations\n- Use phrases like \"honestly\", \"here's the thing\", \"real talk\"",
            "structure": "1. RELATABLE HOOK - Connect with shared experience\n2. STORY/OBSERVATION - Set up the insight\n3. THE INSIGHT - 2-3 key points in casual language\n4. WRAP UP - Invite engagement",
            "output_format": '{\n  "hook": "Relatable opening that connects",\n  "setup": "Brief story or observation",\n' + _TIKTOK_POINTS + '\n  "wrapUp": "Friendly close that invites response",\n  "cta": "Engagement CTA (comment, share experience, etc.)",\n  "hashtags": ["#relatable", "#hashtags", "#max5"],\n  "captionSuggestion": "Casual caption (max 150 chars)"\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "bold, opinionated takes",
            "tone_line": "Opinionated - Take a clear stance. Challenge conventional wisdom. Be memorable and polarizing (in a good way).",
            "task": "Create talking points for a 60-second TikTok/Reel that presents a strong point of view.",
            "rules": "- Hook with a controversial or contrarian statement\n- Back up opinions with logic or examples\n- Don't apologize for the take\n- Invite debate in comments",
            "structure": "1. BOLD HOOK - Controversial or contrarian statement\n2. WHY - Explain the reasoning\n3. EVIDENCE - 2-3 supporting points\n4. CHALLENGE - Push back on common objections",
            "output_format": '{\n  "hook": "Controversial/bold opening statement",\n  "thesis": "Your clear position on the topic",\n' + _TIKTOK_POINTS + '\n  "conclusion": "Restate position with conviction",\n  "cta": "Invite agreement/disagreement in comments",\n  "hashtags": ["#hottake", "#relevant", "#max5"],\n  "captionSuggestion": "Bold caption that reinforces take (max 150 chars)"\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "expert, authoritative content",
            "tone_line": "Authority/Expert - Position as the trusted expert. Cite experience, data, or credentials. Build trust through expertise.",
            "task": "Create talking points for a 60-second TikTok/Reel that establishes credibility and shares expert knowledge.",
            "rules": "- Hook with credentials or surprising data\n- Use specific numbers, studies, or examples\n- Reference mistakes others make\n- Position as problem-solver",
            "structure": "1. CREDIBILITY HOOK - Establish expertise immediately\n2. THE PROBLEM - What most people get wrong\n3. THE SOLUTION - Expert approach (3 steps)\n4. PROOF - Why this works",
            "output_format": '{\n  "hook": "Credibility-establishing opening",\n  "problem": "What most people get wrong about this",\n' + _TIKTOK_POINTS + '\n  "proof": "Why this expert approach works",\n  "cta": "Expert CTA (save this, follow for more, etc.)",\n  "hashtags": ["#experttips", "#relevant", "#max5"],\n  "captionSuggestion": "Authority-building caption (max 150 chars)"\n}',
        },
    },
    Platform.TWITTER: {
        Tone.EDUCATIONAL: {
            "specialty": "educational threads",
            "tone_line": "Educational - Break down complex topics into digestible tweets. Make people smarter in 2 minutes.",
            "task": "Create a Twitter/X thread that teaches this concept clearly and concisely.",
            "rules": "- Tweet 1: Hook + promise (make them want to click \"Show more\")\n- One idea per tweet\n- Include specific examples or data\n- Encourage engagement (bookmarks, retweets)",
            "structure": "1. HOOK TWEET - Grab attention + what they'll learn\n2-4. TEACHING TWEETS - Core concepts with examples\n5-6. APPLICATION TWEETS - How to use this knowledge\n7. CONCLUSION - Recap + CTA",
            "output_format": '{\n  "thread": [\n    "1/ Hook that makes them stop scrolling + promise of value",\n    "2/ First key concept explained clearly with an example",\n    "3/ Second key concept with specific detail or data",\n    "4/ Third key concept with actionable insight",\n    "5/ How to apply this (practical steps)",\n    "6/ Common mistake to avoid",\n    "7/ Final takeaway + CTA"\n  ],\n  "tweetCount": 7,\n  "hashtags": ["#relevant", "#max3"],\n  "engagementTip": "Suggestion for where to add engagement question"\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "conversational, story-driven threads",
            "tone_line": "Conversational - Share insights like you're texting a friend. Personal, authentic, relatable.",
            "task": "Create a Twitter/X thread that feels like a genuine conversation or story.",
            "rules": "- Hook with a personal story or observation\n- Share the journey, not just the destination\n- Include vulnerable moments or mistakes\n- End with an invitation to connect",
            "structure": "1. RELATABLE HOOK - Personal story opening\n2-3. THE SETUP - Context and journey\n4-6. THE INSIGHTS - What you learned\n7. THE PAYOFF - How it changed things + invitation",
            "output_format": '{\n  "thread": [\n    "1/ Personal hook that draws them in",\n    "2/ Setup - the situation or context",\n    "3/ The turning point or realization",\n    "4/ First insight from the experience",\n    "5/ Second insight with specific example",\n    "6/ Third insight or what changed",\n    "7/ Current perspective + invitation"\n  ],\n  "tweetCount": 7,\n  "hashtags": ["#relevant", "#max2"],\n  "engagementTip": "Where to invite personal stories from audience"\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "bold, opinionated takes",
            "tone_line": "Opinionated - Take a clear stance. Challenge conventional wisdom. Make people think or argue (respectfully).",
            "task": "Create a Twitter/X thread that presents a strong, well-reasoned point of view.",
            "rules": "- Hook with a contrarian or provocative statement\n- Support opinions with logic and evidence\n- Address counterarguments\n- No hedging (\"I think maybe...\")",
            "structure": "1. BOLD STATEMENT - Your contrarian take\n2. WHY THIS MATTERS - The stakes\n3-5. YOUR CASE - Supporting arguments\n6. COUNTERARGUMENT - Address objections\n7. CONCLUSION - Restate position + invite debate",
            "output_format": '{\n  "thread": [\n    "1/ Contrarian/bold opening statement",\n    "2/ Why this conventional wisdom fails",\n    "3/ First piece of supporting evidence or logic",\n    "4/ Second supporting point with example",\n    "5/ Third supporting point or alternative approach",\n    "6/ Addressing the main counterargument",\n    "7/ Conclusion + invitation to debate"\n  ],\n  "tweetCount": 7,\n  "hashtags": ["#relevant", "#max2"],\n  "engagementTip": "Where to add poll or question to spark debate"\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "expert, data-driven threads",
            "tone_line": "Authority/Expert - Share insider knowledge. Use data and experience. Build trust through expertise.",
            "task": "Create a Twitter/X thread that positions you as the trusted expert on this topic.",
            "rules": "- Hook with credentials, data, or surprising insight\n- Use specific numbers and examples\n- Provide an actionable framework\n- Use phrases like \"After analyzing X...\", \"Data shows...\"",
            "structure": "1. CREDIBILITY HOOK - Establish expertise + bold insight\n2. THE PROBLEM - What most people get wrong\n3-6. THE SOLUTION - Expert framework with specifics\n7. PROOF/RESULTS - Why this works\n8. CTA - How to implement + follow for more",
            "output_format": '{\n  "thread": [\n    "1/ Credibility hook with data or experience",\n    "2/ The common mistake or misconception",\n    "3/ Pattern #1 with specific insight",\n    "4/ Pattern #2 with data or example",\n    "5/ Pattern #3 with actionable detail",\n    "6/ How to implement (specific steps)",\n    "7/ Results or proof point",\n    "8/ Conclusion + expert CTA"\n  ],\n  "tweetCount": 8,\n  "hashtags": ["#relevant", "#max2"],\n  "engagementTip": "Where to add question to surface audience experience"\n}',
        },
    },
    Platform.LINKEDIN: {
        Tone.EDUCATIONAL: {
            "specialty": "educational, value-driven posts",
            "tone_line": "Educational - Share professional insights that help people grow in their careers or businesses.",
            "task": "Write a LinkedIn post that teaches this concept to a professional audience.",
            "rules": "- Include specific examples from business/career context\n- Provide actionable takeaways\n- End with engagement question",
            "structure": "1. HOOK (first 1-2 lines) - Grab attention\n2. CONTEXT - Why this matters professionally\n3. INSIGHTS - 3-5 key points with examples\n4. APPLICATION - How to use this in your career/business\n5. CTA - Question or call to action",
            "output_format": '{\n  "hook": "Compelling first line that shows before \'see more\'",\n  "post": "Full LinkedIn post with formatting (\\n\\n for paragraphs)",\n  "keyTakeaways": ["First main takeaway", "Second main takeaway", "Third main takeaway"],\n  "cta": "Engagement question or call to action",\n  "hashtags": ["#Relevant", "#Professional", "#Hashtags"],\n  "characterCount": 1500\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "authentic, story-driven posts",
            "tone_line": "Conversational - Share professional stories and insights like you're talking to a colleague over coffee.",
            "task": "Write a LinkedIn post that tells a professional story and draws out the lesson.",
            "rules": "- Hook with relatable professional scenario\n- Use \"I\" language and personal anecdotes\n- Make it feel human, not corporate",
            "structure": "1. PERSONAL HOOK - Relatable professional moment\n2. THE STORY - What happened\n3. THE INSIGHT - What you learned\n4. THE APPLICATION - How others can use this\n5. INVITATION - Encourage sharing their stories",
            "output_format": '{\n  "hook": "Personal, relatable opening line",\n  "post": "Full story-driven post with formatting",\n  "keyTakeaways": ["First lesson learned", "Second lesson learned"],\n  "cta": "Invitation to share their experience",\n  "hashtags": ["#CareerLessons", "#Professional", "#Growth"],\n  "characterCount": 1400\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "thought leadership and bold takes",
            "tone_line": "Opinionated - Challenge conventional business wisdom. Present a clear professional point of view.",
            "task": "Write a LinkedIn thought-leadership post that argues a clear position.",
            "rules": "- Hook with contrarian or provocative statement\n- Back claims with experience, data, or examples\n- Stay respectful while holding the position",
            "structure": "1. BOLD HOOK - Contrarian professional take\n2. THE CASE - Why conventional wisdom is wrong\n3. EVIDENCE - Experience, data, or examples\n4. ALTERNATIVE - Your recommended approach\n5. INVITATION - Respectful call for debate",
            "output_format": '{\n  "hook": "Bold, contrarian opening statement",\n  "post": "Full thought leadership post",\n  "keyTakeaways": ["First supporting argument", "Second supporting argument", "Third supporting argument"],\n  "cta": "Professional invitation to discuss or debate",\n  "hashtags": ["#ThoughtLeadership", "#Business", "#Leadership"],\n  "characterCount": 1600\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "expert insights and industry authority",
            "tone_line": "Authority/Expert - Share insider knowledge and expert frameworks. Build professional credibility.",
            "task": "Write a LinkedIn post that shares an expert framework for this topic.",
            "rules": "- Hook with credibility or data\n- Name the framework or methodology\n- Include results or case studies",
            "structure": "1. CREDIBILITY HOOK - Establish expertise\n2. THE PROBLEM - What professionals get wrong\n3. THE FRAMEWORK - Expert approach or methodology\n4. PROOF - Results or case studies\n5. APPLICATION - How to implement\n6. CTA - Next steps",
            "output_format": '{\n  "hook": "Expert hook with credibility or data",\n  "post": "Full expert insights post with framework",\n  "keyTakeaways": ["First expert insight", "Second expert insight", "Third expert insight"],\n  "framework": "Name of framework or methodology shared",\n  "cta": "Professional CTA (download, connect, implement)",\n  "hashtags": ["#Leadership", "#Business", "#Strategy"],\n  "characterCount": 1700\n}',
        },
    },
    Platform.INSTAGRAM: {
        Tone.EDUCATIONAL: {
            "specialty": "educational carousel/post captions",
            "tone_line": "Educational - Teach something valuable in a visually engaging, accessible way.",
            "task": "Write an Instagram caption and carousel slide plan that teaches this concept.",
            "rules": "- Make the first line earn the \"more\" tap (under 125 chars)\n- Keep points carousel-friendly\n- Ask them to save or share",
            "structure": "1. HOOK (first line) - Make them tap \"more\"\n2. VALUE PROMISE - What they'll learn\n3. TEACHING - 3-5 key points (carousel-friendly)\n4. RECAP - Quick summary\n5. CTA - Save, share, or engage",
            "output_format": '{\n  "hook": "Compelling first line (under 125 chars)",\n  "caption": "Full caption with emojis and formatting",\n  "slideIdeas": ["Slide 1: [Hook image/text suggestion]", "Slide 2: [Point 1 visual]", "Slide 3: [Point 2 visual]", "Slide 4: [Point 3 visual]", "Slide 5: [CTA slide]"],\n  "cta": "Specific CTA (save, share, tag, comment)",\n  "hashtags": ["#relevant", "#instagram", "#hashtags", "#max15"],\n  "characterCount": 1500\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "relatable, community-driven captions",
            "tone_line": "Conversational - Connect authentically with your community. Share like you're talking to friends.",
            "task": "Write a personal Instagram caption and slide plan that invites the community in.",
            "rules": "- Open with \"Can we talk about...\" energy\n- Share a personal experience\n- Ask \"Anyone else?\"",
            "structure": "1. RELATABLE HOOK - \"Can we talk about...\"\n2. PERSONAL STORY - Share experience\n3. INSIGHTS - What you learned\n4. CONNECTION - \"Anyone else?\"\n5. CTA - Invite sharing their stories",
            "output_format": '{\n  "hook": "Relatable first line",\n  "caption": "Full personal, conversational caption",\n  "slideIdeas": ["Slide 1: [Relatable quote or moment]", "Slide 2: [Story visual]", "Slide 3: [Insight visual]", "Slide 4: [Community question]"],\n  "cta": "Invitation to share their experience",\n  "hashtags": ["#relatable", "#community", "#authentic"],\n  "characterCount": 1200\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "bold, perspective-driven content",
            "tone_line": "Opinionated - Share your take. Challenge norms. Start conversations. Be memorable.",
            "task": "Write an Instagram caption and slide plan built around a clear hot take.",
            "rules": "- Lead with the take\n- Support it, then acknowledge nuance\n- Invite agreement or disagreement",
            "structure": "1. BOLD HOOK - Your hot take\n2. THE CASE - Why you believe this\n3. EVIDENCE - Support your position\n4. NUANCE - Acknowledge complexity\n5. CTA - Invite agreement/disagreement",
            "output_format": '{\n  "hook": "Bold opening statement",\n  "caption": "Full opinionated caption",\n  "slideIdeas": ["Slide 1: [Bold statement visual]", "Slide 2: [Reason 1]", "Slide 3: [Reason 2]", "Slide 4: [Call to discussion]"],\n  "cta": "Invitation to share their take",\n  "hashtags": ["#hottake", "#perspective", "#realtalk"],\n  "characterCount": 1400\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "expert tips and insider knowledge",
            "tone_line": "Authority/Expert - Share expert knowledge in an accessible, visual way. Build trust through expertise.",
            "task": "Write an Instagram caption and slide plan of expert tips for this topic.",
            "rules": "- Hook with data or credentials\n- Give 3-5 specific tips\n- Close with \"save for later\"",
            "structure": "1. CREDIBILITY HOOK - Establish expertise\n2. THE PROBLEM - Common mistakes\n3. EXPERT TIPS - 3-5 specific solutions\n4. PROOF - Why this works\n5. CTA - Save for later + follow for more",
            "output_format": '{\n  "hook": "Expert hook with data or credentials",\n  "caption": "Full expert tips caption",\n  "slideIdeas": ["Slide 1: [Expert hook with stat]", "Slide 2: [Tip #1 visual]", "Slide 3: [Tip #2 visual]", "Slide 4: [Tip #3 visual]", "Slide 5: [Results/proof slide]", "Slide 6: [CTA slide]"],\n  "cta": "Save + follow for more expert tips",\n  "hashtags": ["#experttips", "#howto", "#tutorial"],\n  "characterCount": 1500\n}',
        },
    },
    Platform.THREADS: {
        Tone.EDUCATIONAL: {
            "specialty": "accessible, bite-sized education",
            "tone_line": "Educational - Make learning easy and fun. Break things down simply.",
            "task": "Create a short Threads series that teaches this concept.",
            "rules": "- Open with a question or bold statement\n- One point per post",
            "structure": "1. HOOK - Grab attention with question or bold statement\n2-4. TEACHING - Core points in digestible chunks\n5. TAKEAWAY - Quick recap + CTA",
            "output_format": '{\n  "posts": [\n    "Post 1: Hook that makes them want to keep reading",\n    "Post 2: First key point explained simply",\n    "Post 3: Second key point with example",\n    "Post 4: Third key point with actionable tip",\n    "Post 5: Quick recap + CTA to engage"\n  ],\n  "postCount": 5,\n  "hashtags": ["#relevant", "#max3"],\n  "engagementTip": "Where to add question for replies"\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "authentic, relatable content",
            "tone_line": "Conversational - Share thoughts like you're texting a friend. Authentic and relatable.",
            "task": "Create a short Threads series that shares this as a personal observation.",
            "rules": "- Open with \"okay but...\" energy\n- Keep it personal",
            "structure": "1. RELATABLE HOOK - \"okay but...\"\n2. SETUP - Personal context\n3-4. INSIGHTS - What you've noticed/learned\n5. INVITATION - Ask for their take",
            "output_format": '{\n  "posts": [\n    "Post 1: Relatable hook like \'okay but can we talk about...\'",\n    "Post 2: Personal story or observation",\n    "Post 3: What you\'ve learned or noticed",\n    "Post 4: Invitation to share their experience"\n  ],\n  "postCount": 4,\n  "hashtags": ["#relatable", "#realtalk"],\n  "engagementTip": "Natural conversation starter"\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "takes and perspectives",
            "tone_line": "Opinionated - Share your take. Start discussions. Be genuine about your views.",
            "task": "Create a short Threads series that shares a clear take.",
            "rules": "- State the take plainly\n- Keep the reasoning casual\n- Acknowledge other views",
            "structure": "1. BOLD HOOK - Your take\n2. WHY - Casual reasoning\n3. NUANCE - Acknowledge other views\n4. INVITATION - Invite discussion",
            "output_format": '{\n  "posts": [\n    "Post 1: Your take stated clearly",\n    "Post 2: Why you think this (casual reasoning)",\n    "Post 3: Acknowledging other perspectives",\n    "Post 4: Invitation to share their take"\n  ],\n  "postCount": 4,\n  "hashtags": ["#take", "#discussion"],\n  "engagementTip": "Where to invite debate"\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "accessible expert insights",
            "tone_line": "Authority/Expert - Share expertise in a casual, accessible way. No gatekeeping.",
            "task": "Create a short Threads series of insider tips for this topic.",
            "rules": "- Lead with a surprising insight\n- Save the most valuable tip for last",
            "structure": "1. EXPERT HOOK - Surprising insight\n2-4. QUICK TIPS - Insider knowledge\n5. CTA - Invite questions or follows",
            "output_format": '{\n  "posts": [\n    "Post 1: Hook with surprising expert insight",\n    "Post 2: First insider tip explained simply",\n    "Post 3: Second tip with example",\n    "Post 4: Third tip (most valuable)",\n    "Post 5: Invite questions or engagement"\n  ],\n  "postCount": 5,\n  "hashtags": ["#tips", "#howto"],\n  "engagementTip": "Invite questions about implementation"\n}',
        },
    },
    Platform.EMAIL: {
        Tone.EDUCATIONAL: {
            "specialty": "educational, value-packed content",
            "tone_line": "Educational - Teach something valuable that respects their inbox. Make them glad they opened.",
            "task": "Write a newsletter email that teaches this concept.",
            "rules": "- Deliver 3 key insights with examples\n- Recap before the CTA",
            "structure": "1. SUBJECT LINE - Curiosity + value\n2. PREVIEW TEXT - Hook them immediately\n3. PERSONAL OPENER - Quick connection\n4. VALUE DELIVERY - 3 key insights with examples\n5. RECAP - Quick summary\n6. CTA - One clear next step\n7. SIGN OFF - Personal close",
            "output_format": '{\n  "subjectLine": "Curiosity-driven subject (max 60 chars)",\n  "previewText": "Hook for preview pane (max 100 chars)",\n  "emailBody": "Full email content with formatting",\n' + _EMAIL_SECTIONS + '\n  "cta": {"text": "Clear CTA text", "link": "[URL placeholder]", "context": "Why they should click"},\n  "signOff": "Personal closing",\n  "wordCount": 500\n}',
        },
        Tone.CONVERSATIONAL: {
            "specialty": "personal, story-driven emails",
            "tone_line": "Conversational - Write like you're emailing a friend. Share stories and insights personally.",
            "task": "Write a newsletter email that shares this through a personal story.",
            "rules": "- Open with a story or moment\n- Invite them to hit reply",
            "structure": "1. SUBJECT - Casual and intriguing\n2. PERSONAL OPENER - Story or moment\n3. THE INSIGHT - What you learned/noticed\n4. APPLICATION - How they can use this\n5. INVITATION - Invite them to reply",
            "output_format": '{\n  "subjectLine": "Casual, intriguing subject",\n  "previewText": "Personal opening line",\n  "emailBody": "Full conversational email",\n' + _EMAIL_SECTIONS + '\n  "cta": {"text": "Soft CTA or question", "link": "[URL if needed]", "context": "Invitation to engage"},\n  "signOff": "Friendly, personal closing",\n  "wordCount": 400\n}',
        },
        Tone.OPINIONATED: {
            "specialty": "perspective-driven, thought-provoking emails",
            "tone_line": "Opinionated - Take a clear stance. Challenge thinking. Make them see things differently.",
            "task": "Write a newsletter email that argues a clear position on this topic.",
            "rules": "- State the position in the first paragraph\n- Address the strongest objection",
            "structure": "1. SUBJECT - Hint at the hot take\n2. BOLD OPENER - State your position\n3. THE CASE - Why you believe this\n4. EVIDENCE - Support with reasoning/examples\n5. COUNTERPOINT - Address objections\n6. CONCLUSION - Restate and invite response",
            "output_format": '{\n  "subjectLine": "Provocative but professional subject",\n  "previewText": "Bold opening line",\n  "emailBody": "Full opinionated email",\n' + _EMAIL_SECTIONS + '\n  "cta": {"text": "Invitation to respond", "link": "[URL or reply]", "context": "Invite agreement or disagreement"},\n  "signOff": "Confident closing",\n  "wordCount": 600\n}',
        },
        Tone.AUTHORITY: {
            "specialty": "expert insights and frameworks",
            "tone_line": "Authority/Expert - Share insider knowledge and expert frameworks that subscribers can't get elsewhere.",
            "task": "Write a newsletter email that walks through an expert framework for this topic.",
            "rules": "- Name the framework and list its steps\n- Show why it works",
            "structure": "1. SUBJECT - Specific value promise\n2. CREDIBILITY HOOK - Establish expertise\n3. THE PROBLEM - What people get wrong\n4. THE FRAMEWORK - Expert approach\n5. PROOF - Why this works\n6. APPLICATION - How to implement\n7. CTA - Next steps",
            "output_format": '{\n  "subjectLine": "Specific value promise",\n  "previewText": "Expert hook or data",\n  "emailBody": "Full expert insights email",\n' + _EMAIL_SECTIONS + '\n  "framework": {"name": "Framework name", "steps": ["Step 1", "Step 2", "Step 3"]},\n  "cta": {"text": "Download, implement, or learn more", "link": "[Resource URL]", "context": "Value of taking action"},\n  "signOff": "Professional but warm closing",\n  "wordCount": 700\n}',
        },
    },
}

# Rules that apply to every tone on a platform; tone-specific rules are appended.
_PLATFORM_RULES: Dict[Platform, Dict[str, str]] = {
    Platform.TIKTOK: {
        "role": "TikTok",
        "rules": "- Include a visual suggestion for each point\n- End with a clear takeaway or CTA\n- Avoid jargon unless explaining it",
        "closing": "Create the TikTok script now.",
    },
    Platform.TWITTER: {
        "role": "Twitter",
        "rules": "- Keep each tweet under 280 characters\n- Use line breaks for readability\n- Use thread numbers (1/, 2/, etc.)\n- Start strong (no \"A thread about...\")",
        "closing": "Create the Twitter thread now. Make tweet #1 impossible to scroll past.",
    },
    Platform.LINKEDIN: {
        "role": "LinkedIn",
        "rules": "- Hook in first 2 lines (shows before \"see more\")\n- Max 2-3 lines per paragraph\n- Professional but conversational\n- Avoid hashtag spam (3-5 max)",
        "closing": "Create the LinkedIn post now.",
    },
    Platform.INSTAGRAM: {
        "role": "Instagram",
        "rules": "- Use emojis naturally, not excessively\n- Use line breaks so the caption is skimmable\n- Suggest one visual per slide",
        "closing": "Create the Instagram post now.",
    },
    Platform.THREADS: {
        "role": "Threads",
        "rules": "- More casual than Twitter, less formal than LinkedIn\n- Shorter posts (aim for 200-400 characters each)\n- Include emojis naturally\n- Encourage replies and engagement",
        "closing": "Create the Threads posts now.",
    },
    Platform.EMAIL: {
        "role": "email newsletter",
        "rules": "- Subject line is CRITICAL (makes or breaks opens)\n- Use short paragraphs (2-3 lines max)\n- Include subheadings for skimmability\n- One clear CTA\n- Make it feel personal (from a person, not a brand)\n- Optimal length: 400-600 words",
        "closing": "Create the email now.",
    },
}


# Worked layouts for the long-form single-post platforms.
_EXAMPLE_STRUCTURES: Dict[Platform, Dict[Tone, str]] = {
    Platform.LINKEDIN: {
        Tone.EDUCATIONAL: """Hook that makes professionals stop scrolling.

Here's what I learned:

1. First insight
Specific example from business context

2. Second insight
Data or case study

3. Third insight
Actionable application

The bottom line: [Core message]

What's your experience with this? Drop a comment below.""",
        Tone.CONVERSATIONAL: """[Relatable professional situation]

Here's what happened:

[Story with specific details]

The lesson?

[Core insight with application]

If you've experienced something similar, I'd love to hear about it in the comments.""",
        Tone.OPINIONATED: """Unpopular opinion in [industry]:

[Conventional wisdom] is holding companies back.

Here's why:

1. [First reason with evidence]

2. [Second reason with example]

3. [Third reason with data]

What should we do instead?

[Alternative approach with rationale]

I know this is controversial. What's your take?""",
        Tone.AUTHORITY: """After [experience/credential], I've identified [number] patterns that separate [high performers] from everyone else:

The problem:
[Common mistake]

The framework:

1. [First principle with explanation]
2. [Second principle with data]
3. [Third principle with example]

Results:
[Specific outcomes or metrics]

How to implement:
[Actionable steps]

Want the full framework? Comment 'interested' below.""",
    },
    Platform.INSTAGRAM: {
        Tone.EDUCATIONAL: """Hook that makes them stop scrolling ✨

Here's what you need to know:

📌 First key point
Brief explanation

📌 Second key point
Brief explanation

📌 Third key point
Brief explanation

Save this for later 🔖

Which tip surprised you? Drop a comment! 👇""",
        Tone.CONVERSATIONAL: """Can we talk about [relatable situation]? 🙃

Because honestly...

[Personal story with specific details]

Here's what I learned:

💭 [Insight 1]
💭 [Insight 2]
💭 [Insight 3]

Anyone else relate to this?

Drop a 🙋 if this is you!""",
        Tone.OPINIONATED: """Hot take: [Contrarian statement] 🔥

And here's why:

1️⃣ [First reason with example]

2️⃣ [Second reason with logic]

3️⃣ [Third reason with observation]

I know this is controversial, but...

[Restate position]

Agree or disagree? Let me know in the comments! 👇""",
        Tone.AUTHORITY: """After [credential/experience], here are the [number] things I wish I knew sooner: 📚

Most people make these mistakes:
❌ [Common mistake]

Instead, do this:

1️⃣ [Expert tip with specific detail]

2️⃣ [Expert tip with example]

3️⃣ [Expert tip with data]

This approach has [result/proof].

Save this for when you need it 🔖

Follow @username for more [topic] tips!""",
    },
}


def _example_section(platform: Platform, tone: Tone) -> str:
    example = _EXAMPLE_STRUCTURES.get(platform, {}).get(tone)
    if example is None:
        return ""
    return "\n\n**--- EXAMPLE STRUCTURE ---**\n" + example


def _render_skeleton(platform: Platform, tone: Tone) -> str:
    platform_rules = _PLATFORM_RULES[platform]
    parts = _PLATFORM_TONE_PARTS[platform][tone]
    values = {
        "role": platform_rules["role"],
        "specialty": parts["specialty"],
        "tone_line": parts["tone_line"],
        "task": parts["task"],
        "rules": platform_rules["rules"] + "\n" + parts["rules"],
        "structure": parts["structure"],
        "output_format": parts["output_format"],
        "closing": platform_rules["closing"],
        "example_section": _example_section(platform, tone),
    }
    template = _TEMPLATE_SKELETON
    for key, value in values.items():
        template = template.replace("{" + key + "}", value)
    return template


# The 24 fixed platform x tone templates, built once at import time.
PLATFORM_PROMPTS: Dict[Platform, Dict[Tone, str]] = {
    platform: {tone: _render_skeleton(platform, tone) for tone in Tone}
    for platform in Platform
}

def get_prompt_for_platform(platform: Platform, tone: Tone) -> str:
    """
    Returns the fixed template for a platform/tone pair. There is no fallback:
    an unknown pair raises KeyError.
    """
    return PLATFORM_PROMPTS[platform][tone]


def format_key_points(key_points: List[str]) -> str:
    return "\n".join(f"{i}. {point}" for i, point in enumerate(key_points, start=1))


def fill_prompt_template(
    template: str,
    content: Optional[str] = None,
    core_message: Optional[str] = None,
    key_points: Optional[List[str]] = None,
) -> str:
    """Substitutes every occurrence of {content}, {coreMessage} and {keyPoints}."""
    filled = template
    if content is not None:
        filled = filled.replace("{content}", content)
    if core_message is not None:
        filled = filled.replace("{coreMessage}", core_message)
    if key_points is not None:
        filled = filled.replace("{keyPoints}", format_key_points(key_points))
    return filled
