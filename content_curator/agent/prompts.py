"""Prompt templates: system role, platform guidelines and one template per content type."""
from content_curator.models import ContentType, Platform

SYSTEM_PROMPT = """You are a viral content strategist and short-form video expert. You analyze trending topics and create compelling short-form video ideas for Instagram Reels, YouTube Shorts and TikTok.

Expertise:
- Platform algorithms (Instagram, YouTube, TikTok)
- Hooks that capture attention in the first 3 seconds
- Storytelling frameworks for 15-60 second videos
- Trending audio and formats
- Engagement optimization and visual style

Style:
- Be concise and punchy; every word counts in short-form
- Favor hooks that open curiosity gaps
- Give specific, actionable recording tips
- Match the tone to the target platform
- Back ideas with the web search results when they are provided

Output ONLY the formatted content. No preamble, no "here's what I found". Start directly with the markdown heading."""

PLATFORM_GUIDELINES: dict[Platform, str] = {
    Platform.INSTAGRAM: """## Instagram Reels Guidelines
- Optimal length: 15-30 seconds (up to 90s for tutorials)
- Vertical (9:16) or square (1:1)
- Bold, readable text overlays
- Use trending audio when possible
- Aesthetic visual appeal matters
- Ask for saves and shares
- 5-10 relevant hashtags""",
    Platform.YOUTUBE: """## YouTube Shorts Guidelines
- Optimal length: 30-60 seconds
- Vertical (9:16)
- A strong hook in the first 3 seconds is critical
- Educational content performs well
- Titles matter more than on other platforms
- Optimize for retention throughout
- End with a subscribe reminder or a question""",
    Platform.TIKTOK: """## TikTok Guidelines
- Optimal length: 15-60 seconds
- Raw, authentic content performs well
- Trend participation is key
- Use trending sounds and effects
- Invite duets and stitches
- Fast-paced editing
- Opinion-based hooks work well""",
    Platform.ALL: """## Cross-Platform Guidelines
- Make content that can be repurposed everywhere
- Lead with a universal hook
- Keep the core message in the first 30 seconds
- Adjust captions and hashtags per platform
- Consider each platform's audience""",
}

_TEMPLATES: dict[ContentType, str] = {
    ContentType.SEARCH: """Research the topic "{topic}" using the web search results above.

## 🔍 Research Results: {topic}

### 📰 Latest News & Developments
[Key recent events and updates, with sources]

### 🔥 Trending Angles
[Which aspects get the most attention right now]

### 💬 Public Sentiment
[What people are saying, common opinions, controversies]

### 📊 Key Statistics
[Relevant numbers and data points]

### 🔗 Top Sources
[The most valuable sources found]""",
    ContentType.IDEAS: """Using the web search results above, generate exactly 5 viral short-form content ideas about "{topic}".

{guidelines}

## 💡 Content Ideas: {topic}

### Idea 1: [Catchy Title]
**Hook:** [First 3 seconds]
**Angle:** [The unique perspective]
**Why it works:** [Platform-specific reasoning]
**Trending potential:** ⭐⭐⭐⭐⭐ (rate 1-5)

[Continue for all 5 ideas]

---
**Best for {platform}:** [Which idea fits best]""",
    ContentType.SCRIPT: """Create a complete short-form video script for "{topic}", grounded in the web search results above.

{guidelines}

## 📝 Reel Script: {topic}

### 🎣 HOOK (0-3 seconds)
[The exact opening line; it must stop the scroll]

### 📖 BODY (3-45 seconds)
**Beat 1:** [First key point with exact dialogue]
**Beat 2:** [Second key point with exact dialogue]
**Beat 3:** [Third key point with exact dialogue]

### 🎯 CTA (final 5-10 seconds)
[What viewers should do next]

### 🎬 Recording Suggestions
**Camera Setup:** [Angles, framing, movement]
**B-Roll Ideas:** [Supplementary footage]
**On-Screen Text:** [Overlays with timing]
**Transitions:** [Transition styles]

### 🎨 Visual Style
**Aesthetic:** [Look and feel]
**Color Palette:** [Colors]
**Lighting:** [Lighting setup]

### 🎵 Audio Suggestions
**Music Vibe:** [Background music]
**Voiceover Tips:** [Tone, pacing, energy]

### #️⃣ Hashtags
[10 relevant hashtags for {platform}]

### ⏱️ Estimated Duration: [X seconds]""",
    ContentType.TRENDING: """Find trending topics and viral content opportunities related to "{topic}" from the last 7 days of search results above.

{guidelines}

## 🔥 Trending Report: {topic}

### 📈 Hot Right Now
[Topics at peak virality; act fast]

### 🌱 Rising Trends
[Emerging trends with growth potential]

### 💥 Controversy & Debate
[Polarizing topics driving engagement]

### 🎵 Trending Audio/Formats
[Popular sounds and formats]

### ⚡ Quick Win Ideas
| Trend | Virality | Difficulty | Best Platform |
|-------|----------|------------|---------------|
| [Trend 1] | 🔥🔥🔥 | Easy | {platform} |""",
    ContentType.HOOKS: """Generate 10 scroll-stopping hooks for "{topic}" based on what the search results above show is getting engagement.

{guidelines}

## 🎣 Hook Collection: {topic}

### Curiosity Hooks
1. "[Opens a curiosity gap]"
2. "[Makes viewers need to know more]"

### Controversial Hooks
3. "[Bold statement or hot take]"
4. "[Challenges a common belief]"

### Story Hooks
5. "[Personal story opener]"
6. "[Transformation story starter]"

### Educational Hooks
7. "[Surprising fact or statistic]"
8. "[Common mistake reveal]"

### Trend Hooks
9. "[References a current trend or event]"
10. "[Platform-native hook format]"

---
**🏆 Best Overall Hook:** [The strongest one]
**Why it works:** [The psychology behind it]""",
    ContentType.FULL: """Create a comprehensive content package for "{topic}" from the search results above.

{guidelines}

## 📦 Complete Content Package: {topic}

### 🔍 Research Summary
[Key insights from the search results]

### 💡 Top 3 Content Ideas
[Best angles]

### 📝 Featured Script
[Complete script for the best idea]

### 🎣 Hook Variations
[5 alternative hooks to test]

### 🎬 Recording Checklist
- [ ] [Equipment]
- [ ] [Location/setup]
- [ ] [Props or visuals]

### 📊 Posting Strategy
**Best time to post:** [For {platform}]
**Caption:** [Ready-to-use caption]
**Hashtags:** [Optimized set]
**Cross-posting:** [Adaptation tips]""",
}


def content_prompt(content_type: ContentType, topic: str, platform: Platform, search_context: str) -> str:
    """Search context first, then the content-type instructions with platform guidelines."""
    body = _TEMPLATES[content_type].format(
        topic=topic,
        platform=platform.value,
        guidelines=PLATFORM_GUIDELINES[platform],
    )
    return f"{search_context}\n\n---\n\n{body}"


def refinement_prompt(original: str, feedback: str) -> str:
    return f"""Based on this previously generated content:

{original}

The user wants to refine it with this feedback:
"{feedback}"

Update the content accordingly while keeping the same format and quality."""


def variations_prompt(content_type: ContentType, existing: str, topic: str) -> str:
    return f"""You previously generated this {content_type.value} content for "{topic}":

{existing}

Generate 3 MORE unique variations that differ from the above but are equally engaging.
Keep the same format and quality standards."""
