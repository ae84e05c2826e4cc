"""
Prompt tables for every AI endpoint.

Each builder is a pure function returning the chat messages to send to the
gateway. Values are expected to have passed the endpoint's serializer; an
unknown action or script type raises ValueError.
"""
import json

from .constants import (
    PROMPT_EXCERPT_LENGTH,
    EmotionMode,
    EnhanceAction,
    Language,
    ResearchAction,
    ScriptType,
)

JSON_ONLY = "Only output valid JSON."

LANGUAGE_NAMES = {
    Language.ENGLISH: "English",
    Language.BENGALI: "Bengali (বাংলা)",
    Language.HINDI: "Hindi (हिंदी)",
}

SCRIPT_INSTRUCTIONS = {
    ScriptType.EXPLAINER: """Generate an EXPLAINER VIDEO SCRIPT with:
- A catchy title
- An engaging hook (1-2 lines)
- 3-5 clear explanation sections with facts and examples
- Educational tone with storytelling elements
- A strong outro with call-to-action""",

    ScriptType.NARRATIVE: """Generate a NARRATIVE SHORT SCRIPT with:
- A compelling title
- Setting (time and place)
- Character introduction
- Scene-by-scene narration with dialogues
- An emotional twist or conflict
- A memorable closing line or moral""",

    ScriptType.OUTLINE: """Generate a DETAILED CONTENT OUTLINE with:
- A descriptive title
- Introduction section
- 4-6 main sections with subtopics and key talking points
- Suggested visuals or tone for each section
- Transition suggestions between sections
- Summary and outro""",

    ScriptType.YOUTUBE: """Generate a YOUTUBE VIDEO SCRIPT (8-12 minutes) with:
- A click-worthy title and a one-line thumbnail text idea
- A hook in the first 15 seconds that promises the payoff
- An intro that sets up the question the video answers
- 4-6 chapters with timestamps, talking points and B-roll cues
- A mid-video retention beat (question, twist or teaser)
- An outro with a subscribe call-to-action and a next-video suggestion""",

    ScriptType.REELS: """Generate a SHORT-FORM REELS / SHORTS SCRIPT (30-60 seconds) with:
- A scroll-stopping hook in the first 3 seconds
- One single idea delivered in short, punchy lines
- On-screen text suggestions for each beat
- A quick visual cue per line
- A loopable ending or a one-line call-to-action""",

    ScriptType.MOVIE: """Generate a SHORT FILM SCREENPLAY with:
- A title and a one-line logline
- Scene headings (INT./EXT., location, time of day)
- Action lines describing what we see
- Character names with dialogue and brief parentheticals
- A clear three-act shape: setup, confrontation, resolution
- A closing image that lands the theme""",

    ScriptType.PODCAST: """Generate a PODCAST EPISODE SCRIPT with:
- An episode title and a cold-open teaser
- Host intro and episode overview
- 3-5 discussion segments with talking points and questions for a guest or co-host
- Natural transitions between segments
- A listener takeaway and a sign-off with call-to-action""",

    ScriptType.AD: """Generate an ADVERTISEMENT SCRIPT (15-60 seconds) with:
- A headline and the core product promise
- A hook that names the viewer's problem
- The solution and 2-3 concrete benefits
- Social proof or a credibility line
- A clear, urgent call-to-action
- Voiceover lines paired with visual directions""",

    ScriptType.BLOG: """Generate a BLOG ARTICLE with:
- An SEO-friendly headline and a meta description (under 160 characters)
- An introduction that hooks the reader
- 4-6 sections with H2 subheadings, examples and practical tips
- Bullet lists where they help scanning
- A conclusion with a call-to-action""",
}

ENHANCE_PROMPTS = {
    EnhanceAction.EXPAND: "You are a script enhancement AI. Expand the given text by adding more details, descriptions, and depth while maintaining the original meaning and tone. Make it approximately 50% longer.",
    EnhanceAction.SHORTEN: "You are a script enhancement AI. Condense the given text to its essential points while maintaining clarity and impact. Make it approximately 50% shorter.",
    EnhanceAction.EMOTIONAL: "You are a script enhancement AI. Rewrite the given text to be more emotionally engaging and impactful. Add emotional language, vivid descriptions, and compelling storytelling elements. Make it sentimental and heart-touching.",
    EnhanceAction.POLISH: "You are a script enhancement AI. Polish the given text by improving grammar, enhancing clarity, refining storytelling tone, and making it more professional and engaging.",
    EnhanceAction.REGENERATE: "You are a script enhancement AI. Completely rewrite the given text with fresh wording while keeping the same core message and structure. Be creative but maintain the original intent.",
    EnhanceAction.FUNNY: "You are a script tone adjustment AI. Transform the given text into a funny, witty, and relatable version. Add humor, clever wordplay, and light-hearted elements while maintaining the core message. Use casual, conversational language that makes people smile.",
    EnhanceAction.MOTIVATIONAL: "You are a script tone adjustment AI. Transform the given text into an uplifting, inspiring, and motivational version. Use powerful, encouraging language that energizes and drives action. Focus on possibilities, growth, and empowerment.",
    EnhanceAction.DRAMATIC: "You are a script tone adjustment AI. Transform the given text into a dramatic, cinematic version with emotional tension and powerful pacing. Build intensity, use vivid imagery, and create compelling narrative momentum. Make it feel like a movie scene.",
    EnhanceAction.PHILOSOPHICAL: "You are a script tone adjustment AI. Transform the given text into a deep, reflective, and philosophical version. Explore underlying meanings, raise thoughtful questions, and add contemplative insights. Use introspective and thought-provoking language.",
    EnhanceAction.PROFESSIONAL: "You are a script tone adjustment AI. Transform the given text into a formal, structured, and professional version. Use clear, authoritative language with proper business terminology. Maintain objectivity and precision while being engaging.",
}

EMOTION_GUIDELINES = {
    EmotionMode.NEUTRAL: "Keep it clear and straightforward.",
    EmotionMode.FUNNY: "Make it witty, playful, and engaging with a light touch.",
    EmotionMode.EMOTIONAL: "Use heartfelt, touching language that connects emotionally.",
    EmotionMode.SERIOUS: "Keep it professional, informative, and impactful.",
    EmotionMode.MYSTERIOUS: "Create intrigue and curiosity with enigmatic phrasing.",
}

CHAT_SYSTEM_PROMPT = """You are an AI script writing assistant integrated into ScriptGenie.
You help users improve their scripts, provide creative suggestions, and answer questions about scriptwriting.
Keep your responses concise, helpful, and actionable. Focus on practical improvements."""


def _lookup(table, key, kind):
    try:
        return table[key]
    except KeyError:
        raise ValueError(f"Invalid {kind}: {key}")


def _excerpt(text):
    return (text or "")[:PROMPT_EXCERPT_LENGTH]


def _messages(system_prompt, user_prompt):
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def build_script_messages(topic, language, script_type):
    language_name = _lookup(LANGUAGE_NAMES, language, "language")
    instructions = _lookup(SCRIPT_INSTRUCTIONS, script_type, "script type")

    system_prompt = f"""You are ScriptGenie, an expert AI script writer for influencers, YouTubers, and content creators.
You have deep knowledge across internet culture, science, history, philosophy, and trending topics.
You write engaging, viral-worthy scripts that are:
- Emotionally compelling and trend-aware
- Well-structured and easy to follow
- Perfect for social media and video content
- Authentic and relatable

CRITICAL: You MUST write the entire script in {language_name}.
Every word, every line, every section must be in {language_name}.
Do not mix languages. Use native script and vocabulary."""

    user_prompt = f"""Topic: {topic}

{instructions}

Make it creative, engaging, and ready to shoot. Include emojis where appropriate.
Remember: Write EVERYTHING in {language_name}."""

    return _messages(system_prompt, user_prompt)


def build_enhance_messages(text, action):
    return _messages(_lookup(ENHANCE_PROMPTS, action, "action"), text)


def build_summary_messages(script_content, emotion_mode):
    guideline = _lookup(EMOTION_GUIDELINES, emotion_mode, "emotion mode")
    system_prompt = f"""You are an expert social media content strategist. Generate engaging, optimized content for social platforms.
{guideline}

Return your response as valid JSON with this exact structure:
{{
  "title": "SEO-friendly title (under 60 characters)",
  "description": "Short engaging description (40-60 words)",
  "hashtags": ["#tag1", "#tag2", "#tag3", "#tag4", "#tag5"]
}}

Rules:
- Title must be catchy and SEO-optimized
- Description must be concise, engaging, and platform-ready
- Include 5-10 relevant, trending hashtags
- Match the emotion mode: {emotion_mode}
- Focus on maximum engagement
- {JSON_ONLY}"""
    user_prompt = f"Script content:\n\n{_excerpt(script_content)}\n\nGenerate an optimized title, description, and hashtags for this content."
    return _messages(system_prompt, user_prompt)


def build_caption_messages(script_content, script_topic):
    system_prompt = f"""You are a social media copywriter. Write one platform-ready caption and a set of hashtags for a short video.

Return your response as valid JSON with this exact structure:
{{
  "caption": "Caption of 1-3 sentences with a hook and a call-to-action",
  "hashtags": ["#tag1", "#tag2", "#tag3"]
}}

Rules:
- Caption must be under 300 characters
- Include 8-15 relevant hashtags mixing broad and niche tags
- Every hashtag starts with #
- {JSON_ONLY}"""
    user_prompt = f"Topic: {script_topic}\n\nScript content:\n\n{_excerpt(script_content)}\n\nWrite the caption and hashtags."
    return _messages(system_prompt, user_prompt)


def build_topic_messages(niche):
    system_prompt = f"""You are a content strategy expert specializing in identifying trending topics and viral content ideas.
Generate 5-7 trending subtopics, 3-5 viral hook ideas, and 5-7 suggested titles for the given niche.
Format your response as JSON with this structure: {{
  "trendingTopics": ["topic1", "topic2", ...],
  "viralHooks": ["hook1", "hook2", ...],
  "suggestedTitles": ["title1", "title2", ...]
}}
{JSON_ONLY}"""
    user_prompt = f"Niche: {niche}\n\nAnalyze this niche and provide trending content ideas, viral hooks, and compelling titles."
    return _messages(system_prompt, user_prompt)


def build_research_messages(action, text=None, context=None, topic=None, content=None, script_type=None):
    if action == ResearchAction.FACT_CHECK:
        system_prompt = f"""You are a fact-checking assistant. Verify the provided text and return accurate, verified information with credible sources. Format your response as JSON with:
{{
  "verified": true/false,
  "summary": "Brief verified fact summary",
  "sources": ["Source 1", "Source 2", "Source 3"],
  "confidence": "high/medium/low"
}}
{JSON_ONLY}"""
        user_prompt = f'Fact-check this text: "{text}"'
    elif action == ResearchAction.EXPAND_FACT:
        system_prompt = "You are a research assistant. Provide a concise, one-sentence explanation or interesting fact about the given keyword. Make it educational and engaging."
        user_prompt = f'Provide a brief, interesting fact about: "{text}"'
    elif action == ResearchAction.SMOOTH_INTEGRATE:
        fact = context.get("fact", "") if isinstance(context, dict) else (context or "")
        system_prompt = "You are a script editor specializing in natural fact integration. Rewrite the provided text to smoothly incorporate the verified fact while maintaining storytelling flow and tone. Keep it natural and engaging."
        user_prompt = f'Original text: "{text}"\n\nVerified fact to integrate: "{fact}"\n\nRewrite this to naturally incorporate the fact while maintaining narrative flow.'
    elif action == ResearchAction.SUGGEST_RELATED:
        system_prompt = "You are a research assistant. Suggest one interesting, related fact or detail connected to the given topic. Keep it concise and relevant."
        user_prompt = f'Suggest an interesting related fact about: "{text}"'
    elif action == ResearchAction.GENERATE_SOURCES:
        system_prompt = f"""You are a research assistant. Generate 3-5 credible source references based on the script content. Return as JSON array:
[{{"title": "Source Name", "description": "Brief description of what this source covers", "url": "optional URL if available"}}]
{JSON_ONLY}"""
        user_prompt = f'Generate source references for this {script_type or "video"} script about "{topic}". Content excerpt: "{content}"'
    else:
        raise ValueError(f"Invalid action: {action}")
    return _messages(system_prompt, user_prompt)


def build_chat_messages(message, script_context=None):
    messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    if script_context:
        messages.append({
            "role": "system",
            "content": f"Current script context:\n{_excerpt(script_context)}",
        })
    messages.append({"role": "user", "content": message})
    return messages


def build_visual_messages(script_content, script_type=None):
    system_prompt = f"""You are a video director and cinematographer. Break the script into 4-6 key scenes and suggest how to shoot each one.

Return your response as valid JSON with this exact structure:
{{
  "scenes": [
    {{
      "title": "Short scene name",
      "background": "Setting or backdrop",
      "camera": "Shot type and movement",
      "lighting": "Lighting setup",
      "tone": "Mood and color tone"
    }}
  ]
}}
{JSON_ONLY}"""
    user_prompt = f"Script type: {script_type or 'video'}\n\nScript content:\n\n{_excerpt(script_content)}\n\nSuggest the visual scenes."
    return _messages(system_prompt, user_prompt)


def context_as_text(context):
    """Research context arrives as a string or a JSON object; measure both the same way."""
    if context is None:
        return ""
    if isinstance(context, str):
        return context
    return json.dumps(context)
