import pytest

from api.constants import EmotionMode, EnhanceAction, ResearchAction, ScriptType
from api.prompts import (
    CHAT_SYSTEM_PROMPT,
    build_caption_messages,
    build_chat_messages,
    build_enhance_messages,
    build_research_messages,
    build_script_messages,
    build_summary_messages,
    build_topic_messages,
    build_visual_messages,
    context_as_text,
)


def roles(messages):
    return [m["role"] for m in messages]


class TestScriptPrompt:

    @pytest.mark.parametrize("language,name", [
        ("english", "English"),
        ("bengali", "Bengali (বাংলা)"),
        ("hindi", "Hindi (हिंदी)"),
    ])
    def test_language_is_demanded(self, language, name):
        system, user = build_script_messages("Time travel basics", language, "explainer")

        assert f"You MUST write the entire script in {name}" in system["content"]
        assert f"Write EVERYTHING in {name}" in user["content"]

    @pytest.mark.parametrize("script_type", ScriptType.values)
    def test_every_script_type_has_instructions(self, script_type):
        messages = build_script_messages("Time travel basics", "english", script_type)

        assert roles(messages) == ["system", "user"]
        assert messages[1]["content"].startswith("Topic: Time travel basics")
        assert "Generate" in messages[1]["content"]

    def test_unknown_script_type(self):
        with pytest.raises(ValueError):
            build_script_messages("Time travel basics", "english", "tiktok")

    def test_unknown_language(self):
        with pytest.raises(ValueError):
            build_script_messages("Time travel basics", "klingon", "explainer")


class TestEnhancePrompt:

    @pytest.mark.parametrize("action", EnhanceAction.values)
    def test_each_action_has_a_system_prompt(self, action):
        system, user = build_enhance_messages("Original text", action)

        assert system["content"].startswith("You are a script")
        assert user == {"role": "user", "content": "Original text"}

    def test_actions_are_distinct(self):
        prompts = {build_enhance_messages("x", a)[0]["content"] for a in EnhanceAction.values}
        assert len(prompts) == len(EnhanceAction.values)

    def test_research_action_is_not_an_enhance_action(self):
        with pytest.raises(ValueError):
            build_enhance_messages("x", "fact-check")


class TestStructuredPrompts:

    @pytest.mark.parametrize("emotion_mode", EmotionMode.values)
    def test_summary_asks_for_json(self, emotion_mode):
        system, _ = build_summary_messages("A script", emotion_mode)

        assert '"title"' in system["content"]
        assert '"hashtags"' in system["content"]
        assert f"Match the emotion mode: {emotion_mode}" in system["content"]

    def test_summary_truncates_script(self):
        _, user = build_summary_messages("a" * 1500, "neutral")

        assert "a" * 1000 in user["content"]
        assert "a" * 1001 not in user["content"]

    def test_caption_truncates_script(self):
        _, user = build_caption_messages("b" * 1200, "Octopus intelligence")

        assert "Topic: Octopus intelligence" in user["content"]
        assert "b" * 1001 not in user["content"]

    def test_topic_analysis_keys(self):
        system, user = build_topic_messages("home workouts")

        for key in ("trendingTopics", "viralHooks", "suggestedTitles"):
            assert key in system["content"]
        assert "Niche: home workouts" in user["content"]

    def test_visual_scenes(self):
        system, user = build_visual_messages("c" * 3000)

        assert '"scenes"' in system["content"]
        assert "Script type: video" in user["content"]
        assert "c" * 1001 not in user["content"]


class TestResearchPrompt:

    @pytest.mark.parametrize("action", ResearchAction.values)
    def test_each_action_builds(self, action):
        messages = build_research_messages(
            action, text="black holes", topic="Space", content="Stars collapse", script_type="youtube",
        )
        assert roles(messages) == ["system", "user"]

    def test_smooth_integrate_uses_fact_from_object_context(self):
        _, user = build_research_messages(
            "smooth-integrate", text="Stars are big.", context={"fact": "The Sun is a star."},
        )
        assert 'Verified fact to integrate: "The Sun is a star."' in user["content"]

    def test_smooth_integrate_accepts_string_context(self):
        _, user = build_research_messages("smooth-integrate", text="Stars are big.", context="Light is fast.")
        assert '"Light is fast."' in user["content"]

    def test_generate_sources_mentions_type_and_topic(self):
        system, user = build_research_messages(
            "generate_sources", topic="Black holes", content="Gravity wins", script_type="podcast",
        )
        assert "JSON array" in system["content"]
        assert 'podcast script about "Black holes"' in user["content"]

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            build_research_messages("polish", text="x")


class TestChatPrompt:

    def test_without_context(self):
        messages = build_chat_messages("Make my intro punchier")

        assert roles(messages) == ["system", "user"]
        assert messages[0]["content"] == CHAT_SYSTEM_PROMPT

    def test_context_is_a_second_system_message(self):
        messages = build_chat_messages("Help", script_context="d" * 4000)

        assert roles(messages) == ["system", "system", "user"]
        assert messages[1]["content"] == "Current script context:\n" + "d" * 1000


def test_context_as_text():
    assert context_as_text(None) == ""
    assert context_as_text("plain") == "plain"
    assert context_as_text({"fact": "x"}) == '{"fact": "x"}'
