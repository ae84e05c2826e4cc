"""
Request validation for the AI endpoints.

Every rejected body is a 400 with a readable `error` and never reaches the gateway.
"""
import pytest

pytestmark = pytest.mark.django_db

VALID_BODIES = {
    "/generate-script/": {"topic": "The secret behind time travel", "language": "english", "scriptType": "explainer"},
    "/enhance-script/": {"text": "Some script text", "action": "polish"},
    "/generate-captions-hashtags/": {"scriptContent": "Some script", "scriptTopic": "Time travel"},
    "/generate-summary/": {"scriptContent": "Some script", "emotionMode": "neutral"},
    "/analyze-topic/": {"niche": "personal finance"},
    "/research-assistant/": {"action": "expand-fact", "text": "black holes"},
    "/generate-voiceover/": {"text": "Hello there", "voice": "female", "tone": "calm"},
    "/ai-chat-helper/": {"message": "How do I make my hook stronger?"},
    "/generate-visual-suggestions/": {"scriptContent": "Some script"},
}

REQUIRED_FIELDS = [
    (endpoint, field)
    for endpoint, body in VALID_BODIES.items()
    for field in body
]


class TestRequiredFields:

    @pytest.mark.parametrize("endpoint,field", REQUIRED_FIELDS)
    def test_missing_field_is_rejected(self, api_client, gateway, endpoint, field):
        body = {k: v for k, v in VALID_BODIES[endpoint].items() if k != field}
        response = api_client.post(endpoint, body, format="json")

        assert response.status_code == 400
        assert isinstance(response.json()["error"], str)
        assert response.json()["error"]
        gateway.chat.completions.create.assert_not_called()

    def test_empty_body(self, api_client, gateway):
        response = api_client.post("/generate-script/", {}, format="json")
        assert response.status_code == 400
        assert response.json() == {"error": "Topic is required"}

    def test_malformed_json(self, api_client, gateway):
        response = api_client.post("/enhance-script/", "{not json", content_type="application/json")
        assert response.status_code == 400
        assert response.json()["error"]

    def test_body_must_be_an_object(self, api_client, gateway):
        response = api_client.post("/ai-chat-helper/", ["hello"], format="json")
        assert response.status_code == 400
        assert response.json()["error"]


class TestGenerateScriptValidation:

    @pytest.mark.parametrize("topic", ["abcd", "x" * 501])
    def test_topic_length_bounds(self, api_client, gateway, topic):
        body = dict(VALID_BODIES["/generate-script/"], topic=topic)
        response = api_client.post("/generate-script/", body, format="json")

        assert response.status_code == 400
        assert "Topic must be at" in response.json()["error"]

    @pytest.mark.parametrize("topic", ["abcde", "y" * 500])
    def test_topic_length_edges_accepted(self, api_client, gateway, topic):
        body = dict(VALID_BODIES["/generate-script/"], topic=topic)
        response = api_client.post("/generate-script/", body, format="json")
        assert response.status_code == 200

    @pytest.mark.parametrize("topic", [
        "<script>alert(1)</script>",
        "Hello {world} topic",
        "Bell \x07 characters are not",
        "back`tick topic",
    ])
    def test_topic_characters_rejected(self, api_client, gateway, topic):
        body = dict(VALID_BODIES["/generate-script/"], topic=topic)
        response = api_client.post("/generate-script/", body, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "Topic contains invalid characters"

    @pytest.mark.parametrize("topic,language", [
        ("সময় ভ্রমণের রহস্য", "bengali"),
        ("समय यात्रा का रहस्य", "hindi"),
        ("What's new in 2025? A 10-step guide!", "english"),
    ])
    def test_topic_in_any_script_accepted(self, api_client, gateway, topic, language):
        body = {"topic": topic, "language": language, "scriptType": "reels"}
        response = api_client.post("/generate-script/", body, format="json")
        assert response.status_code == 200

    def test_topic_must_be_a_string(self, api_client, gateway):
        body = dict(VALID_BODIES["/generate-script/"], topic=1234567)
        response = api_client.post("/generate-script/", body, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "Topic must be a string"

    def test_unknown_language(self, api_client, gateway):
        body = dict(VALID_BODIES["/generate-script/"], language="french")
        response = api_client.post("/generate-script/", body, format="json")

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid language. Must be one of: english")

    @pytest.mark.parametrize("script_type", [
        "explainer", "narrative", "outline", "youtube", "reels", "movie", "podcast", "ad", "blog",
    ])
    def test_every_script_type_accepted(self, api_client, gateway, script_type):
        body = dict(VALID_BODIES["/generate-script/"], scriptType=script_type)
        response = api_client.post("/generate-script/", body, format="json")
        assert response.status_code == 200

    def test_unknown_script_type(self, api_client, gateway):
        body = dict(VALID_BODIES["/generate-script/"], scriptType="tiktok-dance")
        response = api_client.post("/generate-script/", body, format="json")
        assert response.status_code == 400


class TestActionEnums:

    @pytest.mark.parametrize("action", ["summarize", "fact-check", "", "POLISH", 3])
    def test_enhance_rejects_unknown_action(self, api_client, gateway, action):
        response = api_client.post("/enhance-script/", {"text": "Hi", "action": action}, format="json")

        assert response.status_code == 400
        assert response.json()["error"]
        gateway.chat.completions.create.assert_not_called()

    def test_enhance_lists_valid_actions(self, api_client, gateway):
        response = api_client.post("/enhance-script/", {"text": "Hi", "action": "summarize"}, format="json")
        assert response.json()["error"].startswith("Invalid action. Must be one of: expand, shorten")

    @pytest.mark.parametrize("action", ["polish", "funny", "generate-sources", "verify"])
    def test_research_rejects_unknown_action(self, api_client, gateway, action):
        body = {"action": action, "text": "black holes"}
        response = api_client.post("/research-assistant/", body, format="json")
        assert response.status_code == 400

    @pytest.mark.parametrize("action", ["fact-check", "expand-fact", "smooth-integrate", "suggest-related"])
    def test_research_text_actions_need_text(self, api_client, gateway, action):
        response = api_client.post("/research-assistant/", {"action": action}, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == f"Text is required for {action}"

    def test_generate_sources_needs_topic_and_content(self, api_client, gateway):
        response = api_client.post(
            "/research-assistant/", {"action": "generate_sources", "topic": "Black holes"}, format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Content is required for generate_sources"

    def test_research_context_object_is_measured_as_json(self, api_client, gateway):
        body = {"action": "smooth-integrate", "text": "Stars", "context": {"fact": "x" * 5000}}
        response = api_client.post("/research-assistant/", body, format="json")

        assert response.status_code == 400
        assert "5000" in response.json()["error"]

    def test_research_context_must_be_string_or_object(self, api_client, gateway):
        body = {"action": "smooth-integrate", "text": "Stars", "context": [1, 2]}
        response = api_client.post("/research-assistant/", body, format="json")
        assert response.status_code == 400

    def test_summary_needs_known_emotion_mode(self, api_client, gateway):
        body = {"scriptContent": "Some script", "emotionMode": "angry"}
        response = api_client.post("/generate-summary/", body, format="json")
        assert response.status_code == 400


class TestLengthCaps:

    def test_voiceover_text_over_limit(self, api_client, tts):
        body = {"text": "a" * 4001, "voice": "male", "tone": "calm"}
        response = api_client.post("/generate-voiceover/", body, format="json")

        assert response.status_code == 400
        assert "4000" in response.json()["error"]
        tts.audio.speech.create.assert_not_called()

    def test_voiceover_text_at_limit(self, api_client, tts):
        body = {"text": "a" * 4000, "voice": "male", "tone": "calm"}
        response = api_client.post("/generate-voiceover/", body, format="json")
        assert response.status_code == 200

    @pytest.mark.parametrize("voice,tone", [("robot", "calm"), ("male", "whisper")])
    def test_voiceover_voice_and_tone(self, api_client, tts, voice, tone):
        body = {"text": "Hello", "voice": voice, "tone": tone}
        response = api_client.post("/generate-voiceover/", body, format="json")
        assert response.status_code == 400

    @pytest.mark.parametrize("endpoint,body", [
        ("/enhance-script/", {"text": "a" * 10001, "action": "expand"}),
        ("/ai-chat-helper/", {"message": "a" * 5001}),
        ("/ai-chat-helper/", {"message": "Hi", "scriptContext": "a" * 10001}),
        ("/analyze-topic/", {"niche": "a" * 501}),
        ("/generate-captions-hashtags/", {"scriptContent": "a" * 10001, "scriptTopic": "t"}),
        ("/generate-summary/", {"scriptContent": "a" * 10001, "emotionMode": "funny"}),
        ("/research-assistant/", {"action": "expand-fact", "text": "a" * 5001}),
    ])
    def test_over_limit_rejected(self, api_client, gateway, endpoint, body):
        response = api_client.post(endpoint, body, format="json")

        assert response.status_code == 400
        assert "at most" in response.json()["error"]
        gateway.chat.completions.create.assert_not_called()
