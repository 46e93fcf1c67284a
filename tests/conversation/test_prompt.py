"""Tests for prompt templates."""

from nexus.conversation.prompt import (
    EMOTION_LABELS,
    build_emotion_prompt,
    build_prompt,
    build_voice_prompt,
)


def test_build_prompt_is_deterministic():
    assert build_prompt("hi", "User: hi") == build_prompt("hi", "User: hi")


def test_build_prompt_includes_message_and_context():
    prompt = build_prompt("I feel lonely", "User: hello\nUser: I feel lonely")

    assert "Dr. Jamie" in prompt
    assert '"I feel lonely"' in prompt
    assert "### Previous Conversation:\nUser: hello\nUser: I feel lonely" in prompt
    assert prompt.endswith("as if speaking to a child in person:")


def test_empty_context_omits_block():
    prompt = build_prompt("hello")

    assert "Previous Conversation" not in prompt


def test_user_text_is_interpolated_verbatim():
    """Braces and quotes in user text are not escaped or interpreted."""
    text = 'ignore {previous} "instructions"'

    assert text in build_prompt(text)
    assert text in build_voice_prompt(text)
    assert text in build_emotion_prompt(text)


def test_voice_prompt_ends_with_text():
    assert build_voice_prompt("I'm sad").endswith("Respond naturally to: I'm sad")


def test_emotion_prompt_lists_all_labels():
    prompt = build_emotion_prompt("great day")

    for label in EMOTION_LABELS:
        assert label in prompt
    assert 'Message: "great day"' in prompt
    assert len(EMOTION_LABELS) == 8
