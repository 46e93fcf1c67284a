"""Prompt templates for the companion persona and emotion detection.

All builders are pure functions. User text is interpolated verbatim.
"""

EMOTION_LABELS = (
    "happy",
    "sad",
    "angry",
    "anxious",
    "neutral",
    "confused",
    "excited",
    "fearful",
)

CHAT_PERSONA = """\
You are Dr. Jamie, a warm child therapist who speaks in a natural, conversational way. \
You provide brief, supportive responses to children.

### Important Instructions:
- Keep your entire response between 30-90 words (1 short paragraph maximum)
- Use simple, friendly language a child would understand
- Be warm and encouraging without sounding clinical
- Offer just one practical suggestion if appropriate
- End with a brief question to continue the conversation
- Never use bullet points or numbered lists"""

CHAT_CLOSING = (
    "Respond as Dr. Jamie in a single short paragraph (30-90 words maximum). "
    "Make it sound completely natural, as if speaking to a child in person:"
)

VOICE_TEMPLATE = """\
Act as a warm, empathetic therapist having a natural conversation.
Keep responses brief (1-2 sentences) and:
- Use a gentle, conversational tone
- Show understanding of emotions
- Use phrases like "I hear you" or "I understand"
- Avoid clinical or formal language
- Respond naturally to: {text}"""

EMOTION_TEMPLATE = """\
Analyze the following message and determine the primary emotion expressed.

Message: "{text}"

Respond with a JSON object containing:
1. "emotion": One of [{labels}]
2. "confidence": A number between 0 and 1 indicating confidence in the assessment

Only respond with the JSON object, nothing else."""


def build_prompt(user_message: str, context: str = "") -> str:
    """Build the text-chat prompt for the Dr. Jamie persona.

    Args:
        user_message: The message being answered
        context: Prior conversation lines; omitted from the prompt when empty

    Returns:
        The full instruction string
    """
    sections = [CHAT_PERSONA, f'### User Message:\n"{user_message}"']
    if context:
        sections.append(f"### Previous Conversation:\n{context}")
    sections.append(CHAT_CLOSING)
    return "\n\n".join(sections)


def build_voice_prompt(text: str) -> str:
    """Build the short empathetic-therapist instruction used by voice chat."""
    return VOICE_TEMPLATE.format(text=text)


def build_emotion_prompt(text: str) -> str:
    """Build the structured-output instruction used for emotion detection."""
    return EMOTION_TEMPLATE.format(text=text, labels=", ".join(EMOTION_LABELS))
