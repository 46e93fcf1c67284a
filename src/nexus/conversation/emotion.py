"""Emotion detection for free text via the AI provider."""

import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from nexus.conversation.prompt import EMOTION_LABELS, build_emotion_prompt
from nexus.llm.provider import AIProvider

logger = logging.getLogger(__name__)

NEUTRAL_CONFIDENCE = 0.5


class EmotionResult(BaseModel):
    """Primary emotion detected in a message."""

    emotion: str = Field(description="One of the fixed emotion labels")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence in [0, 1]")
    details: str | None = Field(default=None, description="Model explanation or fallback diagnostic")

    @classmethod
    def neutral(cls, details: str) -> "EmotionResult":
        return cls(emotion="neutral", confidence=NEUTRAL_CONFIDENCE, details=details)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the first JSON object embedded in ``text``, or None.

    Model replies often wrap the object in prose or code fences, so every
    opening brace is tried as a decode start until one parses to a dict.
    """
    decoder = json.JSONDecoder()
    index = text.find("{")
    while index != -1:
        try:
            value, _ = decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            index = text.find("{", index + 1)
            continue
        if isinstance(value, dict):
            return value
        index = text.find("{", index + 1)
    return None


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class EmotionClassifier:
    """Classify text into one of the fixed emotion labels.

    Every failure mode (empty input, upstream outage, unparseable reply,
    unknown label) yields a neutral result; :meth:`detect_emotion` never raises.
    """

    def __init__(self, provider: AIProvider):
        self.provider = provider

    async def detect_emotion(self, text: str) -> EmotionResult:
        if not text or not text.strip():
            return EmotionResult.neutral("No text provided")

        try:
            reply = await self.provider.generate_reply(build_emotion_prompt(text))
        except Exception as e:
            logger.error("Emotion detection request failed: %s", e)
            return EmotionResult.neutral("Error occurred during emotion detection")

        if not reply.succeeded:
            return EmotionResult.neutral("Error occurred during emotion detection")

        return self.parse_reply(reply.text)

    @staticmethod
    def parse_reply(text: str) -> EmotionResult:
        """Turn a model reply into an EmotionResult, falling back to neutral."""
        data = extract_json_object(text)
        if data is None:
            logger.warning("No JSON object in emotion reply: %r", text[:200])
            return EmotionResult.neutral("Could not parse emotion from response")

        emotion = str(data.get("emotion", "")).strip().lower()
        if emotion not in EMOTION_LABELS:
            logger.warning("Unknown emotion label in reply: %r", data.get("emotion"))
            return EmotionResult.neutral(f"Unrecognized emotion: {data.get('emotion')}")

        try:
            confidence = float(data.get("confidence", NEUTRAL_CONFIDENCE))
        except (TypeError, ValueError):
            confidence = NEUTRAL_CONFIDENCE
        if confidence != confidence:  # NaN
            confidence = NEUTRAL_CONFIDENCE

        details = data.get("details")
        return EmotionResult(
            emotion=emotion,
            confidence=_clamp(confidence),
            details=str(details) if details is not None else None,
        )
