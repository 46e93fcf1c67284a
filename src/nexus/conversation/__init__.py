"""Conversation pipeline: prompts, sessions, voice and text chat, emotion detection."""

from nexus.conversation.chat import ChatService
from nexus.conversation.emotion import EmotionClassifier, EmotionResult
from nexus.conversation.prompt import build_emotion_prompt, build_prompt, build_voice_prompt
from nexus.conversation.sessions import ConversationSession, ConversationTurn, SessionStore
from nexus.conversation.voice import VoiceReply, VoiceService

__all__ = [
    "ChatService",
    "ConversationSession",
    "ConversationTurn",
    "EmotionClassifier",
    "EmotionResult",
    "SessionStore",
    "VoiceReply",
    "VoiceService",
    "build_emotion_prompt",
    "build_prompt",
    "build_voice_prompt",
]
