"""Pydantic models for nexus.yaml configuration."""

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_FALLBACK_MESSAGE = (
    "I apologize for the technical difficulty. Here are some general well-being "
    "strategies: 1) Take deep breaths, 2) Step away for a short break, 3) Stretch "
    "your body, 4) Stay hydrated. How are you feeling right now?"
)


class ProviderConfig(BaseModel):
    """Generative-language provider configuration."""

    backend: Literal["gemini", "openai"] = Field(
        default="gemini",
        description="Provider API flavour: native Gemini or any OpenAI-compatible endpoint",
    )
    model: str = Field(default="gemini-1.5-pro", description="Primary model name")
    fallback_model: str | None = Field(
        default=None,
        description="Model tried once after the primary model exhausts its retries (e.g. gemini-1.0-pro)",
    )
    api_key_env: str = Field(
        default="GEMINI_API_KEY",
        description="Environment variable holding the provider API key",
    )
    base_url: str | None = Field(
        default=None,
        description="Override the provider endpoint (required for the openai backend)",
    )
    timeout: float = Field(default=30.0, description="Per-attempt request timeout in seconds", gt=0)
    temperature: float = Field(default=0.7, description="Sampling temperature", ge=0.0, le=2.0)
    top_k: int = Field(default=40, description="Top-k sampling (Gemini only)", ge=1)
    top_p: float = Field(default=0.95, description="Nucleus sampling", ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=1000, description="Maximum tokens per reply", ge=1)


class RetryConfig(BaseModel):
    """Retry policy for provider calls."""

    max_attempts: int = Field(default=3, description="Attempts before giving up", ge=1, le=10)
    delay_seconds: float = Field(
        default=1.0,
        description="Base delay; attempt n waits n * delay_seconds before retrying",
        ge=0.0,
    )


class SessionConfig(BaseModel):
    """In-memory conversation session configuration."""

    max_turns: int = Field(default=10, description="Turns kept per session", ge=2, le=200)
    idle_timeout_minutes: int | None = Field(
        default=None,
        description="Evict sessions idle for longer than this (None keeps them until ended)",
        ge=1,
    )


class ChatConfig(BaseModel):
    """Persisted text chat configuration."""

    context_messages: int = Field(
        default=5, description="Recent user messages included as prompt context", ge=1, le=50
    )
    history_limit: int = Field(default=50, description="Records returned by history", ge=1, le=500)
    context_idle_minutes: int = Field(
        default=60,
        description="Drop a user's in-memory prompt context after this much inactivity",
        ge=1,
    )
    fallback_message: str = Field(
        default=DEFAULT_FALLBACK_MESSAGE,
        description="Reply returned when the provider cannot be reached",
    )


class ServerConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=3000, description="Server port", ge=1, le=65535)
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins (use ['*'] for development only)",
    )


class DatabaseConfig(BaseModel):
    """Document storage configuration."""

    path: str = Field(default="~/.nexus/nexus.db", description="Path to the SQLite database")


class RateLimitConfig(BaseModel):
    """Per-client request limits."""

    enabled: bool = Field(default=True, description="Apply rate limits to chat and AI routes")
    window_seconds: float = Field(default=60.0, description="Sliding window length", gt=0)
    chat_per_window: int = Field(default=10, description="Chat/exercise requests per window", ge=1)
    ai_per_window: int = Field(default=5, description="Emotion detection requests per window", ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: str = Field(default="%(asctime)s %(levelname)s %(name)s: %(message)s")


class NexusConfig(BaseModel):
    """Root configuration schema for Nexus."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    sessions: SessionConfig = Field(default_factory=SessionConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
