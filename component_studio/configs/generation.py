"""
Generation service configuration settings.

Credentials and call limits for the Gemini text-generation boundary.

Dependencies: pydantic, pydantic_settings
System role: Generation client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Gemini generation configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Google Generative AI API key")
    model: str = Field(default="gemini-2.0-flash", description="Gemini model name")
    temperature: float = Field(default=0.2, description="Sampling temperature")
    timeout_seconds: float = Field(
        default=60.0,
        description="Default upper bound for a single generation call",
    )
    max_retries: int = Field(
        default=0,
        description="Client-side retries (0: failures surface immediately)",
    )
