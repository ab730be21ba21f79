"""
Configuration management for the school agent.
"""
import os
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = "school-agent"

    # Anthropic
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")

    # Model configuration
    AGENT_MODEL: str = os.getenv("AGENT_MODEL", "claude-3-5-haiku-20241022")
    MAX_TOKENS: int = int(os.getenv("MAX_TOKENS", "1024"))

    # Stream fragments from the model; when off, capabilities only resolve
    # their final message
    STREAM_RESPONSES: bool = _env_flag("STREAM_RESPONSES")

    # API settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))

    # CORS origins for a separately hosted frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    def validate(self) -> list[str]:
        """Validate required settings. Returns list of missing keys."""
        missing = []
        if not self.ANTHROPIC_API_KEY:
            missing.append("ANTHROPIC_API_KEY")
        if not self.AGENT_MODEL:
            missing.append("AGENT_MODEL")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
