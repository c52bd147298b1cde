"""Configuration management for the painting lead assistant."""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration."""

    # OpenAI Configuration (intent classifier + lead extractor)
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TIMEOUT_SECONDS: float = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "20"))
    # Without a key the classifier falls back to local heuristics only and
    # lead extraction reports a failure, which the orchestrator turns into a retry prompt.

    # Application Settings
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional: log user/assistant text to console.
    # Defaults to enabled in development (DEBUG=True) and disabled in production.
    # May include customer names and phone numbers.
    LOG_CONVERSATION_TEXT: bool = os.getenv(
        "LOG_CONVERSATION_TEXT",
        "True" if DEBUG else "False",
    ).lower() == "true"
    LOG_CONVERSATION_TEXT_MAX_CHARS: int = int(os.getenv("LOG_CONVERSATION_TEXT_MAX_CHARS", "500"))

    # Lead analysis input limit (characters)
    MAX_TEXT_LENGTH: int = int(os.getenv("MAX_TEXT_LENGTH", "2000"))

    # Step-flow ("project") conversation
    PROJECT_FLOW_START_COMMAND: str = os.getenv("PROJECT_FLOW_START_COMMAND", "/project")

    # Security
    API_KEY: str = os.getenv("API_KEY", "")  # For API authentication

    @classmethod
    def has_openai_key(cls) -> bool:
        """Check if OpenAI API key is configured."""
        return bool(cls.OPENAI_API_KEY)


# Create a global config instance
config = Config()
