"""
Configuration management for the conversation webhook receiver.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the webhook receiver."""

    # ElevenLabs
    ELEVENLABS_WEBHOOK_SECRET = os.getenv("ELEVENLABS_WEBHOOK_SECRET", "")
    ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
    ELEVENLABS_API_BASE_URL = os.getenv("ELEVENLABS_API_BASE_URL", "https://api.elevenlabs.io")

    # Storage (relative paths resolve against the process working directory)
    CONVERSATIONS_FILE = os.getenv("CONVERSATIONS_FILE", "conversations.json")

    # Server
    WEBHOOK_PORT = int(os.getenv("WEBHOOK_PORT", "8000"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def missing(cls) -> list[str]:
        """Names of required configuration values that are not set."""
        required = ["ELEVENLABS_WEBHOOK_SECRET"]
        return [key for key in required if not getattr(cls, key)]

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        missing = cls.missing()

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env file")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  Webhook Secret: {'✓ Set' if Config.ELEVENLABS_WEBHOOK_SECRET else '✗ Missing'}")
    print(f"  API Key: {'✓ Set' if Config.ELEVENLABS_API_KEY else '✗ Missing'}")
    print(f"  Conversations File: {Config.CONVERSATIONS_FILE}")
    print(f"  Port: {Config.WEBHOOK_PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
