"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Storage
    DATA_FILE: str = os.getenv("HABITDESK_DATA_FILE", "data.json")

    # AI (OPENAI_KEY is the older variable name)
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "") or os.getenv("OPENAI_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")

    # Empty means the server's local time zone
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "")


# Create a global settings instance
settings = Settings()
