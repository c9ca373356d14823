"""
Application configuration from environment variables
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class Settings:
    """Application settings"""

    # Telegram Bot
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

    # Webhook (empty WEBHOOK_URL means long polling)
    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "/webhook")
    PORT: int = int(os.getenv("PORT", "8080"))

    # Storage: 'postgres' or 'memory'
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "postgres")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
    COMMAND_TIMEOUT: int = int(os.getenv("COMMAND_TIMEOUT", "60"))
    RUN_MIGRATIONS: bool = os.getenv("RUN_MIGRATIONS", "False").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    def validate(self) -> bool:
        """
        Validate required settings

        Returns:
            True if all required settings are present
        """
        required_fields = [("TELEGRAM_BOT_TOKEN", self.TELEGRAM_BOT_TOKEN)]

        if self.STORAGE_BACKEND == "postgres":
            required_fields.append(("DATABASE_URL", self.DATABASE_URL))

        missing = []
        for field_name, field_value in required_fields:
            if not field_value:
                missing.append(field_name)

        if missing:
            print(f"❌ Missing required environment variables: {', '.join(missing)}")
            return False

        if self.STORAGE_BACKEND not in ("postgres", "memory"):
            print(f"❌ Unknown STORAGE_BACKEND: {self.STORAGE_BACKEND}")
            return False

        return True


# Global settings instance
settings = Settings()


def validate_config() -> None:
    """
    Validate configuration and raise error if invalid
    """
    if not settings.validate():
        raise ValueError("Invalid configuration. Check environment variables.")
