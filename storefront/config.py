"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Redis document store
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    STORE_KEY_PREFIX: str = os.getenv("STORE_KEY_PREFIX", "storefront:")

    # Decoder / LLM settings
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    OPENAI_BASE_URL: str | None = os.getenv("OPENAI_BASE_URL")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    CHAT_MAX_TOKENS: int = int(os.getenv("CHAT_MAX_TOKENS", "300"))
    CHAT_TEMPERATURE: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))

    # Chat assistant
    CHAT_MAX_PRODUCTS: int = int(os.getenv("CHAT_MAX_PRODUCTS", "5"))
    CHAT_FALLBACK_PRODUCTS: int = int(os.getenv("CHAT_FALLBACK_PRODUCTS", "3"))
    STORE_CONTEXT: str = os.getenv(
        "STORE_CONTEXT",
        "An online store specializing in electronics and technology products.",
    )
    SUPPORT_CONTACT: str = os.getenv(
        "SUPPORT_CONTACT",
        "our support team through the contact page",
    )

    # Pagination
    STOREFRONT_PAGE_SIZE: int = int(os.getenv("STOREFRONT_PAGE_SIZE", "12"))
    ADMIN_PAGE_SIZE: int = int(os.getenv("ADMIN_PAGE_SIZE", "10"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "50"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def decoder_enabled(self) -> bool:
        """Return True when a decoder client can be initialized."""
        return bool(self.OPENAI_API_KEY)

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
