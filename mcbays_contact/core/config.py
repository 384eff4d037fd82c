from typing import Optional
from pydantic_settings import BaseSettings


DEFAULT_FROM_EMAIL = "no-reply@mcbays.com"
DEFAULT_FROM_NAME = "McBays Website"


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Optional[str] = None

    # CORS (single origin, "*" when unset)
    ALLOWED_ORIGIN: Optional[str] = None

    # Contact form routing
    TO_EMAIL: Optional[str] = None  # Recipient for every submission
    FROM_EMAIL: Optional[str] = None
    FROM_NAME: Optional[str] = None

    # MailChannels Email Configuration
    MAILCHANNELS_API_URL: str = "https://api.mailchannels.net/tx/v1/send"
    MAILCHANNELS_API_KEY: Optional[str] = None  # Sent as X-Api-Key when set

    # Header carrying the caller IP, set by the fronting proxy
    CLIENT_IP_HEADER: str = "cf-connecting-ip"

    # HTTP Settings
    HTTP_REQUEST_TIMEOUT_SECONDS: float = 10.0  # Timeout for the provider call

    # Log Level
    LOG_LEVEL: str = "INFO"

    # Logging Configuration
    LOGGING_FRAME_DEPTH: int = (
        6  # Frame depth for finding logging call origin in stack trace
    )

    # Sentry Configuration
    SENTRY_DSN: Optional[str] = None  # Sentry DSN for error tracking
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # API Configuration
    PROJECT_NAME: str = "McBays-Contact"
    VERSION: str = "1.0.0"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        frozen = True

    # --------- Properties ---------
    @property
    def is_local(self) -> bool:
        """
        Check if running in local development environment.

        Supported values:
        - "local" or "local_dev" → True (local development)
        - "dev", "staging", "prod", or anything else → False (deployed)
        """
        if not self.ENVIRONMENT:
            return False
        return self.ENVIRONMENT.lower() in ["local", "local_dev"]

    @property
    def cors_allow_origin(self) -> str:
        return self.ALLOWED_ORIGIN or "*"

    @property
    def sender_email(self) -> str:
        return self.FROM_EMAIL or DEFAULT_FROM_EMAIL

    @property
    def sender_name(self) -> str:
        return self.FROM_NAME or DEFAULT_FROM_NAME


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
