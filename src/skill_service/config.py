"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "skill-service"

    # CORS
    cors_origins: list[str] = ["*"]

    # Request verification
    application_id: str = ""  # Skill application id; empty disables the check
    verify_timestamp: bool = True

    # Skill content
    skill_name: str = "Echo Radio"
    stream_url: str = ""  # HTTPS audio stream played by PlayStreamIntent

    class Config:
        env_prefix = "SKILL_"
        case_sensitive = False


settings = Settings()
