"""Application settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    app_url: str = "http://localhost:3000"
    public_dir: str = "public"
    consultation_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when consultation_repository=postgres
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    sendgrid_api_key: str = ""
    email_from: str = "noreply@auraintuitive.com"
    email_from_name: str = "Aura Intuitive"
    admin_password: str = ""
    session_secret: str = ""  # Falls back to admin_password
    session_max_age_seconds: int = 86400  # 24 hours default
    redis_url: str = "redis://localhost:6379/0"
    stripe_event_idempotency_enabled: bool = False
    stripe_event_idempotency_ttl_seconds: int = 86400

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
