from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Google Gemini Direct
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-3-flash-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    generation_timeout: float = 60.0

    # Source fetching through CORS relays
    fetch_timeout: float = 8.0
    source_char_limit: int = 15000

    # Screenshots without a data URI prefix are assumed to be JPEG
    default_image_mime_type: str = "image/jpeg"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
