"""FileDive configuration — loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "FILEDIVE_", "env_file": ".env"}

    # Hosted model
    backend: str = "gemini"
    google_api_key: str = ""
    anthropic_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    claude_model: str = "claude-sonnet-4-5"
    request_timeout: float = 120.0

    # Intake
    max_upload_bytes: int = 1_000_000_000

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    debug: bool = False


settings = Settings()
