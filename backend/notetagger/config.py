from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NOTETAGGER_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    # Reverse proxies whose X-Forwarded-* headers are honoured; empty disables them
    forwarded_allow_ips: list[str] = []
    root_path: str = ""

    # Vault
    vault_path: str = "./vault"
    tagger_settings_file: str = "./vault/.notetagger/settings.json"

    # Completion endpoint
    llm_timeout_seconds: float = 60.0  # Applied around the single completion call


settings = Settings()
