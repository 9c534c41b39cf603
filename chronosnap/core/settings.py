"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Keeps the generation credential, store URL and host/port tunable without code changes.
"""

# --- Purpose: robust settings with env-file support and safe handling of extra keys.
from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # <-- prevents crashes if extra env vars exist
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=8000, description="Port for FastAPI/Uvicorn")

    # CORS
    cors_allow_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed origins for browser apps"
    )

    log_level: str = Field(default="INFO", description="Root log level")

    # ---- Image generation (Gemini) ----
    # The browser build used API_KEY; accept the usual Google names too.
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "gemini_api_key"),
    )
    gemini_image_model: str = Field(default="gemini-2.5-flash-image")

    # ---- Visit log (redis list) ----
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("REDIS_URL", "KV_URL", "redis_url"),
    )
    visit_log_key: str = Field(default="access_logs")
    visit_log_fetch_limit: int = Field(default=100, ge=1)

    # where the client-side beacon posts on mount
    visit_beacon_url: str = Field(default="http://localhost:8000/api/log-visit")

    # prefix of the downloadable result file name
    download_label: str = Field(default="aitor-chronosnap")

settings = Settings()
