"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    partitura_env: str = "development"
    partitura_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Notation renderer (verovio toolkit options)
    renderer_page_width: int = 2100
    renderer_scale: int = 40

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
