"""Application configuration via pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repo root: backend/src/gamecalc/config.py -> parents[3]
REPO_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # "production" keeps loaded JSON for the life of the process;
    # anything else re-reads on every call so edits apply instantly.
    environment: str = "development"

    @computed_field
    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    # Static JSON datasets (relative paths resolve from repo root)
    knowledge_dir: str = "knowledge"

    @computed_field
    @property
    def knowledge_path(self) -> Path:
        path = Path(self.knowledge_dir)
        if path.is_absolute():
            return path
        return REPO_ROOT / path

    # Upgrade checker dead zone: |score delta| <= threshold is a sidegrade
    verdict_threshold: float = 0.5


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
