"""Application settings - loaded from environment variables / .env"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # CORE
    # ===========================================
    environment: str = "development"
    database_url: str
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # ===========================================
    # OPENAI (embeddings)
    # ===========================================
    openai_api_key: str
    embedding_model: str = "text-embedding-3-small"
    embedding_timeout_seconds: float = 20.0

    # ===========================================
    # SEARCH
    # ===========================================
    search_rate_limit: str = "60/minute"

    # ===========================================
    # ADMIN
    # ===========================================
    admin_api_key: Optional[str] = None

    # ===========================================
    # PROPERTIES
    # ===========================================
    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def async_database_url(self) -> str:
        """
        Hosting providers hand out postgresql:// or postgres:// URLs,
        asyncpg needs postgresql+asyncpg://.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
