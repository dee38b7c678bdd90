"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Environment ("development" creates tables on startup and echoes SQL)
    node_env: str = "production"

    # Database
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_database: str = "companyDB"
    db_create_all: bool | None = None

    # Servers
    port: int = 3000
    grpc_port: int = 50051
    grpc_enabled: bool = True

    # CORS
    frontend_origin: str = "http://localhost:3000"

    # External directory (cebelca.biz)
    cebelca_url: str = "https://www.cebelca.biz/companies"
    cebelca_timeout_seconds: float = 10.0

    # Deleting a company that still has products
    company_delete_policy: Literal["reject", "cascade"] = "reject"

    # Logging
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @property
    def should_create_tables(self) -> bool:
        """Whether to run metadata.create_all on startup."""
        if self.db_create_all is not None:
            return self.db_create_all
        return self.is_development

    @property
    def async_database_url(self) -> str:
        """Database URL using an async driver."""
        database_url = self.database_url or (
            f"postgresql://{self.db_username}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_database}"
        )

        # Convert postgresql:// to postgresql+asyncpg://
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

        return database_url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
