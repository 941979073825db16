"""Configuration management using Pydantic Settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="CADERNINHO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./caderninho.db"

    # Service
    service_name: str = "caderninho-api"
    log_level: str = "INFO"

    # Installments
    # Due day is capped at 28 so it exists in every month, February included
    installment_due_day: int = Field(default=15, ge=1, le=28)
    max_installments: int = Field(default=120, ge=1)

    # Statements
    statement_min_year: int = 2000
    statement_max_year: int = 2100


settings = Settings()
