"""
Configuration management

Settings are read with pydantic-settings from environment variables and a .env file
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ======================
    # Elasticsearch
    # ======================
    es_host: str = Field(default="localhost", description="ES host")
    es_port: int = Field(default=9200, description="ES port")
    es_scheme: str = Field(default="http", description="ES scheme")
    es_username: Optional[str] = Field(default="elastic", description="ES username")
    es_password: Optional[str] = Field(
        default=None,
        description="ES password",
        validation_alias="ELASTIC_PASSWORD",
    )
    es_index: str = Field(default="docsync", description="Name of the synchronized index")
    es_timeout: int = Field(default=30, ge=1, description="Request timeout (seconds)")
    es_max_retries: int = Field(default=0, ge=0, description="Client-level retries")
    es_verify_certs: bool = Field(default=False, description="Verify TLS certificates")

    # ======================
    # Application
    # ======================
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format (json, text)")

    @property
    def elasticsearch_url(self) -> str:
        """Elasticsearch base URL"""
        return f"{self.es_scheme}://{self.es_host}:{self.es_port}"

    @property
    def es_url(self) -> str:
        """Alias of elasticsearch_url"""
        return self.elasticsearch_url

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log level must be one of: {', '.join(allowed)}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("log format must be 'json' or 'text'")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance"""
    return Settings()
