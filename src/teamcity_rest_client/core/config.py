"""Client configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Connection and logging settings, read from ``TEAMCITY_*`` variables."""

    # Server
    host: str = Field(default="localhost")
    port: int = Field(default=8111)
    scheme: str = Field(default="http")

    # Credentials (both or neither)
    user: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)

    # Transport
    timeout: float = Field(default=30.0)
    verify_ssl: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # json or console
    log_file: Optional[str] = Field(default=None)

    @validator("scheme")
    def validate_scheme(cls, v):
        """Validate URL scheme."""
        valid_schemes = ["http", "https"]
        if v.lower() not in valid_schemes:
            raise ValueError(f"Scheme must be one of: {valid_schemes}")
        return v.lower()

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("log_format")
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    class Config:
        """Pydantic configuration."""
        env_prefix = "TEAMCITY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get client settings (cached)."""
    return Settings()


# Global settings instance
settings = get_settings()
