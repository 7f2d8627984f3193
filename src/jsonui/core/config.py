"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Interpreter settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="JSONUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Streaming
    stream_api_url: str = Field(
        default="http://localhost:3000/api/generate", description="Patch stream endpoint"
    )
    stream_timeout: float = Field(default=60.0, gt=0, description="Stream request timeout")
    max_line_size: int = Field(default=256 * 1024, gt=0, description="Max patch line size (bytes)")
    max_json_depth: int = Field(default=32, gt=0, description="Max patch nesting depth")

    # Data model
    strict_paths: bool = Field(
        default=False, description="Raise on type conflicts instead of overwriting mid-path"
    )

    # Catalog
    catalog_name: str = Field(default="unnamed", description="Default catalog name")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
