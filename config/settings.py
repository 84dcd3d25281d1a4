"""
Configuration management using Pydantic Settings.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # YouTube Data API v3
    youtube_api_key: Optional[str] = Field(None, description="YouTube Data API v3 key")
    youtube_api_key_file: str = Field(
        "client-key",
        description="File holding the API key, used when youtube_api_key is not set"
    )
    youtube_api_base_url: str = Field(
        "https://www.googleapis.com/youtube/v3",
        description="YouTube Data API base URL"
    )
    youtube_request_timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")

    # Pipeline tuning
    youtube_max_concurrent_requests: int = Field(
        10, ge=1, description="Maximum in-flight videos.list requests during enrichment"
    )
    youtube_batch_size: int = Field(
        50, ge=1, le=50, description="Video IDs per videos.list request (API maximum is 50)"
    )
    youtube_handle_strategy: str = Field(
        "search",
        description="Custom handle resolution: search (search + filter) or for_handle (channels.list forHandle)"
    )

    # Output
    output_type: str = Field("multi", description="Output type: multi, single or tsv")

    # Logging Configuration
    log_level: str = Field("INFO", description="Logging level")
    log_file: Optional[str] = Field(None, description="Optional log file path")

    @field_validator('youtube_handle_strategy')
    @classmethod
    def validate_handle_strategy(cls, v):
        """Validate custom handle resolution strategy."""
        if v not in ['search', 'for_handle']:
            raise ValueError('youtube_handle_strategy must be one of: "search" or "for_handle"')
        return v

    @field_validator('output_type')
    @classmethod
    def validate_output_type(cls, v):
        """Validate output type."""
        if v not in ['multi', 'single', 'tsv']:
            raise ValueError('output_type must be one of: "multi", "single" or "tsv"')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    def load_api_key(self) -> str:
        """
        Return the API key from the environment, falling back to the key file.

        The key file is expected to contain just the key, with a possible
        trailing newline.
        """
        if self.youtube_api_key and self.youtube_api_key.strip():
            return self.youtube_api_key.strip()

        key_path = Path(self.youtube_api_key_file)
        if key_path.is_file():
            api_key = key_path.read_text(encoding="utf-8").strip()
            if api_key:
                return api_key

        raise ValueError(
            f"youtube_api_key is not set and no key was found in {self.youtube_api_key_file}"
        )

    def setup_logging(self) -> None:
        """Setup logging configuration."""
        handlers = [logging.StreamHandler()]

        if self.log_file:
            # Create logs directory if it doesn't exist
            log_path = Path(self.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.log_file, encoding='utf-8'))

        logging.basicConfig(
            level=getattr(logging, self.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )

        # Set specific logger levels
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.setup_logging()
    return settings
