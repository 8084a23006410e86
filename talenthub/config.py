"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class CacheBackend(str, Enum):
    """Cache backend type."""
    SQLITE = "sqlite"
    REDIS = "redis"
    NONE = "none"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class TalentHubConfig(BaseSettings):
    """Configuration for the talenthub proxy, service and CLI."""

    # Upstream API
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TALENT_PROTOCOL_API_KEY", "TALENTHUB_API_KEY"),
    )
    api_base_url: str = "https://api.talentprotocol.com"

    # Where the service reaches the proxy route
    proxy_url: str = "http://localhost:8000"

    # HTTP behaviour
    request_timeout_seconds: float = 10.0
    max_concurrency: int = 5
    search_page_size: int = 25

    # Cache settings
    cache_backend: CacheBackend = CacheBackend.SQLITE
    cache_ttl_seconds: int = 300
    sqlite_path: str = ".talenthub_cache.db"
    redis_url: str = "redis://localhost:6379/0"

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    # Mini-app manifest
    app_name: str = "TalentHub"
    app_description: str = "Find talented developers with verified credentials from Talent Protocol"
    app_icon: str = "/logo.svg"
    app_domains: list[str] = ["talenthub-minikit.vercel.app", "localhost:3000"]

    model_config = {
        "env_prefix": "TALENTHUB_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @property
    def masked_api_key(self) -> str | None:
        """API key reduced to its first and last four characters."""
        if not self.api_key:
            return None
        if len(self.api_key) <= 8:
            return "****"
        return f"{self.api_key[:4]}...{self.api_key[-4:]}"
