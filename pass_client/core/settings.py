"""Client settings and configuration."""

import logging
from functools import lru_cache
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ELASTICSEARCH_LIMIT = 200


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="PASS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Fedora repository
    fedora_base_url: str = Field(
        default="http://localhost:8080/fcrepo/rest/",
        description="Base URL of the Fedora repository",
    )
    fedora_user: str | None = Field(
        default="fedoraAdmin", description="Fedora username for basic auth"
    )
    fedora_password: str | None = Field(
        default="moo", description="Fedora password for basic auth"
    )

    # Elasticsearch index
    elasticsearch_url: str = Field(
        default="http://localhost:9200",
        description="Comma separated list of Elasticsearch host URLs",
    )
    elasticsearch_indices: str = Field(
        default="pass", description="Comma separated list of indices to search"
    )
    elasticsearch_limit: int = Field(
        default=DEFAULT_ELASTICSEARCH_LIMIT,
        description="Default maximum number of records returned by a search",
    )

    # JSON-LD
    jsonld_context: str = Field(
        default="https://oa-pass.github.io/pass-data-model/src/main/resources/context-3.4.jsonld",
        description="JSON-LD context sent with every write",
    )

    # HTTP
    http_agent: str | None = Field(
        default=None, description="User-Agent header sent with every request"
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    @field_validator("fedora_base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Container URLs are resolved relative to the base URL."""
        return v if v.endswith("/") else v + "/"

    @field_validator("elasticsearch_limit", mode="before")
    @classmethod
    def default_on_bad_limit(cls, v: Any) -> int:
        """Fall back to the default limit on negative or unparsable values."""
        try:
            limit = int(v)
        except (TypeError, ValueError):
            logger.warning(
                "Index record limit %r could not be converted to an integer, "
                "using default limit of %d",
                v,
                DEFAULT_ELASTICSEARCH_LIMIT,
            )
            return DEFAULT_ELASTICSEARCH_LIMIT
        if limit < 0:
            logger.warning(
                "Index record limit was a negative integer, using default limit of %d",
                DEFAULT_ELASTICSEARCH_LIMIT,
            )
            return DEFAULT_ELASTICSEARCH_LIMIT
        return limit

    @property
    def elasticsearch_urls(self) -> list[str]:
        """Elasticsearch host URLs in the configured order."""
        return [u.strip().rstrip("/") for u in self.elasticsearch_url.split(",") if u.strip()]

    @property
    def indices(self) -> list[str]:
        """Indices to search."""
        return [i.strip() for i in self.elasticsearch_indices.split(",") if i.strip()]

    def container_url(self, segment: str) -> str:
        """Construct the container URL for a container path segment."""
        return f"{self.fedora_base_url}{segment}"


@lru_cache
def get_settings() -> Settings:
    """Get cached client settings."""
    return Settings()
