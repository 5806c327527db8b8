"""Application settings (env/.env)."""

from __future__ import annotations

from pathlib import Path

from pydantic import AnyHttpUrl, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the MCP server and the site index it explores."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    site_url: AnyHttpUrl | None = Field(default=None, alias="SITE_URL")
    site_index_path: str = Field(default="/assets/search_index.json", alias="SITE_INDEX_PATH")
    site_index_file: Path | None = Field(default=None, alias="SITE_INDEX_FILE")
    site_base_path: str = Field(default="", alias="SITE_BASE_PATH")

    content_root: str = Field(
        default="content",
        alias="CONTENT_ROOT",
        min_length=1,
        pattern=r"^[^/]+$",
    )
    search_max_results: int = Field(default=40, alias="SEARCH_MAX_RESULTS", ge=1)

    mcp_api_key: str = Field(alias="MCP_API_KEY", min_length=1)
    mcp_host: str = Field(default="127.0.0.1", alias="MCP_HOST")
    mcp_port: int = Field(default=5005, alias="MCP_PORT", ge=1, le=65535)
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    http_timeout_seconds: float = Field(
        default=15.0,
        alias="HTTP_TIMEOUT_SECONDS",
        gt=0,
    )

    @model_validator(mode="after")
    def _require_index_source(self) -> Settings:
        if self.site_url is None and self.site_index_file is None:
            raise ValueError("Either SITE_URL or SITE_INDEX_FILE must be set")
        return self
