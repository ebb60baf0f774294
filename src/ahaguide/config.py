"""Configuration helpers shared across the MCP host, REST app and CLI."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ScoringWeights


class Settings(BaseSettings):
    """Environment-backed settings."""

    mcp_host: str = Field("0.0.0.0", alias="MCP_HOST")
    mcp_port: int = Field(8787, alias="PORT")
    mcp_path: str = Field("/mcp", alias="MCP_PATH")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", alias="LOG_LEVEL")
    guidelines_path: Path = Field(Path("guidelines.json"), alias="GUIDELINES_PATH")
    public_dir: Path = Field(Path("public"), alias="PUBLIC_DIR")
    widget_file: str = Field("aha-widget.html", alias="WIDGET_FILE")
    public_base_url: str = Field("http://localhost:8787", alias="PUBLIC_BASE_URL")
    result_limit: int = Field(5, ge=1, alias="RESULT_LIMIT")
    score_weights: ScoringWeights = Field(default_factory=ScoringWeights, alias="SCORE_WEIGHTS")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=(
            Path(__file__).resolve().parent.parent.parent / ".env",
            Path.cwd() / ".env",
        ),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def widget_path(self) -> Path:
        return self.public_dir / self.widget_file


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
