from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # uefa endpoints
    uefa_fixtures_url: str = "https://match.uefa.com/v5/matches"
    uefa_statistics_url: str = "https://matchstats.uefa.com/v2/team-statistics"
    competition_id: str = "27"

    # pacing / retries
    requests_per_second: float = Field(default=2.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)
    retry_base_delay_s: float = Field(default=1.0, ge=0)
    retry_max_delay_s: float = Field(default=30.0, ge=0)
    retry_not_found: bool = True

    page_size: int = Field(default=100, ge=1)

    # http
    http_timeout_s: float = Field(default=30.0, gt=0)
    http_connect_timeout_s: float = Field(default=10.0, gt=0)
    user_agent: str = "futsal-stats/0.1"

    # logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    output_dir: Path = Path("data/uefa-scrape")


settings = Settings()
