"""Application settings loaded from environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Status Record Service"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 8000
    database_url: str = "sqlite:///./status.db"
    database_echo: bool = False
    # All status rows share one partition so range/order queries see a single scope
    status_table: str = "statusentity"
    status_root_key: str = "statusroot"
    # Wire layout for the changeDate field (strftime/strptime syntax, UTC)
    date_time_layout: str = "%Y-%m-%dT%H:%M:%SZ"
    # What submit does with a changeDate that does not match the layout
    submit_date_policy: Literal["reject", "now"] = "reject"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
