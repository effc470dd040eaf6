from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Concrete Mix Log"
    env: str = Field(default="dev", alias="ENV")
    tz: str = Field(default="Asia/Bishkek", alias="TZ")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="sqlite+pysqlite:///./mixlog.db", alias="DATABASE_URL")

    api_auth_enabled: bool = Field(default=False, alias="API_AUTH_ENABLED")
    api_token: str = Field(default="", alias="API_TOKEN")
    default_owner_id: str = Field(default="demo-user", alias="DEFAULT_OWNER_ID")

    page_size: int = Field(default=25, alias="PAGE_SIZE")
    # summaries read a single large page, same as the table view
    summary_page_size: int = Field(default=1000, alias="SUMMARY_PAGE_SIZE")

settings = Settings()
