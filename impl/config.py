from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


ROOT_ENV_FILE = Path(__file__).resolve().parents[1] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ROOT_ENV_FILE), env_file_encoding="utf-8", extra="ignore")

    app_name: str = "GitHub Gateway"
    env: str = "dev"
    log_level: str = "INFO"
    request_logging: bool = True

    host: str = "0.0.0.0"
    port: int = 8080

    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    github_timeout_seconds: Optional[float] = None  # None = requests default (no timeout)

    jwt_secret_key: str = "change_me_in_prod"
    session_cookie_name: str = "jwt"
    session_ttl_seconds: int = 300
    session_cookie_secure: bool = False

    cors_allow_origins: str = ""

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = (v or "").strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v

    @field_validator("session_ttl_seconds")
    @classmethod
    def _validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be positive")
        return v

    @property
    def cors_allow_origins_list(self) -> List[str]:
        s = (self.cors_allow_origins or "").strip()
        if not s:
            return []
        if s == "*":
            return ["*"]
        return [x.strip() for x in s.split(",") if x.strip()]


settings = Settings()
