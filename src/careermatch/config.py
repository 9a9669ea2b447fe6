from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "CareerMatch"
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    log_level: str = "INFO"
    redact_log_pii: bool = True
    secret_key: str = "change-me"

    database_url: str = "sqlite:///./data/careermatch.db"
    upload_dir: Path = Path("./data/uploads")
    max_resume_bytes: int = 5 * 1024 * 1024

    auth_url: str = "http://localhost:54321"
    auth_anon_key: str = ""
    auth_redirect_url: str = "http://127.0.0.1:8000/"
    auth_timeout_sec: int = 15

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_timeout_sec: int = 60
    suggestion_max_tokens: int = 2000
    suggestion_temperature: float = 0.7

    legacy_error_status: bool = False

    web_ui_enabled: bool = True
    session_cookie_name: str = "cm_access_token"
    session_cookie_secure: bool = False

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, value: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if value not in allowed:
            raise ValueError(f"app_env must be one of {sorted(allowed)}")
        return value

    @field_validator("suggestion_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if value < 0 or value > 2:
            raise ValueError("suggestion_temperature must be between 0 and 2")
        return value

    @property
    def auth_base_url(self) -> str:
        return self.auth_url.rstrip("/") + "/auth/v1"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
