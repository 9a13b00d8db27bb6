from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def resolve_env_file() -> str:
    override = os.getenv("TRADE_API_ENV_FILE")
    if override:
        return override
    cwd = Path.cwd()
    for base in (cwd, *cwd.parents):
        candidate = base / ".env"
        if candidate.is_file():
            return str(candidate)
    return ".env"


@dataclass(frozen=True)
class ApiEndpoints:
    """Static endpoint, header and media-type constants for the auth API."""

    base_url: str
    registration_path: str
    login_path: str
    approve_by_email_path: str
    approve_by_push_path: str
    aid_header_name: str
    authorization_header_name: str
    json_media_type: str

    def url_for(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class TradeApiSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TRADE_API_",
        extra="ignore",
    )

    base_url: str = "http://localhost:8080"
    registration_path: str = "/auth/registration"
    login_path: str = "/auth/login"
    approve_by_email_path: str = "/auth/approve/email"
    approve_by_push_path: str = "/auth/approve/push"
    aid_header_name: str = "X-App-Instance-Id"
    authorization_header_name: str = "Authorization"
    json_media_type: str = "application/json; charset=utf-8"
    request_timeout_seconds: int = 30

    def endpoints(self) -> ApiEndpoints:
        return ApiEndpoints(
            base_url=self.base_url,
            registration_path=self.registration_path,
            login_path=self.login_path,
            approve_by_email_path=self.approve_by_email_path,
            approve_by_push_path=self.approve_by_push_path,
            aid_header_name=self.aid_header_name,
            authorization_header_name=self.authorization_header_name,
            json_media_type=self.json_media_type,
        )


def load_trade_api_settings_uncached() -> TradeApiSettings:
    return TradeApiSettings(_env_file=resolve_env_file())  # pyright: ignore[reportCallIssue]


@lru_cache
def get_trade_api_settings() -> TradeApiSettings:
    """Load the auth API settings from the environment and cache them.

    Returns:
        The resolved settings object.
    """
    return load_trade_api_settings_uncached()
