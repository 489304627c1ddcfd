from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _package_version(default: str = "0.1.0") -> str:
    try:
        return pkg_version("twitch-auth")
    except PackageNotFoundError:
        return default


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = True
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = "info"


class CorsSettings(BaseModel):
    allow_origins: str = "*"  # comma-separated or "*"
    allow_methods: str = "GET"  # comma-separated
    allow_headers: str = "*"  # comma-separated or "*"

    def origins(self) -> List[str]:
        return _split(self.allow_origins, star=True)

    def methods(self) -> List[str]:
        return [part.upper() for part in _split(self.allow_methods)]

    def headers(self) -> List[str]:
        return _split(self.allow_headers, star=True)


class TwitchSettings(BaseModel):
    client_id: str = ""
    client_secret: str = ""
    callback_url: str = "http://localhost:8000/auth/twitch/callback"
    scope: str = "user:read:email"

    # Overrides; Twitch defaults apply when unset
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    user_profile_url: Optional[str] = None

    def strategy_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "callback_url": self.callback_url,
            "scope": self.scope,
        }
        for key in ("authorization_url", "token_url", "user_profile_url"):
            value = getattr(self, key)
            if value:
                options[key] = value
        return options


class SessionSettings(BaseModel):
    secret_key: str = "dev-secret-change-me"
    cookie_name: str = "twitch_auth_session"
    https_only: bool = False


class LoggingSettings(BaseModel):
    as_json: bool = False


class Settings(BaseSettings):
    """Application settings loaded from environment (and .env)."""

    app_name: str = "Twitch Auth"
    app_version: str = Field(default_factory=_package_version)

    server: ServerSettings = ServerSettings()
    cors: CorsSettings = CorsSettings()
    twitch: TwitchSettings = TwitchSettings()
    session: SessionSettings = SessionSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_prefix="TWITCH_AUTH_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def _split(value: str, star: bool = False) -> List[str]:
    value = value.strip()
    if star and value in ("", "*"):
        return ["*"]
    return [part.strip() for part in value.split(",") if part.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
