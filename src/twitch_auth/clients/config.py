from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from twitch_auth.clients.errors import ConfigError


AUTHORIZATION_URL = "https://id.twitch.tv/oauth2/authorize"
TOKEN_URL = "https://id.twitch.tv/oauth2/token"
USER_PROFILE_URL = "https://api.twitch.tv/helix/users"
DEFAULT_SCOPE = "user:read:email"
CLIENT_ID_HEADER = "Client-Id"

REQUIRED_OPTIONS = ("client_id", "client_secret", "callback_url")


@dataclass(frozen=True)
class StrategyConfig:
    client_id: str
    client_secret: str
    callback_url: str
    authorization_url: str = AUTHORIZATION_URL
    token_url: str = TOKEN_URL
    user_profile_url: str = USER_PROFILE_URL
    scope: str = DEFAULT_SCOPE
    custom_headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Freeze the header mapping so a resolved config cannot drift
        object.__setattr__(self, "custom_headers", MappingProxyType(dict(self.custom_headers)))


def _option(options: Mapping[str, Any], key: str) -> str | None:
    value = options.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_config(options: Mapping[str, Any] | None) -> StrategyConfig:
    """Merge caller options with the Twitch defaults.

    Explicit, non-empty caller values always win over the defaults.

    Raises:
        ConfigError: if ``client_id``, ``client_secret`` or ``callback_url``
            is missing or empty.
    """
    options = options or {}
    for key in REQUIRED_OPTIONS:
        if _option(options, key) is None:
            raise ConfigError(f"Missing required option: {key}", details={"option": key})

    client_id = _option(options, "client_id")
    headers = options.get("custom_headers")
    if headers is None:
        headers = {CLIENT_ID_HEADER: client_id}

    return StrategyConfig(
        client_id=client_id,
        client_secret=_option(options, "client_secret"),
        callback_url=_option(options, "callback_url"),
        authorization_url=_option(options, "authorization_url") or AUTHORIZATION_URL,
        token_url=_option(options, "token_url") or TOKEN_URL,
        user_profile_url=_option(options, "user_profile_url") or USER_PROFILE_URL,
        scope=_option(options, "scope") or DEFAULT_SCOPE,
        custom_headers={str(k): str(v) for k, v in headers.items()},
    )
