"""Twitch OAuth 2.0 sign-in strategy."""
from twitch_auth.clients import (
    ConfigError,
    NormalizedProfile,
    ProfileFetchError,
    ProfileParseError,
    StrategyConfig,
    TwitchAuthError,
    TwitchStrategy,
    build_authorization_params,
    normalize_profile,
    resolve_config,
)

__all__ = [
    "ConfigError",
    "NormalizedProfile",
    "ProfileFetchError",
    "ProfileParseError",
    "StrategyConfig",
    "TwitchAuthError",
    "TwitchStrategy",
    "build_authorization_params",
    "normalize_profile",
    "resolve_config",
]
