from twitch_auth.clients.config import StrategyConfig, resolve_config
from twitch_auth.clients.errors import ConfigError, ProfileFetchError, ProfileParseError, TwitchAuthError
from twitch_auth.clients.profile import NormalizedProfile, normalize_profile
from twitch_auth.clients.twitch import TwitchStrategy, build_authorization_params

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
