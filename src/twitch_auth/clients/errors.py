from __future__ import annotations

from typing import Any, Mapping


class TwitchAuthError(Exception):
    """Base error for the Twitch strategy."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = dict(details or {})
        self.cause = cause


class ConfigError(TwitchAuthError):
    """Raised when required strategy options are missing."""


class ProfileFetchError(TwitchAuthError):
    """Raised when the user-info request fails or returns a non-2xx status."""


class ProfileParseError(TwitchAuthError):
    """Raised when the user-info response cannot be turned into a profile."""
