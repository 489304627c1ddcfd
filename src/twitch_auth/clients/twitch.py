from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from twitch_auth.clients.config import StrategyConfig, resolve_config
from twitch_auth.clients.errors import ProfileFetchError, TwitchAuthError
from twitch_auth.clients.profile import NormalizedProfile, normalize_profile
from twitch_auth.clients.types import DoneCallback, VerifyCallback


logger = logging.getLogger(__name__)

FORCE_VERIFY_OPTION = "force_verify"


def build_authorization_params(options: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Extra query parameters for the Twitch authorize URL.

    ``force_verify`` is emitted whenever the option key is present, even when
    its value is falsy. Nothing is emitted otherwise.
    """
    params: Dict[str, Any] = {}
    if options and FORCE_VERIFY_OPTION in options:
        params["force_verify"] = bool(options[FORCE_VERIFY_OPTION])
    return params


class TwitchStrategy:
    """Twitch sign-in strategy.

    Resolves Twitch endpoint defaults at construction, builds the extra
    authorization parameters and turns an access token into a
    :class:`NormalizedProfile`. Token exchange belongs to the OAuth engine
    driving this strategy.

    Example::

        strategy = TwitchStrategy(
            {
                "client_id": "123-456-789",
                "client_secret": "shhh-its-a-secret",
                "callback_url": "https://www.example.net/auth/twitch/callback",
            },
            verify=find_or_create_user,
        )
    """

    name = "twitch"

    def __init__(
        self,
        options: Mapping[str, Any] | None,
        verify: Optional[VerifyCallback] = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.config: StrategyConfig = resolve_config(options)
        self._verify = verify
        self._http_client = http_client
        self._timeout = timeout

    def authorization_params(self, options: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        return build_authorization_params(options)

    async def user_profile(self, access_token: str) -> NormalizedProfile:
        """Fetch the authenticated user from Helix and normalize it.

        Raises:
            ProfileFetchError: on transport failure or non-2xx status.
            ProfileParseError: when the body is not a usable user listing.
        """
        headers = dict(self.config.custom_headers)
        headers["Authorization"] = f"Bearer {access_token}"
        url = self.config.user_profile_url

        logger.debug("fetching twitch user profile", extra={"url": url})
        try:
            if self._http_client is not None:
                resp = await self._http_client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.get(url, headers=headers)
        except (httpx.HTTPError, UnicodeEncodeError) as exc:
            logger.warning("twitch user profile request failed: %s", exc)
            raise ProfileFetchError("Failed to fetch user profile", cause=exc) from exc

        if not resp.is_success:
            logger.warning("twitch user profile request returned %s", resp.status_code)
            raise ProfileFetchError(
                "Failed to fetch user profile",
                status_code=resp.status_code,
                details=_safe_json(resp),
            )

        try:
            return normalize_profile(resp.text)
        except TwitchAuthError as exc:
            logger.warning("twitch user profile could not be parsed: %s", exc)
            raise

    async def authenticate(self, access_token: str, refresh_token: str | None = None) -> Any:
        """Fetch the profile and hand it to the verify callback.

        Returns whatever ``verify`` returns, or the profile itself when no
        callback was configured.
        """
        profile = await self.user_profile(access_token)
        if self._verify is None:
            return profile
        result = self._verify(access_token, refresh_token, profile)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def load_user_profile(self, access_token: str, done: DoneCallback) -> None:
        """Callback-style wrapper around :meth:`user_profile`."""
        try:
            profile = await self.user_profile(access_token)
        except TwitchAuthError as exc:
            done(exc, None)
            return
        done(None, profile)


def _safe_json(resp: httpx.Response) -> Dict[str, Any]:
    try:
        payload = resp.json()
    except (ValueError, RecursionError):
        return {"raw": resp.text}
    return payload if isinstance(payload, dict) else {"raw": resp.text}
