from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Union

from twitch_auth.clients.config import StrategyConfig
from twitch_auth.clients.errors import TwitchAuthError
from twitch_auth.clients.profile import NormalizedProfile


# (access_token, refresh_token, profile) -> user, sync or async
VerifyCallback = Callable[[str, Optional[str], NormalizedProfile], Union[Any, Awaitable[Any]]]

# done(err, profile); exactly one of the two is set
DoneCallback = Callable[[Optional[TwitchAuthError], Optional[NormalizedProfile]], Any]


class OAuthStrategy(Protocol):
    name: str
    config: StrategyConfig

    def authorization_params(self, options: Mapping[str, Any] | None = None) -> Dict[str, Any]:
        ...

    async def user_profile(self, access_token: str) -> NormalizedProfile:
        ...
