from __future__ import annotations

import json as jsonlib
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from twitch_auth.clients.errors import ProfileParseError


PROVIDER = "twitch"

# normalized field -> Helix user field
_OPTIONAL_STR_FIELDS = {
    "email": "email",
    "description": "description",
    "avatar_url": "profile_image_url",
    "offline_image_url": "offline_image_url",
    "broadcaster_type": "broadcaster_type",
    "created_at": "created_at",
}


@dataclass(frozen=True)
class NormalizedProfile:
    id: str
    login_name: str
    display_name: str
    email: Optional[str] = None
    description: Optional[str] = None
    avatar_url: Optional[str] = None
    offline_image_url: Optional[str] = None
    broadcaster_type: Optional[str] = None
    view_count: Optional[int] = None
    created_at: Optional[str] = None
    raw: str = field(default="", repr=False)
    json: Any = field(default=None, repr=False, hash=False)
    provider: str = PROVIDER

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe view of the profile, without the raw body."""
        return {
            "provider": self.provider,
            "id": self.id,
            "login_name": self.login_name,
            "display_name": self.display_name,
            "email": self.email,
            "description": self.description,
            "avatar_url": self.avatar_url,
            "offline_image_url": self.offline_image_url,
            "broadcaster_type": self.broadcaster_type,
            "view_count": self.view_count,
            "created_at": self.created_at,
        }


def _first_user(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, dict):
        raise ProfileParseError("Unexpected user-info response: expected a JSON object")
    data = payload.get("data")
    if not isinstance(data, list):
        raise ProfileParseError("Unexpected user-info response: missing 'data' list")
    if not data:
        raise ProfileParseError("User-info response contained no user entry")
    user = data[0]
    if not isinstance(user, dict):
        raise ProfileParseError("Unexpected user-info response: user entry is not an object")
    return user


def _optional_str(user: Mapping[str, Any], key: str) -> Optional[str]:
    value = user.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ProfileParseError(f"Unexpected type for '{key}'", details={"field": key})


def normalize_profile(body: str) -> NormalizedProfile:
    """Parse a Helix ``/users`` body into a :class:`NormalizedProfile`.

    Only the first entry of ``data`` is used.
    """
    try:
        payload = jsonlib.loads(body)
    except (ValueError, RecursionError) as exc:
        raise ProfileParseError("Failed to parse user profile", cause=exc) from exc

    user = _first_user(payload)

    user_id = user.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, (str, int)) or str(user_id) == "":
        raise ProfileParseError("User entry is missing 'id'", details={"field": "id"})
    login = user.get("login")
    if not isinstance(login, str) or not login:
        raise ProfileParseError("User entry is missing 'login'", details={"field": "login"})
    display_name = _optional_str(user, "display_name") or login

    view_count = user.get("view_count")
    if view_count is not None and (isinstance(view_count, bool) or not isinstance(view_count, int)):
        raise ProfileParseError("Unexpected type for 'view_count'", details={"field": "view_count"})

    optional = {name: _optional_str(user, key) for name, key in _OPTIONAL_STR_FIELDS.items()}

    return NormalizedProfile(
        id=str(user_id),
        login_name=login,
        display_name=display_name,
        view_count=view_count,
        raw=body,
        json=payload,
        **optional,
    )
