from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from twitch_auth.clients.engine import authorization_query, register_strategy
from twitch_auth.clients.errors import TwitchAuthError
from twitch_auth.clients.profile import NormalizedProfile
from twitch_auth.clients.twitch import TwitchStrategy
from twitch_auth.settings import get_settings


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Session keys
USER_KEY = "user"
ERROR_KEY = "auth_error"


def verify_user(access_token: str, refresh_token: Optional[str], profile: NormalizedProfile) -> Dict[str, Any]:
    """Application verify step: the demo app keeps the profile as its user."""
    return profile.to_dict()


def get_twitch_strategy() -> TwitchStrategy:
    s = get_settings()
    return TwitchStrategy(s.twitch.strategy_options(), verify=verify_user)


def get_twitch_client(request: Request, strategy: TwitchStrategy = Depends(get_twitch_strategy)):
    return register_strategy(request.app.state.oauth, strategy)


def _parse_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@router.get("/twitch/login")
async def login(
    request: Request,
    strategy: TwitchStrategy = Depends(get_twitch_strategy),
    client=Depends(get_twitch_client),
):
    options: Dict[str, Any] = {}
    if "force_verify" in request.query_params:
        options["force_verify"] = _parse_flag(request.query_params["force_verify"])

    query = authorization_query(strategy, options)
    return await client.authorize_redirect(request, strategy.config.callback_url, **query)


@router.get("/twitch/callback")
async def callback(
    request: Request,
    strategy: TwitchStrategy = Depends(get_twitch_strategy),
    client=Depends(get_twitch_client),
):
    # Provider sign-in error
    if "error" in request.query_params:
        request.session[ERROR_KEY] = {
            "error": request.query_params.get("error"),
            "error_description": request.query_params.get("error_description"),
        }
        return RedirectResponse(url="/")

    try:
        token = await client.authorize_access_token(request)
    except OAuthError as e:
        logger.warning("twitch token exchange failed: %s", e)
        request.session[ERROR_KEY] = {
            "error": e.error or "oauth_error",
            "error_description": e.description or str(e),
        }
        return RedirectResponse(url="/")

    access_token = token.get("access_token")
    if not access_token:
        logger.warning("twitch token response carried no access_token")
        request.session[ERROR_KEY] = {
            "error": "invalid_token",
            "error_description": "Token response did not include an access_token",
        }
        return RedirectResponse(url="/")

    try:
        user = await strategy.authenticate(access_token, token.get("refresh_token"))
    except TwitchAuthError as e:
        error_payload: Dict[str, Any] = {
            "error": "profile_error",
            "error_description": str(e),
            "status_code": e.status_code,
        }
        if e.details:
            error_payload["details"] = e.details
        request.session[ERROR_KEY] = error_payload
        return RedirectResponse(url="/")

    request.session.pop(ERROR_KEY, None)
    request.session[USER_KEY] = user
    return RedirectResponse(url="/")


@router.post("/logout")
@router.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/")
