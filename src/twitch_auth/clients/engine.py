"""Wiring between a strategy and Authlib's Starlette OAuth client.

Authlib owns the redirect, state checks and code-for-token exchange; the
strategy contributes endpoints, credentials and extra authorize parameters.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping

from authlib.integrations.starlette_client import OAuth

from twitch_auth.clients.types import OAuthStrategy


def register_strategy(oauth: OAuth, strategy: OAuthStrategy):
    """Register ``strategy`` with ``oauth`` and return the Authlib client.

    Idempotent per registry.
    """
    client = oauth.create_client(strategy.name)
    if client is not None:
        return client

    cfg = strategy.config
    return oauth.register(
        name=strategy.name,
        client_id=cfg.client_id,
        client_secret=cfg.client_secret,
        authorize_url=cfg.authorization_url,
        access_token_url=cfg.token_url,
        client_kwargs={
            "scope": cfg.scope,
            # Twitch rejects HTTP basic auth on the token endpoint
            "token_endpoint_auth_method": "client_secret_post",
        },
    )


def authorization_query(strategy: OAuthStrategy, options: Mapping[str, Any] | None) -> Dict[str, str]:
    """Strategy authorize params rendered as query-string values."""
    query: Dict[str, str] = {}
    for key, value in strategy.authorization_params(options).items():
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query
