from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from twitch_auth.clients.errors import ConfigError, TwitchAuthError


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConfigError)
    async def config_error_handler(_, exc: ConfigError):
        return JSONResponse(status_code=500, content={"detail": f"Twitch strategy misconfigured: {exc}"})

    @app.exception_handler(TwitchAuthError)
    async def twitch_error_handler(_, exc: TwitchAuthError):
        return JSONResponse(
            status_code=502,
            content={"detail": f"Twitch API error: {exc}", "status_code": exc.status_code},
        )

    @app.exception_handler(httpx.HTTPError)
    async def httpx_error_handler(_, exc: httpx.HTTPError):
        return JSONResponse(status_code=502, content={"detail": f"External API error: {str(exc)}"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_, exc: Exception):
        logger.error("unhandled error", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
