from authlib.integrations.starlette_client import OAuth
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from twitch_auth.api import auth_router, system_router
from twitch_auth.app.exceptions import register_exception_handlers
from twitch_auth.app.logging_config import configure_logging
from twitch_auth.middleware.request_id import RequestIDMiddleware
from twitch_auth.settings import get_settings


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Sign in with Twitch",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.server.debug,
    )

    # Authlib client registry, per app
    app.state.oauth = OAuth()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins(),
        allow_credentials=True,
        allow_methods=settings.cors.methods(),
        allow_headers=settings.cors.headers(),
    )

    # Sessions; lax so the cookie survives the redirect back from Twitch
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
        same_site="lax",
        https_only=settings.session.https_only,
    )

    # Routers
    app.include_router(system_router)
    app.include_router(auth_router)

    # Middleware
    app.add_middleware(RequestIDMiddleware)

    # Exceptions, logging
    register_exception_handlers(app)
    configure_logging(settings.logging.as_json, settings.server.log_level)

    return app
