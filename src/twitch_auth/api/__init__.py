from twitch_auth.api.auth import router as auth_router
from twitch_auth.api.system import router as system_router

__all__ = ["auth_router", "system_router"]
