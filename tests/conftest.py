import pytest

from twitch_auth.settings.config import get_settings


CLIENT_ID = "client-123"
CLIENT_SECRET = "shhh-its-a-secret"
CALLBACK_URL = "http://localhost:8000/auth/twitch/callback"


@pytest.fixture
def options():
    return {
        "client_id": CLIENT_ID,
        "client_secret": CLIENT_SECRET,
        "callback_url": CALLBACK_URL,
    }


@pytest.fixture
def helix_user():
    return {
        "id": "689563726",
        "login": "test_user1",
        "display_name": "Test_User1",
        "type": "",
        "broadcaster_type": "affiliate",
        "description": "just a test user",
        "profile_image_url": "https://static-cdn.jtvnw.net/jtv_user_pictures/foo.png",
        "offline_image_url": "",
        "view_count": 42,
        "email": "example@reply.com",
        "created_at": "2021-05-21T18:59:25Z",
    }


@pytest.fixture
def twitch_env(monkeypatch):
    monkeypatch.setenv("TWITCH_AUTH_TWITCH__CLIENT_ID", CLIENT_ID)
    monkeypatch.setenv("TWITCH_AUTH_TWITCH__CLIENT_SECRET", CLIENT_SECRET)
    monkeypatch.setenv("TWITCH_AUTH_TWITCH__CALLBACK_URL", CALLBACK_URL)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]
