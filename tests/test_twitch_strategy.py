import json

import httpx
import pytest
import respx
from httpx import Response

from twitch_auth import ProfileFetchError, ProfileParseError, TwitchStrategy

HELIX_USERS = "https://api.twitch.tv/helix/users"


@pytest.mark.asyncio
@respx.mock
async def test_user_profile_success(options, helix_user):
    route = respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))
    strategy = TwitchStrategy(options)

    profile = await strategy.user_profile("tok-abc")

    assert route.call_count == 1
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer tok-abc"
    assert request.headers["Client-Id"] == "client-123"
    assert profile.id == "689563726"
    assert profile.login_name == "test_user1"
    assert profile.display_name == "Test_User1"
    assert profile.email == "example@reply.com"
    assert profile.provider == "twitch"


@pytest.mark.asyncio
@respx.mock
async def test_user_profile_is_not_cached(options, helix_user):
    route = respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))
    strategy = TwitchStrategy(options)

    first = await strategy.user_profile("tok-abc")
    second = await strategy.user_profile("tok-abc")

    assert route.call_count == 2
    assert first == second


@pytest.mark.asyncio
@respx.mock
async def test_custom_profile_url(options, helix_user):
    options["user_profile_url"] = "https://proxy.example.test/helix/users"
    route = respx.get("https://proxy.example.test/helix/users").mock(
        return_value=Response(200, json={"data": [helix_user]})
    )

    await TwitchStrategy(options).user_profile("tok")
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_non_success_status_raises_fetch_error(options):
    respx.get(HELIX_USERS).mock(
        return_value=Response(401, json={"error": "Unauthorized", "status": 401, "message": "Invalid OAuth token"})
    )

    with pytest.raises(ProfileFetchError) as ei:
        await TwitchStrategy(options).user_profile("expired")
    assert ei.value.status_code == 401
    assert ei.value.details["message"] == "Invalid OAuth token"


@pytest.mark.asyncio
@respx.mock
async def test_server_error_with_text_body(options):
    respx.get(HELIX_USERS).mock(return_value=Response(503, text="upstream down"))

    with pytest.raises(ProfileFetchError) as ei:
        await TwitchStrategy(options).user_profile("tok")
    assert ei.value.status_code == 503
    assert ei.value.details == {"raw": "upstream down"}


@pytest.mark.asyncio
@respx.mock
async def test_connect_error_raises_fetch_error(options):
    respx.get(HELIX_USERS).mock(side_effect=httpx.ConnectError)

    with pytest.raises(ProfileFetchError) as ei:
        await TwitchStrategy(options).user_profile("tok")
    assert isinstance(ei.value.cause, httpx.ConnectError)
    assert ei.value.status_code is None


@pytest.mark.asyncio
@respx.mock
async def test_timeout_raises_fetch_error(options):
    respx.get(HELIX_USERS).mock(side_effect=httpx.ReadTimeout)

    with pytest.raises(ProfileFetchError) as ei:
        await TwitchStrategy(options).user_profile("tok")
    assert isinstance(ei.value.__cause__, httpx.TimeoutException)


@pytest.mark.asyncio
@respx.mock
async def test_malformed_body_raises_parse_error(options):
    respx.get(HELIX_USERS).mock(return_value=Response(200, text="<html>oops</html>"))

    with pytest.raises(ProfileParseError):
        await TwitchStrategy(options).user_profile("tok")


@pytest.mark.asyncio
@respx.mock
async def test_empty_data_raises_parse_error(options):
    respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": []}))

    with pytest.raises(ProfileParseError) as ei:
        await TwitchStrategy(options).user_profile("tok")
    assert "no user" in str(ei.value)


@pytest.mark.asyncio
@respx.mock
async def test_injected_http_client(options, helix_user):
    route = respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))

    async with httpx.AsyncClient() as client:
        strategy = TwitchStrategy(options, http_client=client)
        profile = await strategy.user_profile("tok")
        assert not client.is_closed

    assert route.called
    assert profile.login_name == "test_user1"


@pytest.mark.asyncio
@respx.mock
async def test_authenticate_calls_sync_verify(options, helix_user):
    respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))
    seen = []

    def verify(access_token, refresh_token, profile):
        seen.append((access_token, refresh_token, profile.id))
        return {"user_id": profile.id}

    user = await TwitchStrategy(options, verify=verify).authenticate("tok", "ref")

    assert user == {"user_id": "689563726"}
    assert seen == [("tok", "ref", "689563726")]


@pytest.mark.asyncio
@respx.mock
async def test_authenticate_awaits_async_verify(options, helix_user):
    respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))

    async def verify(access_token, refresh_token, profile):
        return profile.login_name

    assert await TwitchStrategy(options, verify=verify).authenticate("tok") == "test_user1"


@pytest.mark.asyncio
@respx.mock
async def test_authenticate_without_verify_returns_profile(options, helix_user):
    respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": [helix_user]}))

    profile = await TwitchStrategy(options).authenticate("tok")
    assert profile.id == "689563726"


@pytest.mark.asyncio
@respx.mock
async def test_authenticate_does_not_call_verify_on_failure(options):
    respx.get(HELIX_USERS).mock(return_value=Response(500))
    calls = []

    strategy = TwitchStrategy(options, verify=lambda *args: calls.append(args))
    with pytest.raises(ProfileFetchError):
        await strategy.authenticate("tok")
    assert calls == []


@pytest.mark.asyncio
@respx.mock
async def test_load_user_profile_passes_error_to_done(options):
    respx.get(HELIX_USERS).mock(return_value=Response(502))
    results = []

    await TwitchStrategy(options).load_user_profile("tok", lambda err, profile: results.append((err, profile)))

    assert len(results) == 1
    err, profile = results[0]
    assert isinstance(err, ProfileFetchError)
    assert profile is None


@pytest.mark.asyncio
@respx.mock
async def test_load_user_profile_passes_profile_to_done(options, helix_user):
    respx.get(HELIX_USERS).mock(return_value=Response(200, text=json.dumps({"data": [helix_user]})))
    results = []

    await TwitchStrategy(options).load_user_profile("tok", lambda err, profile: results.append((err, profile)))

    err, profile = results[0]
    assert err is None
    assert profile.login_name == "test_user1"


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_non_ascii_token_raises_fetch_error(options):
    route = respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": []}))

    with pytest.raises(ProfileFetchError) as ei:
        await TwitchStrategy(options).user_profile("tök")
    assert isinstance(ei.value.cause, UnicodeEncodeError)
    assert not route.called


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_load_user_profile_reports_non_ascii_header(options):
    route = respx.get(HELIX_USERS).mock(return_value=Response(200, json={"data": []}))
    options["custom_headers"] = {"Client-Id": "clïent"}
    results = []

    await TwitchStrategy(options).load_user_profile("tok", lambda err, profile: results.append((err, profile)))

    assert len(results) == 1
    err, profile = results[0]
    assert isinstance(err, ProfileFetchError)
    assert profile is None
    assert not route.called
