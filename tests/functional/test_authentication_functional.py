"""Functional tests for the JWT bootstrap and the authenticated client."""

from __future__ import annotations

import httpx
import pytest

from story_spoiler.errors import AuthenticationError, SetupError, TokenRetrievalError
from story_spoiler.http.client import connect, fetch_jwt_token
from story_spoiler.models.story import StoryCreateRequest


def test_fetch_jwt_token_returns_access_token(settings, client_factory):
    with client_factory(base_url=settings.base_url) as http:
        token = fetch_jwt_token(http, settings.credentials)

    assert token == "test-jwt-token"


def test_rejected_credentials_raise_with_status_body_and_user(settings, client_factory):
    bad = settings.model_copy(update={"password": "wrong-password"})

    with pytest.raises(AuthenticationError) as excinfo:
        connect(bad, http_factory=client_factory)

    err = excinfo.value
    assert err.status_code == 401
    assert "Invalid username or password!" in err.body
    assert err.user_name == "DenisTestUser"
    message = str(err)
    assert "401" in message
    assert "Invalid username or password!" in message
    assert "DenisTestUser" in message
    # Only the temporary authentication client was ever built.
    assert len(client_factory.clients) == 1


def test_missing_access_token_is_a_distinct_setup_failure(settings, make_fake_api, make_client_factory):
    factory = make_client_factory(make_fake_api(issue_token=False))

    with pytest.raises(TokenRetrievalError) as excinfo:
        connect(settings, http_factory=factory)

    assert not isinstance(excinfo.value, AuthenticationError)
    assert isinstance(excinfo.value, SetupError)
    assert "Failed to retrieve JWT token" in str(excinfo.value)


def test_connect_authenticates_exactly_once(settings, fake_api, client_factory):
    client = connect(settings, http_factory=client_factory)
    try:
        client.list_stories()
        client.list_stories()
    finally:
        client.close()

    assert fake_api.state.auth_calls == 1


def test_every_story_call_carries_the_bearer_token(settings, client_factory):
    client = connect(settings, http_factory=client_factory)
    try:
        created = client.create_story(StoryCreateRequest(title="T", description="D"))
        listed = client.list_stories()
    finally:
        client.close()

    assert created.status == 201
    assert listed.status == 200
    assert client_factory.clients[-1].headers["Authorization"] == "Bearer test-jwt-token"


def test_close_is_idempotent(settings, client_factory):
    client = connect(settings, http_factory=client_factory)

    client.close()
    client.close()

    assert client.is_closed


def test_client_used_as_context_manager_is_closed_on_error(settings, client_factory):
    with pytest.raises(RuntimeError):
        with connect(settings, http_factory=client_factory) as client:
            raise RuntimeError("scenario blew up")

    assert client.is_closed


def test_non_json_authentication_body_is_a_token_retrieval_failure(settings):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>login ok</html>"))

    with httpx.Client(base_url=settings.base_url, transport=transport) as http:
        with pytest.raises(TokenRetrievalError, match="not JSON"):
            fetch_jwt_token(http, settings.credentials)
