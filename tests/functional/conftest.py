"""Functional test bootstrap: an in-process fake of the Story Spoiler API.

The fake is a small FastAPI app that mirrors the remote contract (status
codes and `msg` bodies). Tests reach it through `fastapi.testclient.TestClient`,
which is an `httpx.Client`, so the real `StoryApiClient` and `connect` run
unchanged without network access.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

import pytest
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from pydantic import BaseModel

from story_spoiler.config import Settings


TEST_BASE_URL = "https://stories.test"
TEST_USER = "DenisTestUser"
TEST_PASSWORD = "DenisTestUser123"
TEST_TOKEN = "test-jwt-token"


class _AuthBody(BaseModel):
    userName: str = ""
    password: str = ""


class _StoryBody(BaseModel):
    title: str = ""
    description: str = ""
    url: str = ""


def create_fake_story_api(*, issue_token: bool = True, create_message: str = "Successfully created!") -> FastAPI:
    """Build a fake API with its own story store.

    `app.state.auth_calls` counts authentication requests and
    `app.state.stories` holds live stories keyed by id.
    """
    app = FastAPI()
    app.state.stories = {}
    app.state.auth_calls = 0

    def _authorized(authorization: Optional[str]) -> bool:
        return authorization == f"Bearer {TEST_TOKEN}"

    def _unauthorized() -> JSONResponse:
        return JSONResponse(status_code=401, content={"msg": "Unauthorized"})

    @app.post("/api/User/Authentication")
    def authenticate(body: _AuthBody, request: Request) -> JSONResponse:
        request.app.state.auth_calls += 1
        if body.userName != TEST_USER or body.password != TEST_PASSWORD:
            return JSONResponse(status_code=401, content={"msg": "Invalid username or password!"})
        if not issue_token:
            return JSONResponse(status_code=200, content={"userName": body.userName})
        return JSONResponse(status_code=200, content={"accessToken": TEST_TOKEN})

    @app.post("/api/Story/Create")
    def create(body: _StoryBody, request: Request, authorization: Optional[str] = Header(default=None)) -> JSONResponse:
        if not _authorized(authorization):
            return _unauthorized()
        if not body.title.strip() or not body.description.strip():
            return JSONResponse(status_code=400, content={"title": "One or more validation errors occurred."})
        story_id = str(uuid.uuid4())
        request.app.state.stories[story_id] = {"storyId": story_id, **body.model_dump()}
        return JSONResponse(status_code=201, content={"msg": create_message, "storyId": story_id})

    @app.put("/api/Story/Edit/{story_id}")
    def edit(
        story_id: str, body: _StoryBody, request: Request, authorization: Optional[str] = Header(default=None)
    ) -> JSONResponse:
        if not _authorized(authorization):
            return _unauthorized()
        stories: Dict[str, Dict[str, Any]] = request.app.state.stories
        if story_id not in stories:
            return JSONResponse(status_code=404, content={"msg": "No spoilers..."})
        stories[story_id].update(body.model_dump())
        return JSONResponse(status_code=200, content={"msg": "Successfully edited"})

    @app.get("/api/Story/All")
    def list_all(request: Request, authorization: Optional[str] = Header(default=None)) -> JSONResponse:
        if not _authorized(authorization):
            return _unauthorized()
        items: List[Dict[str, Any]] = list(request.app.state.stories.values())
        return JSONResponse(status_code=200, content=items)

    @app.delete("/api/Story/Delete/{story_id}")
    def delete(story_id: str, request: Request, authorization: Optional[str] = Header(default=None)) -> JSONResponse:
        if not _authorized(authorization):
            return _unauthorized()
        if request.app.state.stories.pop(story_id, None) is None:
            return JSONResponse(status_code=400, content={"msg": "Unable to delete this story spoiler!"})
        return JSONResponse(status_code=200, content={"msg": "Deleted successfully!"})

    return app


class ClientFactory:
    """`http_factory` stand-in that builds TestClients and remembers them."""

    def __init__(self, app: FastAPI) -> None:
        self.app = app
        self.clients: List[TestClient] = []

    def __call__(self, *, base_url: str, headers: Optional[Dict[str, str]] = None, **_: Any) -> TestClient:
        client = TestClient(self.app, base_url=base_url, headers=headers)
        self.clients.append(client)
        return client


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url=TEST_BASE_URL, user_name=TEST_USER, password=TEST_PASSWORD)


@pytest.fixture
def fake_api() -> FastAPI:
    return create_fake_story_api()


@pytest.fixture
def client_factory(fake_api: FastAPI) -> ClientFactory:
    return ClientFactory(fake_api)


@pytest.fixture
def make_fake_api():
    """Build fakes with non-default behaviour (`issue_token`, `create_message`)."""
    return create_fake_story_api


@pytest.fixture
def make_client_factory():
    return ClientFactory
