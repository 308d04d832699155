"""HTTP layer for the Story Spoiler API.

`fetch_jwt_token` performs the one-time authentication bootstrap with an
unauthenticated client. `StoryApiClient` wraps a single `httpx.Client` that
carries the bearer token and is reused by every scenario. `connect` wires the
two together from `Settings`.

Story operations never raise on a non-2xx status: they return an `ApiResult`
and leave the judgement to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import httpx
from pydantic import TypeAdapter

from story_spoiler.config import Settings
from story_spoiler.errors import AuthenticationError, TokenRetrievalError
from story_spoiler.models.story import (
    ApiResponse,
    Credentials,
    StoryCreateRequest,
    StoryEditRequest,
    StoryItem,
)


AUTH_PATH = "/api/User/Authentication"
CREATE_PATH = "/api/Story/Create"
EDIT_PATH = "/api/Story/Edit/{story_id}"
ALL_PATH = "/api/Story/All"
DELETE_PATH = "/api/Story/Delete/{story_id}"

logger = logging.getLogger(__name__)

_STORY_LIST = TypeAdapter(List[StoryItem])

HttpFactory = Callable[..., httpx.Client]


@dataclass
class ApiResult:
    """Captured outcome of one API call."""

    method: str
    path: str
    status: int
    json: Any
    text: str

    def api_response(self) -> ApiResponse:
        """Parse the body as the `{msg, storyId}` envelope.

        A body that is not a JSON object yields an empty envelope so callers
        can assert on `msg` and get a readable mismatch instead of a crash.
        """
        if isinstance(self.json, dict):
            return ApiResponse.model_validate(self.json)
        return ApiResponse()

    def stories(self) -> Optional[List[StoryItem]]:
        """Parse the body as a list of stories, or None when it is not a list."""
        if not isinstance(self.json, list):
            return None
        return _STORY_LIST.validate_python(self.json)

    def preview(self, limit: int = 300) -> str:
        text = self.text or ""
        return text[:limit] + ("…" if len(text) > limit else "")


def _capture(method: str, path: str, resp: httpx.Response) -> ApiResult:
    body_json: Any = None
    try:
        body_json = resp.json()
    except ValueError:
        body_json = None
    logger.info("%s %s -> %s", method, path, resp.status_code)
    return ApiResult(method=method, path=path, status=resp.status_code, json=body_json, text=resp.text)


def fetch_jwt_token(http: httpx.Client, credentials: Credentials) -> str:
    """Exchange credentials for a JWT access token.

    Raises `AuthenticationError` on any non-200 status and
    `TokenRetrievalError` when a 200 body carries no string `accessToken`.
    """
    resp = http.post(AUTH_PATH, json=credentials.to_wire())
    logger.info("POST %s -> %s (user=%s)", AUTH_PATH, resp.status_code, credentials.user_name)
    if resp.status_code != 200:
        raise AuthenticationError(resp.status_code, resp.text, credentials.user_name)
    try:
        content = resp.json()
    except ValueError as e:
        raise TokenRetrievalError("Failed to retrieve JWT token: response body is not JSON.") from e
    token = content.get("accessToken") if isinstance(content, dict) else None
    if not isinstance(token, str) or not token:
        raise TokenRetrievalError()
    return token


class StoryApiClient:
    """Authenticated client reused across all scenarios of one run."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def _send(self, method: str, path: str, *, json_body: Any = None) -> ApiResult:
        resp = self._http.request(method, path, json=json_body)
        return _capture(method, path, resp)

    def create_story(self, request: StoryCreateRequest) -> ApiResult:
        return self._send("POST", CREATE_PATH, json_body=request.to_wire())

    def edit_story(self, story_id: str, request: StoryEditRequest) -> ApiResult:
        return self._send("PUT", EDIT_PATH.format(story_id=story_id), json_body=request.to_wire())

    def list_stories(self) -> ApiResult:
        return self._send("GET", ALL_PATH)

    def delete_story(self, story_id: str) -> ApiResult:
        return self._send("DELETE", DELETE_PATH.format(story_id=story_id))

    def close(self) -> None:
        if not self._http.is_closed:
            self._http.close()

    def __enter__(self) -> "StoryApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def connect(settings: Settings, *, http_factory: HttpFactory = httpx.Client) -> StoryApiClient:
    """Authenticate once and return the client every scenario shares.

    `http_factory` receives `base_url` and, for the authenticated client,
    `headers`; tests pass a factory that builds in-process clients.
    """
    with http_factory(base_url=settings.base_url) as auth_http:
        token = fetch_jwt_token(auth_http, settings.credentials)
    http = http_factory(base_url=settings.base_url, headers={"Authorization": f"Bearer {token}"})
    logger.info("Authenticated against %s as %s", settings.base_url, settings.user_name)
    return StoryApiClient(http)


__all__ = [
    "AUTH_PATH",
    "CREATE_PATH",
    "EDIT_PATH",
    "ALL_PATH",
    "DELETE_PATH",
    "ApiResult",
    "HttpFactory",
    "StoryApiClient",
    "connect",
    "fetch_jwt_token",
]
