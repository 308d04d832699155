"""HTTP client and authentication bootstrap for the Story Spoiler API."""

from story_spoiler.http.client import ApiResult, StoryApiClient, connect, fetch_jwt_token

__all__ = ["ApiResult", "StoryApiClient", "connect", "fetch_jwt_token"]
