"""Request and response shapes exchanged with the Story Spoiler API."""

from story_spoiler.models.story import (
    ApiResponse,
    Credentials,
    StoryCreateRequest,
    StoryEditRequest,
    StoryItem,
)

__all__ = [
    "ApiResponse",
    "Credentials",
    "StoryCreateRequest",
    "StoryEditRequest",
    "StoryItem",
]
