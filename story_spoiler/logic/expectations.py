"""Assertion helpers shared by the scenario harness and the behave steps.

Each helper raises `AssertionError` with the actual status and a body preview
so a failure report says what the API really answered.
"""

from __future__ import annotations

from typing import List

from pydantic import ValidationError as PydanticValidationError

from story_spoiler.http.client import ApiResult
from story_spoiler.models.story import StoryItem


SUCCESS_CREATE_MESSAGE = "Successfully created!"
SUCCESS_EDIT_MESSAGE = "Successfully edited"
SUCCESS_DELETE_MESSAGE = "Deleted successfully!"
NO_SUCH_STORY_MESSAGE = "No spoilers..."
UNABLE_TO_DELETE_MESSAGE = "Unable to delete this story spoiler!"


def expect_status(result: ApiResult, expected: int) -> None:
    if result.status != expected:
        raise AssertionError(
            f"Expected status code {expected} from {result.method} {result.path}, "
            f"got {result.status}: {result.preview()}"
        )


def expect_message(result: ApiResult, expected: str) -> None:
    actual = result.api_response().msg
    if actual != expected:
        raise AssertionError(
            f"Expected message {expected!r} from {result.method} {result.path}, got {actual!r}"
        )


def expect_story_id(result: ApiResult) -> str:
    story_id = result.api_response().story_id
    if not story_id:
        raise AssertionError(f"Response must contain a storyId: {result.preview()}")
    return story_id


def expect_story_list(result: ApiResult) -> List[StoryItem]:
    try:
        stories = result.stories()
    except PydanticValidationError as e:
        raise AssertionError(f"Response must be a list of stories: {result.preview()}") from e
    if stories is None:
        raise AssertionError(f"Response must be a list of stories: {result.preview()}")
    if not stories:
        raise AssertionError("Response must contain at least one story.")
    return stories


def find_story(stories: List[StoryItem], story_id: str) -> StoryItem:
    """Locate a story by id; listings without ids cannot be matched."""
    for item in stories:
        if item.story_id == story_id:
            return item
    raise AssertionError(f"Story {story_id} is not present in the listing of {len(stories)} stories")


def expect_listed_title(stories: List[StoryItem], story_id: str, title: str) -> None:
    """Check the listed story carries `title`.

    Matches by id when the listing has ids; otherwise exactly one listed story
    must carry the title.
    """
    if any(item.story_id for item in stories):
        item = find_story(stories, story_id)
        if item.title != title:
            raise AssertionError(f"Expected title {title!r} for story {story_id}, got {item.title!r}")
        return
    matches = sum(1 for item in stories if item.title == title)
    if matches != 1:
        raise AssertionError(f"Expected exactly one listed story titled {title!r}, found {matches}")


__all__ = [
    "SUCCESS_CREATE_MESSAGE",
    "SUCCESS_EDIT_MESSAGE",
    "SUCCESS_DELETE_MESSAGE",
    "NO_SUCH_STORY_MESSAGE",
    "UNABLE_TO_DELETE_MESSAGE",
    "expect_status",
    "expect_message",
    "expect_story_id",
    "expect_story_list",
    "expect_listed_title",
    "find_story",
]
