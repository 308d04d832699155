"""Ordered scenarios against the Story Spoiler API and the harness that runs them.

Every scenario takes the shared `StoryApiClient` and `SessionState` and raises
`AssertionError` when the API does not behave as expected. The create scenario
is the only writer of `SessionState.last_created_story_id`; edit and delete
read it and raise `PreconditionError` when it was never produced.

`run_scenarios` executes a declared tuple of scenarios one after another and
keeps going past failures, so each scenario is reported on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from story_spoiler.errors import PreconditionError
from story_spoiler.http.client import StoryApiClient
from story_spoiler.logic.expectations import (
    NO_SUCH_STORY_MESSAGE,
    SUCCESS_CREATE_MESSAGE,
    SUCCESS_DELETE_MESSAGE,
    SUCCESS_EDIT_MESSAGE,
    UNABLE_TO_DELETE_MESSAGE,
    expect_listed_title,
    expect_message,
    expect_status,
    expect_story_id,
    expect_story_list,
)
from story_spoiler.logic.session import SessionState, random_story_id, unique_suffix
from story_spoiler.models.story import StoryCreateRequest, StoryEditRequest


logger = logging.getLogger(__name__)

Scenario = Callable[[StoryApiClient, SessionState], None]

PASSED = "passed"
FAILED = "failed"
PRECONDITION = "precondition"
ERROR = "error"


@dataclass
class ScenarioOutcome:
    name: str
    status: str
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == PASSED


def create_story_with_required_fields(client: StoryApiClient, session: SessionState) -> None:
    result = client.create_story(
        StoryCreateRequest(title="Test Story", description="A thrilling test story spoiler.", url="")
    )
    expect_status(result, 201)
    story_id = expect_story_id(result)
    expect_message(result, SUCCESS_CREATE_MESSAGE)
    session.remember_story(story_id)


def edit_created_story(client: StoryApiClient, session: SessionState) -> None:
    story_id = session.require_story_id()
    result = client.edit_story(
        story_id,
        StoryEditRequest(title="Updated Test Story", description="An updated thrilling story spoiler.", url=""),
    )
    expect_status(result, 200)
    expect_message(result, SUCCESS_EDIT_MESSAGE)


def list_all_stories(client: StoryApiClient, session: SessionState) -> None:
    result = client.list_stories()
    expect_status(result, 200)
    expect_story_list(result)


def delete_created_story(client: StoryApiClient, session: SessionState) -> None:
    story_id = session.require_story_id()
    result = client.delete_story(story_id)
    expect_status(result, 200)
    expect_message(result, SUCCESS_DELETE_MESSAGE)


def create_story_without_required_fields(client: StoryApiClient, session: SessionState) -> None:
    result = client.create_story(StoryCreateRequest(title="", description="", url=""))
    expect_status(result, 400)


def edit_nonexistent_story(client: StoryApiClient, session: SessionState) -> None:
    result = client.edit_story(
        random_story_id(),
        StoryEditRequest(title="Non-existing Story", description="Non-existing description", url=""),
    )
    expect_status(result, 404)
    expect_message(result, NO_SUCH_STORY_MESSAGE)


def delete_nonexistent_story(client: StoryApiClient, session: SessionState) -> None:
    result = client.delete_story(random_story_id())
    expect_status(result, 400)
    expect_message(result, UNABLE_TO_DELETE_MESSAGE)


def discard_story(client: StoryApiClient, story_id: str) -> None:
    """Best-effort delete used to clean up after a failed check."""
    try:
        result = client.delete_story(story_id)
    except Exception:
        logger.warning("Could not clean up story %s", story_id, exc_info=True)
        return
    if result.status != 200:
        logger.warning("Cleanup of story %s returned %s", story_id, result.status)


def story_lifecycle_round_trip(client: StoryApiClient, session: SessionState) -> None:
    """Create, edit, list, delete and re-delete one story of its own.

    A deleted id is expected to behave like an unknown one on a second delete.
    If a check fails before the first delete, the story is removed anyway.
    """
    suffix = unique_suffix()
    created = client.create_story(
        StoryCreateRequest(title=f"Lifecycle Story {suffix}", description="A story that lives briefly.", url="")
    )
    expect_status(created, 201)
    expect_message(created, SUCCESS_CREATE_MESSAGE)
    story_id = expect_story_id(created)

    deleted = None
    try:
        edited_title = f"Edited Lifecycle Story {suffix}"
        edited = client.edit_story(
            story_id, StoryEditRequest(title=edited_title, description="Its ending has changed.", url="")
        )
        expect_status(edited, 200)
        expect_message(edited, SUCCESS_EDIT_MESSAGE)

        listing = client.list_stories()
        expect_status(listing, 200)
        expect_listed_title(expect_story_list(listing), story_id, edited_title)

        deleted = client.delete_story(story_id)
    finally:
        if deleted is None:
            discard_story(client, story_id)
    expect_status(deleted, 200)
    expect_message(deleted, SUCCESS_DELETE_MESSAGE)

    deleted_again = client.delete_story(story_id)
    expect_status(deleted_again, 400)
    expect_message(deleted_again, UNABLE_TO_DELETE_MESSAGE)


ORDERED_SCENARIOS: tuple = (
    create_story_with_required_fields,
    edit_created_story,
    list_all_stories,
    delete_created_story,
    create_story_without_required_fields,
    edit_nonexistent_story,
    delete_nonexistent_story,
)

FULL_RUN: tuple = ORDERED_SCENARIOS + (story_lifecycle_round_trip,)


def run_scenario(scenario: Scenario, client: StoryApiClient, session: SessionState) -> ScenarioOutcome:
    name = scenario.__name__
    try:
        scenario(client, session)
    except PreconditionError as e:
        outcome = ScenarioOutcome(name, PRECONDITION, str(e))
    except AssertionError as e:
        outcome = ScenarioOutcome(name, FAILED, str(e))
    except Exception as e:
        logger.exception("Scenario %s raised unexpectedly", name)
        outcome = ScenarioOutcome(name, ERROR, f"{type(e).__name__}: {e}")
    else:
        outcome = ScenarioOutcome(name, PASSED)

    if outcome.ok:
        logger.info("[SCENARIO] %s passed", name)
    else:
        logger.warning("[SCENARIO] %s %s: %s", name, outcome.status, outcome.detail)
    return outcome


def run_scenarios(
    client: StoryApiClient,
    session: SessionState,
    scenarios: Sequence[Scenario] = FULL_RUN,
) -> List[ScenarioOutcome]:
    """Run `scenarios` strictly in order; a failure does not stop the run."""
    return [run_scenario(scenario, client, session) for scenario in scenarios]


__all__ = [
    "Scenario",
    "ScenarioOutcome",
    "PASSED",
    "FAILED",
    "PRECONDITION",
    "ERROR",
    "ORDERED_SCENARIOS",
    "FULL_RUN",
    "create_story_with_required_fields",
    "edit_created_story",
    "list_all_stories",
    "delete_created_story",
    "create_story_without_required_fields",
    "edit_nonexistent_story",
    "delete_nonexistent_story",
    "story_lifecycle_round_trip",
    "discard_story",
    "run_scenario",
    "run_scenarios",
]
