"""Mutable state shared by the scenarios of one run."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from story_spoiler.errors import PreconditionError


MISSING_STORY_ID_MESSAGE = "No story ID stored from previous test."


@dataclass
class SessionState:
    # Written by the create scenario, read by edit and delete.
    last_created_story_id: Optional[str] = None

    def remember_story(self, story_id: str) -> None:
        self.last_created_story_id = story_id

    def require_story_id(self) -> str:
        """Return the stored id or fail with a labeled precondition error."""
        if not self.last_created_story_id:
            raise PreconditionError(MISSING_STORY_ID_MESSAGE)
        return self.last_created_story_id


def random_story_id() -> str:
    """A well-formed story id that the server has never issued."""
    return str(uuid.uuid4())


def unique_suffix() -> str:
    """Short random token that keeps titles from one run distinct."""
    return uuid.uuid4().hex[:8]


__all__ = ["MISSING_STORY_ID_MESSAGE", "SessionState", "random_story_id", "unique_suffix"]
