"""End-to-end suite for the Story Spoiler REST API.

The package authenticates once against the remote API, runs an ordered list of
create/edit/list/delete scenarios that share a single `SessionState`, and
reports each scenario's outcome. HTTP plumbing lives in `story_spoiler.http`,
payload models in `story_spoiler.models` and the scenarios in
`story_spoiler.logic`.
"""

from __future__ import annotations

from story_spoiler.main import run_suite

__all__ = ["run_suite"]
