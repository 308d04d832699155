"""Pydantic models for Story Spoiler API payloads.

Field names follow Python conventions; aliases carry the camelCase names the
API puts on the wire. Dump with `to_wire()` to get the request body.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Credentials(_WireModel):
    user_name: str = Field(alias="userName")
    password: str


class StoryCreateRequest(_WireModel):
    title: str
    description: str
    url: str = ""


class StoryEditRequest(StoryCreateRequest):
    pass


class ApiResponse(BaseModel):
    """Message envelope returned by create, edit and delete."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    msg: Optional[str] = None
    story_id: Optional[str] = Field(default=None, alias="storyId")


class StoryItem(BaseModel):
    """One element of `GET /api/Story/All`."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    story_id: Optional[str] = Field(default=None, alias="storyId")
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None


__all__ = [
    "Credentials",
    "StoryCreateRequest",
    "StoryEditRequest",
    "ApiResponse",
    "StoryItem",
]
