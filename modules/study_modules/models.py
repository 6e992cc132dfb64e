"""
Study modules data models.

A module is a course or subject container owned by a single user.
The table definition lives in migrations/001_create_modules.sql; these
models are its validation schemas.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


TABLE_NAME = "modules"

# Sentinel used for icon and color when the client does not pick one
DEFAULT_TOKEN = "default"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Columns the client may write; everything else is server-managed
EDITABLE_FIELDS = ("name", "description", "code", "icon", "color", "credits")


class Module(BaseModel):
    """A module row as stored."""

    id: str = Field(..., description="Module ID (UUID)")
    user_id: str = Field(..., min_length=1, description="Owning user ID")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(None, description="Free-form description")
    code: str = Field(..., description="Course code, e.g. 'CS201'")
    icon: str = Field(default=DEFAULT_TOKEN, description="Icon token")
    color: str = Field(default=DEFAULT_TOKEN, description="Color token")
    archived: bool = Field(default=False, description="Soft-delete flag")
    credits: int = Field(default=0, description="Credit count")
    created_at: datetime
    modified_at: datetime
    last_visited: datetime


class CreateModuleRequest(BaseModel):
    """Request to create a new module."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Optional description (stored as empty string when omitted)",
    )
    code: str = Field(..., max_length=50, description="Course code")
    icon: str = Field(default=DEFAULT_TOKEN, min_length=1, max_length=50)
    color: str = Field(default=DEFAULT_TOKEN, min_length=1, max_length=50)
    credits: int = Field(default=0, ge=0, le=1000, description="Credit count")

    model_config = {"extra": "forbid"}


class UpdateModuleRequest(BaseModel):
    """
    Partial update for a module.

    Only fields present in the request are applied. Sending
    ``"description": null`` clears the description to an empty string.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    code: Optional[str] = Field(None, max_length=50)
    icon: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, min_length=1, max_length=50)
    credits: Optional[int] = Field(None, ge=0, le=1000)

    model_config = {"extra": "forbid"}

    def changes(self) -> dict:
        """Return the column updates this request asks for."""
        data = self.model_dump(exclude_unset=True)
        if "description" in data and data["description"] is None:
            data["description"] = ""
        # Required columns cannot be nulled out
        return {
            key: value
            for key, value in data.items()
            if value is not None and key in EDITABLE_FIELDS
        }


class ModuleListResponse(BaseModel):
    """One page of a user's modules, most recently visited first."""

    items: list[Module] = Field(default_factory=list)
    next_cursor: Optional[str] = Field(
        None,
        description="Pass as `cursor` to fetch the next page; absent on the last page",
    )
