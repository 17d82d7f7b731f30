from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class NoteCreate(BaseModel):
    """Request body for POST /notes.

    Both fields are free-form and optional; nothing is validated beyond the
    JSON shape.
    """

    title: Optional[str] = None
    description: Optional[str] = None


class NoteCreated(BaseModel):
    """Response for POST /notes. The id and timestamp are not echoed."""

    model_config = ConfigDict(from_attributes=True)

    title: Optional[str] = None
    description: Optional[str] = None


class NoteRead(BaseModel):
    """One entry of the GET /notes listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
