"""Types for the tags resource."""

from __future__ import annotations

from typing import TypedDict
from typing_extensions import ReadOnly


class TagResponse(TypedDict, total=False):
    """Readonly tag dict returned by tag endpoints."""
    id: ReadOnly[int]
    label: ReadOnly[str]
    color: ReadOnly[str]


class TagParams(TypedDict, total=False):
    """Fields a caller may set when creating or updating a tag."""
    label: str
    color: str

__all__ = ["TagParams", "TagResponse"]
