"""Types for the users resource."""

from __future__ import annotations

from typing import TypedDict
from typing_extensions import ReadOnly


class UserAccessResponse(TypedDict, total=False):
    """Readonly submission counters for the current user."""
    total_submissions: ReadOnly[int]
    month_submissions: ReadOnly[int]


class MemberResponse(TypedDict, total=False):
    """Readonly organization member."""
    username: ReadOnly[str]
    full_name: ReadOnly[str]
    joined: ReadOnly[str]


class OrganizationResponse(TypedDict, total=False):
    """Readonly organization the current user belongs to."""
    name: ReadOnly[str]
    owner: ReadOnly[MemberResponse]
    is_user_owner: ReadOnly[bool]
    members_count: ReadOnly[int]
    members: ReadOnly[list[MemberResponse]]
    created_at: ReadOnly[str]

__all__ = ["MemberResponse", "OrganizationResponse", "UserAccessResponse"]
