"""Current-user resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from ..context import Context
from .base import Resource
from .users_types import OrganizationResponse, UserAccessResponse


class Users(Resource):
    """Operations on the authenticated user under ``/api/me``."""

    def access(
        self,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> UserAccessResponse:
        """Return the user's submission counters."""
        return cast(UserAccessResponse, self._get("/api/me/access", ctx=ctx, into=UserAccessResponse, timeout=timeout))

    def organization(
        self,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> OrganizationResponse:
        """Return the user's organization; ``ClientError`` 404 when they have none."""
        response = self._get("/api/me/organization", ctx=ctx, into=OrganizationResponse, timeout=timeout)
        return cast(OrganizationResponse, response)

    def create_organization(
        self,
        name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> OrganizationResponse:
        """Create an organization owned by the current user."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid organization name: {name!r}")
        response = self._post(
            "/api/me/organization",
            ctx=ctx,
            json={"name": name.strip()},
            expected=(200, 201),
            into=OrganizationResponse,
            timeout=timeout,
        )
        return cast(OrganizationResponse, response)
