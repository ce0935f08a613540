"""Tag resource wrapper."""

from __future__ import annotations

from .base import CrudService
from .tags_types import TagParams, TagResponse


class Tags(CrudService[TagResponse, TagParams]):
    """Tag operations under ``/api/tags``.

    Labels are unique server-side; creating a duplicate raises ``ClientError``
    with status 400 and the server's validation body.
    """

    path = "/api/tags"
    response_type = TagResponse
    params_type = TagParams
