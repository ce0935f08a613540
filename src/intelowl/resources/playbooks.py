"""Playbook resource wrapper."""

from __future__ import annotations

from .base import CrudService
from .playbooks_types import PlaybookParams, PlaybookResponse


class Playbooks(CrudService[PlaybookResponse, PlaybookParams]):
    """Playbook operations under ``/api/playbook``, addressed by name.

    Updates are partial (``PATCH``): only the fields present in the
    parameters change.
    """

    path = "/api/playbook"
    response_type = PlaybookResponse
    params_type = PlaybookParams
    create_status = (201,)
    update_method = "PATCH"
