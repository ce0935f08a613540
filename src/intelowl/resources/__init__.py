"""Resource module exports."""

from .analyses import Analyses
from .analyzers import Analyzers
from .base import CrudService, Resource, ResourceService
from .connectors import Connectors
from .jobs import Jobs
from .playbooks import Playbooks
from .tags import Tags
from .users import Users

__all__ = [
    "Analyses",
    "Analyzers",
    "Connectors",
    "CrudService",
    "Jobs",
    "Playbooks",
    "Resource",
    "ResourceService",
    "Tags",
    "Users",
]
