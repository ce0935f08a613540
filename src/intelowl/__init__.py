"""Public package surface for the IntelOwl Python client."""

from .client import DEFAULT_URL, IntelOwl, __version__
from .context import Context
from .errors import CancelledError, ClientError, DeadlineExceededError, IntelOwlError, TransportError
from .resources.analyses_types import *
from .resources.jobs_types import *
from .resources.playbooks_types import *
from .resources.plugins_types import *
from .resources.tags_types import *
from .resources.users_types import *


__all__ = [
    "CancelledError",
    "ClientError",
    "Context",
    "DEFAULT_URL",
    "DeadlineExceededError",
    "IntelOwl",
    "IntelOwlError",
    "TransportError",
    "__version__",
]
