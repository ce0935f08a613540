"""Core IntelOwl client with a raw-request escape hatch."""

from __future__ import annotations

import logging
import os
from typing import Any, Collection, Mapping, Optional

import requests

from .context import Context
from .executor import RequestExecutor
from .resources.analyses import Analyses
from .resources.analyzers import Analyzers
from .resources.connectors import Connectors
from .resources.jobs import Jobs
from .resources.playbooks import Playbooks
from .resources.tags import Tags
from .resources.users import Users
from .tools import jobs as job_tools
from .transport import Transport

__version__ = "0.1.0"

DEFAULT_URL = os.environ.get("INTELOWL_URL", "http://localhost:80")
DEFAULT_TOKEN = os.environ.get("INTELOWL_TOKEN")


class IntelOwl:
    """Resource-grouped client for the IntelOwl REST API.

    Holds no per-call state: one instance can be shared by many threads.
    """

    tags: Tags
    jobs: Jobs
    analyzers: Analyzers
    connectors: Connectors
    playbooks: Playbooks
    analyses: Analyses
    users: Users
    tools: Any

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        token: Optional[str] = None,
        default_timeout: float = 20,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        """Create an IntelOwl client bound to an instance.

        Parameters
        ----------
        url
            Base URL of the IntelOwl instance.
        token
            API token for the ``Authorization`` header.
        default_timeout
            Default request timeout in seconds.
        session
            Optional requests session to reuse connections. The caller keeps
            ownership: ``close()`` leaves it open.
        user_agent
            ``User-Agent`` header value.
        """
        self.url = url or DEFAULT_URL
        self.default_timeout = default_timeout
        self._logger = logging.getLogger(__name__)
        self._transport = Transport(
            self.url,
            token=token or DEFAULT_TOKEN,
            default_timeout=default_timeout,
            session=session,
            user_agent=user_agent or f"intelowl-client/{__version__}",
        )
        self._executor = RequestExecutor(self._transport, logger=self._logger)

        self.tags: Tags = Tags(self)
        self.jobs: Jobs = Jobs(self)
        self.analyzers: Analyzers = Analyzers(self)
        self.connectors: Connectors = Connectors(self)
        self.playbooks: Playbooks = Playbooks(self)
        self.analyses: Analyses = Analyses(self)
        self.users: Users = Users(self)
        self.tools = type("Tools", (), {})()
        self.tools.jobs = job_tools

    def request(
        self,
        method: str,
        path: str,
        *,
        ctx: Optional[Context] = None,
        params: Optional[Mapping[str, Any] | list[tuple[str, Any]]] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        expected: Collection[int] = (200,),
        into: Any = dict,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a raw request to the IntelOwl API.

        See :meth:`intelowl.executor.RequestExecutor.request` for the
        parameters and the errors raised.
        """
        return self._executor.request(
            method,
            path,
            ctx=ctx,
            params=params,
            json=json,
            data=data,
            files=files,
            expected=expected,
            into=into,
            timeout=timeout,
        )

    def close(self) -> None:
        """Close the HTTP session the client created for itself."""
        self._transport.close()

    def __enter__(self) -> "IntelOwl":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()
