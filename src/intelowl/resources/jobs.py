"""Job resource wrapper."""

from __future__ import annotations

from typing import Any, Optional, cast

from ..context import Context
from ..utils import quote_identifier
from .base import DeleteMixin, GetMixin
from .jobs_types import JobListResponse, JobResponse


class Jobs(GetMixin[JobResponse, dict], DeleteMixin[JobResponse, dict]):
    """Job operations under ``/api/jobs``.

    Jobs are created through :class:`~intelowl.resources.analyses.Analyses`;
    this service reads, kills, retries and deletes them.
    """

    path = "/api/jobs"
    response_type = JobResponse

    def list(
        self,
        *,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        ordering: Optional[str] = None,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> JobListResponse:
        """Fetch one page of jobs.

        Parameters
        ----------
        page
            1-based page number.
        page_size
            Number of jobs per page.
        ordering
            Field to order by, prefix with ``-`` for descending.
        ctx
            Cancellation context.
        timeout
            Request timeout in seconds.

        Returns
        -------
        JobListResponse
            Page dict with ``count``, ``total_pages`` and ``results``.
        """
        params: dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if page_size is not None:
            params["page_size"] = page_size
        if ordering is not None:
            params["ordering"] = ordering
        response = self._get(self.path, ctx=ctx, params=params or None, into=JobListResponse, timeout=timeout)
        return cast(JobListResponse, response)

    def download_sample(
        self,
        job_id: int,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Download the file submitted with a sample job."""
        return self._get(f"{self._item_path(job_id)}/download_sample", ctx=ctx, into=bytes, timeout=timeout)

    def kill(
        self,
        job_id: int,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """Kill a running job."""
        return self._patch(f"{self._item_path(job_id)}/kill", ctx=ctx, expected=(204,), into=bool, timeout=timeout)

    def kill_analyzer(
        self,
        job_id: int,
        analyzer_name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        return self._plugin_action(job_id, "analyzer", analyzer_name, "kill", ctx=ctx, timeout=timeout)

    def retry_analyzer(
        self,
        job_id: int,
        analyzer_name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        return self._plugin_action(job_id, "analyzer", analyzer_name, "retry", ctx=ctx, timeout=timeout)

    def kill_connector(
        self,
        job_id: int,
        connector_name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        return self._plugin_action(job_id, "connector", connector_name, "kill", ctx=ctx, timeout=timeout)

    def retry_connector(
        self,
        job_id: int,
        connector_name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        return self._plugin_action(job_id, "connector", connector_name, "retry", ctx=ctx, timeout=timeout)

    def _plugin_action(
        self,
        job_id: int,
        plugin_type: str,
        plugin_name: str,
        action: str,
        *,
        ctx: Optional[Context],
        timeout: Optional[float],
    ) -> bool:
        path = f"{self._item_path(job_id)}/{plugin_type}/{quote_identifier(plugin_name)}/{action}"
        return self._patch(path, ctx=ctx, expected=(204,), into=bool, timeout=timeout)
