"""Job helper tools."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from intelowl.context import Context
from intelowl.errors import CancelledError, DeadlineExceededError
from intelowl.resources.jobs_types import TERMINAL_JOB_STATUSES, JobResponse

if TYPE_CHECKING:  # pragma: no cover
    from intelowl.client import IntelOwl

_logger = logging.getLogger(__name__)


def wait_for_job(
    client: "IntelOwl",
    job_id: int,
    *,
    ctx: Optional[Context] = None,
    poll_interval: float = 5.0,
    timeout: Optional[float] = None,
) -> JobResponse:
    """Poll a job until it reaches a terminal status.

    Parameters
    ----------
    client
        Client used for ``jobs.get``.
    job_id
        Job identifier.
    ctx
        Cancellation context; bound the total wait with ``with_timeout``.
    poll_interval
        Seconds between polls.
    timeout
        Request timeout in seconds for each poll.

    Returns
    -------
    JobResponse
        The job as last fetched, with a terminal ``status``.

    Raises
    ------
    CancelledError
        The context was cancelled between polls.
    DeadlineExceededError
        The context deadline passed between polls.
    """
    if poll_interval <= 0:
        raise ValueError(f"Invalid poll_interval: {poll_interval}")
    ctx = ctx or Context.background()
    while True:
        job = client.jobs.get(job_id, ctx=ctx, timeout=timeout)
        status = job.get("status")
        if status in TERMINAL_JOB_STATUSES:
            return job
        _logger.debug("Job %s is %s; polling again in %ss", job_id, status, poll_interval)
        if ctx.wait(poll_interval):
            if ctx.cancelled:
                raise CancelledError(f"Waiting for job {job_id}: context cancelled")
            raise DeadlineExceededError(f"Waiting for job {job_id}: context deadline exceeded")
