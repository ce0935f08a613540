"""Types for the jobs resource."""

from __future__ import annotations

from typing import Any, Literal, TypedDict, get_args
from typing_extensions import ReadOnly

from .tags_types import TagResponse

JobStatus = Literal[
    "pending",
    "running",
    "reported_without_fails",
    "reported_with_fails",
    "killed",
    "failed",
]
JOB_STATUSES: tuple[JobStatus, ...] = get_args(JobStatus)
TERMINAL_JOB_STATUSES: frozenset[JobStatus] = frozenset(
    {"reported_without_fails", "reported_with_fails", "killed", "failed"}
)


class PluginReport(TypedDict, total=False):
    """Readonly analyzer/connector report embedded in a job."""
    name: ReadOnly[str]
    status: ReadOnly[str]
    report: ReadOnly[dict[str, Any]]
    errors: ReadOnly[list[str]]
    process_time: ReadOnly[float]
    start_time: ReadOnly[str]
    end_time: ReadOnly[str]
    runtime_configuration: ReadOnly[dict[str, Any]]
    type: ReadOnly[str]


class JobResponse(TypedDict, total=False):
    """Readonly job dict returned by job endpoints."""
    id: ReadOnly[int]
    user: ReadOnly[dict[str, Any]]
    tags: ReadOnly[list[TagResponse]]
    process_time: ReadOnly[float]
    is_sample: ReadOnly[bool]
    md5: ReadOnly[str]
    observable_name: ReadOnly[str]
    observable_classification: ReadOnly[str]
    file_name: ReadOnly[str]
    file_mimetype: ReadOnly[str]
    status: ReadOnly[JobStatus]
    analyzers_requested: ReadOnly[list[str]]
    connectors_requested: ReadOnly[list[str]]
    analyzers_to_execute: ReadOnly[list[str]]
    connectors_to_execute: ReadOnly[list[str]]
    playbook_requested: ReadOnly[str]
    playbook_to_execute: ReadOnly[str]
    received_request_time: ReadOnly[str]
    finished_analysis_time: ReadOnly[str]
    tlp: ReadOnly[str]
    errors: ReadOnly[list[str]]
    analyzer_reports: ReadOnly[list[PluginReport]]
    connector_reports: ReadOnly[list[PluginReport]]
    permissions: ReadOnly[dict[str, bool]]


class JobListResponse(TypedDict, total=False):
    """Readonly page of jobs returned by ``GET /api/jobs``."""
    count: ReadOnly[int]
    total_pages: ReadOnly[int]
    results: ReadOnly[list[JobResponse]]

__all__ = [
    "JOB_STATUSES",
    "JobListResponse",
    "JobResponse",
    "JobStatus",
    "PluginReport",
    "TERMINAL_JOB_STATUSES",
]
