"""Types for the analyses resource."""

from __future__ import annotations

from typing import Any, TypedDict
from typing_extensions import ReadOnly

from ._common_types import TLP


class AnalysisResponse(TypedDict, total=False):
    """Readonly dict returned when an analysis is submitted."""
    job_id: ReadOnly[int]
    status: ReadOnly[str]
    warnings: ReadOnly[list[str]]
    analyzers_running: ReadOnly[list[str]]
    connectors_running: ReadOnly[list[str]]
    playbook_running: ReadOnly[str]


class MultipleAnalysisResponse(TypedDict, total=False):
    """Readonly dict returned when several observables are submitted at once."""
    count: ReadOnly[int]
    results: ReadOnly[list[AnalysisResponse]]


class AnalysisParams(TypedDict, total=False):
    """Options shared by every analysis submission."""
    analyzers_requested: list[str]
    connectors_requested: list[str]
    playbook_requested: str
    tlp: TLP
    runtime_configuration: dict[str, Any]
    tags_labels: list[str]

__all__ = ["AnalysisParams", "AnalysisResponse", "MultipleAnalysisResponse"]
