"""Types for the playbooks resource."""

from __future__ import annotations

from typing import Any, TypedDict
from typing_extensions import ReadOnly

from ._common_types import TLP, ObservableClassification
from .tags_types import TagResponse


class PlaybookResponse(TypedDict, total=False):
    """Readonly playbook dict returned by playbook endpoints."""
    name: ReadOnly[str]
    description: ReadOnly[str]
    type: ReadOnly[list[ObservableClassification | str]]
    analyzers: ReadOnly[list[str]]
    connectors: ReadOnly[list[str]]
    pivots: ReadOnly[list[str]]
    runtime_configuration: ReadOnly[dict[str, Any]]
    disabled: ReadOnly[bool]
    tags: ReadOnly[list[TagResponse]]
    tlp: ReadOnly[TLP]
    scan_mode: ReadOnly[int]
    owner: ReadOnly[str]


class PlaybookParams(TypedDict, total=False):
    """Fields a caller may set when creating or updating a playbook."""
    name: str
    description: str
    type: list[str]
    analyzers: list[str]
    connectors: list[str]
    pivots: list[str]
    runtime_configuration: dict[str, Any]
    disabled: bool
    tags_labels: list[str]
    tlp: TLP
    scan_mode: int

__all__ = ["PlaybookParams", "PlaybookResponse"]
