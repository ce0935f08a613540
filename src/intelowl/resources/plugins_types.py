"""Types shared by the analyzer and connector resources."""

from __future__ import annotations

from typing import Any, Literal, TypedDict
from typing_extensions import ReadOnly

PluginType = Literal["analyzer", "connector"]


class PluginVerification(TypedDict, total=False):
    """Readonly configuration check attached to a plugin config."""
    configured: ReadOnly[bool]
    error_message: ReadOnly[str]
    missing_secrets: ReadOnly[list[str]]


class PluginConfig(TypedDict, total=False):
    """Readonly fields common to analyzer and connector configs."""
    name: ReadOnly[str]
    python_module: ReadOnly[str]
    description: ReadOnly[str]
    disabled: ReadOnly[bool]
    config: ReadOnly[dict[str, Any]]
    secrets: ReadOnly[dict[str, Any]]
    params: ReadOnly[dict[str, Any]]
    maximum_tlp: ReadOnly[str]
    verification: ReadOnly[PluginVerification]


class AnalyzerConfig(PluginConfig, total=False):
    """Readonly analyzer config."""
    type: ReadOnly[Literal["file", "observable"]]
    external_service: ReadOnly[bool]
    leaks_info: ReadOnly[bool]
    docker_based: ReadOnly[bool]
    run_hash: ReadOnly[bool]
    run_hash_type: ReadOnly[str]
    supported_filetypes: ReadOnly[list[str]]
    not_supported_filetypes: ReadOnly[list[str]]
    observable_supported: ReadOnly[list[str]]


class ConnectorConfig(PluginConfig, total=False):
    """Readonly connector config."""
    run_on_failure: ReadOnly[bool]

__all__ = [
    "AnalyzerConfig",
    "ConnectorConfig",
    "PluginConfig",
    "PluginType",
    "PluginVerification",
]
