"""Analyzer resource wrapper."""

from __future__ import annotations

from .plugins import PluginService
from .plugins_types import AnalyzerConfig


class Analyzers(PluginService[AnalyzerConfig]):
    """Analyzer operations under ``/api/analyzer``."""

    path = "/api/analyzer"
    plugin_type = "analyzer"
    response_type = AnalyzerConfig
