"""Connector resource wrapper."""

from __future__ import annotations

from .plugins import PluginService
from .plugins_types import ConnectorConfig


class Connectors(PluginService[ConnectorConfig]):
    """Connector operations under ``/api/connector``."""

    path = "/api/connector"
    plugin_type = "connector"
    response_type = ConnectorConfig
