"""Shared analyzer/connector resource wrapper."""

from __future__ import annotations

from typing import ClassVar, Optional, TypeVar, cast

from ..context import Context
from ..utils import quote_identifier
from .base import GetMixin, ListMixin
from .plugins_types import PluginType

C = TypeVar("C")


class PluginService(ListMixin[C, dict], GetMixin[C, dict]):
    """Read-only plugin configs plus health checks.

    Plugins are addressed by name, e.g. ``Classic_DNS``.
    """

    plugin_type: ClassVar[PluginType]

    def get_configs(
        self,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> list[C]:
        """Fetch every plugin config, sorted by name.

        The endpoint returns an object keyed by plugin name; the values are
        returned in name order.
        """
        response = self._get(f"/api/get_{self.plugin_type}_configs", ctx=ctx, into=dict, timeout=timeout)
        return [cast(C, response[name]) for name in sorted(response)]

    def health_check(
        self,
        name: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """Return the ``status`` flag of the plugin's health check.

        Only plugins backed by an external container expose a health check;
        others answer with a ``ClientError``.
        """
        path = f"/api/{self.plugin_type}/{quote_identifier(name)}/healthcheck"
        response = self._get(path, ctx=ctx, into=dict, timeout=timeout)
        status = response.get("status")
        if not isinstance(status, bool):
            self._logger.warning("Health check for %s %s returned no status: %s", self.plugin_type, name, response)
            return False
        return status
