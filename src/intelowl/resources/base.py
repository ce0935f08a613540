"""Base resource helpers and the generic CRUD contract."""

from __future__ import annotations

from typing import Any, ClassVar, Collection, Generic, Mapping, Optional, TypeVar, TYPE_CHECKING, cast

from ..context import Context
from ..utils import quote_identifier

if TYPE_CHECKING:  # pragma: no cover
    from ..client import IntelOwl

R = TypeVar("R")
P = TypeVar("P")

Identifier = int | str


class Resource:
    """Shared helpers for resource classes."""

    def __init__(self, client: "IntelOwl") -> None:
        self._client = client

    @property
    def _logger(self):
        return self._client._logger

    def _request(
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
        into: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self._client.request(
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

    def _get(
        self,
        path: str,
        *,
        ctx: Optional[Context] = None,
        params: Optional[Mapping[str, Any] | list[tuple[str, Any]]] = None,
        into: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self._request("GET", path, ctx=ctx, params=params, into=into, timeout=timeout)

    def _post(
        self,
        path: str,
        *,
        ctx: Optional[Context] = None,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        expected: Collection[int] = (200,),
        into: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self._request(
            "POST",
            path,
            ctx=ctx,
            json=json,
            data=data,
            files=files,
            expected=expected,
            into=into,
            timeout=timeout,
        )

    def _patch(
        self,
        path: str,
        *,
        ctx: Optional[Context] = None,
        json: Any = None,
        expected: Collection[int] = (200,),
        into: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return self._request("PATCH", path, ctx=ctx, json=json, expected=expected, into=into, timeout=timeout)

    def _delete(
        self,
        path: str,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        return self._request("DELETE", path, ctx=ctx, expected=(204,), into=bool, timeout=timeout)


class ResourceService(Resource, Generic[R, P]):
    """A resource collection addressed by ``path`` and ``path/{identifier}``.

    Subclasses declare the collection path and payload types; the operation
    mixins below supply the behavior.
    """

    path: ClassVar[str]
    response_type: ClassVar[Any] = dict
    params_type: ClassVar[Any] = dict
    create_status: ClassVar[tuple[int, ...]] = (200, 201)
    update_method: ClassVar[str] = "PUT"

    def _item_path(self, identifier: Identifier) -> str:
        return f"{self.path}/{quote_identifier(identifier)}"

    def _encode(self, params: P) -> dict[str, Any]:
        """Keep only the keys the parameter type declares."""
        if not isinstance(params, Mapping):
            raise ValueError(f"Parameters must be a mapping, got {type(params).__name__}")
        allowed = getattr(self.params_type, "__required_keys__", frozenset()) | getattr(
            self.params_type, "__optional_keys__", frozenset()
        )
        if not allowed:
            return dict(params)
        dropped = [key for key in params if key not in allowed]
        if dropped:
            self._logger.debug("Dropping undeclared parameter keys for %s: %s", self.path, dropped)
        return {key: value for key, value in params.items() if key in allowed}


class ListMixin(ResourceService[R, P]):
    def list(
        self,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> list[R]:
        """Fetch the whole collection, in server order.

        Parameters
        ----------
        ctx
            Cancellation context.
        timeout
            Request timeout in seconds.

        Returns
        -------
        list
            Decoded resources; empty when the collection is empty.
        """
        return cast("list[R]", self._get(self.path, ctx=ctx, into=list[self.response_type], timeout=timeout))


class GetMixin(ResourceService[R, P]):
    def get(
        self,
        identifier: Identifier,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> R:
        """Fetch one resource.

        Raises ``ClientError`` with status 404 when it does not exist.
        """
        return cast(R, self._get(self._item_path(identifier), ctx=ctx, into=self.response_type, timeout=timeout))


class CreateMixin(ResourceService[R, P]):
    def create(
        self,
        params: P,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> R:
        """Create a resource from ``params`` and return the server's copy.

        Server-side validation failures surface as ``ClientError`` (usually
        400) with the server's message verbatim.
        """
        return cast(
            R,
            self._post(
                self.path,
                ctx=ctx,
                json=self._encode(params),
                expected=self.create_status,
                into=self.response_type,
                timeout=timeout,
            ),
        )


class UpdateMixin(ResourceService[R, P]):
    def update(
        self,
        identifier: Identifier,
        params: P,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> R:
        """Replace (``PUT``) or patch (``PATCH``) a resource, per ``update_method``."""
        return cast(
            R,
            self._request(
                self.update_method,
                self._item_path(identifier),
                ctx=ctx,
                json=self._encode(params),
                into=self.response_type,
                timeout=timeout,
            ),
        )


class DeleteMixin(ResourceService[R, P]):
    def delete(
        self,
        identifier: Identifier,
        *,
        ctx: Optional[Context] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """Delete a resource. Returns ``True``; any non-204 status raises ``ClientError``."""
        return self._delete(self._item_path(identifier), ctx=ctx, timeout=timeout)


class CrudService(
    ListMixin[R, P],
    GetMixin[R, P],
    CreateMixin[R, P],
    UpdateMixin[R, P],
    DeleteMixin[R, P],
):
    """Full list/get/create/update/delete contract."""


__all__ = [
    "CreateMixin",
    "CrudService",
    "DeleteMixin",
    "GetMixin",
    "Identifier",
    "ListMixin",
    "Resource",
    "ResourceService",
    "UpdateMixin",
]
