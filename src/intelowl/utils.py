"""Shared helpers for the IntelOwl client."""

from __future__ import annotations

import json
from typing import Any, Hashable, Iterable, Optional, TypeVar, get_args, get_origin
from urllib.parse import quote

import requests
from typing_extensions import is_typeddict

from .errors import TransportError

T = TypeVar("T", bound=Hashable)


def unique_in_order(values: Iterable[T]) -> list[T]:
    """Return unique values preserving the original order."""
    seen: set[T] = set()
    output: list[T] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        output.append(value)
    return output


def join_url(base_url: str, path: str) -> str:
    """Join the base URL and an endpoint path."""
    if not path.startswith("/"):
        path = "/" + path
    return base_url.rstrip("/") + path


def quote_identifier(identifier: int | str) -> str:
    """Render a resource identifier as a single path segment.

    Raises
    ------
    ValueError
        If the identifier is not a non-negative int or a non-empty string.
    """
    if isinstance(identifier, bool) or not isinstance(identifier, (int, str)):
        raise ValueError(f"Invalid identifier: {identifier!r}")
    if isinstance(identifier, int):
        if identifier < 0:
            raise ValueError(f"Invalid identifier: {identifier!r}")
        return str(identifier)
    if not identifier.strip():
        raise ValueError(f"Invalid identifier: {identifier!r}")
    return quote(identifier, safe="")


def encode_body(value: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Raises
    ------
    ValueError
        If the value cannot be serialized. Nothing has been sent at that point.
    """
    try:
        return json.dumps(value).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Could not serialize request body: {exc}") from exc


def _empty_value(into: Any) -> Any:
    origin = get_origin(into) or into
    if origin is list:
        return []
    return {}


def _check_shape(payload: Any, into: Any) -> bool:
    origin = get_origin(into) or into
    if origin is list:
        if not isinstance(payload, list):
            return False
        args = get_args(into)
        if args and (args[0] is dict or get_origin(args[0]) is dict or is_typeddict(args[0])):
            return all(isinstance(item, dict) for item in payload)
        return True
    if origin is dict or is_typeddict(into):
        return isinstance(payload, dict)
    return True


def decode_body(response: requests.Response, into: Optional[Any]) -> Any:
    """Decode a successful response body into ``into``.

    Parameters
    ----------
    response
        A response whose body has already been read.
    into
        Decode target: ``None`` skips decoding, ``bool`` yields ``True``,
        ``bytes``/``str`` return the raw body, and ``list[...]``, ``dict`` or a
        ``TypedDict`` decode JSON and check the top-level shape.

    Raises
    ------
    TransportError
        If the body is not JSON or has the wrong top-level shape.
    """
    if into is None:
        return None
    if into is bool:
        return True
    if into is bytes:
        return response.content
    if into is str:
        return response.text
    if not response.content:
        return _empty_value(into)

    try:
        payload = response.json()
    except ValueError as exc:
        raise TransportError(
            f"Response (status {response.status_code}) was not valid JSON", cause=exc
        ) from exc
    if not _check_shape(payload, into):
        raise TransportError(
            f"Response (status {response.status_code}) had an unexpected shape: "
            f"expected {getattr(into, '__name__', into)}, got {type(payload).__name__}"
        )
    return payload


__all__ = ["decode_body", "encode_body", "join_url", "quote_identifier", "unique_in_order"]
