"""Single request path: encode, send, classify, decode."""

from __future__ import annotations

import logging
from typing import Any, Collection, Mapping, Optional

from .context import Context
from .errors import ClientError, TransportError
from .transport import Transport
from .utils import decode_body, encode_body


class RequestExecutor:
    """Turn one HTTP round trip into a decoded value or a classified error.

    Never retries and never substitutes a fallback value: every call either
    returns the decoded body or raises.
    """

    def __init__(self, transport: Transport, *, logger: Optional[logging.Logger] = None) -> None:
        self._transport = transport
        self._logger = logger or logging.getLogger(__name__)

    def request(
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
        """Send a request and decode the response.

        Parameters
        ----------
        method
            HTTP method (GET, POST, PUT, PATCH, DELETE).
        path
            Endpoint path relative to the base URL, e.g. ``/api/tags``.
        ctx
            Cancellation context; defaults to a background context.
        params
            Query parameters appended to the URL.
        json
            JSON-serializable request body.
        data
            Form fields, sent as multipart together with ``files``.
        files
            Files for a multipart upload.
        expected
            Status codes that count as success for this operation.
        into
            Decode target, see :func:`intelowl.utils.decode_body`.
        timeout
            Socket timeout in seconds for this request.

        Returns
        -------
        Any
            The decoded body.

        Raises
        ------
        ValueError
            The JSON body could not be serialized; nothing was sent.
        TransportError
            No interpretable response was obtained.
        ClientError
            The response status is not in ``expected``.
        """
        headers: dict[str, str] = {}
        body: Any = data
        if json is not None:
            if data is not None or files is not None:
                raise ValueError("json cannot be combined with form data or files")
            body = encode_body(json)
            headers["Content-Type"] = "application/json"

        ctx = ctx or Context.background()
        try:
            response = self._transport.send(
                ctx,
                method,
                path,
                params=params,
                data=body,
                files=files,
                headers=headers,
                timeout=timeout,
            )
        except TransportError as exc:
            self._logger.warning("Request failed for %s %s: %s", method, path, exc)
            raise

        if response.status_code not in expected:
            error = ClientError.from_response(response)
            self._logger.warning("Request failed for %s %s: %s", method, path, error)
            raise error

        try:
            return decode_body(response, into)
        except TransportError as exc:
            self._logger.warning("Response from %s %s could not be decoded: %s", method, path, exc)
            raise


__all__ = ["RequestExecutor"]
