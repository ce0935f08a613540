"""HTTP transport: base URL, default headers, timeouts and cancellation."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping, Optional

import requests

from .context import Context
from .errors import CancelledError, DeadlineExceededError, TransportError
from .utils import join_url

_logger = logging.getLogger(__name__)


class _Call:
    """One blocking round trip running on its own daemon thread.

    A call the sender stopped waiting for is abandoned: its response is
    closed as soon as it arrives.
    """

    def __init__(
        self,
        wake: threading.Event,
        target: Callable[..., requests.Response],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        self.finished = threading.Event()
        self._wake = wake
        self.response: Optional[requests.Response] = None
        self.error: Optional[Exception] = None
        self._abandoned = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(
            target=self._run,
            args=(target, args, kwargs),
            name="intelowl-transport",
            daemon=True,
        )

    def start(self) -> None:
        self._thread.start()

    def _run(self, target: Callable[..., requests.Response], args: tuple, kwargs: dict) -> None:
        try:
            response = target(*args, **kwargs)
        except Exception as exc:
            self.error = exc
        else:
            with self._lock:
                if self._abandoned:
                    response.close()
                else:
                    self.response = response
        finally:
            self.finished.set()
            self._wake.set()

    def abandon(self) -> None:
        with self._lock:
            self._abandoned = True
            if self.response is not None:
                self.response.close()
                self.response = None


class Transport:
    """Send one HTTP request and return the fully-read response.

    Each blocking ``requests`` call runs on its own thread so the calling
    thread can stop waiting as soon as its context is cancelled or expires.
    Calls never wait on one another.

    Parameters
    ----------
    base_url
        Root URL of the IntelOwl instance, e.g. ``http://localhost:80``.
    token
        API token sent as ``Authorization: Token <token>``.
    default_timeout
        Socket timeout in seconds when a call does not pass its own.
    session
        Optional requests session to reuse connections, proxies or TLS setup.
        A session passed in stays open on ``close()``; the caller owns it.
    user_agent
        Value for the ``User-Agent`` header.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        default_timeout: float = 20,
        session: Optional[requests.Session] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.base_url = base_url
        self.default_timeout = default_timeout
        self._owns_session = session is None
        self._session = requests.Session() if session is None else session
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Token {token}"
        if user_agent:
            headers["User-Agent"] = user_agent
        self._headers = headers

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the default headers attached to every request."""
        return dict(self._headers)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _round_trip(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        response = self._session.request(method, url, **kwargs)
        # Read the full body here so cancellation after this point is a no-op.
        response.content  # noqa: B018
        return response

    def send(
        self,
        ctx: Context,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any] | list[tuple[str, Any]]] = None,
        data: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Perform one round trip.

        Raises
        ------
        CancelledError
            The context was cancelled before the response was read.
        DeadlineExceededError
            The context deadline passed before the response was read.
        TransportError
            The request failed before a response was obtained.
        """
        url = join_url(self.base_url, path)
        self._raise_if_done(ctx, method, url)

        effective_timeout = self.default_timeout if timeout is None else timeout
        remaining = ctx.remaining()
        if remaining is not None:
            if remaining <= 0:
                raise DeadlineExceededError(f"{method} {url}: context deadline exceeded")
            effective_timeout = min(effective_timeout, remaining)

        request_headers = dict(self._headers)
        if headers:
            request_headers.update(headers)

        _logger.debug("%s %s params=%s", method, url, params)
        wake = threading.Event()
        call = _Call(
            wake,
            self._round_trip,
            method,
            url,
            params=params,
            data=data,
            files=files,
            headers=request_headers,
            timeout=effective_timeout,
        )
        unregister = ctx.add_cancel_callback(wake.set)
        try:
            call.start()
            wake.wait(ctx.remaining())
        finally:
            unregister()

        if not call.finished.is_set():
            call.abandon()
            self._raise_if_done(ctx, method, url)
            raise DeadlineExceededError(f"{method} {url}: context deadline exceeded")

        error = call.error
        if error is None:
            return call.response
        if not isinstance(error, requests.RequestException):
            raise error
        # A failure caused by the context's own deadline reports as such.
        self._raise_if_done(ctx, method, url, cause=error)
        if isinstance(error, requests.Timeout):
            raise TransportError(f"{method} {url} timed out: {error}", cause=error) from error
        raise TransportError(f"{method} {url} failed: {error}", cause=error) from error

    @staticmethod
    def _raise_if_done(ctx: Context, method: str, url: str, *, cause: Optional[BaseException] = None) -> None:
        if ctx.cancelled:
            raise CancelledError(f"{method} {url}: context cancelled", cause=cause) from cause
        if ctx.expired:
            raise DeadlineExceededError(f"{method} {url}: context deadline exceeded", cause=cause) from cause


__all__ = ["Transport"]
