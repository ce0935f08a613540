"""Exception hierarchy raised by the IntelOwl client."""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    import requests


class IntelOwlError(Exception):
    """Base error for everything the client raises."""


class TransportError(IntelOwlError):
    """No interpretable response was obtained from the server.

    Raised for connection failures, timeouts, cancellation and responses
    that could not be read or decoded.
    """

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class CancelledError(TransportError):
    """The caller's context was cancelled while the request was in flight."""


class DeadlineExceededError(TransportError):
    """The caller's context deadline elapsed before a response arrived."""


class ClientError(IntelOwlError):
    """The server answered with a status outside the operation's success set.

    Parameters
    ----------
    status_code
        HTTP status code, verbatim.
    message
        Raw response body text, verbatim.
    payload
        Decoded JSON body, or ``None`` when the body is not JSON.
    response
        The underlying ``requests.Response`` for advanced inspection.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        payload: Any = None,
        response: Optional["requests.Response"] = None,
    ) -> None:
        super().__init__(status_code, message)
        self.status_code = status_code
        self.message = message
        self.payload = payload
        self.response = response

    @classmethod
    def from_response(cls, response: "requests.Response") -> "ClientError":
        try:
            payload = response.json() if response.content else None
        except ValueError:
            payload = None
        return cls(response.status_code, response.text, payload=payload, response=response)

    def __str__(self) -> str:
        return f"IntelOwl returned status {self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return f"ClientError(status_code={self.status_code!r}, message={self.message!r})"

    # Equality ignores the response handle.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClientError):
            return NotImplemented
        return (self.status_code, self.message) == (other.status_code, other.message)

    def __hash__(self) -> int:
        return hash((self.status_code, self.message))


__all__ = [
    "CancelledError",
    "ClientError",
    "DeadlineExceededError",
    "IntelOwlError",
    "TransportError",
]
