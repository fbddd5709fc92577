"""Error taxonomy for request execution.

Every error is terminal for its invocation and is delivered to the caller
inside a ``Failure`` result rather than raised.
"""

from __future__ import annotations


class NetworkError(Exception):
    """Base class for all errors delivered by NetworkService."""


class InvalidURL(NetworkError):
    """The supplied string is not a parseable absolute URL."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        message = f"Invalid URL: {url!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class SerializationError(NetworkError):
    """The request body could not be serialized to JSON."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Request body is not JSON-serializable: {cause}")


class TransportError(NetworkError):
    """The transport reported a network or IO failure."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Transport failure: {cause!r}")


class WrongResponse(NetworkError):
    """The transport did not yield a well-formed HTTP response."""

    def __init__(self) -> None:
        super().__init__("Transport did not return an HTTP response")


class WrongStatusCode(NetworkError):
    """An HTTP response arrived with a status code outside 200-299."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Unexpected HTTP status code: {code}")


class DecodeError(NetworkError):
    """
    The response body was missing or could not be decoded.

    Both causes share this one error kind and the underlying decoder
    error is not attached.
    """

    def __init__(self) -> None:
        super().__init__("Response body missing or not decodable")


def _equal_errors(left: NetworkError, right: NetworkError) -> bool:
    """Structural comparison used by Result equality."""
    if type(left) is not type(right):
        return False
    return left.args == right.args
