"""Protocol definitions for the transport abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

HttpMethod = Literal["GET", "POST"]


@dataclass(frozen=True)
class HttpRequest:
    """
    Fully assembled outgoing request, built fresh for every call.

    Attributes:
        url: Absolute target URL
        method: HTTP method
        headers: Header name to value, attached verbatim
        body: Encoded request body (POST only)
    """

    url: str
    method: HttpMethod = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by a Transport.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response body, or None when the response carried no body
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes | None
    content_type: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""


class Transport(Protocol):
    """
    Protocol for the HTTP exchange underneath NetworkService.

    This abstraction allows for:
    - Mock implementations in tests
    - Different backends (aiohttp, httpx, etc.)

    Anything other than an HttpResponse coming back from ``send`` is
    treated as a protocol violation by the caller.
    """

    async def send(self, request: HttpRequest) -> HttpResponse | Any:
        """
        Perform one request/response exchange.

        Args:
            request: The request descriptor

        Returns:
            HttpResponse with status, body and headers

        Raises:
            Exception on network or IO errors
        """
        ...
