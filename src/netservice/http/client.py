"""Default transport built on a shared aiohttp session."""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp

from .protocols import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "netservice/1.0 (aiohttp)"


class AiohttpTransport:
    """
    Transport that performs requests on one long-lived aiohttp session.

    Connection pooling, TLS and redirects are left to aiohttp. The
    session is created on ``__aenter__`` (or lazily on the first send)
    and reused by every request until ``close()``.

    Example:
        async with AiohttpTransport(read_timeout=10) as transport:
            response = await transport.send(HttpRequest(url="https://example.com"))
            print(response.status_code, len(response.content))
    """

    CHUNK_SIZE = 8192

    def __init__(
        self,
        user_agent: str | None = None,
        proxy: str | None = None,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        max_content_size: int = 50 * 1024 * 1024,
    ) -> None:
        """
        Initialize the transport.

        Args:
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or https://)
            connect_timeout: Connection timeout in seconds
            read_timeout: Socket read timeout in seconds
            max_content_size: Maximum response size in bytes
        """
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._proxy = proxy
        self._timeout = aiohttp.ClientTimeout(sock_connect=connect_timeout, sock_read=read_timeout)
        self._max_content_size = max_content_size
        self._session: aiohttp.ClientSession | None = None

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def __aenter__(self) -> AiohttpTransport:
        """Enter async context and create session."""
        self._open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        await self.close()

    def _open(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=100,  # Total connection limit
                limit_per_host=10,  # Per-host connection limit
                ttl_dns_cache=300,  # DNS cache TTL
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
            )
        return self._session

    async def close(self) -> None:
        """Close the underlying session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def send(self, request: HttpRequest) -> HttpResponse:
        """
        Perform one HTTP exchange.

        Args:
            request: The request descriptor

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            aiohttp.ClientError: On network errors
            asyncio.TimeoutError: When a timeout elapses
            ValueError: On content size exceeded
        """
        session = self._open()
        logger.debug(f"{request.method} {request.url}")

        async with session.request(
            request.method,
            request.url,
            headers=request.headers,
            data=request.body,
            proxy=self._proxy,
            allow_redirects=True,
        ) as response:
            content_length = response.headers.get("Content-Length")
            if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
                raise ValueError(f"Content too large: {content_length} bytes")

            content = b""
            async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                content += chunk
                if len(content) > self._max_content_size:
                    raise ValueError(f"Content size limit exceeded: >{self._max_content_size} bytes")

            return HttpResponse(
                status_code=response.status,
                content=content,
                content_type=response.headers.get("Content-Type", ""),
                headers=dict(response.headers),
                url=str(response.url),
            )
