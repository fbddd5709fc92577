"""Request executor: build, dispatch, validate and decode HTTP requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import partial
from types import TracebackType
from typing import Any, Optional, TypeVar

from .codec import JsonObject, deserialize, serialize
from .errors import DecodeError, NetworkError, TransportError, WrongResponse, WrongStatusCode
from .http.client import AiohttpTransport
from .http.protocols import HttpMethod, HttpRequest, HttpResponse, Transport
from .models.config import NetworkConfig
from .result import Failure, Result, Success
from .urls import UrlValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

Completion = Callable[[Result[T]], Any]
Decoder = Callable[[bytes], Any]

SUCCESS_STATUS_RANGE = range(200, 300)


class NetworkService:
    """
    Executes HTTP requests and delivers each outcome as a single Result.

    Every call ends in exactly one invocation of its ``completion``
    callback. Failures detected before dispatch (bad URL, unserializable
    body) are delivered synchronously from the calling method and nothing
    is sent. Everything else runs on a new task of the running event loop:

    - successes are scheduled onto the callback loop with
      ``call_soon_threadsafe``
    - failures are delivered directly on the dispatch task, unless
      ``config.marshal_failures`` is set, in which case they are scheduled
      like successes

    Cancellation is not offered. A dispatch task cancelled from outside,
    for example by the loop shutting down with calls in flight, ends
    without delivering anything.

    Example:
        async with NetworkService() as service:
            service.fetch_typed(
                "https://api.example.com/items/1",
                Item,
                lambda result: print(result),
                headers={"Accept": "application/json"},
            )
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[NetworkConfig] = None,
        callback_loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            transport: Transport to dispatch through. When omitted an
                AiohttpTransport is built from ``config`` and owned (closed)
                by this service.
            config: Network configuration (defaults apply when omitted)
            callback_loop: Loop that receives success deliveries. Defaults
                to the loop running at call time.
        """
        self.config = config or NetworkConfig()
        self._owned_transport: Optional[AiohttpTransport] = None
        if transport is None:
            transport = self._owned_transport = AiohttpTransport(
                user_agent=self.config.user_agent,
                proxy=self.config.proxy,
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
                max_content_size=self.config.max_content_size,
            )
        self._transport: Transport = transport
        self._callback_loop = callback_loop
        self._url_validator = UrlValidator(allowed_schemes=self.config.allowed_schemes)
        # Strong references so in-flight tasks are not garbage collected
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def transport(self) -> Transport:
        return self._transport

    async def __aenter__(self) -> NetworkService:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Wait for in-flight requests, then close an owned transport."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._owned_transport is not None:
            await self._owned_transport.close()

    def fetch_typed(
        self,
        url: str,
        response_type: type[T],
        completion: Completion[T],
        headers: Optional[dict[str, str]] = None,
    ) -> Optional[asyncio.Task[None]]:
        """
        GET ``url`` and decode the JSON response into ``response_type``.

        Args:
            url: Absolute URL to fetch
            response_type: Target type for decoding (pydantic model,
                dataclass, TypedDict, builtin container or scalar)
            completion: Called exactly once with the Result
            headers: Optional headers attached verbatim

        Returns:
            The dispatch task, or None if the call failed before dispatch
        """
        return self._submit(
            url,
            "GET",
            None,
            completion,
            headers,
            partial(deserialize, response_type=response_type),
        )

    def post_typed(
        self,
        url: str,
        body: JsonObject,
        response_type: type[T],
        completion: Completion[T],
        headers: Optional[dict[str, str]] = None,
    ) -> Optional[asyncio.Task[None]]:
        """
        POST ``body`` as JSON to ``url`` and decode the JSON response.

        A body that cannot be serialized yields SerializationError
        synchronously, before any network activity.

        Returns:
            The dispatch task, or None if the call failed before dispatch
        """
        return self._submit(
            url,
            "POST",
            body,
            completion,
            headers,
            partial(deserialize, response_type=response_type),
        )

    def fetch_raw(
        self,
        url: str,
        completion: Completion[bytes],
        headers: Optional[dict[str, str]] = None,
    ) -> Optional[asyncio.Task[None]]:
        """
        GET ``url`` and deliver the raw response body.

        An empty body is delivered as ``b""``; only a response that
        carries no body at all fails with DecodeError.
        """
        return self._submit(url, "GET", None, completion, headers, None)

    def _submit(
        self,
        url: str,
        method: HttpMethod,
        body: Optional[JsonObject],
        completion: Completion[Any],
        headers: Optional[dict[str, str]],
        decode: Optional[Decoder],
    ) -> Optional[asyncio.Task[None]]:
        try:
            request = self._build_request(url, method, body, headers)
        except NetworkError as e:
            logger.debug(f"{method} {url!r} failed before dispatch: {e}")
            completion(Failure(e))
            return None

        loop = asyncio.get_running_loop()
        callback_loop = self._callback_loop or loop
        task = loop.create_task(self._dispatch(request, completion, decode, callback_loop))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _build_request(
        self,
        url: str,
        method: HttpMethod,
        body: Optional[JsonObject],
        headers: Optional[dict[str, str]],
    ) -> HttpRequest:
        self._url_validator.parse(url)

        request_headers = dict(self.config.default_headers)
        if headers:
            request_headers.update(headers)

        payload = None
        if method == "POST":
            payload = serialize(body if body is not None else {})
            if not any(name.lower() == "content-type" for name in request_headers):
                request_headers["Content-Type"] = "application/json"

        return HttpRequest(url=url, method=method, headers=request_headers, body=payload)

    async def _dispatch(
        self,
        request: HttpRequest,
        completion: Completion[Any],
        decode: Optional[Decoder],
        callback_loop: asyncio.AbstractEventLoop,
    ) -> None:
        try:
            value = await self._exchange(request, decode)
        except NetworkError as e:
            self._fail(completion, e, callback_loop)
            return
        except Exception:
            logger.exception(f"Unexpected error handling response from {request.url}")
            self._fail(completion, DecodeError(), callback_loop)
            return

        callback_loop.call_soon_threadsafe(completion, Success(value))

    def _fail(
        self,
        completion: Completion[Any],
        error: NetworkError,
        callback_loop: asyncio.AbstractEventLoop,
    ) -> None:
        if self.config.marshal_failures:
            callback_loop.call_soon_threadsafe(completion, Failure(error))
        else:
            completion(Failure(error))

    async def _exchange(self, request: HttpRequest, decode: Optional[Decoder]) -> Any:
        logger.debug(f"Dispatching {request.method} {request.url}")
        try:
            response = await self._transport.send(request)
        except Exception as e:
            logger.warning(f"Transport error for {request.method} {request.url}: {e!r}")
            raise TransportError(e) from e

        if (
            not isinstance(response, HttpResponse)
            or not _is_status_code(response.status_code)
            or not isinstance(response.content, (bytes, type(None)))
        ):
            logger.warning(f"Non-HTTP response for {request.url}: {type(response).__name__}")
            raise WrongResponse()

        if response.status_code not in SUCCESS_STATUS_RANGE:
            logger.debug(f"Got {response.status_code} for {request.url}")
            raise WrongStatusCode(response.status_code)

        if response.content is None:
            raise DecodeError()

        if decode is None:
            return response.content
        return decode(response.content)


def _is_status_code(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
