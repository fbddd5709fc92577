"""Transport layer for netservice."""

from .client import AiohttpTransport
from .protocols import HttpMethod, HttpRequest, HttpResponse, Transport

__all__ = [
    "AiohttpTransport",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "Transport",
]
