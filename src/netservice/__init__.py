"""
netservice - Thin async HTTP request executor with typed JSON decoding.

Usage:
    from pydantic import BaseModel
    from netservice import NetworkService, Success

    class Item(BaseModel):
        id: int
        name: str

    def on_item(result):
        if isinstance(result, Success):
            print(result.value.name)
        else:
            print(f"Request failed: {result.error}")

    async with NetworkService() as service:
        service.fetch_typed("https://api.example.com/items/1", Item, on_item)
"""

__version__ = "1.0.0"

from .codec import JsonObject, deserialize, serialize
from .errors import (
    DecodeError,
    InvalidURL,
    NetworkError,
    SerializationError,
    TransportError,
    WrongResponse,
    WrongStatusCode,
)
from .executor import Completion, NetworkService
from .http import AiohttpTransport, HttpRequest, HttpResponse, Transport
from .logging_config import setup_logging, setup_logging_from_config
from .models.config import NetworkConfig
from .result import Failure, Result, Success
from .urls import UrlValidationResult, UrlValidator, parse_url

__all__ = [
    "__version__",
    # Core
    "NetworkService",
    "Completion",
    # Results
    "Result",
    "Success",
    "Failure",
    # Errors
    "NetworkError",
    "InvalidURL",
    "SerializationError",
    "TransportError",
    "WrongResponse",
    "WrongStatusCode",
    "DecodeError",
    # Transport
    "Transport",
    "AiohttpTransport",
    "HttpRequest",
    "HttpResponse",
    # Codec
    "JsonObject",
    "serialize",
    "deserialize",
    # URLs
    "UrlValidator",
    "UrlValidationResult",
    "parse_url",
    # Config & logging
    "NetworkConfig",
    "setup_logging",
    "setup_logging_from_config",
]
