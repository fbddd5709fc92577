"""Configuration models for netservice."""

from .config import ByteSize, NetworkConfig

__all__ = [
    "ByteSize",
    "NetworkConfig",
]
