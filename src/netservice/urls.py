"""Absolute URL validation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from .errors import InvalidURL

SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
FORBIDDEN_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Checks that a string parses as an absolute URL.

    A URL is accepted when it has a syntactically valid scheme, a network
    location, a well-formed port (if any) and no whitespace or control
    characters. Scheme restriction is optional.

    Example:
        validator = UrlValidator(allowed_schemes={"https"})
        result = validator.validate("https://api.example.com/items")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    def __init__(
        self,
        allowed_schemes: set[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_schemes: If set, only these schemes are accepted
                (compared case-insensitively). Default: any scheme.
            logger: Optional logger for validation messages
        """
        self.allowed_schemes = {s.lower() for s in allowed_schemes} if allowed_schemes else None
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate that ``url`` is a parseable absolute URL.

        Args:
            url: The URL string to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not isinstance(url, str) or not url:
            return UrlValidationResult.invalid("URL is empty")

        if FORBIDDEN_CHARS.search(url):
            return UrlValidationResult.invalid("URL contains whitespace or control characters")

        try:
            parsed = urlparse(url)
            # Accessing port validates it
            parsed.port
        except ValueError as e:
            return UrlValidationResult.invalid(f"Invalid URL format: {e}")

        if not parsed.scheme or not SCHEME_PATTERN.match(parsed.scheme):
            return UrlValidationResult.invalid("URL has no valid scheme")

        if self.allowed_schemes is not None and parsed.scheme.lower() not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        if not parsed.netloc or not parsed.hostname:
            return UrlValidationResult.invalid("URL has no host")

        return UrlValidationResult.valid()

    def is_valid(self, url: str) -> bool:
        """Quick check if URL is valid."""
        return self.validate(url).is_valid

    def parse(self, url: str) -> str:
        """
        Validate ``url`` and return it unchanged.

        Raises:
            InvalidURL: If the URL is rejected
        """
        result = self.validate(url)
        if not result.is_valid:
            self.logger.debug(f"Rejected URL {url!r}: {result.rejection_reason}")
            raise InvalidURL(url, result.rejection_reason)
        return url


def parse_url(url: str, allowed_schemes: set[str] | None = None) -> str:
    """Validate ``url`` as an absolute URL, raising InvalidURL if it is not."""
    return UrlValidator(allowed_schemes=allowed_schemes).parse(url)
