"""Domain-level exceptions.

The decoder and the thesaurus adapter raise these errors to describe why a
lookup failed. The CLI catches them and maps them to messages and exit codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DecodeError(DomainError):
    """Response body is not valid JSON."""


class SchemaError(DecodeError):
    """Response is valid JSON but does not have the expected structure."""


class NotFoundError(DomainError):
    """The thesaurus has no results for the requested word."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"No results for '{word}'")


class AuthenticationError(DomainError):
    """Upstream rejected the application credentials."""


class UpstreamError(DomainError):
    """Upstream answered with an unexpected HTTP status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Thesaurus API returned HTTP {status_code}")


class TransportError(DomainError):
    """The request never produced an HTTP response."""


class ConfigError(DomainError):
    """Required configuration (credentials) is missing."""
