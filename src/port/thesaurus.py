"""Thesaurus port: outbound interface for the thesaurus data source."""

from typing import Protocol


class ThesaurusPort(Protocol):
    """Port for fetching raw thesaurus responses.

    fetch() returns the response body untouched; decoding belongs to
    ResultSet.decode(). Failures are raised as domain errors
    (NotFoundError, AuthenticationError, UpstreamError, TransportError).
    """

    def fetch(self, word: str) -> bytes: ...
