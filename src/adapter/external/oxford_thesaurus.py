"""Oxford Dictionaries thesaurus adapter.

Implements ThesaurusPort by fetching raw thesaurus entries from the
Oxford Dictionaries API (v2). Decoding is left to ResultSet.decode().

API Documentation: https://developer.oxforddictionaries.com/documentation
"""

import logging
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import (
    AuthenticationError,
    NotFoundError,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

OXFORD_API_BASE_URL = "https://od-api.oxforddictionaries.com/api/v2/"
API_TIMEOUT_SECONDS = 19.0

ACCEPT_HEADER = "Accept"
APP_ID_HEADER = "app_id"
APP_KEY_HEADER = "app_key"
JSON_MIME_TYPE = "application/json"


class OxfordThesaurusAdapter:
    """Adapter that fetches thesaurus entries from the Oxford Dictionaries API."""

    def __init__(
        self,
        app_id: str,
        app_key: str,
        base_url: str = OXFORD_API_BASE_URL,
        language: str = "en",
        timeout: float = API_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ):
        self.app_id = app_id
        self.app_key = app_key
        self.base_url = base_url.rstrip("/") + "/"
        self.language = language
        self.timeout = timeout
        self._client = client

    def url_for(self, word: str) -> str:
        """Thesaurus endpoint URL for a word."""
        return f"{self.base_url}thesaurus/{self.language}/{quote(word.lower(), safe='')}"

    def fetch(self, word: str) -> bytes:
        """Fetch the raw thesaurus response for a word.

        Args:
            word: The word to look up.

        Returns:
            The response body as bytes.

        Raises:
            NotFoundError: upstream answered 404.
            AuthenticationError: upstream rejected the credentials.
            UpstreamError: any other error status.
            TransportError: no response after retries.
        """
        url = self.url_for(word)
        headers = {
            ACCEPT_HEADER: JSON_MIME_TYPE,
            APP_ID_HEADER: self.app_id,
            APP_KEY_HEADER: self.app_key,
        }

        try:
            if self._client is not None:
                response = _fetch_with_retry(self._client, url, headers)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = _fetch_with_retry(client, url, headers)
        except httpx.RequestError as e:
            logger.warning(
                "Thesaurus API request error",
                extra={"word": word, "error_type": type(e).__name__},
            )
            raise TransportError(f"Could not reach the thesaurus API: {e}") from e

        if response.status_code == 404:
            logger.debug("Word not found in thesaurus API", extra={"word": word})
            raise NotFoundError(word)

        if response.status_code in (401, 403):
            logger.warning(
                "Thesaurus API rejected credentials",
                extra={"word": word, "status_code": response.status_code},
            )
            raise AuthenticationError("Thesaurus API rejected the application credentials")

        if response.is_error:
            logger.warning(
                "Thesaurus API HTTP error",
                extra={"word": word, "status_code": response.status_code},
            )
            raise UpstreamError(response.status_code)

        logger.debug(
            "Thesaurus API lookup successful",
            extra={"word": word, "bytes": len(response.content)},
        )
        return response.content


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _fetch_with_retry(client: httpx.Client, url: str, headers: dict[str, str]) -> httpx.Response:
    """Fetch URL with automatic retry on transient failures."""
    return client.get(url, headers=headers)
