"""In-memory implementation of ThesaurusPort for testing."""

import json
from typing import Any

from domain.model.errors import DomainError


class FakeThesaurusAdapter:
    """Fake thesaurus adapter that returns a preconfigured response."""

    def __init__(self, payload: dict[str, Any] | bytes | None = None, error: DomainError | None = None):
        self.payload = payload
        self.error = error
        self.words: list[str] = []

    def fetch(self, word: str) -> bytes:
        self.words.append(word)
        if self.error is not None:
            raise self.error
        if isinstance(self.payload, bytes):
            return self.payload
        return json.dumps(self.payload or {"results": []}).encode()
