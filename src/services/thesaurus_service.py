"""Thesaurus lookup service: fetch a word and decode the response.

Pipeline: ThesaurusPort.fetch() → ResultSet.decode()
Errors from either step propagate unchanged; nothing is retried here.
"""

import logging

from domain.model.thesaurus import ResultSet
from port.thesaurus import ThesaurusPort

logger = logging.getLogger(__name__)


class ThesaurusService:
    """Looks words up through a ThesaurusPort."""

    def __init__(self, source: ThesaurusPort):
        self.source = source

    def lookup(self, word: str) -> ResultSet:
        """Fetch and decode the thesaurus entry for a word.

        Raises:
            ValueError: word is blank.
            DomainError: any fetch or decode failure (see domain.model.errors).
        """
        word = word.strip()
        if not word:
            raise ValueError("word must not be blank")

        raw = self.source.fetch(word)
        result_set = ResultSet.decode(raw, word)

        logger.info("Thesaurus lookup decoded", extra={
            "word": word,
            "result_count": len(result_set.results),
        })
        return result_set
