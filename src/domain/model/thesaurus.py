"""Thesaurus response model.

Mirrors the Oxford Dictionaries v2 thesaurus JSON:
ResultSet → Result → LexicalEntry → Entry → Sense → Subsense.

Records are immutable once decoded. Absent or null fields become empty
tuples / strings, so a sparse response never fails validation on its own.
Only structurally wrong documents (invalid JSON, wrong JSON types) do.
"""

from typing import Any, Callable, Hashable, Iterable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from domain.model.errors import DecodeError, NotFoundError, SchemaError

K = TypeVar("K", bound=Hashable)

_SHORT_CATEGORIES = {
    "noun": "n.",
    "adjective": "adj.",
    "verb": "v.",
}


class _Record(BaseModel):
    """Base for every response record: frozen, camelCase aliases, lenient."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null behaves like an absent field so the defaults apply
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ── Leaf records ─────────────────────────────────────────────


class TagCategory(_Record):
    """Region, domain, register or lexical category (id + display text)."""
    id: str = ""
    text: str = ""

    @property
    def display(self) -> str:
        """Display text with underscores turned into spaces."""
        label = self.text.strip() or self.id.strip()
        return label.replace("_", " ")


class Onym(_Record):
    """A synonym or antonym entry."""
    id: str = ""
    language: str = ""
    text: str = ""


class Example(_Record):
    """Example usage, optionally tagged with registers."""
    text: str = ""
    registers: tuple[TagCategory, ...] = ()
    notes: tuple[Any, ...] = ()


class CrossReference(_Record):
    """Reference to another headword and how it relates to this one."""
    id: str = ""
    text: str = ""
    type: str = ""


class Derivative(_Record):
    id: str = ""
    language: str = ""
    text: str = ""


class GrammaticalFeature(_Record):
    id: str = ""
    text: str = ""
    type: str = ""


class Pronunciation(_Record):
    audio_file: str = ""
    dialects: tuple[str, ...] = ()
    phonetic_notation: str = ""
    phonetic_spelling: str = ""


class VariantForm(_Record):
    text: str = ""


class ThesaurusLink(_Record):
    # Upstream spells these two in snake_case.
    entry_id: str = Field("", alias="entry_id")
    sense_id: str = Field("", alias="sense_id")


# ── Senses ───────────────────────────────────────────────────


class _SenseFields(_Record):
    """Fields and queries shared by Sense and Subsense."""
    id: str = ""
    definitions: tuple[str, ...] = ()
    short_definitions: tuple[str, ...] = ()
    examples: tuple[Example, ...] = ()
    synonyms: tuple[Onym, ...] = ()
    antonyms: tuple[Onym, ...] = ()
    regions: tuple[TagCategory, ...] = ()
    domains: tuple[TagCategory, ...] = ()
    registers: tuple[TagCategory, ...] = ()
    cross_references: tuple[CrossReference, ...] = ()
    cross_reference_markers: tuple[str, ...] = ()
    thesaurus_links: tuple[ThesaurusLink, ...] = ()
    variant_forms: tuple[VariantForm, ...] = ()
    notes: tuple[Any, ...] = ()

    def has_synonyms(self) -> bool:
        """True if at least one synonym has non-blank text.

        Upstream sometimes sends entries with empty text; those do not count.
        """
        return any(onym.text.strip() for onym in self.synonyms)

    def has_antonyms(self) -> bool:
        """True if at least one antonym has non-blank text."""
        return any(onym.text.strip() for onym in self.antonyms)

    def has_definitions(self) -> bool:
        return len(self.definitions) > 0

    def has_cross_references(self) -> bool:
        """True if there is a marker or a cross-reference with non-blank text."""
        return bool(self.cross_reference_markers) or any(
            ref.text.strip() for ref in self.cross_references
        )

    def example_texts(self) -> list[str]:
        return [example.text for example in self.examples]

    def tags(self, exclude: Iterable[str] = ()) -> list[str]:
        """Region, domain and register labels, in that order.

        Args:
            exclude: Literal tag values to drop (every occurrence).

        Returns:
            Display labels with underscores replaced by spaces. Tags with
            neither text nor id are skipped.
        """
        blocked = set(exclude)
        labels = [
            category.display
            for category in (*self.regions, *self.domains, *self.registers)
        ]
        return [label for label in labels if label and label not in blocked]


class Subsense(_SenseFields):
    """Refinement of a Sense. Not nested any further."""


class Sense(_SenseFields):
    """The atomic unit of meaning."""
    subsenses: tuple[Subsense, ...] = ()


# ── Entries ──────────────────────────────────────────────────


class Entry(_Record):
    """One morphological entry (homograph number, variant spellings)."""
    senses: tuple[Sense, ...] = ()
    homograph_number: str = ""
    etymologies: tuple[str, ...] = ()
    grammatical_features: tuple[GrammaticalFeature, ...] = ()
    variant_forms: tuple[VariantForm, ...] = ()
    notes: tuple[Any, ...] = ()


class LexicalEntry(_Record):
    """Entries grouped under one part of speech."""
    lexical_category: TagCategory = Field(default_factory=TagCategory)
    entries: tuple[Entry, ...] = ()
    derivative_of: tuple[Derivative, ...] = ()
    derivatives: tuple[Derivative, ...] = ()
    pronunciations: tuple[Pronunciation, ...] = ()
    language: str = ""
    text: str = ""

    @property
    def category(self) -> str:
        """Part-of-speech label, e.g. "Noun"."""
        return self.lexical_category.text or self.lexical_category.id

    @property
    def category_header(self) -> str:
        return self.category.upper()

    @property
    def short_category(self) -> str:
        """Abbreviated part of speech ("n.", "adj.", "v.") or ""."""
        return _SHORT_CATEGORIES.get(self.category.lower(), "")

    @property
    def is_derivative(self) -> bool:
        return len(self.derivative_of) > 0

    def matches_category(self, category: str) -> bool:
        wanted = category.lower()
        return wanted in (self.category.lower(), self.lexical_category.id.lower())

    def pronunciation(self, notation: str) -> str:
        """Phonetic spelling for the first pronunciation in `notation`, or ""."""
        for pron in self.pronunciations:
            if pron.phonetic_notation == notation:
                return pron.phonetic_spelling
        return ""


class Result(_Record):
    """One headword for a language."""
    id: str = ""
    word: str = ""
    language: str = ""
    type: str = ""
    lexical_entries: tuple[LexicalEntry, ...] = ()

    def filter_category(self, category: str) -> tuple[LexicalEntry, ...]:
        """Lexical entries whose category matches, ignoring case.

        The Result itself is left untouched.
        """
        return tuple(
            entry for entry in self.lexical_entries
            if entry.matches_category(category)
        )


class ResultSet(_Record):
    """Full decoded response."""
    metadata: dict[str, Any] = Field(default_factory=dict)
    results: tuple[Result, ...] = ()

    @classmethod
    def decode(cls, payload: bytes | str | dict, word: str) -> "ResultSet":
        """Decode a thesaurus response.

        Args:
            payload: Raw JSON (bytes or str) or an already-parsed document.
            word: The queried word, carried by NotFoundError.

        Raises:
            DecodeError: payload is not valid JSON.
            SchemaError: a structural field has the wrong JSON type.
            NotFoundError: the document holds zero results.
        """
        try:
            if isinstance(payload, (bytes, bytearray, str)):
                result_set = cls.model_validate_json(payload)
            else:
                result_set = cls.model_validate(payload)
        except ValidationError as e:
            errors = e.errors()
            if any(error["type"] == "json_invalid" for error in errors):
                raise DecodeError(f"Malformed thesaurus response: {errors[0]['msg']}") from e
            location = ".".join(str(part) for part in errors[0]["loc"]) or "<root>"
            raise SchemaError(
                f"Unexpected thesaurus response structure at {location}: {errors[0]['msg']}"
            ) from e

        if not result_set.results:
            raise NotFoundError(word)
        return result_set


# ── Homograph grouping ───────────────────────────────────────


def homograph_key(result: Result) -> str:
    """Default grouping key: the headword id, falling back to the word."""
    return (result.id or result.word).lower()


def group_results(
    results: Iterable[Result],
    key: Callable[[Result], K] = homograph_key,
) -> list[tuple[K, tuple[Result, ...]]]:
    """Partition results by `key`.

    Groups are ordered by first appearance and members keep their
    relative order.
    """
    groups: dict[K, list[Result]] = {}
    for result in results:
        groups.setdefault(key(result), []).append(result)
    return [(group_key, tuple(members)) for group_key, members in groups.items()]
