"""Unit tests for the thesaurus response model.

Tests focus on behavior the renderer and CLI rely on:
- decode() error mapping (DecodeError / SchemaError / NotFoundError)
- lenient defaults for absent or null fields
- synonym/antonym presence, tags, category filtering
- homograph grouping
"""

import json
import unittest

from pydantic import ValidationError

from domain.model.errors import DecodeError, NotFoundError, SchemaError
from domain.model.thesaurus import (
    CrossReference,
    LexicalEntry,
    Onym,
    Result,
    ResultSet,
    Sense,
    TagCategory,
    group_results,
    homograph_key,
)

HAPPY_RESPONSE = {
    "metadata": {"provider": "Oxford University Press", "schema": "RetrieveThesaurus"},
    "results": [
        {
            "id": "happy",
            "language": "en-gb",
            "type": "headword",
            "word": "happy",
            "lexicalEntries": [
                {
                    "language": "en-gb",
                    "lexicalCategory": {"id": "adjective", "text": "Adjective"},
                    "text": "happy",
                    "entries": [
                        {
                            "homographNumber": "100",
                            "notes": [{"type": "editorNote", "text": "anything"}],
                            "senses": [
                                {
                                    "id": "t_en_gb0006951.001",
                                    "examples": [{"text": "Melissa came in looking happy"}],
                                    "synonyms": [
                                        {"language": "en", "text": "cheerful"},
                                        {"language": "en", "text": "cheery"},
                                    ],
                                    "antonyms": [{"language": "en", "text": "sad"}],
                                    "regions": [{"id": "north_american", "text": "North_American"}],
                                    "registers": [{"id": "informal", "text": "Informal"}],
                                    "subsenses": [
                                        {
                                            "id": "t_en_gb0006951.002",
                                            "synonyms": [{"language": "en", "text": "chipper"}],
                                            "registers": [{"id": "dated", "text": "Dated"}],
                                        }
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    ],
}


class TestDecode(unittest.TestCase):
    """Tests for ResultSet.decode() entry point."""

    def test_decode_bytes(self):
        """Raw JSON bytes decode into the nested model."""
        result_set = ResultSet.decode(json.dumps(HAPPY_RESPONSE).encode(), "happy")

        result = result_set.results[0]
        self.assertEqual(result.word, "happy")
        sense = result.lexical_entries[0].entries[0].senses[0]
        self.assertEqual(sense.synonyms[0].text, "cheerful")
        self.assertEqual(sense.subsenses[0].synonyms[0].text, "chipper")
        self.assertEqual(result_set.metadata["schema"], "RetrieveThesaurus")

    def test_decode_parsed_document(self):
        """An already-parsed dict is accepted as well."""
        result_set = ResultSet.decode(HAPPY_RESPONSE, "happy")
        self.assertEqual(result_set.results[0].lexical_entries[0].category, "Adjective")

    def test_notes_are_passed_through(self):
        """Untyped notes are kept as-is."""
        result_set = ResultSet.decode(HAPPY_RESPONSE, "happy")
        entry = result_set.results[0].lexical_entries[0].entries[0]
        self.assertEqual(entry.notes[0]["type"], "editorNote")

    def test_empty_results_is_not_found(self):
        """Zero results raise NotFoundError carrying the queried word."""
        with self.assertRaises(NotFoundError) as ctx:
            ResultSet.decode(b'{"results": []}', "zzxq")
        self.assertEqual(ctx.exception.word, "zzxq")

    def test_missing_results_is_not_found(self):
        """A document without a results field is treated as not found."""
        with self.assertRaises(NotFoundError):
            ResultSet.decode(b'{"metadata": {}}', "zzxq")

    def test_null_results_is_not_found(self):
        """null results behave like an absent field."""
        with self.assertRaises(NotFoundError):
            ResultSet.decode(b'{"results": null}', "zzxq")

    def test_invalid_json_is_decode_error(self):
        """Malformed JSON raises DecodeError, not SchemaError."""
        with self.assertRaises(DecodeError) as ctx:
            ResultSet.decode(b'{"results": [', "happy")
        self.assertNotIsInstance(ctx.exception, SchemaError)

    def test_results_wrong_type_is_schema_error(self):
        """A non-array results field raises SchemaError."""
        with self.assertRaises(SchemaError):
            ResultSet.decode(b'{"results": "happy"}', "happy")

    def test_top_level_array_is_schema_error(self):
        """A top-level array is structurally invalid."""
        with self.assertRaises(SchemaError):
            ResultSet.decode(b'[]', "happy")

    def test_schema_error_is_decode_error(self):
        """Callers catching DecodeError also see SchemaError."""
        self.assertTrue(issubclass(SchemaError, DecodeError))

    def test_missing_optional_fields_default_empty(self):
        """A bare result decodes with empty sequences and strings."""
        result_set = ResultSet.decode(b'{"results": [{"word": "bare", "lexicalEntries": [{"entries": [{"senses": [{}]}]}]}]}', "bare")

        sense = result_set.results[0].lexical_entries[0].entries[0].senses[0]
        self.assertEqual(sense.definitions, ())
        self.assertEqual(sense.synonyms, ())
        self.assertEqual(sense.subsenses, ())
        self.assertEqual(sense.id, "")
        self.assertEqual(result_set.results[0].lexical_entries[0].category, "")

    def test_thesaurus_links_use_snake_case_keys(self):
        """thesaurusLinks entries are spelled entry_id/sense_id upstream."""
        doc = {"results": [{"lexicalEntries": [{"entries": [{"senses": [
            {"thesaurusLinks": [{"entry_id": "happy", "sense_id": "t_en_gb0006951.001"}]}
        ]}]}]}]}
        sense = ResultSet.decode(doc, "happy").results[0].lexical_entries[0].entries[0].senses[0]
        self.assertEqual(sense.thesaurus_links[0].entry_id, "happy")

    def test_model_is_frozen(self):
        """Decoded records cannot be mutated."""
        result = ResultSet.decode(HAPPY_RESPONSE, "happy").results[0]
        with self.assertRaises(ValidationError):
            result.word = "sad"


class TestSenseQueries(unittest.TestCase):
    """Tests for Sense query methods."""

    def test_has_synonyms(self):
        """A sense with a non-empty synonym has synonyms."""
        sense = Sense(synonyms=(Onym(text="glad"),))
        self.assertTrue(sense.has_synonyms())

    def test_blank_synonyms_do_not_count(self):
        """Entries with blank text never count as synonyms."""
        sense = Sense(synonyms=(Onym(text=""), Onym(text="  ")))
        self.assertFalse(sense.has_synonyms())

    def test_no_synonyms(self):
        """An empty synonym sequence means no synonyms."""
        self.assertFalse(Sense().has_synonyms())

    def test_has_antonyms_ignores_blank(self):
        """Antonyms follow the same non-blank rule."""
        self.assertFalse(Sense(antonyms=(Onym(text=""),)).has_antonyms())
        self.assertTrue(Sense(antonyms=(Onym(text=""), Onym(text="sad"))).has_antonyms())

    def test_tags_order_and_underscores(self):
        """Tags come as regions, domains, registers with underscores replaced."""
        sense = Sense(
            registers=(TagCategory(id="informal", text="Informal"),),
            domains=(TagCategory(id="sport", text="Sport"),),
            regions=(TagCategory(id="north_american", text="North_American"),),
        )
        self.assertEqual(sense.tags(), ["North American", "Sport", "Informal"])

    def test_tags_fall_back_to_id(self):
        """A category without text is shown by its id."""
        sense = Sense(domains=(TagCategory(id="real_estate"),))
        self.assertEqual(sense.tags(), ["real estate"])

    def test_tags_exclude_removes_every_occurrence(self):
        """Excluding a literal removes all occurrences of exactly that value."""
        sense = Sense(
            regions=(TagCategory(text="British"),),
            domains=(TagCategory(text="Informal"),),
            registers=(TagCategory(text="Informal"), TagCategory(text="Informally")),
        )
        self.assertEqual(sense.tags(exclude=["Informal"]), ["British", "Informally"])

    def test_tags_skip_empty_labels(self):
        """A tag with neither text nor id does not produce an empty label."""
        sense = Sense(regions=(TagCategory(), TagCategory(text="British")))
        self.assertEqual(sense.tags(), ["British"])

    def test_example_texts(self):
        """Example texts come back in order."""
        sense = ResultSet.decode(HAPPY_RESPONSE, "happy").results[0].lexical_entries[0].entries[0].senses[0]
        self.assertEqual(sense.example_texts(), ["Melissa came in looking happy"])

    def test_cross_references_from_markers(self):
        """Markers alone are enough to count as cross-references."""
        self.assertTrue(Sense(cross_reference_markers=("see joy",)).has_cross_references())
        self.assertFalse(Sense().has_cross_references())

    def test_blank_cross_reference_texts_do_not_count(self):
        """References without text are not usable cross-references."""
        sense = Sense(cross_references=(CrossReference(id="joy"), CrossReference(id="glee", text=" ")))
        self.assertFalse(sense.has_cross_references())
        self.assertTrue(Sense(cross_references=(CrossReference(text="joy"),)).has_cross_references())


class TestLexicalEntry(unittest.TestCase):
    """Tests for LexicalEntry derived properties."""

    def test_category_header_uppercased(self):
        """The header is the uppercased category label."""
        entry = LexicalEntry(lexical_category=TagCategory(id="noun", text="noun"))
        self.assertEqual(entry.category_header, "NOUN")

    def test_short_category(self):
        """Nouns, verbs and adjectives have abbreviations, others none."""
        self.assertEqual(LexicalEntry(lexical_category=TagCategory(text="Noun")).short_category, "n.")
        self.assertEqual(LexicalEntry(lexical_category=TagCategory(text="Verb")).short_category, "v.")
        self.assertEqual(LexicalEntry(lexical_category=TagCategory(text="Adjective")).short_category, "adj.")
        self.assertEqual(LexicalEntry(lexical_category=TagCategory(text="Adverb")).short_category, "")

    def test_is_derivative(self):
        """Only entries with derivativeOf are derivatives."""
        doc = {"derivativeOf": [{"id": "happy", "text": "happy"}]}
        self.assertTrue(LexicalEntry.model_validate(doc).is_derivative)
        self.assertFalse(LexicalEntry().is_derivative)

    def test_pronunciation_by_notation(self):
        """The first pronunciation in the requested notation wins."""
        doc = {"pronunciations": [
            {"phoneticNotation": "respell", "phoneticSpelling": "HAP-ee"},
            {"phoneticNotation": "IPA", "phoneticSpelling": "ˈhapi"},
        ]}
        entry = LexicalEntry.model_validate(doc)
        self.assertEqual(entry.pronunciation("IPA"), "ˈhapi")
        self.assertEqual(entry.pronunciation("X-SAMPA"), "")


class TestFilterCategory(unittest.TestCase):
    """Tests for Result.filter_category()."""

    def setUp(self):
        self.result = Result(word="bank", lexical_entries=(
            LexicalEntry(lexical_category=TagCategory(id="noun", text="Noun")),
            LexicalEntry(lexical_category=TagCategory(id="verb", text="Verb")),
            LexicalEntry(lexical_category=TagCategory(id="noun", text="Noun")),
        ))

    def test_case_insensitive(self):
        """Matching ignores case."""
        self.assertEqual(len(self.result.filter_category("NOUN")), 2)
        self.assertEqual(len(self.result.filter_category("verb")), 1)

    def test_no_match_returns_empty(self):
        """No match is an empty tuple, not an error."""
        self.assertEqual(self.result.filter_category("adverb"), ())

    def test_result_not_modified(self):
        """Filtering leaves the Result untouched."""
        self.result.filter_category("verb")
        self.assertEqual(len(self.result.lexical_entries), 3)


class TestGroupResults(unittest.TestCase):
    """Tests for homograph grouping."""

    def test_groups_by_first_appearance(self):
        """Groups keep first-appearance order and member order."""
        results = [
            Result(id="bank", word="bank", type="1"),
            Result(id="Bank_2", word="bank", type="2"),
            Result(id="BANK", word="bank", type="3"),
        ]
        groups = group_results(results)

        self.assertEqual([key for key, _ in groups], ["bank", "bank_2"])
        self.assertEqual([r.type for r in groups[0][1]], ["1", "3"])

    def test_custom_key(self):
        """Any key function can be supplied."""
        results = [Result(word="a", language="en"), Result(word="b", language="fr"), Result(word="c", language="en")]
        groups = group_results(results, key=lambda r: r.language)
        self.assertEqual([(k, len(members)) for k, members in groups], [("en", 2), ("fr", 1)])

    def test_homograph_key_falls_back_to_word(self):
        """Results without an id are keyed by their word."""
        self.assertEqual(homograph_key(Result(word="Ace")), "ace")

    def test_empty(self):
        """No results, no groups."""
        self.assertEqual(group_results([]), [])


if __name__ == "__main__":
    unittest.main()
