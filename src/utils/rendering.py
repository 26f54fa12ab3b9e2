"""Terminal rendering for thesaurus results.

Every function here is pure: it turns model values into strings written in
rich console markup and never prints anything. Passing a disabled Markup
(PLAIN) yields plain text, e.g. when output is piped to a file.
"""

from dataclasses import dataclass
from typing import Callable, Hashable, Iterable

from rich.markup import escape

from domain.model.thesaurus import (
    Example,
    LexicalEntry,
    Onym,
    Result,
    ResultSet,
    Sense,
    Subsense,
    VariantForm,
    group_results,
    homograph_key,
)

TITLE_RULE = "▬"
PRONUNCIATION_NOTATION = "IPA"
EXAMPLE_SEPARATOR = ", "

EMPHASIS_STYLE = "bold blue"
TAG_STYLE = "green"
CATEGORY_STYLE = "yellow"
SENSE_NUMBER_STYLE = "bold bright_magenta"
TITLE_STYLE = "bold"


@dataclass(frozen=True)
class Markup:
    """Caller-supplied switch between rich markup and plain text."""
    enabled: bool = True

    def text(self, value: str) -> str:
        """Unstyled text, escaped when markup is on."""
        return escape(value) if self.enabled else value

    def style(self, value: str, style: str) -> str:
        """Text wrapped in a style tag; no wrapper for empty text."""
        if not self.enabled or not value:
            return value
        return f"[{style}]{escape(value)}[/{style}]"


RICH = Markup(enabled=True)
PLAIN = Markup(enabled=False)


# ── Text helpers ─────────────────────────────────────────────


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; the rest is left as is."""
    return text[:1].upper() + text[1:]


def rejoin(text: str, old: str, new: str) -> str:
    """Trim trailing `old` delimiters, split on `old` and join with `new`."""
    text = text.rstrip(old)
    if not text:
        return ""
    return new.join(text.split(old))


# ── Sense-level pieces ───────────────────────────────────────


def render_cross_references(sense: Sense | Subsense) -> str:
    markers = sense.cross_reference_markers or tuple(
        ref.text for ref in sense.cross_references if ref.text.strip()
    )
    return f"[{'; '.join(markers)}]"


def render_definitions(sense: Sense | Subsense, markup: Markup = RICH) -> str:
    """Definition line for a sense.

    Definitions are joined with "; " and the first character capitalized.
    Without definitions the cross-reference markers are shown in brackets,
    and without either the line is empty.
    """
    if sense.has_definitions():
        return markup.text(capitalize_first("; ".join(sense.definitions)))
    if sense.has_cross_references():
        return markup.text(render_cross_references(sense))
    return ""


def render_onyms(onyms: Iterable[Onym], markup: Markup = RICH) -> str:
    """Comma-separated synonyms or antonyms, the first one emphasized.

    Blank entries are skipped; nothing left means an empty string.
    """
    texts = [onym.text for onym in onyms if onym.text.strip()]
    if not texts:
        return ""
    first, *rest = texts
    return ", ".join([markup.style(first, EMPHASIS_STYLE), *(markup.text(t) for t in rest)])


def render_synonyms(sense: Sense | Subsense, markup: Markup = RICH) -> str:
    return render_onyms(sense.synonyms, markup)


def render_antonyms(sense: Sense | Subsense, markup: Markup = RICH) -> str:
    return render_onyms(sense.antonyms, markup)


def render_tags(
    sense: Sense | Subsense,
    markup: Markup = RICH,
    exclude: Iterable[str] = (),
) -> str:
    tags = sense.tags(exclude)
    if not tags:
        return ""
    return markup.style(", ".join(tags), TAG_STYLE)


def render_example(example: Example, markup: Markup = RICH) -> str:
    """An example in quotes, prefixed by its registers in backticks."""
    text = f"'{example.text}'"
    if example.registers:
        registers = ", ".join(f"`{register.display}`" for register in example.registers)
        text = f"{registers} {text}"
    return markup.text(text)


def render_examples(sense: Sense | Subsense, markup: Markup = RICH) -> str:
    block = "".join(f"{render_example(example, markup)}\n" for example in sense.examples)
    return rejoin(block, "\n", EXAMPLE_SEPARATOR)


def render_variant_forms(forms: Iterable[VariantForm], markup: Markup = RICH) -> str:
    variants = [f"'{form.text}'" for form in forms if form.text]
    if not variants:
        return ""
    return markup.text(f"Alternatively: {', '.join(variants)}")


def _onym_line(
    sense: Sense | Subsense,
    onyms: Iterable[Onym],
    markup: Markup,
    exclude_tags: Iterable[str],
) -> str:
    parts = [render_tags(sense, markup, exclude_tags), render_onyms(onyms, markup)]
    return "- " + " ".join(part for part in parts if part)


def render_sense(
    index: int,
    sense: Sense,
    markup: Markup = RICH,
    exclude_tags: Iterable[str] = (),
) -> list[str]:
    """Lines for one numbered sense, its synonyms and antonyms.

    Subsense synonyms/antonyms are listed under the parent's section.
    The block always ends with a blank line.
    """
    exclude_tags = tuple(exclude_tags)
    number = markup.style(f"{index}.", SENSE_NUMBER_STYLE)
    definition = render_definitions(sense, markup)
    examples = render_examples(sense, markup)

    lines: list[str] = []
    if definition:
        lines.append(f"{number} {definition}")
        if examples:
            lines.append(f"   {examples}")
    else:
        lines.append(f"{number} {examples}".rstrip())

    with_synonyms = [s for s in (sense, *sense.subsenses) if s.has_synonyms()]
    if with_synonyms:
        lines.extend(["", "SYNONYMS"])
        lines.extend(_onym_line(s, s.synonyms, markup, exclude_tags) for s in with_synonyms)

    with_antonyms = [s for s in (sense, *sense.subsenses) if s.has_antonyms()]
    if with_antonyms:
        lines.extend(["", "ANTONYMS"])
        lines.extend(_onym_line(s, s.antonyms, markup, exclude_tags) for s in with_antonyms)

    lines.append("")
    return lines


# ── Entry-level pieces ───────────────────────────────────────


def render_category(
    lexical_entry: LexicalEntry,
    markup: Markup = RICH,
    abbreviate: bool = False,
) -> str:
    """Part-of-speech header, e.g. "NOUN" or "n." when abbreviated."""
    label = lexical_entry.category_header
    if abbreviate and lexical_entry.short_category:
        label = lexical_entry.short_category
    header = markup.style(label, CATEGORY_STYLE)

    spelling = lexical_entry.pronunciation(PRONUNCIATION_NOTATION)
    if spelling:
        header = f"{header} {markup.text(f'/{spelling}/')}"
    return header


def render_derivation(lexical_entry: LexicalEntry, markup: Markup = RICH) -> str:
    if not lexical_entry.is_derivative:
        return ""
    sources = ", ".join(d.text for d in lexical_entry.derivative_of if d.text)
    return markup.text(f"Derivative of: {sources}")


def render_title(result: Result, markup: Markup = RICH) -> list[str]:
    """Headword followed by an underline of the same length."""
    return [markup.style(result.word, TITLE_STYLE), TITLE_RULE * len(result.word)]


def render_result(
    result: Result,
    markup: Markup = RICH,
    category: str | None = None,
    abbreviate: bool = False,
    exclude_tags: Iterable[str] = (),
) -> list[str]:
    """Lines for every lexical entry of a Result (optionally one category)."""
    exclude_tags = tuple(exclude_tags)
    lexical_entries = result.filter_category(category) if category else result.lexical_entries

    lines: list[str] = []
    for lexical_entry in lexical_entries:
        lines.append(render_category(lexical_entry, markup, abbreviate))
        lines.append("")

        derivation = render_derivation(lexical_entry, markup)
        if derivation:
            lines.append(derivation)

        for entry in lexical_entry.entries:
            variants = render_variant_forms(entry.variant_forms, markup)
            if variants:
                lines.append(variants)
            for index, sense in enumerate(entry.senses, start=1):
                lines.extend(render_sense(index, sense, markup, exclude_tags))
    return lines


def render_results(
    result_set: ResultSet,
    markup: Markup = RICH,
    category: str | None = None,
    abbreviate: bool = False,
    exclude_tags: Iterable[str] = (),
    key: Callable[[Result], Hashable] = homograph_key,
) -> list[str]:
    """Lines for a whole response, one titled block per homograph group.

    Groups with nothing to show (e.g. filtered out by `category`) are skipped.
    """
    exclude_tags = tuple(exclude_tags)
    lines: list[str] = []
    for _, group in group_results(result_set.results, key):
        body: list[str] = []
        for result in group:
            body.extend(render_result(result, markup, category, abbreviate, exclude_tags))
        if body:
            lines.extend(render_title(group[0], markup))
            lines.append("")
            lines.extend(body)
    return lines
