"""
Response parser: free-form model prose -> partial AnalysisResult.

Models follow the requested grammar most of the time, but not always. The parser never
fails on prose; it degrades through a cascade of strategies:

1. Split on `## ` headers and classify each by synonym (individual / overview / risks / improvements).
2. Split the individual section (or the whole text) on `### ` record headers.
3. If that yields at most one section, anchor on each record's name (header, bold, numbered,
   inline "Name:" forms, with underscore/space variants).
4. If still at most one section and all record names share a leading token, split on it.
5. If there are no section headers at all, the whole text becomes the overview.

Entries returned here are partial: records may be missing, duplicated or misnamed.
The reconciler turns them into exactly one entry per record.
"""

from __future__ import annotations
from flowscope.core.parser.extractors import (
    DESCRIPTION_RULES,
    IMPROVEMENT_RULES,
    clean_value,
    extract_field,
)
from flowscope.core.prompt import grammar
from flowscope.domain.exceptions.exceptions import ParseError
from flowscope.domain.result.analysis import (
    AnalysisEntry,
    AnalysisResult,
    DEFAULT_DESCRIPTION,
    DEFAULT_IMPROVEMENTS,
)
from typing import TYPE_CHECKING
import logging
import re

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.domain.record.record import Record

logger = logging.getLogger(__name__)

_SECTION_SPLIT = re.compile(r"^(?=[ \t]*##(?!#)\s)", re.MULTILINE)
_RECORD_SPLIT = re.compile(r"^(?=[ \t]*###(?!#)\s)", re.MULTILINE)
_SECTION_HEADER = re.compile(r"^[ \t]*##(?!#)[ \t]*(.*)$", re.MULTILINE)
_ANY_HEADER = re.compile(r"^[ \t]*#{1,3}\s", re.MULTILINE)
_SEPARATORS = re.compile(r"[\s_\-]+")
_NUMBERING = re.compile(r"^\s*(?:\d+[.)]|[-*])\s+")
_MARKDOWN = re.compile(r"[*`#]+")
_NAME_PREFIX = re.compile(r"^(?:flow|record|name)\s*[:\-]\s*", re.IGNORECASE)

# Minimum sizes for fallback sections
NAME_ANCHORED_MIN_LENGTH = 100
PREFIX_SECTION_MIN_LENGTH = 50


def normalize_name(name: str) -> str:
    """
    Case-folded name with markdown characters removed and runs of whitespace, underscores
    and hyphens collapsed to one space. Record names and cleaned headings go through the
    same steps, so "Case Routing #2" matches its own "### Case Routing #2" header.
    "Order_Update-Flow" and "order update flow" normalize the same.
    """
    return _SEPARATORS.sub(" ", _MARKDOWN.sub("", name)).strip().lower()


def classify_header(header: str) -> str | None:
    lowered = header.lower()
    for kind, synonyms in grammar.SECTION_SYNONYMS:
        if any(synonym in lowered for synonym in synonyms):
            return kind
    return None


def split_sections(text: str) -> dict[str, str]:
    """
    Map of section kind -> content for every recognized `## ` section.
    Repeated kinds are concatenated; unrecognized headers are ignored.
    """
    sections: dict[str, str] = {}
    for part in _SECTION_SPLIT.split(text):
        match = _SECTION_HEADER.match(part)
        if not match:
            continue
        kind = classify_header(match.group(1))
        if kind is None:
            logger.debug(f"Ignoring unrecognized section header: {match.group(1)!r}")
            continue
        content = clean_value(part[match.end() :])
        if kind in sections and content:
            sections[kind] = f"{sections[kind]}\n\n{content}"
        elif content or kind not in sections:
            sections[kind] = content
    return sections


def extract_record_name(heading: str, records: Sequence[Record]) -> str:
    """
    Clean a record heading and map it to a canonical record name when possible.
    Returns the cleaned heading unchanged when no record matches.
    """
    bare = heading.strip().rstrip(":").strip()
    cleaned = _MARKDOWN.sub("", heading)
    cleaned = _NUMBERING.sub("", cleaned)
    cleaned = _NAME_PREFIX.sub("", cleaned).strip().rstrip(":").strip()
    if not records:
        return cleaned

    # Names may themselves start with "Flow:" or "1."; try the heading before stripping those
    for target in (normalize_name(bare), normalize_name(cleaned)):
        for record in records:
            if normalize_name(record.name) == target:
                return record.name
    target = normalize_name(cleaned)
    # Heading carries extra words, e.g. "Order Update Flow (Record-Triggered)"
    contained = [r for r in records if normalize_name(r.name) and normalize_name(r.name) in target]
    if contained:
        return max(contained, key=lambda r: len(r.name)).name
    return cleaned


def _split_on_record_headers(body: str, records: Sequence[Record]) -> list[tuple[str, str]]:
    sections = []
    for part in _RECORD_SPLIT.split(body):
        stripped = part.strip()
        if not stripped.startswith("###"):
            continue
        heading, _, rest = stripped.partition("\n")
        name = extract_record_name(heading.lstrip("#"), records)
        if name:
            sections.append((name, rest))
    return sections


def _name_variants(name: str) -> list[str]:
    variants = {name, name.replace("_", " "), name.replace(" ", "_")}
    return sorted(variants, key=len, reverse=True)


def _name_alternation(names: Sequence[str]) -> str:
    variants = [re.escape(v) for name in names for v in _name_variants(name)]
    variants.sort(key=len, reverse=True)
    return "(?:" + "|".join(variants) + ")"


def _anchor_patterns(name: str) -> list[re.Pattern[str]]:
    alts = _name_alternation([name])
    flags = re.IGNORECASE | re.MULTILINE
    bold = rf"\*\*{alts}(?!\w)[^*\n]*\*\*"
    return [
        re.compile(rf"^[ \t]*#{{1,4}}[ \t]*(?:\*\*)?{alts}(?!\w)[^\n]*", flags),  # header
        re.compile(rf"^[ \t]*{bold}[ \t]*:?", flags),  # bold
        re.compile(rf"^[ \t]*\d+[.)][ \t]*(?:{bold}|{alts}(?!\w))[ \t]*:?", flags),  # numbered
        re.compile(rf"^[ \t]*{alts}[ \t]*(?:\*\*)?[ \t]*:", flags),  # inline "Name:"
    ]


def _line_at(text: str, start: int) -> str:
    end = text.find("\n", start)
    return text[start:] if end == -1 else text[start:end]


def _terminator(other_names: Sequence[str]) -> re.Pattern[str]:
    if not other_names:
        return _ANY_HEADER
    alts = _name_alternation(other_names)
    return re.compile(
        rf"^[ \t]*#{{1,3}}\s|^[ \t]*(?:#{{1,4}}[ \t]*|\*\*|\d+[.)][ \t]*)?{alts}(?!\w)",
        re.IGNORECASE | re.MULTILINE,
    )


def _split_on_record_names(body: str, records: Sequence[Record]) -> list[tuple[str, str]]:
    """
    Locate each record by its name and take the text up to the next header or the next
    line that starts with another record's name.
    """
    sections = []
    for record in records:
        others = [r.name for r in records if r.id != record.id]
        own = normalize_name(record.name)
        # Names that contain this one ("Order" vs "Order Update") must not be claimed by it
        longer = [normalize_name(n) for n in others if own in normalize_name(n) and len(n) > len(record.name)]
        terminator = _terminator(others)
        for pattern in _anchor_patterns(record.name):
            found = None
            for match in pattern.finditer(body):
                line = normalize_name(_line_at(body, match.start()))
                if any(name in line for name in longer):
                    continue
                end_match = terminator.search(body, match.end())
                end = end_match.start() if end_match else len(body)
                if len(body[match.start() : end].strip()) > NAME_ANCHORED_MIN_LENGTH:
                    found = body[match.end() : end]
                    break
            if found is not None:
                sections.append((record.name, found))
                break
    return sections


def common_prefix_token(records: Sequence[Record]) -> str | None:
    """
    Leading token shared by every record name (case-insensitive), if at least 3 chars.
    """
    if len(records) < 2:
        return None
    tokens = {_SEPARATORS.split(record.name.strip(), maxsplit=1)[0].lower() for record in records}
    if len(tokens) != 1:
        return None
    token = tokens.pop()
    return token if len(token) >= 3 else None


def _split_on_common_prefix(body: str, records: Sequence[Record]) -> list[tuple[str, str]]:
    token = common_prefix_token(records)
    if token is None:
        return []
    splitter = re.compile(rf"^(?=[^\w\n]*{re.escape(token)})", re.IGNORECASE | re.MULTILINE)
    sections = []
    for part in splitter.split(body):
        if len(part.strip()) < PREFIX_SECTION_MIN_LENGTH:
            continue
        heading, _, rest = part.strip().partition("\n")
        if not re.match(rf"[^\w]*{re.escape(token)}", heading, re.IGNORECASE):
            continue
        sections.append((extract_record_name(heading, records), rest))
    return sections


def split_record_sections(body: str, records: Sequence[Record]) -> list[tuple[str, str]]:
    """
    (name, section text) pairs, using the first strategy that finds more than one section.
    """
    sections = _split_on_record_headers(body, records)
    if len(sections) > 1:
        return sections

    anchored = _split_on_record_names(body, records)
    if len(anchored) > len(sections):
        logger.info(f"Record headers missing; located {len(anchored)} sections by name.")
        sections = anchored
    if len(sections) > 1:
        return sections

    prefixed = _split_on_common_prefix(body, records)
    if len(prefixed) > len(sections):
        logger.info(f"Located {len(prefixed)} sections by shared name prefix.")
        sections = prefixed
    return sections


def parse_entry(name: str, text: str) -> AnalysisEntry:
    return AnalysisEntry(
        record_name=name,
        business_description=extract_field(text, DESCRIPTION_RULES, DEFAULT_DESCRIPTION),
        improvements=extract_field(text, IMPROVEMENT_RULES, DEFAULT_IMPROVEMENTS),
    )


def parse_response(text: str, records: Sequence[Record]) -> AnalysisResult:
    """
    Parse a model response into a partial AnalysisResult.
    Never raises on malformed prose; ParseError only signals a non-string input.
    """
    if not isinstance(text, str):
        raise ParseError(f"Expected response text, got {type(text).__name__}")

    sections = split_sections(text)
    overview = sections.get("overview", "")
    risks = sections.get("risks", "")
    improvements = sections.get("improvements", "")
    if not sections:
        overview = text.strip()

    entries: list[AnalysisEntry] = []
    if records:
        body = sections.get("individual") or text
        entries = [parse_entry(name, section) for name, section in split_record_sections(body, records)]
        logger.debug(f"Parsed {len(entries)} entries for {len(records)} records.")

    return AnalysisResult(
        organization_overview=overview,
        potential_risks=risks,
        organization_improvements=improvements,
        entries=entries,
    )
