"""
Field extractors for a single record section.

Each field has an ordered list of rules. A rule is a pure function from section text to an
optional value, paired with a minimum length. The first rule whose cleaned value meets its
minimum wins; when none does, the caller's default is used for that field only.
"""

from __future__ import annotations
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from flowscope.core.prompt import grammar
import re

_HEADER_LINE = re.compile(r"^[ \t]*#{1,4}\s", re.MULTILINE)
_NUMBERED_LINE = re.compile(r"^[ \t]*\d+[.)][ \t]+\S")
_TRAILING_RULE = re.compile(r"(?:\s*\n[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*)+\s*\Z")
_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")


def _alternation(labels: Sequence[str]) -> str:
    # Longest first so "Improvement Opportunities" wins over "Improvement"
    ordered = sorted(labels, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(label) for label in ordered) + ")"


def label_pattern(labels: Sequence[str]) -> re.Pattern[str]:
    """
    A field label in any of the forms models produce:
        **Label:**   **Label**:   **Label (qualifier):**   Label:   - Label:
    Bold labels may appear mid-line; plain labels must start a line and end with a colon.
    """
    alts = _alternation(labels)
    qualifier = r"(?:[ \t]*\([^)\n]*\))?"
    return re.compile(
        rf"(?:\*\*[ \t]*{alts}{qualifier}[ \t]*:?[ \t]*\*\*[ \t]*:?"
        rf"|^[ \t]*(?:[-*][ \t]+)?{alts}{qualifier}[ \t]*:)[ \t]*",
        re.IGNORECASE | re.MULTILINE,
    )


DESCRIPTION_LABEL = label_pattern([grammar.DESCRIPTION_LABEL])
IMPROVEMENTS_LABEL = label_pattern([grammar.IMPROVEMENTS_LABEL])
DESCRIPTION_SYNONYM_LABEL = label_pattern(grammar.DESCRIPTION_SYNONYMS)
IMPROVEMENT_SYNONYM_LABEL = label_pattern(grammar.IMPROVEMENT_SYNONYMS)
_IMPROVEMENT_WORD = re.compile(
    rf"\b{_alternation(grammar.IMPROVEMENT_SYNONYMS)}\b", re.IGNORECASE
)


def clean_value(value: str) -> str:
    """
    Strip label residue (leading bold markers, colons) and trailing horizontal rules.
    """
    value = _TRAILING_RULE.sub("", value)
    return value.strip().lstrip("*:").strip()


def _first_match_end(pattern: re.Pattern[str], text: str, start: int = 0) -> int | None:
    match = pattern.search(text, start)
    return match.end() if match else None


def _until(text: str, start: int, terminators: Sequence[re.Pattern[str]]) -> str:
    """
    Text from start up to the earliest terminator match (or end of text).
    Header lines always terminate.
    """
    end = len(text)
    for terminator in (*terminators, _HEADER_LINE):
        match = terminator.search(text, start)
        if match and match.start() < end:
            end = match.start()
    return text[start:end]


def _labeled(
    label: re.Pattern[str], terminators: Sequence[re.Pattern[str]]
) -> Callable[[str], str | None]:
    def extract(text: str) -> str | None:
        start = _first_match_end(label, text)
        if start is None:
            return None
        return _until(text, start, terminators)

    return extract


def first_substantial_paragraph(text: str, min_length: int = 50) -> str | None:
    """
    First paragraph long enough to be prose, skipping headers and improvement blocks.
    """
    for paragraph in _PARAGRAPH_BREAK.split(text):
        stripped = paragraph.strip()
        if not stripped or _HEADER_LINE.match(stripped):
            continue
        if IMPROVEMENT_SYNONYM_LABEL.match(stripped):
            continue
        if len(clean_value(stripped)) >= min_length:
            return stripped
    return None


def text_before_improvements(text: str) -> str | None:
    match = _IMPROVEMENT_WORD.search(text)
    if not match:
        return None
    before = text[: match.start()]
    # Drop a dangling bold marker / list bullet that belonged to the improvement label
    return re.sub(r"[\s*\-]+\Z", "", before)


def numbered_block(text: str) -> tuple[str | None, int]:
    """
    The first numbered list in text and its item count.
    Indented continuation lines belong to the list; a header, or an unindented line after
    a blank line, ends it.
    """
    lines = text.splitlines()
    start = next((i for i, line in enumerate(lines) if _NUMBERED_LINE.match(line)), None)
    if start is None:
        return None, 0

    block: list[str] = []
    items = 0
    after_blank = False
    for line in lines[start:]:
        if _HEADER_LINE.match(line):
            break
        if _NUMBERED_LINE.match(line):
            items += 1
            after_blank = False
        elif not line.strip():
            after_blank = True
        elif after_blank and not line[:1].isspace():
            break
        block.append(line)
    return "\n".join(block).strip(), items


def numbered_list_with_benefits(text: str) -> str | None:
    block, _ = numbered_block(text)
    if block and "benefit" in block.lower():
        return block
    return None


def numbered_list(text: str) -> str | None:
    block, items = numbered_block(text)
    if block and items >= 2:
        return block
    return None


@dataclass(frozen=True)
class FieldRule:
    name: str
    extract: Callable[[str], str | None]
    min_length: int


DESCRIPTION_RULES: list[FieldRule] = [
    FieldRule(
        "labeled",
        _labeled(DESCRIPTION_LABEL, [IMPROVEMENT_SYNONYM_LABEL]),
        min_length=1,
    ),
    FieldRule(
        "synonym_labeled",
        _labeled(DESCRIPTION_SYNONYM_LABEL, [IMPROVEMENT_SYNONYM_LABEL]),
        min_length=20,
    ),
    FieldRule("first_paragraph", first_substantial_paragraph, min_length=50),
    FieldRule("before_improvements", text_before_improvements, min_length=50),
]

IMPROVEMENT_RULES: list[FieldRule] = [
    FieldRule("labeled", _labeled(IMPROVEMENTS_LABEL, [DESCRIPTION_LABEL]), min_length=1),
    FieldRule(
        "synonym_labeled",
        _labeled(IMPROVEMENT_SYNONYM_LABEL, [DESCRIPTION_LABEL]),
        min_length=30,
    ),
    FieldRule("numbered_with_benefits", numbered_list_with_benefits, min_length=30),
    FieldRule("numbered_list", numbered_list, min_length=30),
]


def extract_field(text: str, rules: Sequence[FieldRule], default: str) -> str:
    """
    Run rules in order; return the first cleaned value that meets its rule's minimum length.
    """
    for rule in rules:
        value = rule.extract(text)
        if value is None:
            continue
        value = clean_value(value)
        if len(value) >= rule.min_length:
            return value
    return default
