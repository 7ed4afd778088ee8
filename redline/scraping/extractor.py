"""Selector-chain field extraction for article pages.

Each article field (title, content, author) is described by an ordered
chain of ``(candidate, validator)`` pairs. A candidate reads a string from
the parsed document; the first value its validator accepts wins. When
nothing qualifies, the last non-empty candidate value is used, so an
adapter always gets its best guess instead of an error.
"""

import hashlib
import re
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence, Tuple

import pendulum
import trafilatura
from bs4 import BeautifulSoup, Tag
from rich.console import Console

console = Console()

Candidate = Callable[[BeautifulSoup], str]
Validator = Callable[[str], bool]
FieldChain = Sequence[Tuple[Candidate, Validator]]

PARAGRAPH_SEPARATOR = "\n\n"

_WHITESPACE = re.compile(r"\s+")


def parse_document(html: str) -> BeautifulSoup:
    """Parse an HTML page."""
    return BeautifulSoup(html, "html.parser")


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def normalize_text(text: str) -> str:
    """Normalize text for hashing."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return "\n".join(lines).lower()


def compute_content_hash(text: str) -> str:
    """Compute hash of normalized text."""
    return hashlib.sha256(normalize_text(text).encode()).hexdigest()


# Candidates


def first_text(selector: str, strip_suffixes: Iterable[str] = ()) -> Candidate:
    """Text of the first element matching ``selector``."""
    suffixes = tuple(strip_suffixes)

    def candidate(document: BeautifulSoup) -> str:
        element = document.select_one(selector)
        if element is None:
            return ""
        text = clean_text(element.get_text(" "))
        for suffix in suffixes:
            if suffix and text.endswith(suffix):
                text = text[: -len(suffix)].strip()
        return text

    return candidate


def joined_paragraphs(selector: str, min_paragraph_length: int = 20) -> Candidate:
    """All elements matching ``selector``, short ones dropped, joined by blank lines."""

    def candidate(document: BeautifulSoup) -> str:
        paragraphs = [clean_text(el.get_text(" ")) for el in document.select(selector)]
        return PARAGRAPH_SEPARATOR.join(p for p in paragraphs if len(p) > min_paragraph_length)

    return candidate


def attribute(selector: str, name: str) -> Candidate:
    """Attribute value of the first element matching ``selector``."""

    def candidate(document: BeautifulSoup) -> str:
        element = document.select_one(selector)
        if element is None:
            return ""
        value = element.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return clean_text(value)

    return candidate


def main_text() -> Candidate:
    """Main article text located by trafilatura, for pages with unknown markup."""

    def candidate(document: BeautifulSoup) -> str:
        extracted = trafilatura.extract(
            str(document),
            include_comments=False,
            include_tables=False,
            deduplicate=True,
            favor_precision=True,
        )
        if not extracted:
            return ""
        lines = [clean_text(line) for line in extracted.splitlines()]
        return PARAGRAPH_SEPARATOR.join(line for line in lines if line)

    return candidate


# Validators


def non_empty(text: str) -> bool:
    return bool(text)


def longer_than(length: int) -> Validator:
    """Accept text with more than ``length`` characters."""

    def validator(text: str) -> bool:
        return len(text) > length

    return validator


def min_paragraphs(count: int, length: int = 0) -> Validator:
    """Accept text with at least ``count`` paragraphs and more than ``length`` characters."""

    def validator(text: str) -> bool:
        if not text:
            return False
        paragraphs = [p for p in text.split(PARAGRAPH_SEPARATOR) if p.strip()]
        return len(paragraphs) >= count and len(text) > length

    return validator


def extract_field(document: BeautifulSoup, chain: FieldChain, default: str = "") -> str:
    """
    Run a selector chain against a document.

    Returns:
        The first candidate value accepted by its validator, else the last
        non-empty candidate value, else ``default``.
    """
    fallback = ""
    for candidate, validator in chain:
        value = candidate(document)
        if value and validator(value):
            return value
        if value:
            fallback = value
    return fallback or default


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a date string, returning None when it is not a point in time."""
    if not value or not value.strip():
        return None
    try:
        parsed = pendulum.parse(value.strip(), strict=False)
    except (ValueError, OverflowError, TypeError):
        return None
    if not isinstance(parsed, datetime):
        return None
    return parsed


def _element_date(element: Tag) -> Optional[datetime]:
    for attr in ("datetime", "content"):
        raw = element.get(attr)
        if isinstance(raw, str):
            parsed = parse_date(raw)
            if parsed:
                return parsed
    return parse_date(element.get_text(" "))


def extract_published_at(
    document: BeautifulSoup,
    selectors: Sequence[str],
    now: Optional[datetime] = None,
) -> datetime:
    """
    Find the publication time.

    Each selector's first element is tried in order: its machine-readable
    attribute first, then its text. Falls back to the current time.
    """
    for selector in selectors:
        element = document.select_one(selector)
        if element is None:
            continue
        parsed = _element_date(element)
        if parsed:
            return parsed

    console.print("[dim]No parseable publication date, using fetch time[/dim]")
    return now or pendulum.now("UTC")
