"""Content model shared by the Markdown parser, the content mapper and the docx builder.

Parser output (`ContentItem`) and mapper output (`DocumentElement`) both live here
so that neither of those modules has to import the other.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class ContentKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLETS = "bullets"
    ORDERED = "ordered"


@dataclass
class ContentFormat:
    """Explicit per-item formatting. `None` means "not set"."""

    font_name: str | None = None
    font_size: float | None = None  # points
    bold: bool | None = None
    italic: bool | None = None
    color: str | None = None  # hex RGB, e.g. "1F4E79"
    level: int | None = None  # heading depth 1-9
    border_bottom: bool | None = None


@dataclass
class ContentItem:
    """Abstract unit of document content.

    Paragraphs and headings use `text`; bullets and ordered lists use `items`.
    `kind` may be omitted on externally supplied items (see content_mapper).
    """

    kind: ContentKind | None = None
    text: str | None = None
    items: list[str] | None = None
    format: ContentFormat | None = None


@dataclass
class TextSegment:
    """Inline run with uniform styling, markers stripped."""

    text: str
    bold: bool = False
    italic: bool = False
    link: str | None = None
    # Segments cut from the same `[label](url)` span share an id.
    link_span: int | None = field(default=None, compare=False, repr=False)


class ElementKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET = "bullet"
    ORDERED = "ordered"


@dataclass
class TextRun:
    """A segment with its resolved character formatting."""

    text: str
    bold: bool = False
    italic: bool = False
    link: str | None = None
    font_name: str | None = None
    font_size: float | None = None
    color: str | None = None


@dataclass
class DocumentElement:
    """One paragraph-level unit handed to the document builder."""

    kind: ElementKind
    runs: list[TextRun] = field(default_factory=list)
    level: int | None = None
    border_bottom: bool = False
    spacing_after: float | None = None  # points

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


# Horizontal rules travel from parser to mapper as a paragraph with this text.
THEMATIC_BREAK_TEXT = "---"
_THEMATIC_BREAK_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")


def is_thematic_break(text: str | None) -> bool:
    """True for `---`, `***`, `___` (three or more of one character, nothing else)."""
    if not text:
        return False
    return bool(_THEMATIC_BREAK_RE.match(text.strip()))
