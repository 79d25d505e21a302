"""Markdown parsing to content items.

A small line-based block parser covering the subset we render into Word:
headings (1-6 `#`), paragraphs, flat bullet/ordered lists, blockquotes and
horizontal rules. Inline markers are left in the item text; the content mapper
resolves them later.

Blank lines: a run of n blank lines between two blocks becomes n - 1 empty
paragraphs, whatever the kinds of the two blocks. Leading and trailing runs
produce nothing.
"""

from __future__ import annotations

import re
from typing import Callable

from .content import (
    THEMATIC_BREAK_TEXT,
    ContentFormat,
    ContentItem,
    ContentKind,
    is_thematic_break,
)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|\s+)#+\s*$")
_BULLET_RE = re.compile(r"^[-*+]\s+(.+)$")
_ORDERED_RE = re.compile(r"^\d+[.)]\s+(.+)$")
_QUOTE_MARKER_RE = re.compile(r"^(?:>\s?)+")


def parse_markdown(markdown: str) -> list[ContentItem]:
    """Parse markdown into an ordered list of ContentItem.

    Total over strings: unrecognised syntax falls through to paragraph text.
    """
    if markdown is None:
        raise TypeError("parse_markdown() requires a string, got None")
    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    out: list[ContentItem] = []
    _parse_blocks(lines, out)
    return out


def _parse_blocks(lines: list[str], out: list[ContentItem]) -> None:
    blank_run = 0
    seen_block = False

    def emit(item: ContentItem) -> None:
        nonlocal blank_run, seen_block
        if seen_block:
            out.extend(_spacer() for _ in range(blank_run - 1))
        out.append(item)
        blank_run = 0
        seen_block = True

    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        if not stripped:
            blank_run += 1
            i += 1
            continue
        # Heading
        m = _HEADING_RE.match(stripped)
        if m:
            level = len(m.group(1))
            text = _CLOSING_HASHES_RE.sub("", m.group(2)).strip()
            if text:
                emit(
                    ContentItem(
                        kind=ContentKind.HEADING,
                        text=text,
                        format=ContentFormat(level=level, border_bottom=level <= 2),
                    )
                )
            i += 1
            continue
        # Unordered list
        if _BULLET_RE.match(stripped):
            items, i = _collect_list(lines, i, _BULLET_RE.match)
            if items:
                emit(ContentItem(kind=ContentKind.BULLETS, items=items))
            continue
        # Ordered list
        if _ORDERED_RE.match(stripped):
            items, i = _collect_list(lines, i, _ORDERED_RE.match)
            if items:
                emit(ContentItem(kind=ContentKind.ORDERED, items=items))
            continue
        # Blockquote
        if stripped.startswith(">"):
            quote_lines = []
            while i < len(lines) and lines[i].strip().startswith(">"):
                part = _QUOTE_MARKER_RE.sub("", lines[i].strip()).strip()
                if part:
                    quote_lines.append(part)
                i += 1
            if quote_lines:
                emit(
                    ContentItem(
                        kind=ContentKind.PARAGRAPH,
                        text=" ".join(quote_lines),
                        format=ContentFormat(italic=True),
                    )
                )
            continue
        # HR
        if is_thematic_break(stripped):
            emit(ContentItem(kind=ContentKind.PARAGRAPH, text=THEMATIC_BREAK_TEXT))
            i += 1
            continue
        # Paragraph (collect until blank or another block)
        para_lines = [stripped]
        i += 1
        while i < len(lines) and lines[i].strip() and not _is_block_start(lines[i]):
            para_lines.append(lines[i].strip())
            i += 1
        emit(ContentItem(kind=ContentKind.PARAGRAPH, text=_join_soft_wrapped(para_lines)))


def _collect_list(
    lines: list[str],
    i: int,
    match: Callable[[str], re.Match[str] | None],
) -> tuple[list[str], int]:
    """Collect items of one list kind starting at `i`.

    Blank lines are absorbed only when the next non-blank line continues the
    same list; otherwise they are left for the caller to count.
    """
    items: list[str] = []
    while i < len(lines):
        s = lines[i].strip()
        m = match(s)
        if m:
            text = m.group(1).strip()
            if text:
                items.append(text)
            i += 1
            continue
        if not s:
            j = i
            while j < len(lines) and not lines[j].strip():
                j += 1
            if j < len(lines) and match(lines[j].strip()):
                i = j
                continue
        break
    return items, i


def _join_soft_wrapped(para_lines: list[str]) -> str:
    # A trailing backslash is a hard break; it renders as the same single space.
    parts = [line[:-1].rstrip() if line.endswith("\\") else line for line in para_lines[:-1]]
    parts.append(para_lines[-1])
    return " ".join(p for p in parts if p)


def _spacer() -> ContentItem:
    return ContentItem(kind=ContentKind.PARAGRAPH, text="")


def _is_block_start(line: str) -> bool:
    s = line.strip()
    if not s:
        return True
    if _HEADING_RE.match(s):
        return True
    if _BULLET_RE.match(s) or _ORDERED_RE.match(s):
        return True
    if s.startswith(">"):
        return True
    return is_thematic_break(s)
