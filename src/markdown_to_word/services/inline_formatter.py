"""Inline formatting: split a line into styled segments.

Recognised markers, in priority order: `[label](url)`, `**bold**`, `*italic*`.
Spans are non-greedy and cannot contain their own marker character. The body of
every recognised span is formatted again, so `[**x**](u)` gives a bold link and
`**see [docs](u)**` gives a bold plain run followed by a bold link.
"""

from __future__ import annotations

import re
from itertools import count
from typing import Iterator

from .content import TextSegment

_INLINE_RE = re.compile(
    r"(?P<link>\[(?P<label>[^\]]+?)\]\((?P<url>[^)]+?)\))"
    r"|(?P<bold>\*\*(?P<strong>[^*]+?)\*\*)"
    r"|(?P<italic>\*(?P<em>[^*]+?)\*)"
)


def format_inline(line: str) -> list[TextSegment]:
    """Parse `line` into segments. Never raises for string input.

    A line without recognised markers (including "") yields exactly one segment.
    Segments of one link span carry the same `link_span` id.
    """
    if line is None:
        raise TypeError("format_inline() requires a string, got None")
    segments = _format(line, bold=False, italic=False, link=None, span=None, spans=count())
    return segments or [TextSegment(text=line)]


def _format(
    text: str,
    *,
    bold: bool,
    italic: bool,
    link: str | None,
    span: int | None,
    spans: Iterator[int],
) -> list[TextSegment]:
    out: list[TextSegment] = []
    pos = 0
    for m in _INLINE_RE.finditer(text):
        if m.start() > pos:
            out.append(TextSegment(text[pos : m.start()], bold, italic, link, span))
        if m.group("link"):
            out.extend(
                _format(m.group("label"), bold=bold, italic=italic, link=m.group("url"), span=next(spans), spans=spans)
            )
        elif m.group("bold"):
            out.extend(_format(m.group("strong"), bold=True, italic=italic, link=link, span=span, spans=spans))
        else:
            out.extend(_format(m.group("em"), bold=bold, italic=True, link=link, span=span, spans=spans))
        pos = m.end()
    if pos < len(text):
        out.append(TextSegment(text[pos:], bold, italic, link, span))
    return out
