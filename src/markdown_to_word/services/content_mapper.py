"""Content items -> document elements.

Each item becomes zero or more `DocumentElement`s for the docx builder:

- paragraph: one element; "" becomes a spacer, `---` a bordered rule
- heading: one element, bold unless the effective style says `bold=False`
- bullets / ordered: one element per non-empty item

Items that fail minimum-content checks are skipped, not reported.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .content import (
    ContentFormat,
    ContentItem,
    ContentKind,
    DocumentElement,
    ElementKind,
    TextRun,
    is_thematic_break,
)
from .inline_formatter import format_inline
from .styles import ElementStyle, StyleKey, merge_format, resolve_styles, style_key_for

logger = logging.getLogger(__name__)

# Space after spacer paragraphs and horizontal rules, in points.
SPACER_SPACING_AFTER = 10


def map_content(
    items: Iterable[ContentItem],
    styles: Mapping[StyleKey | str, ElementStyle] | None = None,
) -> list[DocumentElement]:
    """Map content items to document elements.

    `styles` may be a full style sheet or a partial override; missing buckets
    fall back to the built-in defaults.
    """
    if items is None:
        raise TypeError("map_content() requires a sequence of content items, got None")
    sheet = resolve_styles(styles)
    result: list[DocumentElement] = []
    for item in items:
        result.extend(map_item(item, sheet))
    return result


def map_item(item: ContentItem, sheet: Mapping[StyleKey, ElementStyle]) -> list[DocumentElement]:
    kind = _infer_kind(item)
    if kind is None:
        logger.debug("Skipping unusable content item: %r", item)
        return []
    key = style_key_for(item)
    effective = merge_format(sheet.get(key) if key else None, item.format)
    if kind == ContentKind.PARAGRAPH:
        return _paragraph_elements(item.text, effective)
    if kind == ContentKind.HEADING:
        return _heading_elements(item.text, effective)
    if kind == ContentKind.BULLETS:
        return _list_elements(ElementKind.BULLET, item.items, effective)
    return _list_elements(ElementKind.ORDERED, item.items, effective)


def _infer_kind(item: ContentItem) -> ContentKind | None:
    if item.kind is not None:
        try:
            return ContentKind(item.kind)
        except ValueError:
            logger.debug("Skipping content item of unknown kind: %r", item.kind)
            return None
    # Without an explicit kind only text-bearing items count as paragraphs.
    if item.text is not None:
        return ContentKind.PARAGRAPH
    return None


def _paragraph_elements(text: str | None, effective: ContentFormat) -> list[DocumentElement]:
    if text is None:
        logger.debug("Skipping paragraph without text")
        return []
    if is_thematic_break(text):
        return [_blank_element(border_bottom=True)]
    if not text.strip():
        return [_blank_element(border_bottom=bool(effective.border_bottom))]
    return [
        DocumentElement(
            kind=ElementKind.PARAGRAPH,
            runs=_runs(text, effective),
            border_bottom=bool(effective.border_bottom),
        )
    ]


def _heading_elements(text: str | None, effective: ContentFormat) -> list[DocumentElement]:
    if text is None or not text.strip():
        logger.debug("Skipping heading with empty text")
        return []
    level = min(max(effective.level or 1, 1), 9)
    return [
        DocumentElement(
            kind=ElementKind.HEADING,
            runs=_runs(text, effective, force_bold=effective.bold is not False),
            level=level,
            border_bottom=bool(effective.border_bottom),
        )
    ]


def _list_elements(kind: ElementKind, items: list[str] | None, effective: ContentFormat) -> list[DocumentElement]:
    texts = [s.strip() for s in items or [] if s and s.strip()]
    if not texts:
        logger.debug("Skipping %s list without usable items", kind.value)
        return []
    return [DocumentElement(kind=kind, runs=_runs(text, effective)) for text in texts]


def _runs(text: str, effective: ContentFormat, force_bold: bool | None = None) -> list[TextRun]:
    bold = bool(effective.bold) if force_bold is None else force_bold
    italic = bool(effective.italic)
    return [
        TextRun(
            text=segment.text,
            bold=segment.bold or bold,
            italic=segment.italic or italic,
            link=segment.link,
            font_name=effective.font_name,
            font_size=effective.font_size,
            color=effective.color,
        )
        for segment in format_inline(text)
    ]


def _blank_element(border_bottom: bool) -> DocumentElement:
    # Builders reject paragraphs with no runs; keep one empty run.
    return DocumentElement(
        kind=ElementKind.PARAGRAPH,
        runs=[TextRun(text="")],
        border_bottom=border_bottom,
        spacing_after=SPACER_SPACING_AFTER,
    )
