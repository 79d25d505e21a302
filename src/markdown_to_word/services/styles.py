"""Style buckets for Markdown elements and their resolution.

A style sheet maps each `StyleKey` to an `ElementStyle`. Caller overrides replace
whole buckets (no per-field merge between a default bucket and an override);
per-item `ContentFormat` fields are merged over the bucket afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .content import ContentFormat, ContentItem, ContentKind


class StyleKey(str, Enum):
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    PARAGRAPH = "paragraph"
    BULLETS = "bullets"
    ORDERED = "ordered"
    BLOCKQUOTE = "blockquote"


@dataclass(frozen=True)
class ElementStyle:
    font_name: str | None = None
    font_size: float | None = None
    bold: bool | None = None
    italic: bool | None = None
    color: str | None = None
    border_bottom: bool | None = None  # headings only


StyleSheet = Mapping[StyleKey, ElementStyle]

_SERIF = "Times New Roman"

DEFAULT_MARKDOWN_STYLES: StyleSheet = MappingProxyType(
    {
        StyleKey.HEADING1: ElementStyle(font_name=_SERIF, font_size=24, bold=True, border_bottom=True),
        StyleKey.HEADING2: ElementStyle(font_name=_SERIF, font_size=18, bold=True, border_bottom=True),
        StyleKey.HEADING3: ElementStyle(font_name=_SERIF, font_size=14, bold=True, border_bottom=False),
        StyleKey.HEADING4: ElementStyle(font_name=_SERIF, font_size=12, bold=True, border_bottom=False),
        StyleKey.PARAGRAPH: ElementStyle(font_name=_SERIF, font_size=12),
        StyleKey.BULLETS: ElementStyle(font_name=_SERIF, font_size=12),
        StyleKey.ORDERED: ElementStyle(font_name=_SERIF, font_size=12),
        StyleKey.BLOCKQUOTE: ElementStyle(font_name=_SERIF, font_size=12, italic=True),
    }
)

_HEADING_KEYS = {
    1: StyleKey.HEADING1,
    2: StyleKey.HEADING2,
    3: StyleKey.HEADING3,
    4: StyleKey.HEADING4,
}


def resolve_styles(overrides: Mapping[StyleKey | str, ElementStyle] | None = None) -> dict[StyleKey, ElementStyle]:
    """Return the built-in defaults with `overrides` replacing whole buckets.

    String keys are coerced to StyleKey; an unknown key raises ValueError.
    """
    resolved = dict(DEFAULT_MARKDOWN_STYLES)
    for key, style in (overrides or {}).items():
        try:
            resolved[StyleKey(key)] = style
        except ValueError:
            raise ValueError(f"Unknown style key: {key!r}") from None
    return resolved


def style_key_for(item: ContentItem) -> StyleKey | None:
    """Pick the bucket for an item. Headings deeper than 4 have no bucket."""
    kind = item.kind or ContentKind.PARAGRAPH
    fmt = item.format or ContentFormat()
    if kind == ContentKind.HEADING:
        return _HEADING_KEYS.get(fmt.level or 1)
    if kind == ContentKind.PARAGRAPH:
        return StyleKey.BLOCKQUOTE if fmt.italic is True else StyleKey.PARAGRAPH
    if kind == ContentKind.BULLETS:
        return StyleKey.BULLETS
    if kind == ContentKind.ORDERED:
        return StyleKey.ORDERED
    raise ValueError(f"Unhandled content kind: {kind!r}")


def merge_format(style: ElementStyle | None, fmt: ContentFormat | None) -> ContentFormat:
    """Overlay explicit item fields on a bucket style. Item fields win when set."""
    merged = ContentFormat()
    if style is not None:
        for f in fields(ElementStyle):
            setattr(merged, f.name, getattr(style, f.name))
    if fmt is not None:
        for f in fields(ContentFormat):
            value = getattr(fmt, f.name)
            if value is not None:
                setattr(merged, f.name, value)
    return merged
