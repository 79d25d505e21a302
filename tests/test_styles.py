import pytest

from markdown_to_word.services.content import ContentFormat, ContentItem, ContentKind
from markdown_to_word.services.styles import (
    DEFAULT_MARKDOWN_STYLES,
    ElementStyle,
    StyleKey,
    merge_format,
    resolve_styles,
    style_key_for,
)


def test_defaults_cover_every_key():
    assert set(DEFAULT_MARKDOWN_STYLES) == set(StyleKey)
    assert DEFAULT_MARKDOWN_STYLES[StyleKey.HEADING1] == ElementStyle(
        font_name="Times New Roman", font_size=24, bold=True, border_bottom=True
    )
    assert DEFAULT_MARKDOWN_STYLES[StyleKey.BLOCKQUOTE].italic is True


def test_resolve_without_overrides_returns_defaults():
    assert resolve_styles() == dict(DEFAULT_MARKDOWN_STYLES)
    assert resolve_styles({}) == dict(DEFAULT_MARKDOWN_STYLES)


def test_override_replaces_whole_bucket():
    sheet = resolve_styles({StyleKey.HEADING1: ElementStyle(font_size=30)})
    # No per-field merge with the default heading1 bucket.
    assert sheet[StyleKey.HEADING1] == ElementStyle(font_size=30)
    assert sheet[StyleKey.HEADING2] == DEFAULT_MARKDOWN_STYLES[StyleKey.HEADING2]


def test_string_keys_are_accepted():
    sheet = resolve_styles({"paragraph": ElementStyle(font_name="Arial")})
    assert sheet[StyleKey.PARAGRAPH] == ElementStyle(font_name="Arial")


def test_unknown_key_raises():
    with pytest.raises(ValueError, match="Unknown style key"):
        resolve_styles({"heading7": ElementStyle()})


def test_resolve_does_not_mutate_defaults():
    resolve_styles({StyleKey.PARAGRAPH: ElementStyle(font_size=99)})
    assert DEFAULT_MARKDOWN_STYLES[StyleKey.PARAGRAPH].font_size == 12


@pytest.mark.parametrize(
    "level,expected",
    [
        (1, StyleKey.HEADING1),
        (2, StyleKey.HEADING2),
        (3, StyleKey.HEADING3),
        (4, StyleKey.HEADING4),
        (5, None),
        (9, None),
        (None, StyleKey.HEADING1),
    ],
)
def test_heading_bucket_by_level(level, expected):
    item = ContentItem(kind=ContentKind.HEADING, text="T", format=ContentFormat(level=level))
    assert style_key_for(item) == expected


def test_paragraph_buckets():
    assert style_key_for(ContentItem(kind=ContentKind.PARAGRAPH, text="x")) == StyleKey.PARAGRAPH
    assert style_key_for(ContentItem(text="x")) == StyleKey.PARAGRAPH
    quote = ContentItem(kind=ContentKind.PARAGRAPH, text="x", format=ContentFormat(italic=True))
    assert style_key_for(quote) == StyleKey.BLOCKQUOTE


def test_list_buckets():
    assert style_key_for(ContentItem(kind=ContentKind.BULLETS, items=["a"])) == StyleKey.BULLETS
    assert style_key_for(ContentItem(kind=ContentKind.ORDERED, items=["a"])) == StyleKey.ORDERED


def test_merge_format_item_fields_win():
    merged = merge_format(
        ElementStyle(font_name="Times New Roman", font_size=12, bold=True),
        ContentFormat(font_size=20, bold=False, color="FF0000"),
    )
    assert merged == ContentFormat(font_name="Times New Roman", font_size=20, bold=False, color="FF0000")


def test_merge_format_without_bucket():
    assert merge_format(None, ContentFormat(level=5)) == ContentFormat(level=5)
    assert merge_format(None, None) == ContentFormat()
