"""Pydantic models for API request/response."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .services.content import ContentFormat, ContentItem, ContentKind
from .services.styles import ElementStyle, StyleKey

_HEX_COLOR = r"^#?[0-9A-Fa-f]{6}$"


class _CamelModel(BaseModel):
    """Accepts both camelCase aliases and snake_case field names."""

    model_config = ConfigDict(populate_by_name=True)


class ContentFormatModel(_CamelModel):
    font_name: str | None = Field(default=None, alias="fontName")
    font_size: float | None = Field(default=None, alias="fontSize", gt=0)
    bold: bool | None = None
    italic: bool | None = None
    color: str | None = Field(default=None, pattern=_HEX_COLOR)
    level: int | None = Field(default=None, ge=1, le=9)
    border_bottom: bool | None = Field(default=None, alias="borderBottom")

    def to_format(self) -> ContentFormat:
        return ContentFormat(**self.model_dump())

    @classmethod
    def from_format(cls, fmt: ContentFormat) -> ContentFormatModel:
        return cls(
            font_name=fmt.font_name,
            font_size=fmt.font_size,
            bold=fmt.bold,
            italic=fmt.italic,
            color=fmt.color,
            level=fmt.level,
            border_bottom=fmt.border_bottom,
        )


class ContentItemModel(_CamelModel):
    type: Literal["paragraph", "heading", "bullets", "ordered"] | None = None
    text: str | None = None
    items: list[str] | None = None
    format: ContentFormatModel | None = None

    def to_content_item(self) -> ContentItem:
        return ContentItem(
            kind=ContentKind(self.type) if self.type else None,
            text=self.text,
            items=list(self.items) if self.items is not None else None,
            format=self.format.to_format() if self.format else None,
        )

    @classmethod
    def from_content_item(cls, item: ContentItem) -> ContentItemModel:
        return cls(
            type=item.kind.value if item.kind else None,
            text=item.text,
            items=item.items,
            format=ContentFormatModel.from_format(item.format) if item.format else None,
        )


class ElementStyleModel(_CamelModel):
    font_name: str | None = Field(default=None, alias="fontName")
    font_size: float | None = Field(default=None, alias="fontSize", gt=0)
    bold: bool | None = None
    italic: bool | None = None
    color: str | None = Field(default=None, pattern=_HEX_COLOR)
    border_bottom: bool | None = Field(default=None, alias="borderBottom")

    def to_style(self) -> ElementStyle:
        return ElementStyle(**self.model_dump())


class MarkdownStylesModel(BaseModel):
    """Partial style sheet. A bucket given here replaces the default bucket."""

    model_config = ConfigDict(extra="forbid")

    heading1: ElementStyleModel | None = None
    heading2: ElementStyleModel | None = None
    heading3: ElementStyleModel | None = None
    heading4: ElementStyleModel | None = None
    paragraph: ElementStyleModel | None = None
    bullets: ElementStyleModel | None = None
    ordered: ElementStyleModel | None = None
    blockquote: ElementStyleModel | None = None

    def to_overrides(self) -> dict[StyleKey, ElementStyle]:
        overrides: dict[StyleKey, ElementStyle] = {}
        for key in StyleKey:
            bucket = getattr(self, key.value)
            if bucket is not None:
                overrides[key] = bucket.to_style()
        return overrides


class CreateDocumentRequest(BaseModel):
    filename: str = Field(min_length=1)
    title: str | None = None
    author: str | None = None


class AddParagraphRequest(BaseModel):
    filename: str = Field(min_length=1)
    text: str
    format: ContentFormatModel | None = None


class AddHeadingRequest(BaseModel):
    filename: str = Field(min_length=1)
    text: str
    format: ContentFormatModel | None = None


class AddListRequest(BaseModel):
    filename: str = Field(min_length=1)
    items: list[str]
    format: ContentFormatModel | None = None


class FilenameRequest(BaseModel):
    filename: str = Field(min_length=1)


class ContentDocumentRequest(BaseModel):
    filename: str = Field(min_length=1)
    content: list[ContentItemModel]
    title: str | None = None
    author: str | None = None
    styles: MarkdownStylesModel | None = None


class MarkdownDocumentRequest(BaseModel):
    filename: str = Field(min_length=1)
    markdown: str
    title: str | None = None
    author: str | None = None
    styles: MarkdownStylesModel | None = None


class ParseMarkdownRequest(BaseModel):
    markdown: str


class DocumentResponse(BaseModel):
    filename: str
    message: str
    path: str | None = None
    element_count: int = 0


class ParseMarkdownResponse(BaseModel):
    items: list[ContentItemModel]
    total: int
