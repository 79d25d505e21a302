"""Document sessions keyed by filename.

A `DocumentStore` is an explicit object owned by its caller (the FastAPI app
keeps one on `app.state`, the CLI builds one per run). Sessions are created
lazily by the add_* operations, flushed to disk on save and dropped on close or
discard. There is no locking: callers keep to one mutation stream per filename.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from .content import ContentFormat, ContentItem, ContentKind
from .content_mapper import map_content
from .docx_builder import DocxBuilder
from .markdown_parser import parse_markdown
from .styles import ElementStyle, StyleKey

logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when saving or closing a filename that has no open session."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"No document session found for: {filename}")
        self.filename = filename


@dataclass
class DocumentSession:
    filename: str
    builder: DocxBuilder
    title: str | None = None
    author: str | None = None

    @property
    def element_count(self) -> int:
        return self.builder.element_count


class DocumentStore:
    def __init__(self, output_dir: str | Path | None = None, default_font: str | None = None) -> None:
        self.output_dir = Path(output_dir) if output_dir else None
        self.default_font = default_font
        self._sessions: dict[str, DocumentSession] = {}

    def __contains__(self, filename: str) -> bool:
        return filename in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def has_session(self, filename: str) -> bool:
        return filename in self._sessions

    def get_session(self, filename: str) -> DocumentSession:
        session = self._sessions.get(filename)
        if session is None:
            raise SessionNotFoundError(filename)
        return session

    def resolve_path(self, filename: str) -> Path:
        """Map `filename` to the file it is saved to.

        With an `output_dir` the result must stay inside it; absolute names and
        `..` escapes raise ValueError. Without one the name is used as given.
        """
        path = Path(filename)
        if self.output_dir is None:
            return path
        base = self.output_dir.resolve()
        resolved = (base / path).resolve()
        if path.is_absolute() or resolved == base or base not in resolved.parents:
            raise ValueError(f"Filename must stay inside the output directory: {filename}")
        return resolved

    def create_document(self, filename: str, title: str | None = None, author: str | None = None) -> DocumentSession:
        """Start a new session, replacing any existing one for `filename`."""
        self.resolve_path(filename)
        session = DocumentSession(
            filename=filename,
            builder=DocxBuilder(title=title, author=author, default_font=self.default_font),
            title=title,
            author=author,
        )
        previous = self._sessions.get(filename)
        if previous is not None:
            previous.builder.discard()
        self._sessions[filename] = session
        logger.info("Created document session: %s", filename)
        return session

    def _get_or_create(self, filename: str) -> DocumentSession:
        session = self._sessions.get(filename)
        if session is None:
            session = self.create_document(filename)
        return session

    def add_items(
        self,
        filename: str,
        items: Iterable[ContentItem],
        styles: Mapping[StyleKey | str, ElementStyle] | None = None,
    ) -> int:
        """Map items and append them to the session. Returns elements appended."""
        elements = map_content(items, styles)
        session = self._get_or_create(filename)
        return session.builder.extend(elements)

    def add_paragraph(self, filename: str, text: str, format: ContentFormat | None = None) -> int:
        return self.add_items(filename, [ContentItem(kind=ContentKind.PARAGRAPH, text=text, format=format)])

    def add_heading(self, filename: str, text: str, format: ContentFormat | None = None) -> int:
        return self.add_items(filename, [ContentItem(kind=ContentKind.HEADING, text=text, format=format)])

    def add_bullet_list(self, filename: str, items: list[str], format: ContentFormat | None = None) -> int:
        return self.add_items(filename, [ContentItem(kind=ContentKind.BULLETS, items=list(items), format=format)])

    def add_ordered_list(self, filename: str, items: list[str], format: ContentFormat | None = None) -> int:
        return self.add_items(filename, [ContentItem(kind=ContentKind.ORDERED, items=list(items), format=format)])

    def save_document(self, filename: str) -> Path:
        session = self.get_session(filename)
        return session.builder.finalize(self.resolve_path(filename))

    def close_document(self, filename: str) -> Path:
        """Save, then drop the session."""
        path = self.save_document(filename)
        self._sessions.pop(filename).builder.discard()
        logger.info("Closed document session: %s", filename)
        return path

    def discard_document(self, filename: str) -> bool:
        """Drop the session without saving. Returns False when there was none."""
        session = self._sessions.pop(filename, None)
        if session is None:
            return False
        session.builder.discard()
        logger.info("Discarded document session: %s", filename)
        return True

    def create_document_from_content(
        self,
        filename: str,
        content: Iterable[ContentItem],
        title: str | None = None,
        author: str | None = None,
        styles: Mapping[StyleKey | str, ElementStyle] | None = None,
    ) -> Path:
        """Create, fill and save a document in one call."""
        elements = map_content(content, styles)
        session = self.create_document(filename, title=title, author=author)
        session.builder.extend(elements)
        return self.save_document(filename)

    def create_document_from_markdown(
        self,
        filename: str,
        markdown: str,
        title: str | None = None,
        author: str | None = None,
        styles: Mapping[StyleKey | str, ElementStyle] | None = None,
    ) -> Path:
        items = parse_markdown(markdown)
        logger.debug("Parsed %d content items from markdown for %s", len(items), filename)
        return self.create_document_from_content(filename, items, title=title, author=author, styles=styles)
