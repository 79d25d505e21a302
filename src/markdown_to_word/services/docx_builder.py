"""Word (.docx) builder: render document elements with python-docx.

The builder owns one python-docx `Document`. Callers only append elements,
finalize (write to disk or bytes) or discard it.
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor, Twips
from docx.text.paragraph import Paragraph

from .. import config
from .content import DocumentElement, ElementKind, TextRun

logger = logging.getLogger(__name__)

PAGE_MARGIN_TWIPS = 864  # 0.6 inch
HYPERLINK_COLOR = "0563C1"
DESCRIPTION = "Generated via Markdown to Word"

_HEX_COLOR_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


def parse_color(color: str) -> RGBColor:
    """Parse "1F4E79" or "#1F4E79" into an RGBColor."""
    value = (color or "").strip().lstrip("#")
    if not _HEX_COLOR_RE.match(value):
        raise ValueError(f"Invalid hex RGB color: {color!r}")
    return RGBColor.from_string(value.upper())


class DocxBuilder:
    """Accumulates paragraphs, headings and list items into one .docx document."""

    def __init__(
        self,
        title: str | None = None,
        author: str | None = None,
        default_font: str | None = None,
    ) -> None:
        self.default_font = default_font or config.DEFAULT_FONT_NAME
        self._element_count = 0
        self._document = Document()
        props = self._document.core_properties
        props.author = author or config.DOCUMENT_CREATOR
        props.title = title or "Document"
        props.comments = DESCRIPTION
        for section in self._document.sections:
            section.top_margin = Twips(PAGE_MARGIN_TWIPS)
            section.right_margin = Twips(PAGE_MARGIN_TWIPS)
            section.bottom_margin = Twips(PAGE_MARGIN_TWIPS)
            section.left_margin = Twips(PAGE_MARGIN_TWIPS)

    @property
    def element_count(self) -> int:
        return self._element_count

    def _doc(self):
        if self._document is None:
            raise RuntimeError("Document builder has been discarded")
        return self._document

    def append(self, element: DocumentElement) -> None:
        """Render one element at the end of the document body."""
        doc = self._doc()
        # Validate colours before touching the document so a bad run adds nothing.
        colors = [parse_color(run.color) if run.color else None for run in element.runs]
        if element.kind == ElementKind.HEADING:
            paragraph = doc.add_heading(level=element.level or 1)
        elif element.kind == ElementKind.BULLET:
            paragraph = doc.add_paragraph(style="List Bullet")
        elif element.kind == ElementKind.ORDERED:
            paragraph = doc.add_paragraph(style="List Number")
        else:
            paragraph = doc.add_paragraph()
        # pBdr precedes w:spacing inside w:pPr.
        if element.border_bottom:
            _add_bottom_border(paragraph)
        if element.spacing_after is not None:
            paragraph.paragraph_format.space_after = Pt(element.spacing_after)
        for run, color in zip(element.runs, colors):
            if run.link:
                self._add_hyperlink(paragraph, run, color)
            else:
                self._add_run(paragraph, run, color)
        self._element_count += 1

    def extend(self, elements: list[DocumentElement]) -> int:
        for element in elements:
            self.append(element)
        return len(elements)

    def to_bytes(self) -> bytes:
        stream = io.BytesIO()
        self._doc().save(stream)
        return stream.getvalue()

    def finalize(self, path: str | Path) -> Path:
        """Write the document to `path`, creating parent directories."""
        doc = self._doc()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(path))
        logger.info("Wrote %s (%d elements)", path, self._element_count)
        return path

    def discard(self) -> None:
        self._document = None

    def _add_run(self, paragraph: Paragraph, text_run: TextRun, color: RGBColor | None):
        run = paragraph.add_run(text_run.text)
        if text_run.bold:
            run.bold = True
        if text_run.italic:
            run.italic = True
        run.font.name = text_run.font_name or self.default_font
        if text_run.font_size:
            run.font.size = Pt(text_run.font_size)
        if color is not None:
            run.font.color.rgb = color
        return run

    def _add_hyperlink(self, paragraph: Paragraph, text_run: TextRun, color: RGBColor | None) -> None:
        rel_id = paragraph.part.relate_to(text_run.link, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
        run = self._add_run(paragraph, text_run, color)
        run.font.underline = True
        if color is None:
            run.font.color.rgb = RGBColor.from_string(HYPERLINK_COLOR)
        hyperlink = OxmlElement("w:hyperlink")
        hyperlink.set(qn("r:id"), rel_id)
        # Moves the w:r out of the paragraph into the hyperlink.
        hyperlink.append(run._r)
        paragraph._p.append(hyperlink)


def _add_bottom_border(paragraph: Paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "000000")
    p_bdr.append(bottom)
    p_pr.append(p_bdr)
