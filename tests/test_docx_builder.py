import io

import pytest
from docx import Document
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.shared import Pt, RGBColor, Twips

from markdown_to_word.services.content import DocumentElement, ElementKind, TextRun
from markdown_to_word.services.docx_builder import DocxBuilder, parse_color


def _reopen(builder: DocxBuilder):
    return Document(io.BytesIO(builder.to_bytes()))


def test_empty_document_is_valid():
    doc = _reopen(DocxBuilder(title="Empty"))
    assert all(not p.text for p in doc.paragraphs)
    assert doc.core_properties.title == "Empty"


def test_core_properties_and_margins():
    doc = _reopen(DocxBuilder(title="Report", author="Jane"))
    assert doc.core_properties.title == "Report"
    assert doc.core_properties.author == "Jane"
    assert doc.sections[0].left_margin == Twips(864)


def test_default_creator():
    doc = _reopen(DocxBuilder())
    assert doc.core_properties.author == "Word Document Server"
    assert doc.core_properties.title == "Document"


def test_paragraph_runs_are_formatted():
    builder = DocxBuilder()
    builder.append(
        DocumentElement(
            kind=ElementKind.PARAGRAPH,
            runs=[
                TextRun(text="Hello ", font_size=14, color="#ff0000"),
                TextRun(text="world", bold=True, italic=True, font_name="Arial"),
            ],
        )
    )
    [paragraph] = _reopen(builder).paragraphs
    assert paragraph.text == "Hello world"
    first, second = paragraph.runs
    assert first.font.name == "Times New Roman"
    assert first.font.size == Pt(14)
    assert first.font.color.rgb == RGBColor(0xFF, 0x00, 0x00)
    assert second.bold is True and second.italic is True
    assert second.font.name == "Arial"
    assert builder.element_count == 1


def test_builder_default_font_is_configurable():
    builder = DocxBuilder(default_font="Helvetica")
    builder.append(DocumentElement(kind=ElementKind.PARAGRAPH, runs=[TextRun(text="x")]))
    assert _reopen(builder).paragraphs[0].runs[0].font.name == "Helvetica"


def test_headings_and_lists_use_word_styles():
    builder = DocxBuilder()
    builder.extend(
        [
            DocumentElement(kind=ElementKind.HEADING, runs=[TextRun(text="Title", bold=True)], level=1),
            DocumentElement(kind=ElementKind.HEADING, runs=[TextRun(text="Deep")], level=6),
            DocumentElement(kind=ElementKind.BULLET, runs=[TextRun(text="point")]),
            DocumentElement(kind=ElementKind.ORDERED, runs=[TextRun(text="step")]),
        ]
    )
    styles = [(p.style.name, p.text) for p in _reopen(builder).paragraphs]
    assert styles == [
        ("Heading 1", "Title"),
        ("Heading 6", "Deep"),
        ("List Bullet", "point"),
        ("List Number", "step"),
    ]


def test_border_and_spacing():
    builder = DocxBuilder()
    builder.append(
        DocumentElement(kind=ElementKind.PARAGRAPH, runs=[TextRun(text="")], border_bottom=True, spacing_after=10)
    )
    [paragraph] = _reopen(builder).paragraphs
    assert "w:pBdr" in paragraph._p.xml
    assert paragraph.paragraph_format.space_after == Pt(10)
    assert paragraph.text == ""


def test_links_become_external_hyperlinks():
    builder = DocxBuilder()
    builder.append(
        DocumentElement(
            kind=ElementKind.PARAGRAPH,
            runs=[TextRun(text="see "), TextRun(text="docs", link="https://example.com/docs")],
        )
    )
    doc = _reopen(builder)
    xml = doc.paragraphs[0]._p.xml
    assert "w:hyperlink" in xml
    assert "docs" in xml
    targets = [
        rel.target_ref for rel in doc.part.rels.values() if rel.reltype == RELATIONSHIP_TYPE.HYPERLINK
    ]
    assert targets == ["https://example.com/docs"]


def test_invalid_color_adds_nothing():
    builder = DocxBuilder()
    with pytest.raises(ValueError, match="Invalid hex RGB color"):
        builder.append(DocumentElement(kind=ElementKind.PARAGRAPH, runs=[TextRun(text="x", color="red")]))
    assert builder.element_count == 0
    assert len(_reopen(builder).paragraphs) == len(_reopen(DocxBuilder()).paragraphs)


def test_parse_color():
    assert parse_color("#1f4e79") == RGBColor(0x1F, 0x4E, 0x79)
    with pytest.raises(ValueError):
        parse_color("12345")


def test_finalize_creates_parent_dirs(tmp_path):
    builder = DocxBuilder()
    builder.append(DocumentElement(kind=ElementKind.PARAGRAPH, runs=[TextRun(text="saved")]))
    path = builder.finalize(tmp_path / "nested" / "out.docx")
    assert path.exists()
    assert Document(str(path)).paragraphs[0].text == "saved"


def test_builder_does_not_expose_raw_document():
    assert not hasattr(DocxBuilder(), "document")


def test_discarded_builder_rejects_use():
    builder = DocxBuilder()
    builder.discard()
    with pytest.raises(RuntimeError):
        builder.append(DocumentElement(kind=ElementKind.PARAGRAPH, runs=[TextRun(text="x")]))
    with pytest.raises(RuntimeError):
        builder.to_bytes()
    with pytest.raises(RuntimeError):
        builder.finalize("unused.docx")
