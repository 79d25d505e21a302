"""API routes: document sessions, one-shot conversions and markdown preview."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Request

from ..models import (
    AddHeadingRequest,
    AddListRequest,
    AddParagraphRequest,
    ContentDocumentRequest,
    ContentItemModel,
    CreateDocumentRequest,
    DocumentResponse,
    FilenameRequest,
    MarkdownDocumentRequest,
    ParseMarkdownRequest,
    ParseMarkdownResponse,
)
from ..services.document_store import DocumentStore, SessionNotFoundError
from ..services.markdown_parser import parse_markdown

router = APIRouter(prefix="/api", tags=["api"])


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


@contextmanager
def _http_errors() -> Iterator[None]:
    try:
        yield
    except SessionNotFoundError as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    except OSError as e:
        raise HTTPException(500, f"Failed to write document: {e}")


@router.post("/documents", response_model=DocumentResponse)
async def api_create_document(body: CreateDocumentRequest, store: DocumentStore = Depends(get_store)):
    """Start an empty document session (replaces an open one with the same filename)."""
    with _http_errors():
        store.create_document(body.filename, title=body.title, author=body.author)
    return DocumentResponse(filename=body.filename, message=f"Document created: {body.filename}")


@router.post("/documents/paragraphs", response_model=DocumentResponse)
async def api_add_paragraph(body: AddParagraphRequest, store: DocumentStore = Depends(get_store)):
    """Add a paragraph. Supports **bold**, *italic* and [text](url); "" adds a spacer."""
    with _http_errors():
        count = store.add_paragraph(body.filename, body.text, body.format.to_format() if body.format else None)
    return DocumentResponse(filename=body.filename, message="Paragraph added", element_count=count)


@router.post("/documents/headings", response_model=DocumentResponse)
async def api_add_heading(body: AddHeadingRequest, store: DocumentStore = Depends(get_store)):
    with _http_errors():
        count = store.add_heading(body.filename, body.text, body.format.to_format() if body.format else None)
    return DocumentResponse(filename=body.filename, message="Heading added", element_count=count)


@router.post("/documents/bullet-lists", response_model=DocumentResponse)
async def api_add_bullet_list(body: AddListRequest, store: DocumentStore = Depends(get_store)):
    with _http_errors():
        count = store.add_bullet_list(body.filename, body.items, body.format.to_format() if body.format else None)
    return DocumentResponse(filename=body.filename, message=f"Added {count} bullets", element_count=count)


@router.post("/documents/ordered-lists", response_model=DocumentResponse)
async def api_add_ordered_list(body: AddListRequest, store: DocumentStore = Depends(get_store)):
    with _http_errors():
        count = store.add_ordered_list(body.filename, body.items, body.format.to_format() if body.format else None)
    return DocumentResponse(filename=body.filename, message=f"Added {count} numbered items", element_count=count)


@router.post("/documents/save", response_model=DocumentResponse)
async def api_save_document(body: FilenameRequest, store: DocumentStore = Depends(get_store)):
    with _http_errors():
        path = store.save_document(body.filename)
        count = store.get_session(body.filename).element_count
    return DocumentResponse(filename=body.filename, message=f"Document saved: {body.filename}", path=str(path), element_count=count)


@router.post("/documents/close", response_model=DocumentResponse)
async def api_close_document(body: FilenameRequest, store: DocumentStore = Depends(get_store)):
    """Save the document and end its session."""
    with _http_errors():
        count = store.get_session(body.filename).element_count
        path = store.close_document(body.filename)
    return DocumentResponse(filename=body.filename, message=f"Document closed: {body.filename}", path=str(path), element_count=count)


@router.post("/documents/discard", response_model=DocumentResponse)
async def api_discard_document(body: FilenameRequest, store: DocumentStore = Depends(get_store)):
    discarded = store.discard_document(body.filename)
    message = f"Document discarded: {body.filename}" if discarded else f"No open document: {body.filename}"
    return DocumentResponse(filename=body.filename, message=message)


@router.post("/documents/from-content", response_model=DocumentResponse)
async def api_document_from_content(body: ContentDocumentRequest, store: DocumentStore = Depends(get_store)):
    """Create and save a complete document from a content array in one call."""
    with _http_errors():
        path = store.create_document_from_content(
            body.filename,
            [item.to_content_item() for item in body.content],
            title=body.title,
            author=body.author,
            styles=body.styles.to_overrides() if body.styles else None,
        )
        count = store.get_session(body.filename).element_count
    return DocumentResponse(
        filename=body.filename,
        message=f"Document created and saved: {body.filename}",
        path=str(path),
        element_count=count,
    )


@router.post("/documents/from-markdown", response_model=DocumentResponse)
async def api_document_from_markdown(body: MarkdownDocumentRequest, store: DocumentStore = Depends(get_store)):
    """Create and save a document from markdown (headings, paragraphs, lists, quotes, rules)."""
    with _http_errors():
        path = store.create_document_from_markdown(
            body.filename,
            body.markdown,
            title=body.title,
            author=body.author,
            styles=body.styles.to_overrides() if body.styles else None,
        )
        count = store.get_session(body.filename).element_count
    return DocumentResponse(
        filename=body.filename,
        message=f"Document created from markdown and saved: {body.filename}",
        path=str(path),
        element_count=count,
    )


@router.post("/markdown/parse", response_model=ParseMarkdownResponse, response_model_exclude_none=True)
async def api_parse_markdown(body: ParseMarkdownRequest):
    """Preview the content items a markdown text parses into. Writes nothing."""
    items = parse_markdown(body.markdown)
    return ParseMarkdownResponse(items=[ContentItemModel.from_content_item(i) for i in items], total=len(items))
