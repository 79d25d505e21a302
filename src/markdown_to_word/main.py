"""FastAPI application entry - Markdown to Word document service."""

import logging
from pathlib import Path

from . import config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import router
from .services.document_store import DocumentStore

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Markdown to Word",
    description="Build Word (.docx) documents from markdown or structured content",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)
app.state.store = DocumentStore(output_dir=config.OUTPUT_DIR or Path.cwd(), default_font=config.DEFAULT_FONT_NAME)


@app.get("/")
async def root():
    return {"service": "markdown-to-word", "docs": "/docs"}
