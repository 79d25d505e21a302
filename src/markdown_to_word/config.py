"""Load settings from environment (.env and env vars)."""

from __future__ import annotations

import os
from pathlib import Path

# Load .env from project root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


# Output: relative filenames are resolved against this directory when set
OUTPUT_DIR = _str("MARKDOWN_TO_WORD_OUTPUT_DIR") or None

# Document defaults
DEFAULT_FONT_NAME = _str("MARKDOWN_TO_WORD_DEFAULT_FONT") or "Times New Roman"
DOCUMENT_CREATOR = _str("MARKDOWN_TO_WORD_CREATOR") or "Word Document Server"

# Logging
LOG_LEVEL = _str("MARKDOWN_TO_WORD_LOG_LEVEL") or "INFO"
