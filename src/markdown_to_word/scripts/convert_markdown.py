"""Convert a markdown file to a Word document.

Usage:
  python -m markdown_to_word.scripts.convert_markdown README.md [README.docx] [--title T] [--author A]

Env:
  MARKDOWN_TO_WORD_OUTPUT_DIR (optional, base dir for a relative output path)
  MARKDOWN_TO_WORD_DEFAULT_FONT (optional)
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .. import config
from ..services.document_store import DocumentStore


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Convert markdown to .docx")
    parser.add_argument("markdown", type=Path, help="input markdown file")
    parser.add_argument("output", nargs="?", help="output .docx path (default: input with .docx suffix)")
    parser.add_argument("--title", default=None)
    parser.add_argument("--author", default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    md_path: Path = args.markdown
    if not md_path.exists():
        raise SystemExit(f"File not found: {md_path}")
    output_path = Path(args.output) if args.output else md_path.with_suffix(".docx")
    if config.OUTPUT_DIR and not output_path.is_absolute():
        output_path = Path(config.OUTPUT_DIR) / output_path
    output = str(output_path)

    # Without output_dir the store writes to the path as given.
    store = DocumentStore(default_font=config.DEFAULT_FONT_NAME)
    content = md_path.read_text(encoding="utf-8")
    path = store.create_document_from_markdown(
        output,
        content,
        title=args.title or md_path.stem,
        author=args.author,
    )
    count = store.get_session(output).element_count
    store.discard_document(output)
    print("output:", path)
    print("elements:", count)


if __name__ == "__main__":
    main()
