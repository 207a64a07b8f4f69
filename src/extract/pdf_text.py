"""
PDF -> plain text with PyMuPDF.
"""
from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


def pdf_to_text(source: Path | str | bytes) -> str:
    """
    Extract text from a PDF file path or raw PDF bytes; pages joined by a blank line.
    Raises ValueError when the PDF has no text layer (e.g. scanned pages).
    """
    if isinstance(source, (bytes, bytearray)):
        doc = fitz.open(stream=bytes(source), filetype="pdf")
        name = "<upload>"
    else:
        path = Path(source)
        if not path.is_file():
            raise FileNotFoundError(f"PDF not found: {path}")
        doc = fitz.open(str(path))
        name = path.name
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    text = "\n\n".join(p.strip() for p in pages if p.strip())
    if not text:
        raise ValueError(f"Could not extract text from {name} (might be scanned/image-based)")
    logger.info("PDF %s: %d pages, %d chars", name, len(pages), len(text))
    return text
