"""Extraction: PDF text, webpage scrape, LLM key points -> outline tree."""
from .pdf_text import pdf_to_text
from .scrape import scrape_url
from .key_points import extract_key_points, parse_outline_reply

__all__ = [
    "pdf_to_text",
    "scrape_url",
    "extract_key_points",
    "parse_outline_reply",
]
