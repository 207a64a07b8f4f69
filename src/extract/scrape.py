"""
Scrape a webpage to markdown through the Firecrawl REST API.
"""
from __future__ import annotations

import logging

import requests

from ..config import get_firecrawl_api_key, get_firecrawl_api_url, get_request_timeout

logger = logging.getLogger(__name__)


def scrape_url(url: str, *, api_key: str | None = None, timeout: float | None = None) -> str:
    """
    Return the page content as markdown ("" when Firecrawl returns none).
    Raises ValueError without an API key, RuntimeError when the scrape fails.
    """
    key = api_key or get_firecrawl_api_key()
    if not key:
        raise ValueError("Set FIRECRAWL_API_KEY or pass api_key")
    endpoint = f"{get_firecrawl_api_url()}/v1/scrape"
    logger.info("Scraping %s", url)
    try:
        response = requests.post(
            endpoint,
            json={"url": url, "formats": ["markdown"]},
            headers={"Authorization": f"Bearer {key}"},
            timeout=timeout if timeout is not None else get_request_timeout(),
        )
        payload = response.json()
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to scrape: {e}") from e
    except ValueError as e:
        raise RuntimeError(f"Failed to scrape: invalid response ({response.status_code})") from e

    if not response.ok or not payload.get("success"):
        error = payload.get("error") or f"HTTP {response.status_code}"
        raise RuntimeError(f"Failed to scrape: {error}")

    markdown = (payload.get("data") or {}).get("markdown") or ""
    logger.info("Scraped %s: %d chars", url, len(markdown))
    logger.debug("%s", markdown)
    return markdown
