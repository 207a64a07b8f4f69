"""Tests for Firecrawl scraping (requests mocked)."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.extract.scrape import scrape_url


def _response(status: int, payload: dict) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 400
    resp.json.return_value = payload
    return resp


@patch("src.extract.scrape.requests.post")
def test_scrape_returns_markdown(mock_post, monkeypatch) -> None:
    monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-key")
    mock_post.return_value = _response(200, {"success": True, "data": {"markdown": "# Title\nBody"}})

    assert scrape_url("https://example.com") == "# Title\nBody"

    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.firecrawl.dev/v1/scrape"
    assert kwargs["json"] == {"url": "https://example.com", "formats": ["markdown"]}
    assert kwargs["headers"] == {"Authorization": "Bearer fc-key"}
    assert kwargs["timeout"] == 60.0


@patch("src.extract.scrape.requests.post")
def test_scrape_missing_markdown_is_empty(mock_post) -> None:
    mock_post.return_value = _response(200, {"success": True, "data": {}})
    assert scrape_url("https://example.com", api_key="k", timeout=3) == ""
    assert mock_post.call_args.kwargs["timeout"] == 3


@patch("src.extract.scrape.requests.post")
def test_scrape_failure_reports_error(mock_post) -> None:
    mock_post.return_value = _response(200, {"success": False, "error": "blocked by robots"})
    with pytest.raises(RuntimeError, match="Failed to scrape: blocked by robots"):
        scrape_url("https://example.com", api_key="k")


@patch("src.extract.scrape.requests.post")
def test_scrape_http_error(mock_post) -> None:
    mock_post.return_value = _response(402, {})
    with pytest.raises(RuntimeError, match="HTTP 402"):
        scrape_url("https://example.com", api_key="k")


@patch("src.extract.scrape.requests.post")
def test_scrape_network_error(mock_post) -> None:
    mock_post.side_effect = requests.ConnectionError("down")
    with pytest.raises(RuntimeError, match="Failed to scrape"):
        scrape_url("https://example.com", api_key="k")


def test_scrape_requires_api_key() -> None:
    with pytest.raises(ValueError):
        scrape_url("https://example.com")
