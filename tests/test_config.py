"""Tests for src.config."""
from __future__ import annotations

import os
from pathlib import Path

import pytest


def test_get_output_dir_default() -> None:
    """Without OUTPUT_DIR, get_output_dir returns <project root>/output."""
    from src.config import get_output_dir

    got = get_output_dir()
    assert got.name == "output"
    assert (got.parent / "src").is_dir()


def test_get_output_dir_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))
    from src.config import get_output_dir

    assert get_output_dir() == tmp_path / "out"


def test_google_env_priority(monkeypatch) -> None:
    """GOOGLE_API_KEY wins: Google's OpenAI-compatible endpoint and gemini default model."""
    from src.config import get_llm_api_key, get_llm_base_url, get_llm_model_name

    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_llm_api_key() == "google-key"
    assert get_llm_base_url() == "https://generativelanguage.googleapis.com/v1beta/openai/"
    assert get_llm_model_name() == "gemini-2.0-flash"

    monkeypatch.setenv("LLM_API_KEY", "llm-key")
    monkeypatch.setenv("LLM_BASE_URL", "llm-url")
    monkeypatch.setenv("LLM_MODEL_NAME", "llm-model")
    assert get_llm_api_key() == "google-key"
    assert get_llm_base_url() == "https://generativelanguage.googleapis.com/v1beta/openai/"
    assert get_llm_model_name() == "gemini-2.0-flash"

    monkeypatch.setenv("GOOGLE_MODEL_NAME", "gemini-1.5-pro")
    assert get_llm_model_name() == "gemini-1.5-pro"


def test_no_google_env_fallback(monkeypatch) -> None:
    from src.config import get_llm_api_key, get_llm_base_url, get_llm_model_name

    monkeypatch.setenv("LLM_API_KEY", "llm-key")
    monkeypatch.setenv("LLM_BASE_URL", "llm-url")
    monkeypatch.setenv("LLM_MODEL_NAME", "llm-model")
    assert get_llm_api_key() == "llm-key"
    assert get_llm_base_url() == "llm-url"
    assert get_llm_model_name() == "llm-model"

    for key in ("LLM_API_KEY", "LLM_BASE_URL", "LLM_MODEL_NAME"):
        monkeypatch.delenv(key)
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "openai-url")
    monkeypatch.setenv("OPENAI_MODEL_NAME", "openai-model")
    assert get_llm_api_key() == "openai-key"
    assert get_llm_base_url() == "openai-url"
    assert get_llm_model_name() == "openai-model"


def test_no_keys_at_all() -> None:
    from src.config import get_llm_api_key, get_llm_base_url, get_llm_model_name, get_firecrawl_api_key

    assert get_llm_api_key() is None
    assert get_llm_base_url() is None
    assert get_llm_model_name() is None
    assert get_firecrawl_api_key() is None


def test_llm_backend(monkeypatch) -> None:
    from src.config import get_llm_backend

    assert get_llm_backend() == "openai"
    monkeypatch.setenv("LLM_BACKEND", " Gemini ")
    assert get_llm_backend() == "gemini"


def test_firecrawl_settings(monkeypatch) -> None:
    from src.config import get_firecrawl_api_key, get_firecrawl_api_url

    assert get_firecrawl_api_url() == "https://api.firecrawl.dev"
    monkeypatch.setenv("FIRECRAWL_API_KEY", "fc-key")
    monkeypatch.setenv("FIRECRAWL_API_URL", "http://localhost:3002/")
    assert get_firecrawl_api_key() == "fc-key"
    assert get_firecrawl_api_url() == "http://localhost:3002"


def test_request_timeout(monkeypatch) -> None:
    from src.config import get_request_timeout

    assert get_request_timeout() == 60.0
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    assert get_request_timeout() == 5.0
    monkeypatch.setenv("REQUEST_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        get_request_timeout()


def test_load_env_reads_dotenv_without_overriding(monkeypatch, tmp_path: Path) -> None:
    """load_env copies .env values into os.environ but keeps variables already set."""
    from src.config import load_env

    (tmp_path / ".env").write_text(
        "# comment\nFIRECRAWL_API_KEY='from-file'\nLLM_MODEL_NAME=file-model\nBROKEN_LINE\n",
        encoding="utf-8",
    )
    monkeypatch.setattr("src.config.config._project_root", lambda: tmp_path)
    monkeypatch.setenv("LLM_MODEL_NAME", "env-model")
    monkeypatch.delenv("FIRECRAWL_API_KEY", raising=False)

    load_env()
    assert os.environ["FIRECRAWL_API_KEY"] == "from-file"
    assert os.environ["LLM_MODEL_NAME"] == "env-model"
    monkeypatch.delenv("FIRECRAWL_API_KEY")


def test_dotenv_not_loaded_through_importing_modules(monkeypatch, tmp_path: Path) -> None:
    """Tests never pick up a developer's .env through main or the key-point extractor."""
    import main
    from src.extract import key_points

    (tmp_path / ".env").write_text("FIRECRAWL_API_KEY=leaked\n", encoding="utf-8")
    monkeypatch.setattr("src.config.config._project_root", lambda: tmp_path)

    main.load_env()
    key_points.load_env()
    assert "FIRECRAWL_API_KEY" not in os.environ
