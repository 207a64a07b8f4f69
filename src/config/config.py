"""
Load .env from project root; expose OUTPUT_DIR, GOOGLE_API_KEY, LLM_*, FIRECRAWL_*.
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import os
from pathlib import Path

GOOGLE_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_GOOGLE_MODEL = "gemini-2.0-flash"
DEFAULT_FIRECRAWL_API_URL = "https://api.firecrawl.dev"


def _project_root() -> Path:
    """Project root (directory containing output/, src/)."""
    p = Path(__file__).resolve()
    # src/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "output").is_dir() or (p / "src").is_dir():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def get_output_dir() -> Path:
    """Where outline.json / mindmap.html are written; default <project_root>/output."""
    load_env()
    out_dir = os.environ.get("OUTPUT_DIR")
    if out_dir:
        return Path(out_dir)
    return _project_root() / "output"


def get_llm_api_key() -> str | None:
    """LLM API key (GOOGLE_API_KEY, LLM_API_KEY, or OPENAI_API_KEY)."""
    load_env()
    return (
        os.environ.get("GOOGLE_API_KEY")
        or os.environ.get("LLM_API_KEY")
        or os.environ.get("OPENAI_API_KEY")
        or None
    )


def get_llm_base_url() -> str | None:
    """OpenAI-compatible base URL; Google's endpoint whenever GOOGLE_API_KEY is set."""
    load_env()
    if os.environ.get("GOOGLE_API_KEY") is not None:
        return GOOGLE_OPENAI_BASE_URL
    return os.environ.get("LLM_BASE_URL") or os.environ.get("OPENAI_BASE_URL")


def get_llm_model_name() -> str | None:
    """Model name (GOOGLE_MODEL_NAME, LLM_MODEL_NAME or OPENAI_MODEL_NAME). Default with Google: gemini-2.0-flash."""
    load_env()
    if os.environ.get("GOOGLE_API_KEY") is not None:
        return os.environ.get("GOOGLE_MODEL_NAME") or DEFAULT_GOOGLE_MODEL
    return os.environ.get("LLM_MODEL_NAME") or os.environ.get("OPENAI_MODEL_NAME")


def get_llm_backend() -> str:
    """'openai' (OpenAI SDK, any compatible endpoint) or 'gemini' (google-genai)."""
    load_env()
    return (os.environ.get("LLM_BACKEND") or "openai").strip().lower()


def get_firecrawl_api_key() -> str | None:
    load_env()
    return os.environ.get("FIRECRAWL_API_KEY") or None


def get_firecrawl_api_url() -> str:
    load_env()
    return os.environ.get("FIRECRAWL_API_URL", DEFAULT_FIRECRAWL_API_URL).rstrip("/")


def get_request_timeout() -> float:
    """Timeout in seconds for scrape requests (REQUEST_TIMEOUT, default 60)."""
    load_env()
    raw = os.environ.get("REQUEST_TIMEOUT")
    if not raw:
        return 60.0
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"REQUEST_TIMEOUT must be a number, got {raw!r}") from None
