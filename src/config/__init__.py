"""Config: load .env, expose OUTPUT_DIR, GOOGLE_API_KEY, LLM_*, FIRECRAWL_*, etc."""
from .config import (
    load_env,
    get_output_dir,
    get_llm_api_key,
    get_llm_base_url,
    get_llm_model_name,
    get_llm_backend,
    get_firecrawl_api_key,
    get_firecrawl_api_url,
    get_request_timeout,
)

__all__ = [
    "load_env",
    "get_output_dir",
    "get_llm_api_key",
    "get_llm_base_url",
    "get_llm_model_name",
    "get_llm_backend",
    "get_firecrawl_api_key",
    "get_firecrawl_api_url",
    "get_request_timeout",
]
