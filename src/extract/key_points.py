"""
Document text -> key-point outline (OutlineNode tree) via a hosted LLM.
Backends: OpenAI SDK (any OpenAI-compatible endpoint, Gemini included) or google-genai.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from google import genai
from google.genai import types
from openai import OpenAI

from ..config import get_llm_api_key, get_llm_backend, get_llm_base_url, get_llm_model_name, load_env
from ..mindmap.outline import OutlineError, OutlineNode, count_nodes, outline_from_dict

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a document analyzer. Extract the most important points from the provided document. "
    "Focus on key information, main ideas, and significant details."
)

URL_INSTRUCTION = (
    "Please analyze this webpage content and extract the key points. Include relevant context where helpful."
)
PDF_INSTRUCTION = "Please read this PDF and extract the key points. Include relevant context where helpful."

OUTLINE_SCHEMA_INSTRUCTION = """
Output a single JSON object describing the key points as a tree:

- Root: { "id": "root", "label": "document title or main topic", "children": [...] }.
- Each child: { "id": "unique id", "label": "key point, one short sentence", "children": [...] } (children optional; omit for leaves).
- ids must be unique across the whole tree. Order children by importance / reading order.

Output only one JSON object, no other text.
"""


def _build_user_prompt(source: str) -> str:
    instruction = URL_INSTRUCTION if source == "url" else PDF_INSTRUCTION
    return f"{instruction}\n{OUTLINE_SCHEMA_INSTRUCTION}"


def _extract_json_object(raw: str) -> str:
    raw = raw.strip()
    m = re.search(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", raw)
    if m:
        return m.group(1)
    m = re.search(r"\{[\s\S]*\}", raw)
    if m:
        return m.group(0)
    return raw


def parse_outline_reply(raw: str | None) -> OutlineNode:
    """Parse the model reply (plain JSON or fenced) into a validated outline."""
    text = _extract_json_object(raw or "")
    if not text:
        raise OutlineError("LLM returned an empty reply")
    try:
        obj: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise OutlineError(f"LLM reply is not valid JSON: {e}") from e
    # Some models wrap the tree: {"outline": {...}} / {"root": {...}}
    if isinstance(obj, dict) and "label" not in obj:
        for key in ("outline", "root", "mindmap"):
            if isinstance(obj.get(key), dict):
                obj = obj[key]
                break
    return outline_from_dict(obj)


def _complete_openai(content: str, prompt: str, *, api_key: str, model: str | None) -> str:
    client = OpenAI(api_key=api_key, base_url=get_llm_base_url())
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {"type": "text", "text": content},
            ],
        },
    ]
    try:
        response = client.chat.completions.create(
            model=model or get_llm_model_name(),
            messages=messages,
            max_tokens=8192,
        )
        return response.choices[0].message.content or ""
    except Exception as e:
        raise RuntimeError(f"LLM request failed: {e}") from e


def _complete_gemini(content: str, prompt: str, *, api_key: str, model: str | None) -> str:
    client = genai.Client(api_key=api_key)
    try:
        response = client.models.generate_content(
            model=model or get_llm_model_name() or "gemini-2.0-flash",
            contents=[
                types.Part.from_text(text=prompt),
                types.Part.from_text(text=content),
            ],
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_PROMPT,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""
    except Exception as e:
        raise RuntimeError(f"Gemini request failed: {e}") from e


def extract_key_points(
    content: str,
    *,
    source: str = "pdf",
    api_key: str | None = None,
    model_name: str | None = None,
    backend: str | None = None,
) -> OutlineNode:
    """
    Ask the LLM for the key points of content (PDF text or scraped markdown) and
    return them as an outline tree. source is "pdf" or "url" (only changes the prompt).
    """
    load_env()
    if not content or not content.strip():
        raise ValueError("No content provided")
    key = api_key or get_llm_api_key()
    if not key:
        raise ValueError("Set GOOGLE_API_KEY (or LLM_API_KEY / OPENAI_API_KEY) or pass api_key")
    backend = (backend or get_llm_backend()).lower()
    prompt = _build_user_prompt(source)

    logger.info("Key points: calling %s backend (%d chars of %s content)", backend, len(content), source)
    if backend == "gemini":
        raw = _complete_gemini(content, prompt, api_key=key, model=model_name)
    elif backend == "openai":
        raw = _complete_openai(content, prompt, api_key=key, model=model_name)
    else:
        raise ValueError(f"Unknown LLM backend {backend!r} (expected 'openai' or 'gemini')")

    root = parse_outline_reply(raw)
    logger.info("Key points: %d outline nodes", count_nodes(root))
    return root
