"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest

from src.mindmap import OutlineNode, outline_from_dict


@pytest.fixture
def sample_outline_dict() -> dict:
    """Root with a two-level branch (b -> c) and a leaf sibling (d)."""
    return {
        "id": "a",
        "label": "Root",
        "children": [
            {"id": "b", "label": "B", "children": [{"id": "c", "label": "C"}]},
            {"id": "d", "label": "D"},
        ],
    }


@pytest.fixture
def sample_outline(sample_outline_dict: dict) -> OutlineNode:
    return outline_from_dict(sample_outline_dict)


@pytest.fixture
def deep_outline() -> OutlineNode:
    """Three levels under the root, two branches."""
    return outline_from_dict({
        "id": "root",
        "label": "Paper",
        "children": [
            {"id": "m1", "label": "Method", "children": [
                {"id": "m1a", "label": "Data", "children": [{"id": "m1a1", "label": "Sources"}]},
                {"id": "m1b", "label": "Model"},
            ]},
            {"id": "r1", "label": "Results", "children": [{"id": "r1a", "label": "Accuracy"}]},
            {"id": "c1", "label": "Conclusion"},
        ],
    })


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Avoid picking up real keys / dirs from the environment in tests."""
    for key in (
        "OUTPUT_DIR",
        "GOOGLE_API_KEY",
        "GOOGLE_MODEL_NAME",
        "LLM_API_KEY",
        "LLM_BASE_URL",
        "LLM_MODEL_NAME",
        "LLM_BACKEND",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL_NAME",
        "FIRECRAWL_API_KEY",
        "FIRECRAWL_API_URL",
        "REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)
    # every module that imported load_env holds its own binding
    for target in ("src.config.config.load_env", "src.extract.key_points.load_env", "main.load_env"):
        monkeypatch.setattr(target, lambda: None)
