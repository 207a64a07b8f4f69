"""
Export an outline tree to an XMind mind map (one sheet, root topic = outline root).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from .outline import OutlineNode


def build_xmind(
    root: OutlineNode,
    out_path: Path | str,
    *,
    sheet_title: str = "Key Points",
) -> Path:
    """
    Build an XMind workbook from the full outline (expansion state is a view concern,
    so every node is exported). Children keep their outline order.
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for --xmind. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    root_topic = sheet.get_root_topic()
    root_topic.title = root.label or "(No content)"

    def add_children(parent_topic: Any, node: OutlineNode) -> None:
        for child in node.children:
            sub = parent_topic.add_subtopic(child.label)
            add_children(sub, child)

    add_children(root_topic, root)
    workbook.save(str(out_path))
    return out_path


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """Load an .xmind file and return all topic titles in traversal order."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    titles: list[str] = []

    def walk(topic: Any) -> None:
        t = getattr(topic, "title", None)
        if t:
            titles.append(str(t).strip())
        for st in getattr(topic, "subtopics", []) or []:
            walk(st)

    for sheet in (w.get_sheet(i) for i in range(w.sheet_count)):
        root = sheet.root_topic
        if root:
            walk(root)
    return titles


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """Load an .xmind file and return (parent_title, child_title) for each link."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    pairs: list[tuple[str, str]] = []

    def walk(parent_title: str | None, topic: Any) -> None:
        t = getattr(topic, "title", None)
        if t:
            current = str(t).strip()
            if parent_title is not None:
                pairs.append((parent_title, current))
            for st in getattr(topic, "subtopics", []) or []:
                walk(current, st)

    for sheet in (w.get_sheet(i) for i in range(w.sheet_count)):
        root = sheet.root_topic
        if root:
            walk(None, root)
    return pairs
