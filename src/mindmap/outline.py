"""
Hierarchical outline (document key points) as a tree of OutlineNode.
Wire shape: { "id": str, "label": str, "children"?: [...] }.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


class OutlineError(ValueError):
    """Malformed outline: bad shape, duplicate id or cycle."""


@dataclass
class OutlineNode:
    """One key point; children order is the vertical stacking order."""
    id: str
    label: str
    children: list[OutlineNode] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def _explicit_ids(obj: Any) -> set[str]:
    """Ids the source already carries; malformed shapes are reported later by _node_from_dict."""
    ids: set[str] = set()
    stack = [obj]
    while stack:
        cur = stack.pop()
        if not isinstance(cur, dict):
            continue
        raw_id = cur.get("id")
        node_id = str(raw_id).strip() if raw_id is not None else ""
        if node_id:
            ids.add(node_id)
        children = cur.get("children")
        if isinstance(children, list):
            stack.extend(children)
    return ids


def _node_from_dict(obj: Any, path: str, taken: set[str]) -> OutlineNode:
    if not isinstance(obj, dict):
        raise OutlineError(f"Outline node at {path} must be an object, got {type(obj).__name__}")
    label = obj.get("label")
    if label is None:
        # LLMs drift between label / title / text
        label = obj.get("title", obj.get("text"))
    if not isinstance(label, str):
        raise OutlineError(f"Outline node at {path} has no string label")
    raw_id = obj.get("id")
    node_id = str(raw_id).strip() if raw_id is not None else ""
    if not node_id:
        node_id = path
        n = 1
        while node_id in taken:
            node_id = f"{path}~{n}"
            n += 1
        taken.add(node_id)
    raw_children = obj.get("children")
    if raw_children is None:
        raw_children = []
    if not isinstance(raw_children, list):
        raise OutlineError(f"Outline node {node_id!r}: children must be a list")
    children = [_node_from_dict(c, f"{path}.{i}", taken) for i, c in enumerate(raw_children)]
    return OutlineNode(id=node_id, label=label.strip(), children=children)


def outline_from_dict(obj: Any) -> OutlineNode:
    """
    Build and validate an outline tree from its JSON shape.
    Nodes without an id get their index path ("0", "0.1", ...) once, here;
    a path already used as an explicit id gets a "~N" suffix. Layout never
    regenerates ids.
    """
    root = _node_from_dict(obj, "0", _explicit_ids(obj))
    validate_outline(root)
    return root


def outline_to_dict(node: OutlineNode) -> dict[str, Any]:
    out: dict[str, Any] = {"id": node.id, "label": node.label}
    if node.children:
        out["children"] = [outline_to_dict(c) for c in node.children]
    return out


def validate_outline(root: OutlineNode) -> None:
    """Raise OutlineError on duplicate ids or cycles instead of letting layout recurse forever."""
    seen: set[str] = set()
    on_path: set[int] = set()

    def walk(node: OutlineNode) -> None:
        if id(node) in on_path:
            raise OutlineError(f"Outline has a cycle through node {node.id!r}")
        if node.id in seen:
            raise OutlineError(f"Duplicate outline node id {node.id!r}")
        seen.add(node.id)
        on_path.add(id(node))
        for child in node.children:
            walk(child)
        on_path.discard(id(node))

    walk(root)


def iter_outline(root: OutlineNode) -> Iterator[tuple[OutlineNode, int, OutlineNode | None]]:
    """Pre-order (node, depth, parent) over the whole tree, ignoring expansion."""
    stack: list[tuple[OutlineNode, int, OutlineNode | None]] = [(root, 0, None)]
    while stack:
        node, depth, parent = stack.pop()
        yield node, depth, parent
        for child in reversed(node.children):
            stack.append((child, depth + 1, node))


def collect_ids(root: OutlineNode) -> set[str]:
    return {node.id for node, _, _ in iter_outline(root)}


def count_nodes(root: OutlineNode) -> int:
    return sum(1 for _ in iter_outline(root))


def index_outline(root: OutlineNode) -> dict[str, OutlineNode]:
    return {node.id: node for node, _, _ in iter_outline(root)}


def find_node(root: OutlineNode, node_id: str) -> OutlineNode | None:
    for node, _, _ in iter_outline(root):
        if node.id == node_id:
            return node
    return None
