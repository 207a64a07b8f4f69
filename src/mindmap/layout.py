"""
Mind map layout: outline tree + expanded ids -> positioned nodes and parent->child edges.
Columns by depth, rows from one counter shared across the whole traversal.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection

from .outline import OutlineNode

NODE_WIDTH = 200
HORIZONTAL_GAP = 100
COLUMN_WIDTH = NODE_WIDTH + HORIZONTAL_GAP
VERTICAL_SPACING = 120


@dataclass(frozen=True)
class PositionedNode:
    id: str
    label: str
    has_children: bool
    depth: int
    x: float
    y: float

    @property
    def pointer_cursor(self) -> bool:
        """Only nodes with children react to clicks."""
        return self.has_children

    @property
    def class_name(self) -> str:
        return "mindmap-node cursor-pointer" if self.pointer_cursor else "mindmap-node"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "hasChildren": self.has_children,
            "depth": self.depth,
            "position": {"x": self.x, "y": self.y},
            "className": self.class_name,
        }


@dataclass(frozen=True)
class ConnectionEdge:
    id: str
    source: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "source": self.source, "target": self.target}


def layout(
    root: OutlineNode,
    expanded: Collection[str],
) -> tuple[list[PositionedNode], list[ConnectionEdge]]:
    """
    Depth-first pre-order walk from root (depth 0, row 0).
    x = depth * COLUMN_WIDTH; y = row * VERTICAL_SPACING, where row is bumped once
    before each visited child. Children of a node not in expanded are not visited,
    so a collapsed subtree emits no nodes, no edges and takes no rows.
    """
    nodes: list[PositionedNode] = []
    edges: list[ConnectionEdge] = []
    row = 0

    def visit(node: OutlineNode, depth: int, parent_id: str | None) -> None:
        nonlocal row
        nodes.append(
            PositionedNode(
                id=node.id,
                label=node.label,
                has_children=node.has_children,
                depth=depth,
                x=depth * COLUMN_WIDTH,
                y=row * VERTICAL_SPACING,
            )
        )
        if parent_id is not None:
            edges.append(ConnectionEdge(id=f"{parent_id}-{node.id}", source=parent_id, target=node.id))
        if node.id in expanded:
            for child in node.children:
                row += 1
                visit(child, depth + 1, node.id)

    visit(root, 0, None)
    return nodes, edges
