"""
Expand/collapse state for one outline; recomputes the layout after every change.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from .layout import ConnectionEdge, PositionedNode, layout
from .outline import OutlineNode, collect_ids, index_outline, validate_outline

logger = logging.getLogger(__name__)

NodeClickHandler = Callable[[OutlineNode], None]


@dataclass(frozen=True)
class MindMapView:
    """What the renderer draws. empty=True means "nothing to show", not an error."""
    nodes: list[PositionedNode] = field(default_factory=list)
    edges: list[ConnectionEdge] = field(default_factory=list)
    empty: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "empty": self.empty,
        }


class MindMapController:
    """Owns the set of expanded node ids for the current outline."""

    def __init__(self, root: OutlineNode | None = None, on_node_click: NodeClickHandler | None = None):
        self.on_node_click = on_node_click
        self._root: OutlineNode | None = None
        self._nodes_by_id: dict[str, OutlineNode] = {}
        self._expanded: set[str] = set()
        if root is not None:
            self.initialize(root)

    @classmethod
    def from_state(
        cls,
        root: OutlineNode,
        expanded: Iterable[str],
        on_node_click: NodeClickHandler | None = None,
    ) -> MindMapController:
        """Rebuild a controller from a client-held expansion state; unknown ids are dropped."""
        ctrl = cls(root, on_node_click=on_node_click)
        ctrl._expanded = {i for i in expanded if i in ctrl._nodes_by_id}
        return ctrl

    @property
    def root(self) -> OutlineNode | None:
        return self._root

    @property
    def expanded(self) -> frozenset[str]:
        return frozenset(self._expanded)

    def initialize(self, root: OutlineNode) -> MindMapView:
        """New outline: replace all state; every node starts expanded."""
        validate_outline(root)
        self._root = root
        self._nodes_by_id = index_outline(root)
        self._expanded = collect_ids(root)
        logger.info("Mind map initialized: %d nodes, all expanded", len(self._expanded))
        return self.view()

    def handle_node_activation(self, node_id: str, has_children: bool) -> MindMapView:
        """
        Click on a node: toggle node_id in the expanded set if it has children
        (leaves leave state unchanged), then notify on_node_click with the outline node.
        """
        if self._root is None:
            raise RuntimeError("No outline loaded; call initialize() first")
        node = self._nodes_by_id.get(node_id)
        if node is None:
            raise KeyError(f"Unknown node id: {node_id!r}")
        if has_children:
            if node_id in self._expanded:
                self._expanded.remove(node_id)
                logger.debug("Collapsed %s", node_id)
            else:
                self._expanded.add(node_id)
                logger.debug("Expanded %s", node_id)
        if self.on_node_click is not None:
            self.on_node_click(node)
        return self.view()

    def view(self) -> MindMapView:
        if self._root is None or not self._root.children:
            return MindMapView(empty=True)
        nodes, edges = layout(self._root, self._expanded)
        return MindMapView(nodes=nodes, edges=edges)
