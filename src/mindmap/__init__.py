"""Mind map: outline tree -> layout (nodes/edges) -> HTML; expand/collapse controller; XMind export."""
from .outline import (
    OutlineError,
    OutlineNode,
    outline_from_dict,
    outline_to_dict,
    validate_outline,
    iter_outline,
    collect_ids,
    count_nodes,
    find_node,
    index_outline,
)
from .layout import ConnectionEdge, PositionedNode, layout
from .controller import MindMapController, MindMapView
from .render import render_mindmap_html, render_mindmap_svg_content
from .xmind_export import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs

__all__ = [
    "OutlineError",
    "OutlineNode",
    "outline_from_dict",
    "outline_to_dict",
    "validate_outline",
    "iter_outline",
    "collect_ids",
    "count_nodes",
    "find_node",
    "index_outline",
    "ConnectionEdge",
    "PositionedNode",
    "layout",
    "MindMapController",
    "MindMapView",
    "render_mindmap_html",
    "render_mindmap_svg_content",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
]
