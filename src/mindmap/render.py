"""
Render a MindMapView to a self-contained HTML page: node boxes at their layout
positions, bezier edges (source right side -> target left side), dotted background.
Given the outline, the page re-runs the layout in the browser: clicking a node
with children collapses/expands it, and nodes can be dragged.
"""
from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Collection

from .controller import MindMapView
from .layout import COLUMN_WIDTH, NODE_WIDTH, VERTICAL_SPACING, PositionedNode
from .outline import OutlineNode, collect_ids, outline_to_dict

# Box height used to anchor edges at the vertical middle of a node
NODE_HEIGHT = 44
CANVAS_MARGIN = 40
EDGE_STROKE = "#DEDDDF"
NODE_BORDER = "#E4E4E7"
# Pointer travel (px) below which a mousedown/mouseup pair counts as a click, not a drag
DRAG_THRESHOLD = 3

_INTERACTIVE_SCRIPT = """
(function() {
  var data = JSON.parse(document.getElementById("mindmap-data").textContent);
  var canvas = document.getElementById("mindmap-canvas");
  var svg = document.getElementById("mindmap-edges");
  var expanded = new Set(data.expanded);
  var moved = {};
  var byId = {};
  var edges = [];
  var dragging = null;
  var startX, startY, startLeft, startTop, travelled;

  function layout(root) {
    var nodes = [], out = [], row = 0;
    function visit(node, depth, parent) {
      nodes.push({node: node, depth: depth, x: depth * data.columnWidth, y: row * data.verticalSpacing});
      if (parent) out.push({id: parent.id + "-" + node.id, source: parent.id, target: node.id});
      if (!expanded.has(node.id)) return;
      (node.children || []).forEach(function(child) {
        row += 1;
        visit(child, depth + 1, node);
      });
    }
    visit(root, 0, null);
    return {nodes: nodes, edges: out};
  }

  function drawEdges() {
    var paths = [];
    var width = 0, height = 0;
    Object.keys(byId).forEach(function(id) {
      var el = byId[id];
      width = Math.max(width, parseFloat(el.style.left) + data.nodeWidth + data.margin);
      height = Math.max(height, parseFloat(el.style.top) + data.nodeHeight + data.margin);
    });
    edges.forEach(function(e) {
      var src = byId[e.source], dst = byId[e.target];
      if (!src || !dst) return;
      var sx = parseFloat(src.style.left) + data.nodeWidth;
      var sy = parseFloat(src.style.top) + data.nodeHeight / 2;
      var tx = parseFloat(dst.style.left);
      var ty = parseFloat(dst.style.top) + data.nodeHeight / 2;
      var mx = (sx + tx) / 2;
      var path = document.createElementNS("http://www.w3.org/2000/svg", "path");
      path.setAttribute("class", "mindmap-edge");
      path.setAttribute("data-id", e.id);
      path.setAttribute("d", "M " + sx + " " + sy + " C " + mx + " " + sy + ", " + mx + " " + ty + ", " + tx + " " + ty);
      path.setAttribute("fill", "none");
      path.setAttribute("stroke", data.edgeStroke);
      path.setAttribute("stroke-width", "1.5");
      paths.push(path);
    });
    canvas.style.width = width + "px";
    canvas.style.height = height + "px";
    svg.setAttribute("width", width);
    svg.setAttribute("height", height);
    svg.setAttribute("viewBox", "0 0 " + width + " " + height);
    while (svg.firstChild) svg.removeChild(svg.firstChild);
    paths.forEach(function(path) { svg.appendChild(path); });
  }

  function render() {
    var result = layout(data.outline);
    canvas.querySelectorAll(".mindmap-node").forEach(function(el) { el.remove(); });
    byId = {};
    result.nodes.forEach(function(p) {
      var hasChildren = (p.node.children || []).length > 0;
      var el = document.createElement("div");
      el.className = hasChildren ? "mindmap-node cursor-pointer" : "mindmap-node";
      el.setAttribute("data-id", p.node.id);
      el.setAttribute("data-depth", p.depth);
      el.setAttribute("data-has-children", hasChildren ? "true" : "false");
      var pos = moved[p.node.id] || {left: p.x + data.margin, top: p.y + data.margin};
      el.style.left = pos.left + "px";
      el.style.top = pos.top + "px";
      el.textContent = p.node.label;
      canvas.appendChild(el);
      byId[p.node.id] = el;
    });
    edges = result.edges;
    drawEdges();
  }

  function toggleNode(el) {
    if (el.getAttribute("data-has-children") !== "true") return;
    var id = el.getAttribute("data-id");
    if (expanded.has(id)) {
      expanded.delete(id);
    } else {
      expanded.add(id);
    }
    render();
  }

  canvas.addEventListener("mousedown", function(e) {
    var el = e.target.closest(".mindmap-node");
    if (!el || e.button !== 0) return;
    e.preventDefault();
    dragging = el;
    startX = e.clientX;
    startY = e.clientY;
    startLeft = parseFloat(el.style.left) || 0;
    startTop = parseFloat(el.style.top) || 0;
    travelled = 0;
  });

  document.addEventListener("mousemove", function(e) {
    if (!dragging) return;
    e.preventDefault();
    var dx = e.clientX - startX, dy = e.clientY - startY;
    travelled = Math.max(travelled, Math.abs(dx) + Math.abs(dy));
    if (travelled < data.dragThreshold) return;
    var pos = {left: Math.max(0, startLeft + dx), top: Math.max(0, startTop + dy)};
    dragging.style.left = pos.left + "px";
    dragging.style.top = pos.top + "px";
    moved[dragging.getAttribute("data-id")] = pos;
    drawEdges();
  });

  document.addEventListener("mouseup", function() {
    if (!dragging) return;
    var el = dragging;
    dragging = null;
    if (travelled < data.dragThreshold) toggleNode(el);
  });
  document.addEventListener("mouseleave", function() {
    dragging = null;
  });

  render();
})();
"""


def _esc(s: str) -> str:
    return html.escape(str(s))


def _edge_path(src: PositionedNode, dst: PositionedNode) -> str:
    sx = src.x + NODE_WIDTH + CANVAS_MARGIN
    sy = src.y + NODE_HEIGHT / 2 + CANVAS_MARGIN
    tx = dst.x + CANVAS_MARGIN
    ty = dst.y + NODE_HEIGHT / 2 + CANVAS_MARGIN
    mx = (sx + tx) / 2
    return f"M {sx:g} {sy:g} C {mx:g} {sy:g}, {mx:g} {ty:g}, {tx:g} {ty:g}"


def _canvas_size(view: MindMapView) -> tuple[int, int]:
    if not view.nodes:
        return (0, 0)
    width = max(n.x for n in view.nodes) + NODE_WIDTH + 2 * CANVAS_MARGIN
    height = max(n.y for n in view.nodes) + NODE_HEIGHT + 2 * CANVAS_MARGIN
    return (int(width), int(height))


def render_mindmap_svg_content(view: MindMapView) -> str:
    """SVG <path> elements for every edge whose endpoints are both in view."""
    by_id = {n.id: n for n in view.nodes}
    paths = []
    for edge in view.edges:
        src = by_id.get(edge.source)
        dst = by_id.get(edge.target)
        if src is None or dst is None:
            continue
        paths.append(
            f'<path class="mindmap-edge" data-id="{_esc(edge.id)}" d="{_edge_path(src, dst)}" '
            f'fill="none" stroke="{EDGE_STROKE}" stroke-width="1.5"/>'
        )
    return "\n".join(paths)


def _render_node_divs(view: MindMapView) -> list[str]:
    divs = []
    for n in view.nodes:
        left = n.x + CANVAS_MARGIN
        top = n.y + CANVAS_MARGIN
        divs.append(
            f'<div class="{n.class_name}" data-id="{_esc(n.id)}" data-depth="{n.depth}" '
            f'data-has-children="{"true" if n.has_children else "false"}" '
            f'style="left:{left:g}px;top:{top:g}px;">{_esc(n.label)}</div>'
        )
    return divs


def _empty_state_html() -> str:
    return """<div class="mindmap-empty">
  <h3>No Mind Map Yet</h3>
  <p>Upload a PDF or Enter a URL to generate an interactive mind map of its key concepts.</p>
</div>"""


def _interactive_data(outline: OutlineNode, expanded: Collection[str]) -> str:
    payload = {
        "outline": outline_to_dict(outline),
        "expanded": sorted(expanded),
        "columnWidth": COLUMN_WIDTH,
        "verticalSpacing": VERTICAL_SPACING,
        "nodeWidth": NODE_WIDTH,
        "nodeHeight": NODE_HEIGHT,
        "margin": CANVAS_MARGIN,
        "edgeStroke": EDGE_STROKE,
        "dragThreshold": DRAG_THRESHOLD,
    }
    # "</script>" inside a label must not close the data block
    return json.dumps(payload, ensure_ascii=False).replace("<", "\\u003c")


def render_mindmap_html(
    view: MindMapView,
    out_path: Path | str,
    *,
    title: str = "Mind Map",
    outline: OutlineNode | None = None,
    expanded: Collection[str] | None = None,
) -> Path:
    """
    Write the view to out_path; an empty view gets the placeholder instead of a canvas.
    With outline (and the expanded ids behind view; default every id), the page
    toggles nodes on click and lets them be dragged.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    script = ""
    if view.empty:
        body = _empty_state_html()
    else:
        width, height = _canvas_size(view)
        body = f"""<div class="mindmap-viewport">
  <div class="mindmap-canvas" id="mindmap-canvas" style="width:{width}px;height:{height}px;">
    <svg class="mindmap-edges" id="mindmap-edges" width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">
{render_mindmap_svg_content(view)}
    </svg>
{chr(10).join(_render_node_divs(view))}
  </div>
</div>"""
        if outline is not None:
            if expanded is None:
                expanded = collect_ids(outline)
            script = f"""
<script id="mindmap-data" type="application/json">{_interactive_data(outline, expanded)}</script>
<script>{_INTERACTIVE_SCRIPT}</script>"""

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  :root {{ font-family: system-ui, sans-serif; font-size: 14px; color: #18181b; }}
  body {{ margin: 0; background: #fff; }}
  .mindmap-viewport {{
    width: 100vw; height: 100vh; overflow: auto;
    background-image: radial-gradient(#d4d4d8 1px, transparent 1px);
    background-size: 12px 12px;
  }}
  .mindmap-canvas {{ position: relative; }}
  .mindmap-edges {{ position: absolute; left: 0; top: 0; pointer-events: none; }}
  .mindmap-node {{
    position: absolute;
    width: {NODE_WIDTH}px;
    box-sizing: border-box;
    padding: 10px;
    background: #ffffff;
    border: 1px solid {NODE_BORDER};
    border-radius: 8px;
    line-height: 1.4;
    user-select: none;
  }}
  .mindmap-node.cursor-pointer {{ cursor: pointer; }}
  .mindmap-empty {{ max-width: 400px; margin: 20vh auto; padding: 2rem; text-align: center; }}
  .mindmap-empty h3 {{ font-size: 1.25rem; font-weight: 500; }}
  .mindmap-empty p {{ color: #a1a1aa; }}
</style>
</head>
<body>
{body}{script}
</body>
</html>
"""
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
