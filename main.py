#!/usr/bin/env python3
"""
Root entry: PDF / URL / outline JSON -> key points (LLM) -> mind map layout -> HTML.
Supports --xmind (export outline) and --serve (run the Flask API).
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from src.config import load_env, get_output_dir
from src.extract import pdf_to_text, scrape_url, extract_key_points
from src.mindmap import (
    MindMapController,
    OutlineError,
    OutlineNode,
    build_xmind,
    find_node,
    outline_from_dict,
    outline_to_dict,
    render_mindmap_html,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract key points from a PDF or webpage and render them as a mind map. Supports --xmind and --serve."
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--pdf", metavar="PATH", default=None, help="Extract key points from a local PDF")
    source.add_argument("--url", metavar="URL", default=None, help="Scrape a webpage (Firecrawl) and extract its key points")
    source.add_argument(
        "--outline",
        metavar="JSON",
        default=None,
        help="Skip extraction and lay out an existing outline JSON file ({id, label, children})",
    )
    parser.add_argument(
        "--out-dir",
        metavar="DIR",
        default=None,
        help="Output directory for outline.json / mindmap.html (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--collapse",
        metavar="NODE_ID",
        action="append",
        default=[],
        help="Collapse this node in the rendered mind map (repeatable)",
    )
    parser.add_argument(
        "--xmind",
        action="store_true",
        help="Also export the outline to mindmap.xmind",
    )
    parser.add_argument(
        "--backend",
        choices=["openai", "gemini"],
        default=None,
        help="LLM backend (default: LLM_BACKEND or openai)",
    )
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead of a one-shot extraction")
    parser.add_argument("--host", default="127.0.0.1", help="Host for --serve")
    parser.add_argument("--port", type=int, default=5000, help="Port for --serve")
    return parser


def _load_outline(path: Path) -> OutlineNode:
    if not path.is_file():
        raise FileNotFoundError(f"Outline not found: {path}")
    return outline_from_dict(json.loads(path.read_text(encoding="utf-8")))


def _extract_outline(args: argparse.Namespace) -> OutlineNode:
    if args.outline:
        return _load_outline(Path(args.outline))
    if args.url:
        content = scrape_url(args.url)
        return extract_key_points(content, source="url", backend=args.backend)
    content = pdf_to_text(Path(args.pdf))
    return extract_key_points(content, source="pdf", backend=args.backend)


def _render(root: OutlineNode, out_dir: Path, collapse: list[str], use_xmind: bool) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    outline_path = out_dir / "outline.json"
    outline_path.write_text(json.dumps(outline_to_dict(root), ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Outline: %s", outline_path.name)

    ctrl = MindMapController(root)
    for node_id in collapse:
        node = find_node(root, node_id)
        if node is None:
            logger.warning("  --collapse %s: no such node, ignored", node_id)
            continue
        if node_id in ctrl.expanded:
            ctrl.handle_node_activation(node_id, node.has_children)
    view = ctrl.view()
    if view.empty:
        logger.warning("Outline has no key points; writing empty mind map")
    render_mindmap_html(
        view, out_dir / "mindmap.html", title=root.label or "Mind Map", outline=root, expanded=ctrl.expanded
    )
    logger.info("Mind map: mindmap.html (%d nodes, %d edges)", len(view.nodes), len(view.edges))

    if use_xmind:
        try:
            xmind_path = build_xmind(root, out_dir / "mindmap.xmind", sheet_title=root.label or "Key Points")
            logger.info("XMind: %s", xmind_path.name)
        except Exception as e:
            logger.warning("XMind export failed: %s", e)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    load_env()

    if args.serve:
        from src.api import create_app

        create_app().run(host=args.host, port=args.port)
        return 0

    if not (args.pdf or args.url or args.outline):
        parser.print_usage(sys.stderr)
        logger.error("Give one of --pdf, --url or --outline (or --serve)")
        return 1

    out_dir = Path(args.out_dir) if args.out_dir else get_output_dir()
    t0 = time.perf_counter()
    try:
        root = _extract_outline(args)
    except (OutlineError, ValueError, RuntimeError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1
    try:
        _render(root, out_dir, args.collapse, args.xmind)
    except OSError as e:
        logger.error("Could not write output to %s: %s", out_dir, e)
        return 1
    logger.info("Done in %.2fs. Output: %s", time.perf_counter() - t0, out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
