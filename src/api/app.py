"""
Flask API: key-point extraction (PDF / URL -> outline) and stateless mind map layout/toggle.
The client keeps the outline and its expanded ids and sends them with every request.
"""
from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..extract import extract_key_points, pdf_to_text, scrape_url
from ..mindmap import MindMapController, OutlineError, find_node, outline_from_dict, outline_to_dict


class ApiError(Exception):
    """Error with an HTTP status, rendered as {"error": message}."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status = status


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ApiError("Request body must be a JSON object")
    return body


def _load_content() -> tuple[str, str]:
    """(content, source) from a multipart PDF upload, a {url} or a {files: [{data}]} body."""
    upload = request.files.get("file")
    if upload is not None:
        try:
            return pdf_to_text(upload.read()), "pdf"
        except ValueError as e:
            raise ApiError(str(e)) from e
        except RuntimeError as e:
            # fitz raises RuntimeError subclasses on unreadable streams
            raise ApiError(f"Could not read PDF: {e}") from e

    body = _json_body()
    url = body.get("url")
    if url:
        try:
            return scrape_url(str(url)), "url"
        except ValueError as e:
            # missing FIRECRAWL_API_KEY on the server
            raise ApiError(str(e), 500) from e
        except RuntimeError as e:
            raise ApiError(str(e), 502) from e
    files = body.get("files")
    if isinstance(files, list) and files and isinstance(files[0], dict) and files[0].get("data"):
        return str(files[0]["data"]), "pdf"
    raise ApiError("No content provided")


def _controller_from_body(body: dict[str, Any]) -> MindMapController:
    try:
        root = outline_from_dict(body.get("outline"))
    except OutlineError as e:
        raise ApiError(f"Invalid outline: {e}") from e
    expanded = body.get("expanded")
    if expanded is None:
        return MindMapController(root)
    if not isinstance(expanded, list):
        raise ApiError("expanded must be a list of node ids")
    return MindMapController.from_state(root, [str(i) for i in expanded])


def _view_response(ctrl: MindMapController, **extra: Any):
    payload = ctrl.view().to_dict()
    payload["expanded"] = sorted(ctrl.expanded)
    payload.update(extra)
    return jsonify(payload)


def register_routes(app: Flask) -> None:
    """Register routes for the API application"""

    @app.route("/api/key-points", methods=["POST"])
    def key_points():
        content, source = _load_content()
        if not content.strip():
            raise ApiError("No content provided")
        try:
            root = extract_key_points(content, source=source)
        except OutlineError as e:
            raise ApiError(f"LLM returned an invalid outline: {e}", 502) from e
        except ValueError as e:
            # content is checked above, so this is the server's LLM key/backend setup
            raise ApiError(str(e), 500) from e
        except RuntimeError as e:
            raise ApiError(str(e), 502) from e
        return jsonify({"outline": outline_to_dict(root)})

    @app.route("/api/layout", methods=["POST"])
    def mindmap_layout():
        return _view_response(_controller_from_body(_json_body()))

    @app.route("/api/toggle", methods=["POST"])
    def mindmap_toggle():
        body = _json_body()
        ctrl = _controller_from_body(body)
        node_id = body.get("nodeId")
        if not node_id:
            raise ApiError("nodeId is required")
        node = find_node(ctrl.root, str(node_id))
        if node is None:
            raise ApiError(f"Unknown node id: {node_id}", 404)
        clicked: list[dict[str, Any]] = []
        ctrl.on_node_click = lambda n: clicked.append(outline_to_dict(n))
        ctrl.handle_node_activation(node.id, node.has_children)
        return _view_response(ctrl, clicked=clicked[0])


def add_errorhandlers(app: Flask) -> None:
    """Register JSON error handlers"""

    @app.errorhandler(ApiError)
    def api_error(exception: ApiError):
        app.logger.warning("API error (%d): %s", exception.status, exception.message)
        return jsonify({"error": exception.message}), exception.status

    @app.errorhandler(HTTPException)
    def http_error(exception: HTTPException):
        return jsonify({"error": exception.description}), exception.code

    @app.errorhandler(500)
    def server_error(exception):
        app.logger.error("Error occured: %s", exception)
        return jsonify({"error": "An internal server error occurred."}), 500


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask("mindmap")
    app.logger.setLevel(logging.INFO)
    if config:
        app.config.update(config)
    register_routes(app)
    add_errorhandlers(app)
    return app
