"""Flask API for key-point extraction and mind map layout."""
from .app import ApiError, create_app

__all__ = ["ApiError", "create_app"]
