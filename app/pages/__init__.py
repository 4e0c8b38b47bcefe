"""Static HTML pages served by the app."""

from app.pages.root import render_root_page

__all__ = ["render_root_page"]
