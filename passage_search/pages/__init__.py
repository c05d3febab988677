"""Server-rendered HTML pages."""

from passage_search.pages.root import render_root_page

__all__ = ["render_root_page"]
