"""Render a tree of Jinja templates into a static site, or serve it live."""

__version__ = "0.1.0"
