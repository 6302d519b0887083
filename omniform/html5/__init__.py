"""Plain HTML5 form rendering for record schemas."""

from .plugin import define_html_type, install, load_html_types, render_form

__all__ = ["define_html_type", "install", "load_html_types", "render_form"]
