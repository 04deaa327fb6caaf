"""Markdown rendering to HTML, plus the HTML wrappers served to browsers."""

from __future__ import annotations

import html as _html

import markdown

from ..errors import RenderFailure

EXTENSIONS = ["fenced_code", "tables", "sane_lists"]

PAGE_TEMPLATE = "<!DOCTYPE html><html><body>{body}</body></html>"
NOT_FOUND_PLACEHOLDER = "error"


def render_markdown(text: str) -> str:
    """Render markdown to an HTML fragment. Same input always gives the same output."""
    # Markdown instances keep state between conversions; build one per call.
    md = markdown.Markdown(extensions=EXTENSIONS, output_format="html")
    try:
        return md.convert(text)
    except Exception as e:
        raise RenderFailure(f"Markdown render failed: {e}") from e


def wrap_html_document(body: str) -> str:
    return PAGE_TEMPLATE.format(body=body)


def render_listing(names: list[str]) -> str:
    """HTML page with one <li> per published name."""
    items = "\n".join(f"<li>{_html.escape(name)}</li>" for name in names)
    return wrap_html_document(f"<ul>{items}</ul>")
