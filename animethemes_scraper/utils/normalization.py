"""Normalization utilities for wiki markup and link paths."""

from typing import Optional


def normalize_content_html(content_html: str) -> str:
    """Unescape the angle brackets of JSON-embedded wiki HTML.

    Only ``&lt;`` and ``&gt;`` are touched so the result can be parsed as
    markup. Quote entities are left for the theme name field.
    """
    html = content_html.replace("&lt;", "<")
    html = html.replace("&gt;", ">")
    return html


def unescape_quotes(text: str) -> str:
    """Replace leftover ``&quot;`` entities with literal double quotes."""
    return text.replace("&quot;", '"')


def path_segment(href: Optional[str], index: int) -> str:
    """
    Get a slash-delimited segment of a link.
    
    Args:
        href: Link as found in the markup (may be None)
        index: Segment index when the href is split on "/"
        
    Returns:
        The segment, or "" if the link is missing or too short
    """
    if not href:
        return ""
    segments = href.split("/")
    if index >= len(segments):
        return ""
    return segments[index]
