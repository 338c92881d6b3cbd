#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/synthesizer.py
"""Mapping of extracted text onto slide and presentation records.

The first fragment of a slide becomes its title and the rest its content
items. Content is rendered to HTML (nothing, one ``<p>``, or a ``<ul>``),
the layout is inferred from whether a title was found, and the background
color is picked from a palette by slide position. Every function here is pure.

"""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional, Sequence

from pptx2slides.constants import (
    DARK_PALETTE,
    DEFAULT_UNTITLED_PRESENTATION,
    LAYOUT_CONTENT_ONLY,
    LAYOUT_TITLE_CONTENT,
    SlideLayout,
)
from pptx2slides.models import PresentationRecord, SlideRecord, TextFragment, UserId
from pptx2slides.options import ImportOptions

# "&" first so the entities added below are not escaped again
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(text: str) -> str:
    """Escape HTML special characters in slide text.

    Parameters
    ----------
    text : str
        Raw text

    Returns
    -------
    str
        Text safe to place inside an HTML element

    Examples
    --------
    >>> escape_html('<b> & "it\\'s"')
    '&lt;b&gt; &amp; &quot;it&#039;s&quot;'

    """
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render_content_html(items: Sequence[str]) -> str:
    """Render content items as an HTML fragment.

    No items render as an empty string, one item as a paragraph and several
    as an unordered list. Each item is escaped exactly once.
    """
    if not items:
        return ""
    if len(items) == 1:
        return f"<p>{escape_html(items[0])}</p>"
    return "<ul>" + "".join(f"<li>{escape_html(item)}</li>" for item in items) + "</ul>"


def classify_layout(title: str, items: Sequence[str]) -> SlideLayout:
    """Return ``title-content`` when the slide has a title, else ``content-only``.

    Content items do not change the outcome; they are accepted so callers
    pass the whole slide.
    """
    if title:
        return LAYOUT_TITLE_CONTENT
    return LAYOUT_CONTENT_ONLY


def background_color_for(position: int, palette: Sequence[str] = DARK_PALETTE) -> str:
    """Return the palette color for the slide at 0-based ``position``."""
    return palette[position % len(palette)]


def synthesize_slide(
    fragments: Sequence[TextFragment],
    position: int,
    options: Optional[ImportOptions] = None,
) -> SlideRecord:
    """Build the slide record for one slide's fragments.

    Parameters
    ----------
    fragments : sequence of TextFragment
        The slide's fragments in document order
    position : int
        0-based position of the slide in the package
    options : ImportOptions, optional
        Supplies the placeholder title and the palette

    Returns
    -------
    SlideRecord
        The record to store. A slide without fragments gets the placeholder
        title and the ``content-only`` layout.

    """
    options = options or ImportOptions()
    texts = [fragment.text for fragment in fragments]

    title = texts[0] if texts else ""
    items = texts[1:]

    return SlideRecord(
        title=title or options.untitled_title,
        content=render_content_html(items),
        layout=classify_layout(title, items),
        background_color=background_color_for(position, options.palette),
    )


def default_presentation_title(filename: Optional[str]) -> str:
    """Return the base name of ``filename`` without its extension."""
    if not filename:
        return DEFAULT_UNTITLED_PRESENTATION
    # Uploads from Windows clients may carry backslash paths
    stem = PurePath(filename.replace("\\", "/")).stem
    return stem or DEFAULT_UNTITLED_PRESENTATION


def build_presentation(
    slide_ids: Sequence[str],
    filename: Optional[str] = None,
    title: Optional[str] = None,
    user_id: Optional[UserId] = None,
) -> PresentationRecord:
    """Build the presentation record linking stored slides in order.

    An explicit ``title`` wins over the one derived from ``filename``;
    ``user_id`` is kept verbatim and omitted from the record when None.
    """
    return PresentationRecord(
        title=title if title else default_presentation_title(filename),
        slides=tuple(slide_ids),
        user_id=user_id,
    )
