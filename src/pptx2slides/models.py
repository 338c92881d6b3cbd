#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/models.py
"""Record types flowing through the import pipeline.

``SlidePart`` and ``TextFragment`` are transient and never leave the pipeline.
``SlideRecord`` and ``PresentationRecord`` are what a document store persists;
their ``to_dict()`` output uses the camelCase keys the store and its HTTP
clients expect (``backgroundColor``, ``userId``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pptx2slides.constants import SlideLayout

UserId = Union[int, str]


@dataclass(frozen=True)
class SlidePart:
    """One ``ppt/slides/slideN.xml`` entry of a package.

    Parameters
    ----------
    name : str
        Archive path of the part
    index : int
        1-based slide number parsed from the name, 0 when it does not parse
    xml : bytes
        Raw XML payload

    """

    name: str
    index: int
    xml: bytes = field(repr=False)


@dataclass(frozen=True)
class TextFragment:
    """Plain text recovered from one paragraph of a slide."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class SlideRecord:
    """A slide as stored by the document store.

    Parameters
    ----------
    title : str
        Slide title
    content : str
        HTML body: empty, a single ``<p>`` or a ``<ul>`` list
    layout : SlideLayout
        ``"title-content"`` or ``"content-only"``
    background_color : str
        Hex background color
    subtitle : str, default ""
        Always empty for imported slides
    image : str, default ""
        Always empty for imported slides

    """

    title: str
    content: str
    layout: SlideLayout
    background_color: str
    subtitle: str = ""
    image: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the store representation of the slide."""
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "content": self.content,
            "image": self.image,
            "layout": self.layout,
            "backgroundColor": self.background_color,
        }


@dataclass(frozen=True)
class PresentationRecord:
    """A presentation referencing its slides by id, in display order."""

    title: str
    slides: tuple[str, ...] = ()
    user_id: Optional[UserId] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the store representation; ``userId`` is omitted when unset."""
        result: dict[str, Any] = {"title": self.title, "slides": list(self.slides)}
        if self.user_id is not None:
            result["userId"] = self.user_id
        return result
