#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/extractor.py
"""Plain-text extraction from slide XML.

Each slide part is parsed with ``defusedxml`` and walked shape tree ->
text body -> paragraph. A paragraph carries its text in one of three ways,
checked in order:

1. plain runs (``a:r/a:t``), concatenated without a separator
2. field runs (``a:fld/a:t``) used for slide numbers and dates
3. a bare ``a:t`` directly on the paragraph

The first carrier with non-blank text yields the paragraph's fragment; a
paragraph yields at most one. Extraction is best-effort: ``extract_slide``
never raises and returns whatever was collected before a failure.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import defusedxml.ElementTree as ET

from pptx2slides.constants import NAMESPACES
from pptx2slides.exceptions import SlideExtractionError
from pptx2slides.models import SlidePart, TextFragment

logger = logging.getLogger(__name__)

_A = NAMESPACES["a"]


def children(node: Any, path: str) -> list[Any]:
    """Return the elements under ``node`` matching ``path`` as a list.

    An absent ``node`` yields an empty list, so callers treat absent, single
    and repeated elements the same way.
    """
    if node is None:
        return []
    return list(node.findall(path, NAMESPACES))


def _joined_text(containers: list[Any]) -> str:
    return "".join(t.text or "" for container in containers for t in children(container, "a:t"))


def _bare_text(paragraph: Any) -> str:
    return "".join(t.text or "" for t in children(paragraph, "a:t"))


# Carrier precedence for a paragraph: plain runs, field runs, bare text
_CARRIERS: tuple[Callable[[Any], str], ...] = (
    lambda p: _joined_text(children(p, "a:r")),
    lambda p: _joined_text(children(p, "a:fld")),
    _bare_text,
)


def paragraph_text(paragraph: Any) -> Optional[str]:
    """Return the trimmed text of the first non-blank carrier, or None.

    Parameters
    ----------
    paragraph : Element
        An ``a:p`` element

    Returns
    -------
    str or None
        The paragraph's text, None when every carrier is blank

    """
    for carrier in _CARRIERS:
        text = carrier(paragraph).strip()
        if text:
            return text
    return None


def extract_fragments(xml: bytes | str, part_name: Optional[str] = None) -> list[TextFragment]:
    """Extract the ordered text fragments of one slide.

    Parameters
    ----------
    xml : bytes or str
        The slide part's XML payload
    part_name : str, optional
        Archive name of the part, used in error messages

    Returns
    -------
    list of TextFragment
        Fragments in shape, paragraph, run order; possibly empty

    Raises
    ------
    SlideExtractionError
        If the XML cannot be parsed or walked. ``fragments`` on the error
        holds what was collected before the failure.

    """
    fragments: list[TextFragment] = []
    try:
        root = ET.fromstring(xml)

        shape_tree = root.find("p:cSld/p:spTree", NAMESPACES)
        if shape_tree is None:
            raise ValueError("slide has no shape tree")

        # iter() walks in document order and reaches text bodies inside group shapes
        for body in shape_tree.iter(f"{{{NAMESPACES['p']}}}txBody"):
            for paragraph in body.iter(f"{{{_A}}}p"):
                text = paragraph_text(paragraph)
                if text:
                    fragments.append(TextFragment(text))
    except Exception as e:
        raise SlideExtractionError(
            f"Failed to extract text from {part_name or 'slide'}: {e}",
            part_name=part_name,
            fragments=fragments,
            original_error=e,
        ) from e

    return fragments


@dataclass
class ExtractionResult:
    """Outcome of extracting one slide.

    ``error`` is set when extraction stopped early; ``fragments`` then holds
    the partial result.
    """

    part_name: str
    fragments: list[TextFragment] = field(default_factory=list)
    error: Optional[SlideExtractionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_slide(part: SlidePart) -> ExtractionResult:
    """Extract a slide part without ever raising.

    Parameters
    ----------
    part : SlidePart
        The part to extract

    Returns
    -------
    ExtractionResult
        The fragments, plus the absorbed error when extraction failed

    """
    try:
        fragments = extract_fragments(part.xml, part.name)
    except SlideExtractionError as e:
        logger.warning(f"{e.message}; keeping {len(e.fragments)} fragment(s)")
        return ExtractionResult(part_name=part.name, fragments=e.fragments, error=e)

    logger.debug(f"Extracted {len(fragments)} fragment(s) from {part.name}")
    return ExtractionResult(part_name=part.name, fragments=fragments)
