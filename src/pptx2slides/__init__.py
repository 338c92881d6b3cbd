"""pptx2slides - import PowerPoint decks into slide and presentation records.

pptx2slides reads a ``.pptx`` package, recovers the plain text of every
slide, and stores one slide record per slide plus a presentation record that
lists them in order. Each slide record carries a title, an HTML body, an
inferred layout and a background color, ready for a web slide editor.

Pipeline
--------
1. **Package reader** - opens the ZIP container and orders the
   ``ppt/slides/slideN.xml`` parts by ``N``
2. **Slide extractor** - walks shapes, paragraphs and runs, one text
   fragment per paragraph; a broken slide yields what could be read
3. **Slide synthesizer** - first fragment becomes the title, the rest the
   body (``<p>`` or ``<ul>``), colors cycle by position

Examples
--------
    >>> from pptx2slides import InMemoryDocumentStore, import_presentation
    >>> store = InMemoryDocumentStore()
    >>> presentation = import_presentation("deck.pptx", store=store, user_id=7)  # doctest: +SKIP
    >>> [slide["title"] for slide in presentation["slides"]]  # doctest: +SKIP
    ['Welcome', 'Agenda', 'Untitled Slide']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from pptx2slides.exceptions import (
    PackageReadError,
    PackageSecurityError,
    PersistenceError,
    Pptx2SlidesError,
    RecordNotFoundError,
    SlideExtractionError,
    ValidationError,
)
from pptx2slides.extractor import ExtractionResult, extract_fragments, extract_slide
from pptx2slides.models import PresentationRecord, SlidePart, SlideRecord, TextFragment
from pptx2slides.options import ImportOptions
from pptx2slides.package_reader import count_slide_parts, read_slide_parts
from pptx2slides.pipeline import import_presentation, import_presentation_file
from pptx2slides.progress import ProgressCallback, ProgressEvent
from pptx2slides.store import DocumentStore, InMemoryDocumentStore, JsonFileDocumentStore, open_store
from pptx2slides.synthesizer import escape_html, synthesize_slide

__version__ = "0.1.0"

__all__ = [
    "DocumentStore",
    "ExtractionResult",
    "ImportOptions",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "PackageReadError",
    "PackageSecurityError",
    "PersistenceError",
    "Pptx2SlidesError",
    "PresentationRecord",
    "ProgressCallback",
    "ProgressEvent",
    "RecordNotFoundError",
    "SlideExtractionError",
    "SlidePart",
    "SlideRecord",
    "TextFragment",
    "ValidationError",
    "count_slide_parts",
    "escape_html",
    "extract_fragments",
    "extract_slide",
    "import_presentation",
    "import_presentation_file",
    "open_store",
    "read_slide_parts",
    "synthesize_slide",
]
