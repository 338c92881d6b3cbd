"""Test utilities for the pptx2slides test suite.

This module builds presentation packages for tests: hand-written slide XML
zipped into a minimal OOXML container, and real decks generated with
python-pptx.
"""

import io
import shutil
import struct
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, Mapping, Union
from xml.sax.saxutils import escape

from pptx import Presentation
from pptx.util import Inches

P_NS = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

SLIDE_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    f'<p:sld xmlns:a="{A_NS}" xmlns:p="{P_NS}" xmlns:r="{R_NS}">'
    "<p:cSld><p:spTree>"
    '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
    "<p:grpSpPr/>"
    "{shapes}"
    "</p:spTree></p:cSld></p:sld>"
)

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="xml" ContentType="application/xml"/>'
    "</Types>"
)


def run_paragraph(*runs: str) -> str:
    """Return an ``a:p`` whose text is carried by plain runs."""
    body = "".join(f"<a:r><a:rPr lang=\"en-US\"/><a:t>{escape(run)}</a:t></a:r>" for run in runs)
    return f"<a:p>{body}</a:p>"


def field_paragraph(*texts: str, field_type: str = "slidenum") -> str:
    """Return an ``a:p`` whose text is carried by field runs."""
    body = "".join(
        f'<a:fld id="{{B6F15528-21DE-4FAA-801E-634DDDAF4B2B}}" type="{field_type}"><a:t>{escape(text)}</a:t></a:fld>'
        for text in texts
    )
    return f"<a:p>{body}</a:p>"


def bare_paragraph(text: str) -> str:
    """Return an ``a:p`` with a text node directly on the paragraph."""
    return f"<a:p><a:t>{escape(text)}</a:t></a:p>"


def empty_paragraph() -> str:
    return '<a:p><a:endParaRPr lang="en-US"/></a:p>'


def shape(*paragraphs: str, shape_id: int = 2) -> str:
    """Return a ``p:sp`` text shape holding the given paragraphs."""
    return (
        f'<p:sp><p:nvSpPr><p:cNvPr id="{shape_id}" name="Shape {shape_id}"/><p:cNvSpPr/><p:nvPr/></p:nvSpPr>'
        f"<p:spPr/><p:txBody><a:bodyPr/><a:lstStyle/>{''.join(paragraphs)}</p:txBody></p:sp>"
    )


def group(*shapes: str) -> str:
    """Return a ``p:grpSp`` wrapping the given shapes."""
    return (
        '<p:grpSp><p:nvGrpSpPr><p:cNvPr id="10" name="Group"/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
        f"<p:grpSpPr/>{''.join(shapes)}</p:grpSp>"
    )


def slide_xml(*shapes: str) -> str:
    """Return a complete slide part containing the given shapes."""
    return SLIDE_TEMPLATE.format(shapes="".join(shapes))


def text_slide(*texts: str) -> str:
    """Return a slide whose single shape has one run paragraph per text."""
    return slide_xml(shape(*(run_paragraph(text) for text in texts)))


def build_package(slides: Union[Iterable[str], Mapping[str, Union[str, bytes]]], with_extras: bool = True) -> bytes:
    """Zip slide parts into a minimal presentation package.

    Parameters
    ----------
    slides : iterable of str or mapping of str to str/bytes
        Slide XML in slide order (named ``slide1.xml``, ``slide2.xml`` ...),
        or a mapping of part names to payloads written in mapping order
    with_extras : bool, default True
        Also write content types, a layout and a relationships part, which
        must not be mistaken for slides

    Returns
    -------
    bytes
        The package as bytes

    """
    if isinstance(slides, Mapping):
        parts = dict(slides)
    else:
        parts = {f"ppt/slides/slide{i}.xml": xml for i, xml in enumerate(slides, start=1)}

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        if with_extras:
            zf.writestr("[Content_Types].xml", CONTENT_TYPES)
            zf.writestr("ppt/presentation.xml", f'<p:presentation xmlns:p="{P_NS}"/>')
            zf.writestr("ppt/slideLayouts/slideLayout1.xml", slide_xml(shape(run_paragraph("Layout text"))))
            zf.writestr("ppt/slides/_rels/slide1.xml.rels", "<Relationships/>")
        for name, payload in parts.items():
            zf.writestr(name, payload)
    return buffer.getvalue()


def corrupt_entry_data(package: bytes, name: str) -> bytes:
    """Overwrite the compressed bytes of one entry with 0xFF, leaving the headers intact."""
    with zipfile.ZipFile(io.BytesIO(package)) as archive:
        info = archive.getinfo(name)
    data = bytearray(package)
    # Local file header: 30 fixed bytes, then the file name and extra field
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26 : info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    data[start : start + info.compress_size] = b"\xff" * info.compress_size
    return bytes(data)


def set_compression_method(package: bytes, name: str, method: int) -> bytes:
    """Rewrite the compression method recorded for ``name`` in the central directory."""
    data = bytearray(package)
    encoded = name.encode("utf-8")
    pos = data.find(b"PK\x01\x02")
    while pos != -1:
        if data[pos + 46 : pos + 46 + len(encoded)] == encoded:
            struct.pack_into("<H", data, pos + 10, method)
            return bytes(data)
        pos = data.find(b"PK\x01\x02", pos + 4)
    raise KeyError(name)


class PptxTestGenerator:
    """Generator for real PPTX decks built with python-pptx."""

    @staticmethod
    def to_bytes(prs: Presentation) -> bytes:
        buffer = io.BytesIO()
        prs.save(buffer)
        return buffer.getvalue()

    @staticmethod
    def create_basic_deck() -> Presentation:
        """Create a deck with a title slide, a bulleted slide, and a blank slide."""
        prs = Presentation()

        slide = prs.slides.add_slide(prs.slide_layouts[0])  # Title slide
        slide.shapes.title.text = "Quarterly Review"
        slide.placeholders[1].text = "Prepared by Finance"

        slide = prs.slides.add_slide(prs.slide_layouts[1])  # Title and Content
        slide.shapes.title.text = "Highlights"
        tf = slide.placeholders[1].text_frame
        tf.text = "Revenue up"
        for text in ("Costs down", "Margins <improved> & stable"):
            p = tf.add_paragraph()
            p.text = text

        prs.slides.add_slide(prs.slide_layouts[6])  # Blank

        return prs

    @staticmethod
    def create_deck_with_slides(count: int) -> Presentation:
        """Create a deck of ``count`` title-only slides titled "Slide 1", "Slide 2", ..."""
        prs = Presentation()
        for i in range(1, count + 1):
            slide = prs.slides.add_slide(prs.slide_layouts[5])  # Title only
            slide.shapes.title.text = f"Slide {i}"
        return prs

    @staticmethod
    def create_textbox_deck() -> Presentation:
        """Create a blank-layout slide whose text lives in free text boxes."""
        prs = Presentation()
        slide = prs.slides.add_slide(prs.slide_layouts[6])

        box = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(1))
        box.text_frame.text = "Loose heading"

        box = slide.shapes.add_textbox(Inches(1), Inches(2), Inches(6), Inches(1))
        box.text_frame.text = "Only body line"

        return prs


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
