#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/package_reader.py
"""Slide part enumeration for OOXML presentation packages.

A ``.pptx`` file is a ZIP archive; every slide lives in its own
``ppt/slides/slide<N>.xml`` part. Archive order is not slide order, so parts
are sorted on ``N`` before they are handed to the extractor. This module knows
nothing about the slide schema.

Functions
---------
- slide_index_from_name: Parse the slide number out of a part name
- is_slide_part: Check whether an archive entry is a slide part
- validate_package: Pre-validate the archive for ZIP bomb and traversal threats
- read_slide_parts: Lazily yield slide parts in slide-number order
- count_slide_parts: Count the slide parts of a package
"""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import PurePosixPath
from typing import Iterator, Optional

from pptx2slides.constants import SLIDE_INDEX_PATTERN, SLIDE_PART_PATTERN
from pptx2slides.exceptions import PackageReadError, PackageSecurityError
from pptx2slides.models import SlidePart
from pptx2slides.options import ImportOptions

logger = logging.getLogger(__name__)


def slide_index_from_name(name: str) -> int:
    """Return the integer immediately preceding ``.xml`` in a part name.

    Parameters
    ----------
    name : str
        Archive path, e.g. ``"ppt/slides/slide12.xml"``

    Returns
    -------
    int
        The slide number, or 0 when the name carries none

    Examples
    --------
    >>> slide_index_from_name("ppt/slides/slide12.xml")
    12
    >>> slide_index_from_name("ppt/slides/cover.xml")
    0

    """
    match = SLIDE_INDEX_PATTERN.search(name)
    return int(match.group(1)) if match else 0


def is_slide_part(name: str) -> bool:
    """Return True for ``ppt/slides/slide<N>.xml`` entries with a positive ``N``."""
    match = SLIDE_PART_PATTERN.match(name)
    return bool(match) and int(match.group(1)) > 0


def validate_package(archive: zipfile.ZipFile, options: Optional[ImportOptions] = None) -> None:
    """Validate an opened package for security threats before reading parts.

    Parameters
    ----------
    archive : zipfile.ZipFile
        The opened package
    options : ImportOptions, optional
        Limits to enforce; defaults apply when omitted

    Raises
    ------
    PackageSecurityError
        If the archive has too many entries, is too large once decompressed,
        has a suspicious compression ratio or contains unsafe paths

    """
    options = options or ImportOptions()
    entries = archive.infolist()

    if len(entries) > options.max_zip_entries:
        raise PackageSecurityError(f"Package contains too many entries: {len(entries)} > {options.max_zip_entries}")

    total_uncompressed = 0
    total_compressed = 0

    for entry in entries:
        name_norm = entry.filename.replace("\\", "/")

        if len(name_norm) >= 2 and name_norm[1] == ":":
            raise PackageSecurityError(f"Package contains Windows absolute path: {entry.filename}")

        p = PurePosixPath(name_norm)
        if any(part == ".." for part in p.parts) or name_norm.startswith("/"):
            raise PackageSecurityError(f"Package contains suspicious path: {entry.filename}")

        total_uncompressed += entry.file_size
        total_compressed += entry.compress_size

        if total_uncompressed > options.max_uncompressed_size:
            raise PackageSecurityError(
                f"Package uncompressed size too large: "
                f"{total_uncompressed / (1024 * 1024):.1f}MB > "
                f"{options.max_uncompressed_size / (1024 * 1024):.1f}MB"
            )

    if total_compressed > 0:
        compression_ratio = total_uncompressed / total_compressed
        if compression_ratio > options.max_compression_ratio:
            raise PackageSecurityError(f"Package has suspicious compression ratio: {compression_ratio:.1f}:1")


def _open_package(data: bytes, filename: Optional[str]) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data), "r")
    except zipfile.BadZipFile as e:
        raise PackageReadError(f"Not a valid presentation package: {e}", filename=filename, original_error=e) from e
    except (OSError, ValueError) as e:
        raise PackageReadError(f"Could not read presentation package: {e}", filename=filename, original_error=e) from e


def _sorted_slide_names(archive: zipfile.ZipFile) -> list[str]:
    names = [name for name in archive.namelist() if is_slide_part(name)]
    # sorted() is stable, so equal indices keep archive order
    return sorted(names, key=slide_index_from_name)


def read_slide_parts(
    data: bytes,
    options: Optional[ImportOptions] = None,
    filename: Optional[str] = None,
) -> Iterator[SlidePart]:
    """Yield the slide parts of a package in ascending slide-number order.

    The archive is opened and validated on the first ``next()`` call; each
    part's XML is read only when it is yielded.

    Parameters
    ----------
    data : bytes
        Raw package bytes
    options : ImportOptions, optional
        Archive safety limits
    filename : str, optional
        Package name, used in error messages

    Yields
    ------
    SlidePart
        One entry per slide, ``slide1`` first

    Raises
    ------
    PackageReadError
        If the bytes are not a ZIP archive, a part cannot be read, or the
        archive holds no slide parts
    PackageSecurityError
        If the archive fails safety validation

    """
    with _open_package(data, filename) as archive:
        validate_package(archive, options)

        names = _sorted_slide_names(archive)
        if not names:
            raise PackageReadError("Package contains no slides", filename=filename)

        logger.debug(f"Found {len(names)} slide parts in {filename or 'package'}")

        for name in names:
            try:
                xml = archive.read(name)
            except (zipfile.BadZipFile, zlib.error, NotImplementedError, OSError, RuntimeError) as e:
                raise PackageReadError(f"Could not read {name}: {e}", filename=filename, original_error=e) from e
            yield SlidePart(name=name, index=slide_index_from_name(name), xml=xml)


def count_slide_parts(data: bytes, filename: Optional[str] = None) -> int:
    """Return the number of slide parts in a package without reading them.

    Raises
    ------
    PackageReadError
        If the bytes are not a ZIP archive

    """
    with _open_package(data, filename) as archive:
        return len(_sorted_slide_names(archive))
