#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/pipeline.py
"""Presentation import pipeline.

``import_presentation`` runs the stages in a straight line::

    read package -> (extract -> synthesize -> store slide) per slide -> store presentation

Slides are handled one at a time in package order; background colors and the
presentation's slide order depend on it. The whole package is read before the
first write, so a package that cannot be read leaves the store untouched.
A failed write removes the slides this import already created (unless
``ImportOptions.rollback_on_failure`` is off) and re-raises.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Callable, Optional, Union

from pptx2slides.exceptions import PackageReadError, PersistenceError, ValidationError
from pptx2slides.extractor import extract_slide
from pptx2slides.models import UserId
from pptx2slides.options import ImportOptions
from pptx2slides.package_reader import read_slide_parts
from pptx2slides.progress import ProgressCallback, emit_progress
from pptx2slides.store import DocumentStore
from pptx2slides.synthesizer import build_presentation, synthesize_slide

logger = logging.getLogger(__name__)

PackageSource = Union[str, Path, IO[bytes], bytes]


def _load_package_bytes(source: PackageSource) -> tuple[bytes, Optional[str]]:
    """Return the package bytes and, when known, the source file name."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), None
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            return path.read_bytes(), path.name
        except OSError as e:
            raise PackageReadError(f"Could not read {path}: {e}", filename=path.name, original_error=e) from e
    if hasattr(source, "read"):
        data = source.read()
        if not isinstance(data, bytes):
            raise ValidationError(
                "Package streams must be opened in binary mode",
                parameter_name="source",
                parameter_value=type(data).__name__,
            )
        name = getattr(source, "name", None)
        return data, Path(name).name if isinstance(name, str) else None
    raise ValidationError(
        f"Unsupported input type: {type(source).__name__}",
        parameter_name="source",
        parameter_value=source,
    )


def _store_call(operation: str, call: Callable[..., dict[str, Any]], *args: Any, **kwargs: Any) -> dict[str, Any]:
    """Run a store call, reporting any store failure as PersistenceError."""
    try:
        return call(*args, **kwargs)
    except PersistenceError:
        raise
    except Exception as e:
        raise PersistenceError(f"{operation} failed: {e}", operation=operation, original_error=e) from e


def _rollback(store: DocumentStore, slide_ids: list[str]) -> None:
    """Delete the slides created by a failed import, newest first."""
    for slide_id in reversed(slide_ids):
        try:
            store.delete_slide(slide_id)
        except Exception as e:
            logger.error(f"Rollback could not delete slide {slide_id}: {e}")
    if slide_ids:
        logger.info(f"Rolled back {len(slide_ids)} slide(s) after failed import")


def import_presentation(
    source: PackageSource,
    *,
    store: DocumentStore,
    filename: Optional[str] = None,
    title: Optional[str] = None,
    user_id: Optional[UserId] = None,
    options: Optional[ImportOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> dict[str, Any]:
    """Import a ``.pptx`` package into slide and presentation records.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        The package: a path, a binary stream or raw bytes
    store : DocumentStore
        Where records are written
    filename : str, optional
        Original file name, used for the default presentation title. Paths
        and named streams supply it when omitted.
    title : str, optional
        Presentation title; overrides ``options.title``
    user_id : int or str, optional
        Owner id stored verbatim; overrides ``options.user_id``
    options : ImportOptions, optional
        Import configuration
    progress_callback : ProgressCallback, optional
        Receives a ProgressEvent per stage and slide

    Returns
    -------
    dict
        The stored presentation with ``slides`` populated in package order

    Raises
    ------
    PackageReadError
        If the package is not a ZIP archive, cannot be read or has no slides.
        Nothing has been written.
    PersistenceError
        If a store write fails

    Examples
    --------
    >>> from pptx2slides import InMemoryDocumentStore, import_presentation
    >>> store = InMemoryDocumentStore()
    >>> presentation = import_presentation("quarterly.pptx", store=store)  # doctest: +SKIP
    >>> presentation["title"]  # doctest: +SKIP
    'quarterly'

    """
    options = options or ImportOptions()
    data, source_name = _load_package_bytes(source)
    filename = filename or source_name
    title = title if title is not None else options.title
    user_id = user_id if user_id is not None else options.user_id

    parts = list(read_slide_parts(data, options, filename))
    total = len(parts)
    logger.info(f"Importing {total} slide(s) from {filename or 'package'}")
    emit_progress(progress_callback, "started", f"Importing {filename or 'package'}", current=0, total=total)

    created_ids: list[str] = []
    stored_slides: list[dict[str, Any]] = []
    try:
        for position, part in enumerate(parts):
            result = extract_slide(part)
            if not result.ok:
                emit_progress(
                    progress_callback,
                    "error",
                    f"Slide {position + 1} text extracted partially",
                    current=position,
                    total=total,
                    error=str(result.error),
                    stage="extraction",
                    part=part.name,
                )

            record = synthesize_slide(result.fragments, position, options)
            stored = _store_call("create_slide", store.create_slide, record)
            created_ids.append(stored["id"])
            stored_slides.append(stored)

            logger.debug(f"Stored {part.name} as slide {stored['id']} ({record.layout})")
            emit_progress(
                progress_callback,
                "item_done",
                f"Slide {position + 1} of {total}",
                current=position + 1,
                total=total,
                item_type="slide",
                slide_id=stored["id"],
            )

        presentation = build_presentation(created_ids, filename=filename, title=title, user_id=user_id)
        stored_presentation = _store_call("create_presentation", store.create_presentation, presentation)
    except PersistenceError as e:
        logger.error(f"Import of {filename or 'package'} failed: {e.message}")
        if options.rollback_on_failure:
            _rollback(store, created_ids)
        raise

    logger.info(f"Created presentation {stored_presentation['id']} with {total} slide(s)")
    emit_progress(progress_callback, "finished", "Import complete", current=total, total=total)

    # Same shape as get_presentation(populate=True), without reading back committed records
    return {**stored_presentation, "slides": stored_slides}


def import_presentation_file(path: Union[str, Path], **kwargs: Any) -> dict[str, Any]:
    """Import the package at ``path``; keyword arguments as for import_presentation."""
    return import_presentation(Path(path), **kwargs)
