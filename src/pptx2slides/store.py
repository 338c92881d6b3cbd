#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/store.py
"""Document stores for slide and presentation records.

The import pipeline only needs ``create_slide``, ``create_presentation`` and,
for rollback, ``delete_slide``; the rest of the interface serves the editing
surface that reads and updates records after import.

Records are plain dicts with camelCase keys. Stores assign ``id``,
``createdAt`` and ``updatedAt``; a presentation's ``slides`` holds slide ids,
replaced by the slide dicts themselves when read with ``populate=True``.

"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Union

from pptx2slides.constants import DEFAULT_BACKGROUND_COLOR, EDITABLE_SLIDE_FIELDS
from pptx2slides.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from pptx2slides.models import PresentationRecord, SlideRecord

logger = logging.getLogger(__name__)

RecordInput = Union[Mapping[str, Any], SlideRecord, PresentationRecord]


def _as_dict(record: RecordInput) -> dict[str, Any]:
    if isinstance(record, (SlideRecord, PresentationRecord)):
        return record.to_dict()
    return dict(record)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocumentStore(ABC):
    """Persistence boundary for slide and presentation records."""

    # --- Slides -------------------------------------------------------------------
    @abstractmethod
    def create_slide(self, record: RecordInput) -> dict[str, Any]:
        """Store a new slide and return it with its ``id`` and timestamps."""

    @abstractmethod
    def get_slide(self, slide_id: str) -> dict[str, Any]:
        """Return one slide, raising RecordNotFoundError for unknown ids."""

    @abstractmethod
    def list_slides(self) -> list[dict[str, Any]]:
        """Return every slide in creation order."""

    @abstractmethod
    def update_slide(self, slide_id: str, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Apply changes to the editable fields of a slide and return it."""

    @abstractmethod
    def delete_slide(self, slide_id: str) -> None:
        """Remove one slide, raising RecordNotFoundError for unknown ids."""

    # --- Presentations ------------------------------------------------------------
    @abstractmethod
    def create_presentation(self, record: RecordInput) -> dict[str, Any]:
        """Store a new presentation and return it with its ``id`` and timestamps."""

    @abstractmethod
    def get_presentation(self, presentation_id: str, populate: bool = False) -> dict[str, Any]:
        """Return one presentation, optionally with slide dicts in place of ids."""

    @abstractmethod
    def list_presentations(self, populate: bool = False) -> list[dict[str, Any]]:
        """Return every presentation in creation order."""

    @abstractmethod
    def delete_presentation(self, presentation_id: str) -> None:
        """Remove one presentation; its slides are left in place."""


class InMemoryDocumentStore(DocumentStore):
    """Thread-safe store keeping records in process memory.

    Records are deep-copied on the way in and out, so callers never share
    mutable state with the store or with each other.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._slides: dict[str, dict[str, Any]] = {}
        self._presentations: dict[str, dict[str, Any]] = {}

    # Subclasses persist state here; raising rolls the in-memory change back
    def _commit(self) -> None:
        pass

    def _persists(self) -> bool:
        return type(self)._commit is not InMemoryDocumentStore._commit

    @contextmanager
    def _mutation(self, operation: str) -> Iterator[None]:
        with self._lock:
            # Each mutation is a single dict assignment, so only a failing commit needs undoing
            snapshot = (copy.deepcopy(self._slides), copy.deepcopy(self._presentations)) if self._persists() else None
            try:
                yield
                self._commit()
            except PersistenceError:
                if snapshot is not None:
                    self._slides, self._presentations = snapshot
                raise
            except (OSError, TypeError, ValueError) as e:
                if snapshot is not None:
                    self._slides, self._presentations = snapshot
                raise PersistenceError(f"{operation} failed: {e}", operation=operation, original_error=e) from e

    def _require_slide(self, slide_id: str) -> dict[str, Any]:
        try:
            return self._slides[slide_id]
        except KeyError:
            raise RecordNotFoundError("slide", slide_id) from None

    def _require_presentation(self, presentation_id: str) -> dict[str, Any]:
        try:
            return self._presentations[presentation_id]
        except KeyError:
            raise RecordNotFoundError("presentation", presentation_id) from None

    def _populated(self, presentation: dict[str, Any]) -> dict[str, Any]:
        result = copy.deepcopy(presentation)
        slides = []
        for slide_id in presentation.get("slides", []):
            slide = self._slides.get(slide_id)
            if slide is None:
                logger.debug(f"Presentation {presentation['id']} references missing slide {slide_id}")
                continue
            slides.append(copy.deepcopy(slide))
        result["slides"] = slides
        return result

    def create_slide(self, record: RecordInput) -> dict[str, Any]:
        data = _as_dict(record)
        data.setdefault("backgroundColor", DEFAULT_BACKGROUND_COLOR)
        now = _timestamp()
        data.update(id=uuid.uuid4().hex, createdAt=now, updatedAt=now)

        with self._mutation("create_slide"):
            self._slides[data["id"]] = data
        return copy.deepcopy(data)

    def get_slide(self, slide_id: str) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._require_slide(slide_id))

    def list_slides(self) -> list[dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(slide) for slide in self._slides.values()]

    def update_slide(self, slide_id: str, changes: Mapping[str, Any]) -> dict[str, Any]:
        unknown = sorted(set(changes) - set(EDITABLE_SLIDE_FIELDS))
        if unknown:
            raise ValidationError(f"Slide fields cannot be updated: {', '.join(unknown)}", "changes", unknown)

        with self._mutation("update_slide"):
            slide = self._require_slide(slide_id)
            slide.update(changes)
            slide["updatedAt"] = _timestamp()
            result = copy.deepcopy(slide)
        return result

    def delete_slide(self, slide_id: str) -> None:
        with self._mutation("delete_slide"):
            self._require_slide(slide_id)
            del self._slides[slide_id]

    def create_presentation(self, record: RecordInput) -> dict[str, Any]:
        data = _as_dict(record)
        data["slides"] = list(data.get("slides", []))
        now = _timestamp()
        data.update(id=uuid.uuid4().hex, createdAt=now, updatedAt=now)

        with self._mutation("create_presentation"):
            self._presentations[data["id"]] = data
        return copy.deepcopy(data)

    def get_presentation(self, presentation_id: str, populate: bool = False) -> dict[str, Any]:
        with self._lock:
            presentation = self._require_presentation(presentation_id)
            return self._populated(presentation) if populate else copy.deepcopy(presentation)

    def list_presentations(self, populate: bool = False) -> list[dict[str, Any]]:
        with self._lock:
            return [self._populated(p) if populate else copy.deepcopy(p) for p in self._presentations.values()]

    def delete_presentation(self, presentation_id: str) -> None:
        with self._mutation("delete_presentation"):
            self._require_presentation(presentation_id)
            del self._presentations[presentation_id]


class JsonFileDocumentStore(InMemoryDocumentStore):
    """Store persisted to a single JSON file.

    The file is loaded when the store is created and rewritten atomically
    after every mutation. A failed write leaves both the file and the
    in-memory state unchanged.

    Parameters
    ----------
    path : str or Path
        Location of the JSON file; created on first write

    Raises
    ------
    PersistenceError
        If an existing file cannot be read or is not a store file

    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Could not read store file {self.path}: {e}", operation="load", original_error=e
            ) from e

        if not isinstance(data, dict):
            raise PersistenceError(f"Store file {self.path} must contain a JSON object", operation="load")

        try:
            self._slides = {s["id"]: s for s in data.get("slides", [])}
            self._presentations = {p["id"]: p for p in data.get("presentations", [])}
        except (KeyError, TypeError) as e:
            raise PersistenceError(
                f"Store file {self.path} has a record without an id", operation="load", original_error=e
            ) from e
        logger.debug(f"Loaded {len(self._slides)} slides and {len(self._presentations)} presentations from {self.path}")

    def _commit(self) -> None:
        payload = {
            "slides": list(self._slides.values()),
            "presentations": list(self._presentations.values()),
        }
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            Path(temp_path).unlink(missing_ok=True)
            raise PersistenceError(
                f"Could not write store file {self.path}: {e}", operation="commit", original_error=e
            ) from e


def open_store(path: Optional[Union[str, Path]] = None) -> DocumentStore:
    """Return a JSON-file store for ``path``, or an in-memory store when None."""
    if path is None:
        return InMemoryDocumentStore()
    return JsonFileDocumentStore(path)
