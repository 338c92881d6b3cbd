#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/progress.py
"""Progress callback system for presentation imports.

This module lets embedders follow an import slide by slide, for example to
drive a progress bar while a large deck is being stored.

Examples
--------
    >>> from pptx2slides import import_presentation
    >>> from pptx2slides.progress import ProgressEvent
    >>>
    >>> def handler(event: ProgressEvent):
    ...     print(event)
    >>>
    >>> import_presentation("deck.pptx", store=store, progress_callback=handler)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pptx2slides.constants import ProgressEventType

logger = logging.getLogger(__name__)


@dataclass
class ProgressEvent:
    """Progress event emitted during an import.

    Parameters
    ----------
    event_type : ProgressEventType
        One of:

        - "started": the package was read; ``total`` is the slide count
        - "item_done": one slide was stored; ``metadata["item_type"] == "slide"``
        - "error": a slide's text could not be fully extracted. The import
          continues; ``metadata["error"]`` holds the reason
        - "finished": the presentation record was created

    message : str
        Human-readable description of the event
    current : int, default 0
        Number of slides completed so far
    total : int, default 0
        Total number of slides in the package
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: ProgressEventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise; exceptions are logged and otherwise ignored.
"""


def emit_progress(
    callback: Optional[ProgressCallback],
    event_type: ProgressEventType,
    message: str,
    current: int = 0,
    total: int = 0,
    **metadata: Any,
) -> None:
    """Emit a progress event to the callback if one is registered.

    Parameters
    ----------
    callback : ProgressCallback or None
        Receiver of the event
    event_type : ProgressEventType
        Type of progress event
    message : str
        Human-readable description of the event
    current : int, default 0
        Current progress position
    total : int, default 0
        Total items to process
    **metadata
        Additional event-specific information

    """
    if not callback:
        return

    try:
        callback(ProgressEvent(event_type=event_type, message=message, current=current, total=total, metadata=metadata))
    except Exception as e:
        logger.warning(f"Progress callback raised exception: {e}", exc_info=True)
