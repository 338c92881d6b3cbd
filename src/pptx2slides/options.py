#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2slides/options.py
"""Configuration options for presentation imports.

Options are frozen dataclasses; use ``create_updated()`` to derive a modified
copy. Field metadata carries the help text used by the CLI config loader.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from pptx2slides.constants import (
    DARK_PALETTE,
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
    DEFAULT_UNTITLED_SLIDE,
    HEX_COLOR_PATTERN,
)
from pptx2slides.exceptions import ValidationError
from pptx2slides.models import UserId


def _check_positive(name: str, value: Any, types: tuple[type, ...]) -> None:
    """Raise ValidationError unless ``value`` is a positive number of one of ``types``."""
    # bool is an int subclass; ``true`` in a config file is not a limit
    if isinstance(value, bool) or not isinstance(value, types):
        raise ValidationError(f"{name} must be a number, got {value!r}", name, value)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}", name, value)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ImportOptions(CloneFrozenMixin):
    """Options controlling how a package is turned into slide records.

    Parameters
    ----------
    title : str or None
        Presentation title. When None the package's file name is used.
    user_id : int, str or None
        Owner identifier stored verbatim on the presentation record.
    untitled_title : str
        Title given to slides without any text.
    palette : tuple of str
        Background colors cycled by slide position.
    rollback_on_failure : bool
        Delete the slides created by an import when a later write fails.
    max_compression_ratio : float
        Largest uncompressed/compressed ratio accepted for the package.
    max_uncompressed_size : int
        Largest total uncompressed size in bytes.
    max_zip_entries : int
        Largest number of archive entries.

    """

    title: Optional[str] = field(
        default=None,
        metadata={"help": "Presentation title (defaults to the file's base name)", "importance": "core"},
    )
    user_id: Optional[UserId] = field(
        default=None,
        metadata={"help": "Owner id stored on the presentation record", "importance": "core"},
    )
    untitled_title: str = field(
        default=DEFAULT_UNTITLED_SLIDE,
        metadata={"help": "Title used for slides with no text", "importance": "advanced"},
    )
    palette: tuple[str, ...] = field(
        default=DARK_PALETTE,
        metadata={"help": "Background colors cycled by slide position", "importance": "advanced"},
    )
    rollback_on_failure: bool = field(
        default=True,
        metadata={"help": "Delete already-created slides when a store write fails", "importance": "core"},
    )
    max_compression_ratio: float = field(
        default=DEFAULT_MAX_COMPRESSION_RATIO,
        metadata={"help": "Maximum compression ratio accepted for the package", "importance": "security"},
    )
    max_uncompressed_size: int = field(
        default=DEFAULT_MAX_UNCOMPRESSED_SIZE,
        metadata={"help": "Maximum total uncompressed package size in bytes", "importance": "security"},
    )
    max_zip_entries: int = field(
        default=DEFAULT_MAX_ZIP_ENTRIES,
        metadata={"help": "Maximum number of entries in the package", "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        # Lists from JSON/YAML configs arrive here; keep the frozen instance hashable
        if isinstance(self.palette, list):
            object.__setattr__(self, "palette", tuple(self.palette))

        if not isinstance(self.palette, tuple):
            raise ValidationError(
                f"palette must be a list of hex colors, got {type(self.palette).__name__}", "palette", self.palette
            )
        if not self.palette:
            raise ValidationError("palette must contain at least one color", "palette", self.palette)
        for color in self.palette:
            if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
                raise ValidationError(f"palette entry is not a hex color: {color!r}", "palette", color)

        if not isinstance(self.untitled_title, str):
            raise ValidationError(
                f"untitled_title must be a string, got {type(self.untitled_title).__name__}",
                "untitled_title",
                self.untitled_title,
            )
        if not isinstance(self.rollback_on_failure, bool):
            raise ValidationError(
                f"rollback_on_failure must be true or false, got {self.rollback_on_failure!r}",
                "rollback_on_failure",
                self.rollback_on_failure,
            )

        _check_positive("max_compression_ratio", self.max_compression_ratio, (int, float))
        _check_positive("max_uncompressed_size", self.max_uncompressed_size, (int,))
        _check_positive("max_zip_entries", self.max_zip_entries, (int,))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImportOptions":
        """Build options from a config mapping, accepting dashed or underscored keys.

        Raises
        ------
        ValidationError
            If the mapping names an unknown option.

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                raise ValidationError(f"Unknown import option: {key}", key, value)
            kwargs[name] = value
        return cls(**kwargs)
